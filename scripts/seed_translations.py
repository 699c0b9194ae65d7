"""
批量生成翻译数据的脚本（性能测试用）

按 (key, locale) 冲突时更新，可重复执行或并发执行而不会产生重复行

用法:
    python scripts/seed_translations.py --count 100000 --batch 1000 --with-tags --truncate
"""
# 标准库导包
import argparse
import asyncio
import math
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 项目内部导包
from storage import async_session_factory, init_db, cleanup_db
from storage.repositories import TranslationRepository, TagRepository, TranslationTagRepository


LOCALES = ["en", "fr", "es", "de", "it", "pt", "nl", "ru", "zh", "ja"]

# 键前缀及对应的示例文案
PHRASES = {
    "common": ["Welcome", "Hello", "Goodbye", "Thank you", "Please wait"],
    "auth": ["Login", "Logout", "Register", "Password", "Email"],
    "validation": ["This field is required", "Invalid email", "Password too short"],
    "messages": ["Success!", "Error occurred", "Please try again", "Loading..."],
    "errors": ["Something went wrong", "Not found", "Access denied", "Session expired"],
    "buttons": ["Submit", "Cancel", "Save", "Delete", "Edit", "Create"],
    "labels": ["Name", "Email", "Phone", "Address", "Description"],
    "placeholders": ["Enter your name", "Enter email", "Type here..."],
    "notifications": ["New message", "Update available", "Task completed"],
    "pages": ["Home", "About", "Contact", "Dashboard", "Settings"],
    "forms": ["Fill in the form", "Required fields", "Optional"],
    "modals": ["Confirm action", "Are you sure?", "Close"],
    "menu": ["Profile", "Settings", "Logout", "Help"],
    "footer": ["Terms of Service", "Privacy Policy", "Contact Us"],
    "header": ["Welcome back", "Navigation", "Search"],
}

# 系统默认标签
DEFAULT_TAGS = ["mobile", "desktop", "web", "ios", "android", "api", "admin", "public"]


def generate_fake_value(prefix: str, rng: random.Random) -> str:
    """根据键前缀生成示例文案"""
    options = PHRASES.get(prefix, PHRASES["common"])
    return f"{rng.choice(options)} {rng.randint(1, 1000)}"


def build_batch(start: int, size: int, rng: random.Random, now: datetime) -> List[Dict[str, Any]]:
    """
    生成一批翻译记录

    Args:
        start: 本批第一条记录的序号（用于生成唯一键）
        size: 本批数量
        rng: 随机数生成器
        now: 创建/更新时间

    Returns:
        记录列表
    """
    prefixes = list(PHRASES.keys())
    records = []
    for offset in range(size):
        prefix = rng.choice(prefixes)
        records.append({
            "key": f"{prefix}.key_{start + offset}",
            "locale": rng.choice(LOCALES),
            "value": generate_fake_value(prefix, rng),
            "created_at": now,
            "updated_at": now,
        })
    return records


def sample_size_for(total: int) -> int:
    """需要打标签的样本数：少于100条时全部，否则取10%且不超过1000"""
    if total < 100:
        return total
    return min(1000, math.ceil(total * 0.1))


def build_tag_links(
    translation_ids: Sequence[int],
    tag_ids: Sequence[int],
    rng: random.Random
) -> List[tuple]:
    """为每个翻译随机选择1-3个标签"""
    links = []
    if not tag_ids:
        return links
    for translation_id in translation_ids:
        chosen = rng.sample(list(tag_ids), min(rng.randint(1, 3), len(tag_ids)))
        links.extend((translation_id, tag_id) for tag_id in chosen)
    return links


async def seed_translations(
    count: int = 100000,
    batch_size: int = 1000,
    with_tags: bool = False,
    truncate: bool = False,
    seed: Optional[int] = None
) -> int:
    """
    生成翻译数据

    Args:
        count: 生成的翻译数量
        batch_size: 每批插入数量
        with_tags: 是否为部分翻译随机关联标签
        truncate: 是否先清空翻译与关联表
        seed: 随机种子（测试时用于复现）

    Returns:
        写入的翻译数量
    """
    rng = random.Random(seed)

    async with async_session_factory() as session:
        try:
            translation_repo = TranslationRepository(session)
            tag_repo = TagRepository(session)
            translation_tag_repo = TranslationTagRepository(session)

            if truncate:
                print("清空翻译表...")
                await translation_tag_repo.truncate()
                await translation_repo.truncate()

            print(f"开始生成 {count} 条翻译...")

            tag_ids: List[int] = []
            if with_tags:
                for name in DEFAULT_TAGS:
                    await tag_repo.get_or_create(name)
                tag_ids = await tag_repo.get_all_ids()
                print(f"  ✓ 默认标签就绪: {len(tag_ids)} 个")

            batches = math.ceil(count / batch_size) if count > 0 else 0
            now = datetime.utcnow()
            written = 0

            for batch in range(batches):
                current_size = min(batch_size, count - batch * batch_size)
                records = build_batch(batch * batch_size, current_size, rng, now)
                await translation_repo.upsert_many(records)
                written += current_size

                # 每批提交，避免超大事务
                await session.commit()
                print(f"  - 进度: {written}/{count}")

            if with_tags:
                total = await translation_repo.count()
                sample_ids = await translation_repo.get_random_ids(sample_size_for(total))
                links = build_tag_links(sample_ids, tag_ids, rng)
                await translation_tag_repo.insert_ignore_many(links)
                await session.commit()
                print(f"  ✓ 已为 {len(sample_ids)} 条翻译关联标签")

            print(f"\n完成！共写入 {written} 条翻译。")
            return written

        except Exception:
            await session.rollback()
            raise


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(description="批量生成翻译数据（性能测试用）")
    parser.add_argument("--count", type=int, default=100000, help="生成的翻译数量")
    parser.add_argument("--batch", type=int, default=1000, help="每批插入数量")
    parser.add_argument("--with-tags", action="store_true", help="为部分翻译随机关联标签")
    parser.add_argument("--truncate", action="store_true", help="生成前清空翻译表")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None):
    """主函数"""
    args = parse_args(argv)
    if args.count < 0 or args.batch < 1:
        print("✗ --count 不能为负数，--batch 至少为1")
        return 1

    try:
        await init_db()
        await seed_translations(
            count=args.count,
            batch_size=args.batch,
            with_tags=args.with_tags,
            truncate=args.truncate
        )
        return 0

    except Exception as e:
        print(f"✗ 生成失败: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1

    finally:
        # 清理数据库连接
        await cleanup_db()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
