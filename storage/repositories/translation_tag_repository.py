"""
TranslationTagRepository - 翻译标签关联Repository
"""
# 标准库导包
from typing import List, Set, Tuple, Iterable

# 第三方库导包
from sqlalchemy import select, delete, insert, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.translation_tag import TranslationTag
from storage.repositories.base import BaseRepository


class TranslationTagRepository(BaseRepository[TranslationTag]):
    """翻译标签关联Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, TranslationTag)

    async def get_tag_ids(self, translation_id: int) -> Set[int]:
        """
        获取翻译当前关联的标签ID

        Args:
            translation_id: 翻译ID

        Returns:
            标签ID集合
        """
        result = await self.session.execute(
            select(TranslationTag.tag_id).where(TranslationTag.translation_id == translation_id)
        )
        return {row[0] for row in result.all()}

    async def add_links(self, translation_id: int, tag_ids: Iterable[int]) -> int:
        """
        为翻译添加标签关联

        Args:
            translation_id: 翻译ID
            tag_ids: 标签ID集合（调用方保证不与已有关联重复）

        Returns:
            新增的关联数量
        """
        rows = [{"translation_id": translation_id, "tag_id": tag_id} for tag_id in sorted(set(tag_ids))]
        if not rows:
            return 0

        await self.session.execute(insert(TranslationTag), rows)
        return len(rows)

    async def remove_links(self, translation_id: int, tag_ids: Iterable[int]) -> int:
        """
        移除翻译的指定标签关联

        Args:
            translation_id: 翻译ID
            tag_ids: 标签ID集合

        Returns:
            删除的关联数量
        """
        ids = set(tag_ids)
        if not ids:
            return 0

        result = await self.session.execute(
            delete(TranslationTag).where(
                and_(
                    TranslationTag.translation_id == translation_id,
                    TranslationTag.tag_id.in_(ids)
                )
            )
        )
        return result.rowcount

    async def sync_tags(self, translation_id: int, tag_ids: Iterable[int]) -> Tuple[Set[int], Set[int]]:
        """
        将翻译的标签关联完整替换为给定集合

        计算与现有关联的差集：插入新增、删除移除、交集保持不动。
        重复调用相同集合不会产生任何写入。

        Args:
            translation_id: 翻译ID
            tag_ids: 期望的完整标签ID集合

        Returns:
            (新增的标签ID集合, 移除的标签ID集合)
        """
        desired = set(tag_ids)
        current = await self.get_tag_ids(translation_id)

        to_add = desired - current
        to_remove = current - desired

        await self.remove_links(translation_id, to_remove)
        await self.add_links(translation_id, to_add)
        await self.session.flush()

        return to_add, to_remove

    async def insert_ignore_many(self, pairs: List[Tuple[int, int]]) -> int:
        """
        批量插入关联，已存在的 (translation_id, tag_id) 跳过

        Args:
            pairs: (translation_id, tag_id) 列表

        Returns:
            受影响的行数（仅供参考）
        """
        rows = [{"translation_id": t_id, "tag_id": tag_id} for t_id, tag_id in set(pairs)]
        if not rows:
            return 0

        dialect = self.dialect_name
        if dialect == "mysql":
            stmt = insert(TranslationTag).prefix_with("IGNORE").values(rows)
        else:
            dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = dialect_insert(TranslationTag).values(rows).on_conflict_do_nothing()

        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_by_translation_id(self, translation_id: int) -> int:
        """
        删除指定翻译的所有标签关联

        Args:
            translation_id: 翻译ID

        Returns:
            删除的关联数量
        """
        result = await self.session.execute(
            delete(TranslationTag).where(TranslationTag.translation_id == translation_id)
        )
        return result.rowcount

    async def delete_by_tag_id(self, tag_id: int) -> int:
        """
        删除指定标签的所有翻译关联

        Args:
            tag_id: 标签ID

        Returns:
            删除的关联数量
        """
        result = await self.session.execute(
            delete(TranslationTag).where(TranslationTag.tag_id == tag_id)
        )
        return result.rowcount

    async def truncate(self) -> int:
        """
        清空关联表

        Returns:
            删除的关联数量
        """
        result = await self.session.execute(delete(TranslationTag))
        return result.rowcount
