"""
翻译服务类
处理翻译条目的创建、查询、更新、删除与标签同步等业务逻辑
"""
# 标准库导包
import logging
from typing import Optional, List, Dict, Any, Iterable

# 第三方库导包
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import SearchFilters
from storage.models.translation import Translation
from storage.repositories.base import Page
from storage.repositories.translation_repository import TranslationRepository
from storage.repositories.tag_repository import TagRepository
from storage.repositories.translation_tag_repository import TranslationTagRepository
from utils.exceptions import NotFoundError, ConflictError, InvalidInputError

# 配置日志
logger = logging.getLogger(__name__)

DUPLICATE_KEY_MESSAGE = "The translation key has already been taken for this locale."
UNKNOWN_TAGS_MESSAGE = "One or more selected tags do not exist."


class TranslationService:
    """翻译服务类"""

    def __init__(self, session: AsyncSession):
        """
        初始化翻译服务

        Args:
            session: 数据库会话（一个请求一个事务，由get_session统一提交或回滚）
        """
        self.session = session
        self.translation_repo = TranslationRepository(session)
        self.tag_repo = TagRepository(session)
        self.translation_tag_repo = TranslationTagRepository(session)

    async def search(self, filters: SearchFilters, page: int = 1, per_page: int = 15) -> Page[Translation]:
        """
        按过滤条件分页搜索翻译

        未知的标签ID不会报错，只是匹配不到任何记录

        Args:
            filters: 过滤条件
            page: 页码
            per_page: 每页数量（边界层已校验范围）

        Returns:
            分页结果
        """
        return await self.translation_repo.search(
            key=filters.key,
            locale=filters.locale,
            content=filters.content,
            tag_ids=filters.tags,
            page=page,
            per_page=per_page
        )

    async def paginate(self, page: int = 1, per_page: int = 15) -> Page[Translation]:
        """无过滤条件的分页列表"""
        return await self.search(SearchFilters(), page=page, per_page=per_page)

    async def get_translation(self, translation_id: int) -> Translation:
        """
        获取翻译详情（含标签）

        Raises:
            NotFoundError: 翻译不存在
        """
        translation = await self.translation_repo.get_with_tags(translation_id)
        if not translation:
            raise NotFoundError("Translation", translation_id)
        return translation

    async def create_translation(
        self,
        key: str,
        locale: str,
        value: str,
        tag_ids: Optional[List[int]] = None
    ) -> Translation:
        """
        创建翻译，并可选关联标签

        Args:
            key: 翻译键
            locale: 语言代码
            value: 翻译内容
            tag_ids: 标签ID列表

        Returns:
            创建的翻译实例（含标签）

        Raises:
            ConflictError: key+locale 已存在
            InvalidInputError: 引用了不存在的标签
        """
        if await self.translation_repo.get_by_key_and_locale(key, locale):
            raise ConflictError("Translation", "key", DUPLICATE_KEY_MESSAGE)

        if tag_ids:
            await self._ensure_tags_exist(tag_ids)

        try:
            translation = await self.translation_repo.create(key=key, locale=locale, value=value)
        except IntegrityError as e:
            # 并发写入时由唯一约束兜底
            raise ConflictError("Translation", "key", DUPLICATE_KEY_MESSAGE) from e

        if tag_ids:
            await self.translation_tag_repo.sync_tags(translation.id, tag_ids)

        logger.info(f"创建翻译成功: translation_id={translation.id}, key={key}, locale={locale}, tags={tag_ids or []}")

        return await self.get_translation(translation.id)

    async def update_translation(
        self,
        translation_id: int,
        fields: Dict[str, Any],
        tag_ids: Optional[List[int]] = None
    ) -> Translation:
        """
        更新翻译字段；tag_ids不为None时整体替换标签

        两步操作（更新字段、同步标签）处于同一事务中

        Args:
            translation_id: 翻译ID
            fields: 要更新的字段（key/locale/value 的任意子集）
            tag_ids: 标签ID列表，None表示不修改标签

        Returns:
            更新后的翻译实例（含标签）

        Raises:
            NotFoundError: 翻译不存在
            ConflictError: 修改后的 key+locale 与其他记录冲突
            InvalidInputError: 引用了不存在的标签
        """
        translation = await self.translation_repo.get_by_id(translation_id)
        if not translation:
            raise NotFoundError("Translation", translation_id)

        update_data = {
            field: fields[field]
            for field in ("key", "locale", "value")
            if fields.get(field) is not None
        }

        new_key = update_data.get("key", translation.key)
        new_locale = update_data.get("locale", translation.locale)
        if (new_key, new_locale) != (translation.key, translation.locale):
            existing = await self.translation_repo.get_by_key_and_locale(new_key, new_locale)
            if existing and existing.id != translation_id:
                raise ConflictError("Translation", "key", DUPLICATE_KEY_MESSAGE)

        if tag_ids:
            await self._ensure_tags_exist(tag_ids)

        if update_data:
            try:
                await self.translation_repo.update_by_id(translation_id, **update_data)
            except IntegrityError as e:
                raise ConflictError("Translation", "key", DUPLICATE_KEY_MESSAGE) from e

        if tag_ids is not None:
            await self.translation_tag_repo.sync_tags(translation_id, tag_ids)

        logger.info(
            f"更新翻译成功: translation_id={translation_id}, fields={list(update_data.keys())}, "
            f"tags={'unchanged' if tag_ids is None else tag_ids}"
        )

        return await self.get_translation(translation_id)

    async def delete_translation(self, translation_id: int) -> None:
        """
        删除翻译，先显式删除其标签关联

        Raises:
            NotFoundError: 翻译不存在
        """
        if not await self.translation_repo.exists(id=translation_id):
            raise NotFoundError("Translation", translation_id)

        removed_links = await self.translation_tag_repo.delete_by_translation_id(translation_id)
        await self.translation_repo.delete_by_id(translation_id)

        logger.info(f"删除翻译成功: translation_id={translation_id}, removed_links={removed_links}")

    async def sync_tags(self, translation_id: int, tag_ids: List[int]) -> None:
        """
        将翻译的标签整体替换为给定集合（幂等）

        先锁定翻译行，使同一翻译上的并发同步串行执行；不同翻译之间互不影响

        Args:
            translation_id: 翻译ID
            tag_ids: 期望的完整标签ID列表

        Raises:
            NotFoundError: 翻译不存在
            InvalidInputError: 引用了不存在的标签
        """
        if not await self.translation_repo.lock_by_id(translation_id):
            raise NotFoundError("Translation", translation_id)

        if tag_ids:
            await self._ensure_tags_exist(tag_ids)

        added, removed = await self.translation_tag_repo.sync_tags(translation_id, tag_ids)

        logger.info(
            f"同步翻译标签: translation_id={translation_id}, "
            f"added={sorted(added)}, removed={sorted(removed)}"
        )

    async def _ensure_tags_exist(self, tag_ids: Iterable[int]) -> None:
        """
        校验标签ID全部存在

        Raises:
            InvalidInputError: 存在未知的标签ID
        """
        requested = set(tag_ids)
        existing = await self.tag_repo.get_existing_ids(requested)
        missing = requested - existing
        if missing:
            logger.warning(f"引用了不存在的标签: {sorted(missing)}")
            raise InvalidInputError("tags", UNKNOWN_TAGS_MESSAGE)
