"""
TagRepository - 标签Repository
"""
# 标准库导包
from typing import Optional, List, Set, Iterable

# 第三方库导包
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.tag import Tag
from storage.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """标签Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Tag)

    async def get_by_name(self, name: str) -> Optional[Tag]:
        """
        根据名称获取标签

        Args:
            name: 标签名称

        Returns:
            标签实例或None
        """
        results = await self.query_by_filters(filters={"name": name}, limit=1)
        return results[0] if results else None

    async def get_or_create(self, name: str) -> Tag:
        """
        按名称获取标签，不存在时创建（幂等）

        Args:
            name: 标签名称

        Returns:
            标签实例
        """
        tag = await self.get_by_name(name)
        if tag:
            return tag
        return await self.create(name=name)

    async def get_existing_ids(self, tag_ids: Iterable[int]) -> Set[int]:
        """
        返回给定ID中实际存在的标签ID

        Args:
            tag_ids: 标签ID集合

        Returns:
            存在的标签ID集合
        """
        ids = set(tag_ids)
        if not ids:
            return set()

        result = await self.session.execute(select(Tag.id).where(Tag.id.in_(ids)))
        return {row[0] for row in result.all()}

    async def get_all_ids(self) -> List[int]:
        """
        获取全部标签ID

        Returns:
            标签ID列表
        """
        result = await self.session.execute(select(Tag.id).order_by(Tag.id))
        return [row[0] for row in result.all()]
