"""
标签服务类
"""
# 标准库导包
import logging
from typing import List

# 第三方库导包
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.tag import Tag
from storage.repositories.tag_repository import TagRepository
from storage.repositories.translation_tag_repository import TranslationTagRepository
from utils.exceptions import NotFoundError, ConflictError

# 配置日志
logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A tag with this name already exists."


class TagService:
    """标签服务类"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tag_repo = TagRepository(session)
        self.translation_tag_repo = TranslationTagRepository(session)

    async def list_tags(self) -> List[Tag]:
        """获取全部标签（按ID升序）"""
        return await self.tag_repo.get_all()

    async def get_tag(self, tag_id: int) -> Tag:
        tag = await self.tag_repo.get_by_id(tag_id)
        if not tag:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def create_tag(self, name: str) -> Tag:
        """
        创建标签

        Raises:
            ConflictError: 名称已存在
        """
        if await self.tag_repo.get_by_name(name):
            raise ConflictError("Tag", "name", DUPLICATE_NAME_MESSAGE)

        try:
            tag = await self.tag_repo.create(name=name)
        except IntegrityError as e:
            raise ConflictError("Tag", "name", DUPLICATE_NAME_MESSAGE) from e

        logger.info(f"创建标签成功: tag_id={tag.id}, name={name}")
        return tag

    async def update_tag(self, tag_id: int, name: str) -> Tag:
        """
        重命名标签

        Raises:
            NotFoundError: 标签不存在
            ConflictError: 名称被其他标签占用
        """
        tag = await self.get_tag(tag_id)

        existing = await self.tag_repo.get_by_name(name)
        if existing and existing.id != tag.id:
            raise ConflictError("Tag", "name", DUPLICATE_NAME_MESSAGE)

        try:
            tag = await self.tag_repo.update_by_id(tag_id, name=name)
        except IntegrityError as e:
            raise ConflictError("Tag", "name", DUPLICATE_NAME_MESSAGE) from e

        logger.info(f"更新标签成功: tag_id={tag_id}, name={name}")
        return tag

    async def delete_tag(self, tag_id: int) -> None:
        """
        删除标签及其全部翻译关联

        Raises:
            NotFoundError: 标签不存在
        """
        await self.get_tag(tag_id)

        removed_links = await self.translation_tag_repo.delete_by_tag_id(tag_id)
        await self.tag_repo.delete_by_id(tag_id)

        logger.info(f"删除标签成功: tag_id={tag_id}, removed_links={removed_links}")
