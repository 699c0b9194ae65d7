"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository, Page
from .translation_repository import TranslationRepository
from .tag_repository import TagRepository
from .translation_tag_repository import TranslationTagRepository

__all__ = [
    "BaseRepository",
    "Page",
    "TranslationRepository",
    "TagRepository",
    "TranslationTagRepository",
]
