"""
Storage models package.
"""
# 项目内部导包
from .translation import Translation
from .tag import Tag
from .translation_tag import TranslationTag

__all__ = [
    "Translation",
    "Tag",
    "TranslationTag",
]
