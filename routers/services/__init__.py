"""
Services layer
业务逻辑层
"""

from .translation_service import TranslationService
from .tag_service import TagService
from .export_service import ExportService

__all__ = [
    "TranslationService",
    "TagService",
    "ExportService"
]
