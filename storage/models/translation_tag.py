"""
TranslationTag模型 - 翻译标签关联表
"""
# 第三方库导包
from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base


class TranslationTag(Base):
    """翻译标签关联表，纯关联实体，复合主键防止重复关联"""

    __tablename__ = "translation_tags"

    translation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("translations.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    def __repr__(self):
        return f"<TranslationTag(translation_id={self.translation_id}, tag_id={self.tag_id})>"
