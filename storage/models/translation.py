"""
Translation模型 - 翻译条目表
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
from sqlalchemy import String, Text, Integer, DateTime, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class Translation(Base):
    """翻译条目表，(key, locale) 唯一"""

    __tablename__ = "translations"

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False, comment="翻译键，如 common.welcome")
    locale: Mapped[str] = mapped_column(String(10), nullable=False, comment="语言代码，如 en/fr")
    value: Mapped[str] = mapped_column(Text, nullable=False, comment="翻译内容")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系定义（只读，仅通过selectinload显式加载；写入统一走TranslationTag）
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="translation_tags",
        viewonly=True,
        order_by="Tag.id",
        lazy="raise",
    )

    # 唯一约束与导出排序索引
    __table_args__ = (
        UniqueConstraint("key", "locale", name="uq_translation_key_locale"),
        Index("idx_locale_key", "locale", "key"),
    )

    def __repr__(self):
        return f"<Translation(id={self.id}, key={self.key}, locale={self.locale})>"
