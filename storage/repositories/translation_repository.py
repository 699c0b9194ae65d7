"""
TranslationRepository - 翻译条目Repository
包含搜索查询组合与导出投影查询
"""
# 标准库导包
from datetime import datetime
from typing import Optional, List, Dict, Any, Sequence, Tuple

# 第三方库导包
from sqlalchemy import select, delete, and_
from sqlalchemy.sql import func
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

# 项目内部导包
from storage.models.translation import Translation
from storage.models.translation_tag import TranslationTag
from storage.repositories.base import BaseRepository, Page


class TranslationRepository(BaseRepository[Translation]):
    """翻译条目Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Translation)

    async def get_with_tags(self, translation_id: int) -> Optional[Translation]:
        """
        获取翻译条目并加载标签

        会覆盖身份映射中已有实例的属性，保证标签同步后读取到最新关联

        Args:
            translation_id: 翻译ID

        Returns:
            翻译实例或None
        """
        query = (
            select(Translation)
            .where(Translation.id == translation_id)
            .options(selectinload(Translation.tags))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_key_and_locale(self, key: str, locale: str) -> Optional[Translation]:
        """
        根据自然键获取翻译条目

        Args:
            key: 翻译键
            locale: 语言代码

        Returns:
            翻译实例或None
        """
        results = await self.query_by_filters(filters={"key": key, "locale": locale}, limit=1)
        return results[0] if results else None

    async def lock_by_id(self, translation_id: int) -> bool:
        """
        锁定翻译行（SELECT ... FOR UPDATE），用于串行化同一条目的并发标签同步

        SQLite不支持行锁，语句中的FOR UPDATE会被忽略

        Args:
            translation_id: 翻译ID

        Returns:
            记录是否存在
        """
        result = await self.session.execute(
            select(Translation.id).where(Translation.id == translation_id).with_for_update()
        )
        return result.scalar_one_or_none() is not None

    def build_search_conditions(
        self,
        key: Optional[str] = None,
        locale: Optional[str] = None,
        content: Optional[str] = None,
        tag_ids: Optional[Sequence[int]] = None
    ) -> List:
        """
        根据可选过滤字段构建条件列表，各条件之间为AND关系

        - key / content: 子串匹配（LIKE %x%，通配符按字面量转义），大小写敏感性取决于数据库排序规则
        - locale: 精确匹配
        - tag_ids: 关联了任意一个给定标签即匹配（OR语义），空列表视为未提供

        Args:
            key: 翻译键子串
            locale: 语言代码
            content: 翻译内容子串
            tag_ids: 标签ID列表

        Returns:
            条件列表
        """
        conditions = []

        if key:
            conditions.append(Translation.key.contains(key, autoescape=True))

        if locale:
            conditions.append(Translation.locale == locale)

        if content:
            conditions.append(Translation.value.contains(content, autoescape=True))

        if tag_ids:
            # 子查询判断成员关系，避免JOIN带来的重复行
            tagged_ids = select(TranslationTag.translation_id).where(
                TranslationTag.tag_id.in_(list(tag_ids))
            )
            conditions.append(Translation.id.in_(tagged_ids))

        return conditions

    async def search(
        self,
        key: Optional[str] = None,
        locale: Optional[str] = None,
        content: Optional[str] = None,
        tag_ids: Optional[Sequence[int]] = None,
        page: int = 1,
        per_page: int = 15
    ) -> Page[Translation]:
        """
        组合过滤条件并分页查询翻译条目（含标签）

        结果按ID升序，数据不变时多次调用顺序一致

        Args:
            key: 翻译键子串
            locale: 语言代码
            content: 翻译内容子串
            tag_ids: 标签ID列表
            page: 页码
            per_page: 每页数量

        Returns:
            分页结果
        """
        conditions = self.build_search_conditions(
            key=key,
            locale=locale,
            content=content,
            tag_ids=tag_ids
        )

        query = select(Translation)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Translation.id.asc())

        return await self.paginate(
            query,
            page=page,
            per_page=per_page,
            options=(selectinload(Translation.tags),)
        )

    async def get_all_for_export(self, locale: Optional[str] = None) -> List[Tuple[str, str, str]]:
        """
        导出专用查询：只投影 locale/key/value 三列，不加载实体和关联

        按 locale、key 排序，保证导出结果稳定；在当前事务的连接上直接用DBAPI游标取回原始元组，不构造Row

        Args:
            locale: 语言代码（可选，提供时只查询该语言）

        Returns:
            (locale, key, value) 元组列表
        """
        table = Translation.__table__
        query = select(table.c.locale, table.c.key, table.c.value)

        if locale is not None:
            query = query.where(table.c.locale == locale)

        query = query.order_by(table.c.locale, table.c.key)

        def _fetch(sync_conn) -> List[Tuple[str, str, str]]:
            compiled = query.compile(dialect=sync_conn.dialect)
            params = compiled.params
            if compiled.positional:
                params = tuple(params[name] for name in compiled.positiontup)

            cursor = sync_conn.connection.cursor()
            try:
                cursor.execute(compiled.string, params)
                return cursor.fetchall()
            finally:
                cursor.close()

        connection = await self.session.connection()
        return await connection.run_sync(_fetch)

    async def upsert_many(self, records: List[Dict[str, Any]]) -> int:
        """
        批量插入或更新（按 key+locale 冲突时更新 value 和 updated_at）

        依赖数据库唯一约束处理并发与重复执行，不做应用层预检查

        Args:
            records: 记录列表，每条包含 key, locale, value，可选 created_at/updated_at

        Returns:
            受影响的行数（不同数据库计数方式不同，仅供参考）
        """
        if not records:
            return 0

        now = datetime.utcnow()
        rows = [
            {
                "key": record["key"],
                "locale": record["locale"],
                "value": record["value"],
                "created_at": record.get("created_at") or now,
                "updated_at": record.get("updated_at") or now,
            }
            for record in records
        ]

        dialect = self.dialect_name
        if dialect == "mysql":
            stmt = mysql.insert(Translation).values(rows)
            stmt = stmt.on_duplicate_key_update(
                value=stmt.inserted.value,
                updated_at=stmt.inserted.updated_at
            )
        else:
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = insert(Translation).values(rows)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Translation.key, Translation.locale],
                set_={
                    "value": stmt.excluded.value,
                    "updated_at": stmt.excluded.updated_at,
                }
            )

        result = await self.session.execute(stmt)
        return result.rowcount

    async def get_random_ids(self, limit: int) -> List[int]:
        """
        随机获取翻译ID

        Args:
            limit: 数量

        Returns:
            翻译ID列表
        """
        rand = func.rand() if self.dialect_name == "mysql" else func.random()
        result = await self.session.execute(
            select(Translation.id).order_by(rand).limit(limit)
        )
        return [row[0] for row in result.all()]

    async def truncate(self) -> int:
        """
        清空翻译表（关联表需先清空）

        Returns:
            删除的行数
        """
        result = await self.session.execute(delete(Translation))
        return result.rowcount
