"""
基础Repository类
"""
# 标准库导包
import math
from typing import TypeVar, Generic, Optional, List, Dict, Any, Tuple
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, update, delete, and_, inspect
from sqlalchemy.sql import func

# 项目内部导包
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class Page(Generic[ModelType]):
    """分页结果"""

    def __init__(self, items: List[ModelType], total: int, page: int, per_page: int):
        self.items = items
        self.total = total
        self.page = page
        self.per_page = per_page

    @property
    def last_page(self) -> int:
        """最后一页页码，无数据时为1"""
        return max(1, math.ceil(self.total / self.per_page))

    def __repr__(self):
        return f"<Page(page={self.page}, per_page={self.per_page}, total={self.total}, items={len(self.items)})>"


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供通用的CRUD操作"""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    @property
    def dialect_name(self) -> str:
        """当前连接的数据库方言名称（mysql/sqlite/postgresql）"""
        return self.session.get_bind().dialect.name

    @property
    def primary_key_columns(self) -> Tuple:
        """模型主键列，复合主键时按定义顺序"""
        return tuple(inspect(self.model).primary_key)

    def _identity_condition(self, id: Any):
        """
        构建按主键定位单行的条件

        Args:
            id: 单列主键直接传值；复合主键传与主键列顺序一致的元组

        Returns:
            WHERE条件
        """
        columns = self.primary_key_columns
        values = id if isinstance(id, tuple) else (id,)
        if len(values) != len(columns):
            raise ValueError(
                f"{self.model.__name__} 主键需要 {len(columns)} 个值，实际传入 {len(values)} 个"
            )
        return and_(*(column == value for column, value in zip(columns, values)))

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """
        根据主键获取单条记录

        Args:
            id: 主键值（复合主键为元组）

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model).where(self._identity_condition(id))
        )
        return result.scalar_one_or_none()

    async def get_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[ModelType]:
        """
        获取所有记录（按主键升序）

        Args:
            limit: 限制返回数量
            offset: 偏移量

        Returns:
            模型实例列表
        """
        query = select(self.model).order_by(*self.primary_key_columns)

        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_by_id(self, id: Any, **kwargs) -> Optional[ModelType]:
        """
        根据主键更新记录

        Args:
            id: 主键值（复合主键为元组）
            **kwargs: 要更新的字段值

        Returns:
            更新后的模型实例或None
        """
        # MySQL不支持RETURNING子句，所以先执行UPDATE，然后重新查询
        existing = await self.get_by_id(id)
        if not existing:
            return None

        if kwargs:
            await self.session.execute(
                update(self.model)
                .where(self._identity_condition(id))
                .values(**kwargs)
            )
            await self.session.flush()

        # 身份映射中的实例仍是旧值，需要刷新
        await self.session.refresh(existing)
        return existing

    async def delete_by_id(self, id: Any) -> bool:
        """
        根据主键删除记录

        Args:
            id: 主键值（复合主键为元组）

        Returns:
            是否删除成功
        """
        result = await self.session.execute(
            delete(self.model).where(self._identity_condition(id))
        )
        return result.rowcount > 0

    async def count(self, **filters) -> int:
        """
        统计记录数量

        Args:
            **filters: 过滤条件

        Returns:
            记录数量
        """
        query = select(func.count()).select_from(self.model)

        conditions = self._build_filter_conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def exists(self, **filters) -> bool:
        """
        检查记录是否存在

        Args:
            **filters: 过滤条件

        Returns:
            是否存在
        """
        count = await self.count(**filters)
        return count > 0

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        构建等值/IN过滤条件

        Args:
            filters: 过滤条件字典

        Returns:
            条件列表
        """
        conditions = []

        for key, value in filters.items():
            if not hasattr(self.model, key):
                continue

            column = getattr(self.model, key)

            if isinstance(value, (list, tuple, set)):
                # IN 条件
                conditions.append(column.in_(list(value)))
            else:
                # 等于条件
                conditions.append(column == value)

        return conditions

    async def query_by_filters(
        self,
        filters: Dict[str, Any],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ModelType]:
        """
        根据过滤条件查询记录

        Args:
            filters: 过滤条件字典
            limit: 限制返回数量
            offset: 偏移量

        Returns:
            模型实例列表
        """
        conditions = self._build_filter_conditions(filters)
        query = select(self.model)

        if conditions:
            query = query.where(and_(*conditions))

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def paginate(
        self,
        query: Select,
        page: int,
        per_page: int,
        options: Tuple = ()
    ) -> Page[ModelType]:
        """
        执行分页查询并返回总数

        先统计匹配总数，再按偏移量获取当前页数据

        Args:
            query: 未分页的查询语句（需自带排序）
            page: 页码，从1开始
            per_page: 每页数量
            options: 仅作用于数据查询的加载选项（如selectinload），不参与计数

        Returns:
            分页结果
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await self.session.execute(count_query)).scalar_one()

        paged_query = query.options(*options).offset((page - 1) * per_page).limit(per_page)
        result = await self.session.execute(paged_query)
        items = list(result.scalars().all())

        return Page(items=items, total=total, page=page, per_page=per_page)
