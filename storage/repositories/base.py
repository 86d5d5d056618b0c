"""
基础Repository类
"""
# 标准库导包
from typing import TypeVar, Generic, Optional, List, Dict, Any
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_
from sqlalchemy.sql import func

# 项目内部导包
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供单表的通用CRUD操作，每个操作对应一条语句"""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        根据ID获取单条记录

        Args:
            id: 记录ID

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例（含数据库生成的ID）
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_by_id(self, id: int, **kwargs) -> Optional[ModelType]:
        """
        根据ID更新记录

        Args:
            id: 记录ID
            **kwargs: 要更新的字段值

        Returns:
            更新后的模型实例，记录不存在时返回None
        """
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
        )
        if result.rowcount == 0:
            return None

        await self.session.flush()

        updated_instance = await self.get_by_id(id)
        if updated_instance:
            await self.session.refresh(updated_instance)

        return updated_instance

    async def delete_by_id(self, id: int) -> bool:
        """
        根据ID删除记录

        Args:
            id: 记录ID

        Returns:
            是否删除成功
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        return result.rowcount > 0

    async def count(self, **filters) -> int:
        """
        统计记录数量

        Args:
            **filters: 等值过滤条件

        Returns:
            记录数量
        """
        query = select(func.count()).select_from(self.model)

        conditions = self._build_filter_conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        构建过滤条件，列表/元组生成IN条件，其余为等值条件

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

            if isinstance(value, (list, tuple)):
                conditions.append(column.in_(value))
            else:
                conditions.append(column == value)

        return conditions

    async def query_by_filters(
        self,
        filters: Dict[str, Any],
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> List[ModelType]:
        """
        根据过滤条件查询记录

        Args:
            filters: 过滤条件字典
            limit: 限制返回数量
            order_by: 排序字段
            order_desc: 是否降序

        Returns:
            模型实例列表
        """
        conditions = self._build_filter_conditions(filters)
        query = select(self.model)

        if conditions:
            query = query.where(and_(*conditions))

        if order_by and hasattr(self.model, order_by):
            column = getattr(self.model, order_by)
            if order_desc:
                query = query.order_by(column.desc())
            else:
                query = query.order_by(column.asc())

        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
