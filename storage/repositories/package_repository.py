"""
PackageRepository - 规则包Repository
"""
# 标准库导包
from typing import List

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.package import Package
from storage.repositories.base import BaseRepository


class PackageRepository(BaseRepository[Package]):
    """规则包Repository

    规则包只由调用方显式创建，没有按名称查找或创建的操作。
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Package)

    async def get_all_ordered(self) -> List[Package]:
        """
        获取所有规则包，按名称排序

        Returns:
            规则包列表
        """
        return await self.query_by_filters(filters={}, order_by="name")
