"""
TagRepository - 标签Repository
"""
# 标准库导包
import logging
from typing import Optional, List

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.tag import Tag
from storage.repositories.base import BaseRepository

# 配置日志
logger = logging.getLogger(__name__)


class TagRepository(BaseRepository[Tag]):
    """标签Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Tag)

    async def get_by_name(self, name: str) -> Optional[Tag]:
        """
        根据名称获取标签

        Args:
            name: 标签名称

        Returns:
            标签实例或None
        """
        results = await self.query_by_filters(filters={"name": name}, limit=1)
        return results[0] if results else None

    async def get_or_create_id(self, name: str, color: Optional[int]) -> int:
        """
        按名称查找标签，不存在时创建

        已存在的标签保持原有颜色，重复调用不会产生重复记录。

        Args:
            name: 标签名称
            color: 新建标签时使用的颜色，None按0存储

        Returns:
            标签ID
        """
        existing = await self.get_by_name(name)
        if existing:
            return existing.id

        tag = await self.create(name=name, color=color if color is not None else 0)
        logger.info(f"创建标签: tag_id={tag.id}, name={name}")
        return tag.id

    async def get_all_ordered(self) -> List[Tag]:
        """
        获取所有标签，按名称排序

        Returns:
            标签列表
        """
        return await self.query_by_filters(filters={}, order_by="name")
