"""
CharacterRepository - 角色Repository
"""
# 标准库导包
from typing import List

# 第三方库导包
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.character import Character
from storage.models.character_package import CharacterPackage
from storage.repositories.base import BaseRepository


class CharacterRepository(BaseRepository[Character]):
    """角色Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Character)

    async def get_all_by_last_opened(self) -> List[Character]:
        """
        获取所有角色，按最后打开时间降序排列

        Returns:
            角色列表
        """
        return await self.query_by_filters(
            filters={},
            order_by="last_opened",
            order_desc=True
        )

    async def get_characters_for_package(self, package_id: int) -> List[Character]:
        """
        获取引用了指定规则包的所有角色

        Args:
            package_id: 规则包ID

        Returns:
            角色列表
        """
        query = (
            select(Character)
            .join(CharacterPackage, CharacterPackage.character_id == Character.id)
            .where(CharacterPackage.package_id == package_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
