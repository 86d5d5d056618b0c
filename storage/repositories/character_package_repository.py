"""
CharacterPackageRepository - 角色规则包关联Repository
"""
# 标准库导包
from typing import List

# 第三方库导包
from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.character_package import CharacterPackage
from storage.models.package import Package
from storage.repositories.base import BaseRepository


class CharacterPackageRepository(BaseRepository[CharacterPackage]):
    """角色规则包关联Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, CharacterPackage)

    async def get_packages_by_character_id(self, character_id: int) -> List[Package]:
        """
        根据角色ID获取所有已关联的规则包

        Args:
            character_id: 角色ID

        Returns:
            规则包列表
        """
        query = (
            select(Package)
            .join(CharacterPackage, CharacterPackage.package_id == Package.id)
            .where(CharacterPackage.character_id == character_id)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def add_package_to_character(
        self,
        character_id: int,
        package_id: int
    ) -> CharacterPackage:
        """
        为角色关联规则包（已存在时直接返回原关联）

        Args:
            character_id: 角色ID
            package_id: 规则包ID

        Returns:
            规则包关联实例
        """
        existing = await self.query_by_filters(
            filters={"character_id": character_id, "package_id": package_id},
            limit=1
        )

        if existing:
            return existing[0]

        return await self.create(character_id=character_id, package_id=package_id)

    async def remove_package_from_character(
        self,
        character_id: int,
        package_id: int
    ) -> bool:
        """
        移除角色的规则包关联

        Args:
            character_id: 角色ID
            package_id: 规则包ID

        Returns:
            是否删除成功
        """
        result = await self.session.execute(
            delete(CharacterPackage).where(
                and_(
                    CharacterPackage.character_id == character_id,
                    CharacterPackage.package_id == package_id
                )
            )
        )
        return result.rowcount > 0
