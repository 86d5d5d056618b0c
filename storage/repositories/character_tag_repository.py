"""
CharacterTagRepository - 角色标签关联Repository
"""
# 标准库导包
from typing import List, Optional

# 第三方库导包
from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.character_tag import CharacterTag
from storage.models.tag import Tag
from storage.repositories.base import BaseRepository


class CharacterTagRepository(BaseRepository[CharacterTag]):
    """角色标签关联Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, CharacterTag)

    async def get_tags_by_character_id(self, character_id: int) -> List[Tag]:
        """
        根据角色ID获取所有已关联的标签

        Args:
            character_id: 角色ID

        Returns:
            标签列表
        """
        query = (
            select(Tag)
            .join(CharacterTag, CharacterTag.tag_id == Tag.id)
            .where(CharacterTag.character_id == character_id)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def add_tag_to_character(
        self,
        character_id: int,
        tag_id: int
    ) -> CharacterTag:
        """
        为角色添加标签（已存在时直接返回原关联）

        Args:
            character_id: 角色ID
            tag_id: 标签ID

        Returns:
            标签关联实例
        """
        existing = await self.query_by_filters(
            filters={"character_id": character_id, "tag_id": tag_id},
            limit=1
        )

        if existing:
            return existing[0]

        return await self.create(character_id=character_id, tag_id=tag_id)

    async def remove_tag_from_character_by_name(
        self,
        character_id: int,
        tag_name: str
    ) -> bool:
        """
        按标签名称移除角色的标签关联，标签不存在时什么也不做

        Args:
            character_id: 角色ID
            tag_name: 标签名称

        Returns:
            是否删除了关联
        """
        tag_id: Optional[int] = (
            await self.session.execute(select(Tag.id).where(Tag.name == tag_name))
        ).scalar_one_or_none()

        if tag_id is None:
            return False

        result = await self.session.execute(
            delete(CharacterTag).where(
                and_(
                    CharacterTag.character_id == character_id,
                    CharacterTag.tag_id == tag_id
                )
            )
        )
        return result.rowcount > 0
