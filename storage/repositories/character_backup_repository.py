"""
CharacterBackupRepository - 角色备份Repository
"""
# 标准库导包
from datetime import datetime
from typing import List, Optional

# 第三方库导包
from sqlalchemy import update, and_
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.character_backup import CharacterBackup
from storage.repositories.base import BaseRepository


class CharacterBackupRepository(BaseRepository[CharacterBackup]):
    """角色备份Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, CharacterBackup)

    async def get_by_character_id(self, character_id: int) -> List[CharacterBackup]:
        """
        获取角色的所有备份，按备份时间降序排列

        Args:
            character_id: 角色ID

        Returns:
            备份列表
        """
        return await self.query_by_filters(
            filters={"character_id": character_id},
            order_by="backup_date",
            order_desc=True
        )

    async def update_backup(
        self,
        backup_id: int,
        character_id: int,
        backup_path: str,
        backup_date: datetime
    ) -> Optional[CharacterBackup]:
        """
        更新备份的路径和时间，只更新属于指定角色的备份

        Args:
            backup_id: 备份ID
            character_id: 备份所属角色ID
            backup_path: 备份文件路径
            backup_date: 备份时间

        Returns:
            更新后的备份实例，备份不存在或属于其他角色时返回None
        """
        result = await self.session.execute(
            update(CharacterBackup)
            .where(
                and_(
                    CharacterBackup.id == backup_id,
                    CharacterBackup.character_id == character_id
                )
            )
            .values(backup_path=backup_path, backup_date=backup_date)
        )
        if result.rowcount == 0:
            return None

        await self.session.flush()

        backup = await self.get_by_id(backup_id)
        await self.session.refresh(backup)
        return backup
