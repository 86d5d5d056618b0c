"""
角色服务类
负责角色聚合的读取、创建、删除，以及更新时标签/规则包/备份关联与数据库状态的同步
"""
# 标准库导包
import logging
from datetime import datetime
from typing import Optional, List, Tuple, Union

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import Character, Tag, Package, Backup
from storage.database import Database
from storage.errors import PackageInUseError
from storage.repositories.character_repository import CharacterRepository
from storage.repositories.tag_repository import TagRepository
from storage.repositories.package_repository import PackageRepository
from storage.repositories.character_tag_repository import CharacterTagRepository
from storage.repositories.character_package_repository import CharacterPackageRepository
from storage.repositories.character_backup_repository import CharacterBackupRepository

# 配置日志
logger = logging.getLogger(__name__)


class CharacterService:
    """角色服务类

    每个公开方法在一个工作单元内执行：成功时整体提交，任一步骤失败时整体回滚，
    并以 StorageError 抛给调用方。
    """

    def __init__(self, database: Database):
        """
        初始化角色服务

        Args:
            database: 数据库句柄
        """
        self.database = database

    # ========== 角色 ==========

    async def add_character(self, character: Character) -> Character:
        """
        新增角色并关联其携带的标签和规则包

        标签按名称获取或创建；规则包必须已存在。备份列表在新增时忽略。
        生成的ID会写回传入的对象。

        Args:
            character: 新角色（id被忽略）

        Returns:
            从数据库重新加载的角色聚合
        """
        async with self.database.session() as session:
            row = await CharacterRepository(session).create(
                name=character.name,
                campaign=character.campaign,
                last_opened=character.last_opened,
                sheet_path=character.sheet_path
            )

            tag_repo = TagRepository(session)
            character_tag_repo = CharacterTagRepository(session)
            for tag in character.tags or []:
                tag_id = await tag_repo.get_or_create_id(tag.name, tag.color)
                await character_tag_repo.add_tag_to_character(row.id, tag_id)

            character_package_repo = CharacterPackageRepository(session)
            for package in character.packages or []:
                await character_package_repo.add_package_to_character(row.id, package.id)

            loaded = await self._load_character(session, row.id)

        character.id = loaded.id
        logger.info(f"创建角色成功: character_id={loaded.id}, name={loaded.name}")
        return loaded

    async def get_character(self, character_id: int) -> Optional[Character]:
        """
        获取角色聚合（含标签、规则包、备份）

        Args:
            character_id: 角色ID

        Returns:
            角色聚合，不存在时返回None
        """
        async with self.database.session() as session:
            return await self._load_character(session, character_id)

    async def get_all_characters(self) -> List[Character]:
        """
        获取所有角色，按最后打开时间从新到旧排列，每个角色都包含完整的关联列表

        Returns:
            角色列表
        """
        async with self.database.session() as session:
            rows = await CharacterRepository(session).get_all_by_last_opened()
            return [await self._build_character(session, row) for row in rows]

    async def update_character(self, character: Character) -> Optional[Character]:
        """
        更新角色，并把标签、规则包、备份同步为对象中给出的期望状态

        执行顺序固定：标量字段 -> 标签 -> 规则包 -> 备份 -> 重新加载。
        新建备份的ID在提交后写回传入的备份对象。

        Args:
            character: 带有期望关联列表的角色聚合（id必须已设置）

        Returns:
            重新加载的角色聚合；角色不存在时返回None
        """
        async with self.database.session() as session:
            await CharacterRepository(session).update_by_id(
                character.id,
                name=character.name,
                campaign=character.campaign,
                last_opened=character.last_opened,
                sheet_path=character.sheet_path
            )
            await self._synchronize_tags(session, character)
            await self._synchronize_packages(session, character)
            created_backups = await self._synchronize_backups(session, character)

            loaded = await self._load_character(session, character.id)

        for backup, backup_id in created_backups:
            backup.id = backup_id

        logger.info(f"更新角色完成: character_id={character.id}, created_backups={len(created_backups)}")
        return loaded

    async def update_last_opened(self, character: Character) -> Character:
        """
        把角色的最后打开时间设为当前时间并保存（只更新标量字段）

        Args:
            character: 角色（id必须已设置）

        Returns:
            同一个角色对象
        """
        character.last_opened = datetime.now().replace(microsecond=0)

        async with self.database.session() as session:
            await CharacterRepository(session).update_by_id(
                character.id,
                name=character.name,
                campaign=character.campaign,
                last_opened=character.last_opened,
                sheet_path=character.sheet_path
            )

        return character

    async def delete_character(self, character: Character) -> bool:
        """
        删除角色，关联行和备份由数据库外键级联删除，标签和规则包保留

        Args:
            character: 角色（只需要id）

        Returns:
            是否删除了记录
        """
        async with self.database.session() as session:
            deleted = await CharacterRepository(session).delete_by_id(character.id)

        logger.info(f"删除角色: character_id={character.id}, deleted={deleted}")
        return deleted

    # ========== 标签 ==========

    async def get_all_tags(self) -> List[Tag]:
        """获取所有标签，按名称排序"""
        async with self.database.session() as session:
            rows = await TagRepository(session).get_all_ordered()
            return [Tag.model_validate(row) for row in rows]

    async def add_tag(self, tag: Tag) -> Tag:
        """
        添加标签；同名标签已存在时返回已有的ID，颜色保持不变

        Args:
            tag: 标签（id被忽略）

        Returns:
            同一个标签对象，id已设置
        """
        async with self.database.session() as session:
            tag_id = await TagRepository(session).get_or_create_id(tag.name, tag.color)

        tag.id = tag_id
        return tag

    async def delete_tag(self, tag: Union[Tag, int]) -> bool:
        """
        删除标签，所有角色上的该标签关联一并级联删除（不检查是否在用）

        Args:
            tag: 标签对象或标签ID

        Returns:
            是否删除了记录
        """
        tag_id = tag.id if isinstance(tag, Tag) else tag

        async with self.database.session() as session:
            deleted = await TagRepository(session).delete_by_id(tag_id)

        logger.info(f"删除标签: tag_id={tag_id}, deleted={deleted}")
        return deleted

    # ========== 规则包 ==========

    async def get_all_packages(self) -> List[Package]:
        """获取所有规则包，按名称排序"""
        async with self.database.session() as session:
            rows = await PackageRepository(session).get_all_ordered()
            return [Package.model_validate(row) for row in rows]

    async def add_package(self, package: Package) -> Package:
        """
        添加规则包，名称重复时抛出StorageError

        Args:
            package: 规则包（id被忽略）

        Returns:
            同一个规则包对象，id已设置
        """
        async with self.database.session() as session:
            row = await PackageRepository(session).create(
                name=package.name,
                description=package.description,
                file_path=package.file_path,
                version=package.version
            )

        package.id = row.id
        logger.info(f"创建规则包: package_id={row.id}, name={package.name}")
        return package

    async def delete_package(self, package: Package) -> None:
        """
        删除规则包

        Args:
            package: 规则包（需要id）

        Raises:
            PackageInUseError: 规则包仍被至少一个角色引用，此时不做任何修改
        """
        async with self.database.session() as session:
            characters = await CharacterRepository(session).get_characters_for_package(package.id)
            if characters:
                logger.warning(
                    f"规则包仍在使用，拒绝删除: package_id={package.id}, characters={len(characters)}"
                )
                raise PackageInUseError(package.name, [c.id for c in characters])

            await PackageRepository(session).delete_by_id(package.id)

        logger.info(f"删除规则包: package_id={package.id}")

    # ========== 备份 ==========

    async def get_backups_for_character(self, character_id: int) -> List[Backup]:
        """获取角色的备份列表，按备份时间从新到旧排列"""
        async with self.database.session() as session:
            rows = await CharacterBackupRepository(session).get_by_character_id(character_id)
            return [Backup.model_validate(row) for row in rows]

    async def add_backup(self, backup: Backup) -> Backup:
        """
        添加备份，character_id必须指向已存在的角色，否则抛出StorageError

        Args:
            backup: 备份（id被忽略）

        Returns:
            同一个备份对象，id已设置
        """
        async with self.database.session() as session:
            row = await CharacterBackupRepository(session).create(
                character_id=backup.character_id,
                backup_path=backup.backup_path,
                backup_date=backup.backup_date
            )

        backup.id = row.id
        return backup

    async def delete_backup(self, backup: Union[Backup, int]) -> bool:
        """
        删除备份

        Args:
            backup: 备份对象或备份ID

        Returns:
            是否删除了记录
        """
        backup_id = backup.id if isinstance(backup, Backup) else backup

        async with self.database.session() as session:
            return await CharacterBackupRepository(session).delete_by_id(backup_id)

    # ========== 同步 ==========

    async def _synchronize_tags(self, session: AsyncSession, character: Character):
        """
        同步标签关联

        按id比较当前关联和期望列表：多余的按名称解除关联，缺少的先按名称获取或创建
        标签再关联。id=0的新标签总会被当作新增，获取或创建时按名称复用已有标签。
        """
        character_tag_repo = CharacterTagRepository(session)
        tag_repo = TagRepository(session)

        current = [
            Tag.model_validate(row)
            for row in await character_tag_repo.get_tags_by_character_id(character.id)
        ]
        desired = character.tags or []

        removed = [tag for tag in current if tag not in desired]
        added = [tag for tag in desired if tag not in current]

        # 先解除再关联，同名重新关联时不会被误删
        for tag in removed:
            await character_tag_repo.remove_tag_from_character_by_name(character.id, tag.name)
            logger.debug(f"解除标签关联: character_id={character.id}, tag={tag.name}")

        for tag in added:
            tag_id = await tag_repo.get_or_create_id(tag.name, tag.color)
            await character_tag_repo.add_tag_to_character(character.id, tag_id)
            logger.debug(f"添加标签关联: character_id={character.id}, tag_id={tag_id}")

    async def _synchronize_packages(self, session: AsyncSession, character: Character):
        """同步规则包关联，只按规则包id增删关联"""
        character_package_repo = CharacterPackageRepository(session)

        current_ids = {
            package.id
            for package in await character_package_repo.get_packages_by_character_id(character.id)
        }
        desired_ids = {package.id for package in character.packages or []}

        for package_id in sorted(current_ids - desired_ids):
            await character_package_repo.remove_package_from_character(character.id, package_id)
            logger.debug(f"解除规则包关联: character_id={character.id}, package_id={package_id}")

        for package_id in sorted(desired_ids - current_ids):
            await character_package_repo.add_package_to_character(character.id, package_id)
            logger.debug(f"添加规则包关联: character_id={character.id}, package_id={package_id}")

    async def _synchronize_backups(
        self,
        session: AsyncSession,
        character: Character
    ) -> List[Tuple[Backup, int]]:
        """
        同步备份列表

        - 数据库中存在但期望列表中没有的备份被删除
        - id=0 的备份作为新记录插入
        - id>0 的备份更新路径和时间，属于其他角色的备份不会被修改

        Returns:
            (备份对象, 新生成ID) 列表，由调用方在提交后写回
        """
        backup_repo = CharacterBackupRepository(session)

        current_ids = {row.id for row in await backup_repo.get_by_character_id(character.id)}
        desired = character.backups or []
        desired_ids = {backup.id for backup in desired if backup.id != 0}

        for backup_id in sorted(current_ids - desired_ids):
            await backup_repo.delete_by_id(backup_id)
            logger.debug(f"删除备份: character_id={character.id}, backup_id={backup_id}")

        created: List[Tuple[Backup, int]] = []
        for backup in desired:
            if backup.id == 0:
                backup.character_id = character.id
                row = await backup_repo.create(
                    character_id=character.id,
                    backup_path=backup.backup_path,
                    backup_date=backup.backup_date
                )
                created.append((backup, row.id))
            elif await backup_repo.update_backup(
                backup.id, character.id, backup.backup_path, backup.backup_date
            ) is None:
                logger.warning(
                    f"备份不属于该角色，跳过更新: character_id={character.id}, backup_id={backup.id}"
                )
            else:
                backup.character_id = character.id

        return created

    # ========== 加载 ==========

    async def _load_character(self, session: AsyncSession, character_id: int) -> Optional[Character]:
        """根据ID加载完整的角色聚合，不存在时返回None"""
        row = await CharacterRepository(session).get_by_id(character_id)
        if row is None:
            return None
        return await self._build_character(session, row)

    async def _build_character(self, session: AsyncSession, row) -> Character:
        """把角色行和它的三个关联列表组装为角色聚合"""
        tags = await CharacterTagRepository(session).get_tags_by_character_id(row.id)
        packages = await CharacterPackageRepository(session).get_packages_by_character_id(row.id)
        backups = await CharacterBackupRepository(session).get_by_character_id(row.id)

        return Character(
            id=row.id,
            name=row.name,
            campaign=row.campaign,
            last_opened=row.last_opened,
            sheet_path=row.sheet_path,
            tags=[Tag.model_validate(tag) for tag in tags],
            packages=[Package.model_validate(package) for package in packages],
            backups=[Backup.model_validate(backup) for backup in backups]
        )
