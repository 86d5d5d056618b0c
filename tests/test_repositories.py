"""
Repository层测试
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
import pytest

# 项目内部导包
from storage.errors import StorageError
from storage.repositories import (
    CharacterBackupRepository,
    CharacterPackageRepository,
    CharacterRepository,
    CharacterTagRepository,
    PackageRepository,
    TagRepository
)


async def _create_character(session, name="Aria"):
    return await CharacterRepository(session).create(
        name=name,
        campaign="Night Below",
        last_opened=datetime(2024, 1, 1, 8, 0, 0),
        sheet_path=f"/sheets/{name}.xml"
    )


class TestBaseRepository:
    """通用CRUD操作"""

    @pytest.mark.asyncio
    async def test_update_and_delete_by_id(self, database):
        async with database.session() as session:
            repo = CharacterRepository(session)
            character = await _create_character(session)

            updated = await repo.update_by_id(character.id, name="Bryn")
            assert updated.name == "Bryn"
            assert await repo.update_by_id(character.id + 100, name="Nobody") is None

            assert await repo.delete_by_id(character.id) is True
            assert await repo.delete_by_id(character.id) is False
            assert await repo.get_by_id(character.id) is None

    @pytest.mark.asyncio
    async def test_count_on_link_table(self, database):
        async with database.session() as session:
            character = await _create_character(session)
            tag_id = await TagRepository(session).get_or_create_id("hero", 1)
            links = CharacterTagRepository(session)
            await links.add_tag_to_character(character.id, tag_id)

            assert await links.count(character_id=character.id) == 1
            assert await links.count(tag_id=tag_id) == 1
            assert await links.count(tag_id=tag_id + 1) == 0

    @pytest.mark.asyncio
    async def test_query_by_filters_with_list(self, database):
        async with database.session() as session:
            repo = CharacterRepository(session)
            first = await _create_character(session, "Aria")
            await _create_character(session, "Bryn")
            third = await _create_character(session, "Cora")

            rows = await repo.query_by_filters(filters={"id": [first.id, third.id]}, order_by="name")

            assert [row.name for row in rows] == ["Aria", "Cora"]


class TestTagRepository:
    """标签获取或创建"""

    @pytest.mark.asyncio
    async def test_get_or_create_is_idempotent(self, database):
        async with database.session() as session:
            repo = TagRepository(session)
            first = await repo.get_or_create_id("hero", 5)
            second = await repo.get_or_create_id("hero", 9)

            assert first == second
            tag = await repo.get_by_name("hero")
            assert tag.color == 5

    @pytest.mark.asyncio
    async def test_null_color_stored_as_zero(self, database):
        async with database.session() as session:
            repo = TagRepository(session)
            await repo.get_or_create_id("plain", None)

            assert (await repo.get_by_name("plain")).color == 0


class TestLinkRepositories:
    """关联表操作"""

    @pytest.mark.asyncio
    async def test_add_tag_link_is_idempotent(self, database):
        async with database.session() as session:
            character = await _create_character(session)
            tag_id = await TagRepository(session).get_or_create_id("hero", 0)
            links = CharacterTagRepository(session)

            await links.add_tag_to_character(character.id, tag_id)
            await links.add_tag_to_character(character.id, tag_id)

            assert [tag.id for tag in await links.get_tags_by_character_id(character.id)] == [tag_id]

    @pytest.mark.asyncio
    async def test_remove_tag_by_name(self, database):
        async with database.session() as session:
            character = await _create_character(session)
            tag_id = await TagRepository(session).get_or_create_id("hero", 0)
            links = CharacterTagRepository(session)
            await links.add_tag_to_character(character.id, tag_id)

            assert await links.remove_tag_from_character_by_name(character.id, "unknown") is False
            assert await links.remove_tag_from_character_by_name(character.id, "hero") is True
            assert await links.get_tags_by_character_id(character.id) == []

    @pytest.mark.asyncio
    async def test_package_links(self, database):
        async with database.session() as session:
            character = await _create_character(session)
            package = await PackageRepository(session).create(name="Core", file_path="/packages/core.zip")
            links = CharacterPackageRepository(session)

            await links.add_package_to_character(character.id, package.id)
            users = await CharacterRepository(session).get_characters_for_package(package.id)
            assert [c.id for c in users] == [character.id]

            assert await links.remove_package_from_character(character.id, package.id) is True
            assert await links.get_packages_by_character_id(character.id) == []

    @pytest.mark.asyncio
    async def test_link_to_missing_package_fails(self, database):
        with pytest.raises(StorageError):
            async with database.session() as session:
                character = await _create_character(session)
                await CharacterPackageRepository(session).add_package_to_character(character.id, 999)


class TestCharacterBackupRepository:
    """备份读写"""

    @pytest.mark.asyncio
    async def test_update_backup(self, database):
        async with database.session() as session:
            character = await _create_character(session)
            repo = CharacterBackupRepository(session)
            backup = await repo.create(
                character_id=character.id,
                backup_path="/backups/1.xml",
                backup_date=datetime(2024, 2, 1, 12, 0, 0)
            )

            updated = await repo.update_backup(backup.id, character.id, "/backups/1b.xml", datetime(2024, 2, 2, 12, 0, 0))

            assert updated.backup_path == "/backups/1b.xml"
            assert updated.backup_date == datetime(2024, 2, 2, 12, 0, 0)
            assert await repo.update_backup(backup.id + 50, character.id, "/x.xml", datetime(2024, 2, 2)) is None

    @pytest.mark.asyncio
    async def test_update_backup_requires_owner(self, database):
        async with database.session() as session:
            owner = await _create_character(session, "Aria")
            other = await _create_character(session, "Bryn")
            repo = CharacterBackupRepository(session)
            backup = await repo.create(
                character_id=owner.id,
                backup_path="/backups/1.xml",
                backup_date=datetime(2024, 2, 1, 12, 0, 0)
            )

            assert await repo.update_backup(backup.id, other.id, "/backups/taken.xml", datetime(2024, 3, 1)) is None

            [stored] = await repo.get_by_character_id(owner.id)
            assert stored.backup_path == "/backups/1.xml"
