"""
时间字段存储格式测试
"""
# 标准库导包
from datetime import datetime, timedelta, timezone

# 第三方库导包
import pytest
from sqlalchemy import text

# 项目内部导包
from storage.errors import StorageError
from storage.repositories import CharacterRepository
from storage.types import TimestampText


class TestTimestampText:

    def test_bind_uses_fixed_format(self):
        column_type = TimestampText()

        assert column_type.process_bind_param(datetime(2024, 3, 4, 5, 6, 7, 891011), None) == "2024-03-04 05:06:07"
        assert column_type.process_bind_param(None, None) is None

    def test_bind_converts_aware_value_to_local_time(self):
        aware = datetime(2024, 3, 4, 10, 0, 0, tzinfo=timezone(timedelta(hours=5)))
        expected = aware.astimezone().replace(tzinfo=None).strftime("%Y-%m-%d %H:%M:%S")

        assert TimestampText().process_bind_param(aware, None) == expected

    def test_aware_values_for_same_instant_store_same_text(self):
        column_type = TimestampText()
        moment = datetime(2024, 3, 4, 5, 0, 0, tzinfo=timezone.utc)
        shifted = moment.astimezone(timezone(timedelta(hours=-7)))

        assert column_type.process_bind_param(moment, None) == column_type.process_bind_param(shifted, None)

    def test_result_parses_fixed_format(self):
        column_type = TimestampText()

        assert column_type.process_result_value("2024-03-04 05:06:07", None) == datetime(2024, 3, 4, 5, 6, 7)
        assert column_type.process_result_value(None, None) is None

    def test_result_rejects_other_formats(self):
        with pytest.raises(ValueError):
            TimestampText().process_result_value("2024-03-04T05:06:07", None)

    @pytest.mark.asyncio
    async def test_stored_as_text_without_microseconds(self, database):
        async with database.session() as session:
            character = await CharacterRepository(session).create(
                name="Aria",
                campaign="Night Below",
                last_opened=datetime(2024, 3, 4, 5, 6, 7, 123456),
                sheet_path="/sheets/aria.xml"
            )
            raw = (
                await session.execute(
                    text("SELECT last_opened FROM characters WHERE id = :id"),
                    {"id": character.id}
                )
            ).scalar_one()

        assert raw == "2024-03-04 05:06:07"
        assert character.last_opened == datetime(2024, 3, 4, 5, 6, 7)

    @pytest.mark.asyncio
    async def test_malformed_stored_value_raises_storage_error(self, database):
        async with database.session() as session:
            await session.execute(
                text(
                    "INSERT INTO characters (name, campaign, last_opened, sheet_path) "
                    "VALUES ('Aria', 'Night Below', 'yesterday', '/sheets/aria.xml')"
                )
            )

        with pytest.raises(StorageError):
            async with database.session() as session:
                await CharacterRepository(session).get_all_by_last_opened()
