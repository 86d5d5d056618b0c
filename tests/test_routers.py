"""
HTTP接口测试
"""
# 第三方库导包
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# 项目内部导包
from main import app


@pytest_asyncio.fixture
async def client(database):
    """直接注入测试数据库句柄，不经过应用生命周期"""
    app.state.database = database
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


async def _create_package(client, name="Core Rules") -> dict:
    response = await client.post("/packages", json={"name": name, "file_path": f"/packages/{name}.zip"})
    assert response.status_code == 200
    return response.json()["data"]


class TestBasicEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCharacterEndpoints:
    """角色接口"""

    @pytest.mark.asyncio
    async def test_create_and_get_character(self, client):
        package = await _create_package(client)
        response = await client.post(
            "/characters",
            json={
                "name": "Aria",
                "campaign": "Night Below",
                "sheet_path": "/sheets/aria.xml",
                "tags": [{"name": "hero", "color": -65536}],
                "package_ids": [package["id"]]
            }
        )

        assert response.status_code == 200
        created = response.json()["data"]
        assert created["id"] > 0
        assert [tag["name"] for tag in created["tags"]] == ["hero"]

        response = await client.get(f"/characters/{created['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["packages"][0]["id"] == package["id"]

    @pytest.mark.asyncio
    async def test_missing_character_is_404(self, client):
        assert (await client.get("/characters/404")).status_code == 404
        assert (await client.delete("/characters/404")).status_code == 404
        response = await client.put("/characters/404", json={"name": "Ghost", "sheet_path": "/x.xml", "campaign": ""})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_without_name_is_400(self, client):
        response = await client.post("/characters", json={"campaign": "Night Below", "sheet_path": "/x.xml"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_synchronizes_backups(self, client):
        created = (
            await client.post("/characters", json={"name": "Aria", "campaign": "", "sheet_path": "/sheets/aria.xml"})
        ).json()["data"]

        response = await client.put(
            f"/characters/{created['id']}",
            json={
                "name": "Aria",
                "campaign": "Night Below",
                "sheet_path": "/sheets/aria.xml",
                "backups": [{"backup_path": "/backups/1.xml", "backup_date": "2024-01-01T10:00:00"}]
            }
        )

        assert response.status_code == 200
        [backup] = response.json()["data"]["backups"]
        assert backup["id"] > 0
        assert backup["character_id"] == created["id"]

        response = await client.get(f"/characters/{created['id']}/backups")
        assert [b["id"] for b in response.json()["data"]] == [backup["id"]]

    @pytest.mark.asyncio
    async def test_update_without_last_opened_keeps_stored_value(self, client):
        created = (
            await client.post(
                "/characters",
                json={"name": "Aria", "campaign": "", "sheet_path": "/a.xml", "last_opened": "2020-01-01T00:00:00"}
            )
        ).json()["data"]

        response = await client.put(
            f"/characters/{created['id']}",
            json={"name": "Aria", "campaign": "", "sheet_path": "/a.xml", "tags": [{"name": "hero"}]}
        )

        assert response.status_code == 200
        assert response.json()["data"]["last_opened"] == "2020-01-01T00:00:00"

    @pytest.mark.asyncio
    async def test_mark_opened_and_list(self, client):
        first = (
            await client.post(
                "/characters",
                json={"name": "Aria", "campaign": "", "sheet_path": "/a.xml", "last_opened": "2020-01-01T00:00:00"}
            )
        ).json()["data"]
        await client.post(
            "/characters",
            json={"name": "Bryn", "campaign": "", "sheet_path": "/b.xml", "last_opened": "2021-01-01T00:00:00"}
        )

        response = await client.post(f"/characters/{first['id']}/opened")
        assert response.status_code == 200

        response = await client.get("/characters")
        body = response.json()
        assert body["total"] == 2
        assert [c["name"] for c in body["data"]] == ["Aria", "Bryn"]

    @pytest.mark.asyncio
    async def test_backup_endpoints(self, client):
        created = (
            await client.post("/characters", json={"name": "Aria", "campaign": "", "sheet_path": "/a.xml"})
        ).json()["data"]

        response = await client.post(f"/characters/{created['id']}/backups", json={"backup_path": "/backups/a.xml"})
        assert response.status_code == 200
        backup_id = response.json()["data"]["id"]

        assert (await client.post("/characters/999/backups", json={"backup_path": "/x.xml"})).status_code == 404
        assert (await client.delete(f"/backups/{backup_id}")).status_code == 200
        assert (await client.delete(f"/backups/{backup_id}")).status_code == 404


class TestCatalogEndpoints:
    """标签与规则包接口"""

    @pytest.mark.asyncio
    async def test_tags(self, client):
        first = (await client.post("/tags", json={"name": "wizard", "color": -16776961})).json()["data"]
        again = (await client.post("/tags", json={"name": "wizard", "color": 1})).json()["data"]
        await client.post("/tags", json={"name": "elf"})

        assert again["id"] == first["id"]
        response = await client.get("/tags")
        assert [tag["name"] for tag in response.json()["data"]] == ["elf", "wizard"]

        assert (await client.delete(f"/tags/{first['id']}")).status_code == 200
        assert (await client.delete(f"/tags/{first['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_package_is_400(self, client):
        await _create_package(client)

        response = await client.post("/packages", json={"name": "Core Rules", "file_path": "/other.zip"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_package_in_use_is_409(self, client):
        package = await _create_package(client)
        created = (
            await client.post(
                "/characters",
                json={"name": "Aria", "campaign": "", "sheet_path": "/a.xml", "package_ids": [package["id"]]}
            )
        ).json()["data"]

        response = await client.delete(f"/packages/{package['id']}")
        assert response.status_code == 409

        await client.delete(f"/characters/{created['id']}")
        assert (await client.delete(f"/packages/{package['id']}")).status_code == 200
        assert (await client.delete(f"/packages/{package['id']}")).status_code == 404
