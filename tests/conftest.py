"""
测试共享夹具

提供:
    - database: 每个测试独立的内存SQLite数据库句柄（表已创建）
    - service: 基于该句柄的角色服务
"""
# 标准库导包
import sys
from pathlib import Path

# 第三方库导包
import pytest_asyncio

# 保证从任意目录运行pytest时都能导入项目模块
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# 项目内部导包
from storage.database import Database
from routers.services.character_service import CharacterService

IN_MEMORY_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def database():
    """每个测试使用一个全新的内存数据库"""
    db = Database(IN_MEMORY_URL)
    await db.init_db()
    yield db
    await db.cleanup_db()


@pytest_asyncio.fixture
async def service(database):
    return CharacterService(database)

