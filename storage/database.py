"""Database configuration module."""
# 标准库导包
import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

# 第三方库导包
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

# 项目内部导包
from config import Settings, settings as default_settings
from storage.errors import StorageError

# 配置日志
logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def _enable_foreign_keys(dbapi_connection, connection_record):
    """每个新建的SQLite连接都需要单独开启外键约束"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    """
    根据数据库URL创建异步引擎

    SQLite使用StaticPool，整个进程生命周期只打开并复用一个连接。

    Args:
        url: 数据库URL
        echo: 是否输出SQL语句

    Returns:
        AsyncEngine: 异步引擎
    """
    if not url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)

    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(url, echo=echo, poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


class Database:
    """数据库句柄

    持有引擎、会话工厂和一把互斥锁。所有数据库访问都通过 session() 串行执行，
    句柄由调用方创建并注入到服务中，而不是全局单例。
    """

    def __init__(self, url: str, echo: bool = False):
        """
        初始化数据库句柄

        Args:
            url: 数据库URL，例如 sqlite+aiosqlite:///character_data.db
            echo: 是否输出SQL语句
        """
        self.url = url
        self.engine = create_engine_for_url(url, echo=echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Database":
        """根据应用配置创建数据库句柄"""
        settings = settings or default_settings
        url = settings.SQLALCHEMY_URL
        logger.info(f"数据库连接URL: {make_url(url).render_as_string(hide_password=True)}")
        return cls(url, echo=settings.DEBUG)

    async def init_db(self):
        """初始化数据库，创建所有表（已存在的表会被跳过）"""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"数据库表初始化失败: {str(e)}")
            raise StorageError(str(e)) from e
        logger.info("数据库表初始化完成")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """获取一个工作单元会话

        持有互斥锁直到会话结束；正常退出时提交，出错时整体回滚。
        底层数据库异常和时间格式错误统一转换为 StorageError。

        Yields:
            AsyncSession: 数据库会话对象
        """
        async with self._lock:
            async with self.session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except (SQLAlchemyError, ValueError) as e:
                    logger.error(f"数据库会话发生错误: {str(e)}")
                    await session.rollback()
                    raise StorageError(str(e)) from e
                except Exception:
                    await session.rollback()
                    raise

    async def cleanup_db(self):
        """清理数据库连接"""
        await self.engine.dispose()
        logger.info("数据库连接已关闭")
