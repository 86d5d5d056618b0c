"""
角色列表编辑器 主应用程序

基于FastAPI和Uvicorn，对外提供角色、标签、规则包和备份的管理接口
"""
# 标准库导包
import logging
from contextlib import asynccontextmanager

# 第三方库导包
import uvicorn
from fastapi import FastAPI

# 项目内部导包
from config import settings
from storage.database import Database
from routers import basic, characters, catalog

# 配置日志
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用程序生命周期管理
    """
    database = Database.from_settings(settings)
    app.state.database = database

    # 启动时初始化数据库
    try:
        await database.init_db()
        logger.info("应用程序启动完成")
        yield
    except Exception as e:
        logger.error(f"应用程序启动失败: {str(e)}")
        raise
    finally:
        # 关闭时清理数据库连接
        try:
            await database.cleanup_db()
            logger.info("应用程序关闭完成")
        except Exception as e:
            logger.error(f"应用程序关闭时发生错误: {str(e)}")

# 创建FastAPI应用实例
app = FastAPI(
    title=settings.APP_NAME,
    description="角色列表编辑器服务",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# 注册路由
app.include_router(basic.router)
app.include_router(characters.router)
app.include_router(catalog.router)


def main():
    """
    应用程序入口点
    """
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL,
        workers=settings.WORKERS
    )


if __name__ == "__main__":
    main()
