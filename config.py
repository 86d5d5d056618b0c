"""
应用程序配置
"""
# 标准库导包
import os
from pathlib import Path

# 第三方库导包
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# 数据库中时间字段的存储格式，读写必须一致
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseSettings):
    """应用程序设置类"""

    # 应用基本信息
    APP_NAME: str = "Character List Editor"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="调试模式下输出SQL语句")
    RELOAD: bool = False

    # 服务器配置
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # 数据库配置
    APP_DIR: str = Field(default_factory=os.getcwd, description="数据库文件所在目录")
    DB_FILE_NAME: str = "character_data.db"
    DATABASE_URL: str = Field(default="", description="显式指定的数据库URL，为空时使用APP_DIR下的SQLite文件")

    # 日志配置
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(
        env_file=".env",  # 支持从.env文件读取配置
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def DB_PATH(self) -> Path:
        return Path(self.APP_DIR) / self.DB_FILE_NAME

    @property
    def SQLALCHEMY_URL(self) -> str:
        """根据配置返回最终使用的数据库连接URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{self.DB_PATH.as_posix()}"


# 创建设置实例
settings = Settings()
