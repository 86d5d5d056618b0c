"""
Storage层包
提供数据库句柄、模型和Repository的统一访问接口
"""
# 项目内部导包
from .errors import (
    CharacterStoreError,
    StorageError,
    PackageInUseError
)
from .database import (
    Base,
    Database,
    create_engine_for_url
)
from .models import (
    Character,
    Tag,
    Package,
    CharacterTag,
    CharacterPackage,
    CharacterBackup
)
from .repositories import (
    BaseRepository,
    CharacterRepository,
    TagRepository,
    PackageRepository,
    CharacterTagRepository,
    CharacterPackageRepository,
    CharacterBackupRepository
)

__all__ = [
    # 异常
    "CharacterStoreError",
    "StorageError",
    "PackageInUseError",

    # 数据库连接相关
    "Base",
    "Database",
    "create_engine_for_url",

    # 模型相关
    "Character",
    "Tag",
    "Package",
    "CharacterTag",
    "CharacterPackage",
    "CharacterBackup",

    # Repository相关
    "BaseRepository",
    "CharacterRepository",
    "TagRepository",
    "PackageRepository",
    "CharacterTagRepository",
    "CharacterPackageRepository",
    "CharacterBackupRepository",
]
