"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .character_repository import CharacterRepository
from .tag_repository import TagRepository
from .package_repository import PackageRepository
from .character_tag_repository import CharacterTagRepository
from .character_package_repository import CharacterPackageRepository
from .character_backup_repository import CharacterBackupRepository

__all__ = [
    "BaseRepository",
    "CharacterRepository",
    "TagRepository",
    "PackageRepository",
    "CharacterTagRepository",
    "CharacterPackageRepository",
    "CharacterBackupRepository",
]
