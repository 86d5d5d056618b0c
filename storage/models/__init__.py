"""
Storage models package.
"""
# 项目内部导包
from .character import Character
from .tag import Tag
from .package import Package
from .character_tag import CharacterTag
from .character_package import CharacterPackage
from .character_backup import CharacterBackup

__all__ = [
    "Character",
    "Tag",
    "Package",
    "CharacterTag",
    "CharacterPackage",
    "CharacterBackup",
]
