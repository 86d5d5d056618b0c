"""
Services layer
业务逻辑层
"""

from .character_service import CharacterService

__all__ = [
    "CharacterService"
]
