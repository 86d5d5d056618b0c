"""
CharacterTag模型 - 角色标签关联表
"""
# 第三方库导包
from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class CharacterTag(Base):
    """角色标签关联表，主键为 (character_id, tag_id)"""

    __tablename__ = "character_tags"

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )

    # 关系定义
    character: Mapped["Character"] = relationship("Character", back_populates="tag_links")
    tag: Mapped["Tag"] = relationship("Tag", back_populates="character_links")

    def __repr__(self):
        return f"<CharacterTag(character_id={self.character_id}, tag_id={self.tag_id})>"
