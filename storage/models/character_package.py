"""
CharacterPackage模型 - 角色规则包关联表
"""
# 第三方库导包
from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class CharacterPackage(Base):
    """角色规则包关联表，主键为 (character_id, package_id)"""

    __tablename__ = "character_package"

    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True
    )
    package_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("packages.id", ondelete="CASCADE"), primary_key=True
    )

    # 关系定义
    character: Mapped["Character"] = relationship("Character", back_populates="package_links")
    package: Mapped["Package"] = relationship("Package", back_populates="character_links")

    def __repr__(self):
        return f"<CharacterPackage(character_id={self.character_id}, package_id={self.package_id})>"
