"""
Package模型 - 规则包表
"""
# 标准库导包
from typing import Optional

# 第三方库导包
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class Package(Base):
    """规则包表，全局共享，名称唯一"""

    __tablename__ = "packages"
    __table_args__ = {"sqlite_autoincrement": True}

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, comment="规则包名称")
    file_path: Mapped[str] = mapped_column(Text, nullable=False, comment="规则包文件路径")

    # 扩展字段
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="规则包描述")
    version: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="规则包版本")

    # 关系定义
    character_links: Mapped[list["CharacterPackage"]] = relationship(
        "CharacterPackage", back_populates="package", passive_deletes=True
    )

    def __repr__(self):
        return f"<Package(id={self.id}, name={self.name}, version={self.version})>"
