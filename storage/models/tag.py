"""
Tag模型 - 标签表
"""
# 标准库导包
from typing import Optional

# 第三方库导包
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class Tag(Base):
    """标签表，全局共享，名称唯一"""

    __tablename__ = "tags"
    __table_args__ = {"sqlite_autoincrement": True}

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, comment="标签名称")
    color: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="标签颜色，ARGB整数")

    # 关系定义
    character_links: Mapped[list["CharacterTag"]] = relationship(
        "CharacterTag", back_populates="tag", passive_deletes=True
    )

    def __repr__(self):
        return f"<Tag(id={self.id}, name={self.name}, color={self.color})>"
