"""
Character模型 - 角色表
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base
from storage.types import TimestampText


class Character(Base):
    """角色表（聚合根）"""

    __tablename__ = "characters"
    __table_args__ = {"sqlite_autoincrement": True}

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, comment="角色名称")
    campaign: Mapped[str] = mapped_column(Text, nullable=False, comment="所属战役")
    last_opened: Mapped[datetime] = mapped_column(TimestampText, nullable=False, comment="最后打开时间")
    sheet_path: Mapped[str] = mapped_column(Text, nullable=False, comment="角色卡文件路径")

    # 关系定义，删除由数据库外键级联完成
    tag_links: Mapped[list["CharacterTag"]] = relationship(
        "CharacterTag", back_populates="character", passive_deletes=True
    )
    package_links: Mapped[list["CharacterPackage"]] = relationship(
        "CharacterPackage", back_populates="character", passive_deletes=True
    )
    backups: Mapped[list["CharacterBackup"]] = relationship(
        "CharacterBackup", back_populates="character", passive_deletes=True
    )

    def __repr__(self):
        return f"<Character(id={self.id}, name={self.name}, campaign={self.campaign})>"
