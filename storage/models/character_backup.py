"""
CharacterBackup模型 - 角色备份表
"""
# 标准库导包
from datetime import datetime

# 第三方库导包
from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base
from storage.types import TimestampText


class CharacterBackup(Base):
    """角色备份表，归属于唯一的角色"""

    __tablename__ = "character_backups"
    __table_args__ = {"sqlite_autoincrement": True}

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("characters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    backup_path: Mapped[str] = mapped_column(Text, nullable=False, comment="备份文件路径")
    backup_date: Mapped[datetime] = mapped_column(TimestampText, nullable=False, comment="备份时间")

    # 关系定义
    character: Mapped["Character"] = relationship("Character", back_populates="backups")

    def __repr__(self):
        return f"<CharacterBackup(id={self.id}, character_id={self.character_id}, backup_path={self.backup_path})>"
