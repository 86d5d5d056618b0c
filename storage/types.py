"""
自定义列类型
"""
# 标准库导包
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

# 项目内部导包
from config import DATE_FORMAT


class TimestampText(TypeDecorator):
    """以固定格式文本（yyyy-MM-dd HH:mm:ss）存储的时间字段，写入时丢弃秒以下精度"""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[str]:
        if value is None:
            return None
        if value.tzinfo is not None:
            # 带时区的时间先换算为本地时间再存储
            value = value.astimezone().replace(tzinfo=None)
        return value.strftime(DATE_FORMAT)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[datetime]:
        if value is None:
            return None
        # 格式不符时抛出ValueError，由会话边界转换为StorageError
        return datetime.strptime(value, DATE_FORMAT)
