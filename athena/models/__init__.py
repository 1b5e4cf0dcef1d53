"""
数据库模型模块
导出所有表模型和枚举类型
"""

# 账户域模型
from .account import Account, AccountRole
from .profile_record import (
    ProfileRecord, ProfileRecordType,
    serialize_value, deserialize_value,
)

# 基础模型
from .base import TimestampModel, SoftDeleteModel

# 定义导出的内容
__all__ = [
    # 账户域
    "Account", "AccountRole",
    "ProfileRecord", "ProfileRecordType",
    "serialize_value", "deserialize_value",
    # 基础模型
    "TimestampModel", "SoftDeleteModel",
]
