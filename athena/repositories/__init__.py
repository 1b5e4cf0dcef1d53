"""
Repository (DAO) 模块
提供数据库操作的抽象层，封装 CRUD 逻辑
"""

from .account_repository import AccountRepository
from .profile_record_repository import ProfileRecordRepository

__all__ = [
    "AccountRepository",
    "ProfileRecordRepository"
]
