"""
核心基础设施模块
提供配置、日志、异常和密码哈希
"""

from .config import settings, Settings
from .exceptions import (
    AthenaError,
    AccountNotFoundError,
    LoginConflictError,
    AccountOperationError,
)
from .security import hash_password, verify_password, needs_rehash

__all__ = [
    "settings", "Settings",
    "AthenaError", "AccountNotFoundError", "LoginConflictError", "AccountOperationError",
    "hash_password", "verify_password", "needs_rehash",
]
