"""
密码哈希模块
使用 Argon2id（argon2-cffi），成本参数来自配置
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from .config import settings

_hasher = PasswordHasher(
    time_cost=settings.ARGON2_TIME_COST,
    memory_cost=settings.ARGON2_MEMORY_COST,
    parallelism=settings.ARGON2_PARALLELISM,
)


def hash_password(password: str) -> str:
    """
    生成带盐的 Argon2 哈希，每次调用结果都不同

    Args:
        password: 明文密码

    Returns:
        编码后的哈希字符串（含算法参数和盐）
    """
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    校验明文密码是否与哈希匹配

    Returns:
        匹配返回 True，不匹配或哈希格式错误返回 False
    """
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """哈希的成本参数是否已落后于当前配置"""
    return _hasher.check_needs_rehash(password_hash)
