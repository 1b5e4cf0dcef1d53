"""
服务层模块
提供业务逻辑的抽象层，封装复杂的服务流程
"""

from .account_service import AccountService

__all__ = [
    "AccountService"
]
