"""
账户服务异常定义

- AccountNotFoundError / LoginConflictError 携带出错的值，原样传递给调用方
- AccountOperationError 是记录日志之后抛出的通用错误，消息中不包含底层原因
"""


class AthenaError(Exception):
    """账户服务所有异常的基类"""

    pass


class AccountNotFoundError(AthenaError):
    """没有可见（未软删除）的账户匹配给定 ID"""

    def __init__(self, account_id: str):
        """
        Args:
            account_id: 查询的账户 ID
        """
        self.account_id = account_id
        super().__init__("Account not found")


class LoginConflictError(AthenaError):
    """登录名与已有账户冲突（包括已软删除的账户）"""

    def __init__(self, login: str):
        """
        Args:
            login: 已被占用的登录名
        """
        self.login = login
        super().__init__("Login already in use")


class AccountOperationError(AthenaError):
    """其他任何原因导致的操作失败"""

    def __init__(self, operation: str, message: str):
        """
        Args:
            operation: 失败的操作名，如 "list_accounts"
            message: 可以返回给调用方的通用消息
        """
        self.operation = operation
        super().__init__(message)
