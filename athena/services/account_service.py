"""
账户服务层

封装账户管理业务逻辑，包括：
1. 分页、筛选、排序的账户列表查询
2. 登录名唯一性校验（先查询，再由数据库唯一约束兜底）
3. 密码 Argon2 哈希与重新哈希
4. 软删除

错误约定：
- AccountNotFoundError / LoginConflictError 在检测点抛出，原样传递给调用方
- 其他任何异常都会记录日志（含操作名和参数，不含密码），
  再以通用的 AccountOperationError 抛出，不向外泄露内部细节
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from athena.core.exceptions import (
    AccountNotFoundError,
    AccountOperationError,
    AthenaError,
    LoginConflictError,
)
from athena.core.security import hash_password
from athena.models.account import Account
from athena.repositories.account_repository import AccountRepository
from athena.schemas.account import AccountCreate, AccountFilter, AccountRead, AccountUpdate
from athena.schemas.common import Page

logger = logging.getLogger(__name__)


# 登录名唯一约束在各数据库错误信息中的标识
# SQLite: "UNIQUE constraint failed: accounts.login"
# PostgreSQL: 'duplicate key value violates unique constraint "ix_accounts_login"' / "Key (login)=..."
_LOGIN_UNIQUE_MARKERS = ("accounts.login", "ix_accounts_login", "key (login)")


def _is_login_violation(error: IntegrityError) -> bool:
    """判断完整性错误是否来自登录名唯一约束（NOT NULL、外键等其他约束不算）"""
    message = str(error.orig).lower()
    if "unique" not in message and "duplicate" not in message:
        return False
    return any(marker in message for marker in _LOGIN_UNIQUE_MARKERS)


class AccountService:
    """
    账户服务类

    每个实例绑定一个数据库会话（一次请求一个会话），
    不在请求之间共享任何状态

    使用示例：
        with Session(get_engine()) as session:
            service = AccountService(session)
            page = service.list_accounts(AccountFilter(search="anna", limit=10))
    """

    def __init__(self, session: Session):
        """
        Args:
            session: SQLModel 数据库会话
        """
        self.session = session
        self.repository = AccountRepository(session)

    # ==================== 查询 ====================

    def list_accounts(self, filters: AccountFilter) -> Page[AccountRead]:
        """
        分页获取账户列表

        Args:
            filters: 筛选、排序与分页参数

        Returns:
            Page[AccountRead]，meta.pages = ceil(total / limit)

        Raises:
            AccountOperationError: 查询失败
        """
        logger.info(
            "list_accounts() | page=%s, limit=%s, search=%r, role=%s, is_active=%s, sort=%s %s",
            filters.page, filters.limit, filters.search, filters.role, filters.is_active,
            filters.sort_by, filters.sort_order,
        )
        try:
            accounts, total = self.repository.list_accounts(filters)
            data = [AccountRead.model_validate(account) for account in accounts]
        except Exception:
            logger.exception(
                "list_accounts() failed | page=%s, limit=%s, search=%r, role=%s, is_active=%s",
                filters.page, filters.limit, filters.search, filters.role, filters.is_active,
            )
            raise AccountOperationError("list_accounts", "Failed to fetch accounts")

        logger.info("list_accounts() | Found %d accounts (total=%d)", len(data), total)
        return Page[AccountRead].build(data, total=total, page=filters.page, limit=filters.limit)

    def get_account(self, account_id: str) -> AccountRead:
        """
        根据 ID 获取账户

        Raises:
            AccountNotFoundError: 账户不存在或已软删除
            AccountOperationError: 查询失败
        """
        logger.info("get_account() | id=%s", account_id)
        try:
            account = self.repository.get_by_id(account_id)
        except Exception:
            logger.exception("get_account() failed | id=%s", account_id)
            raise AccountOperationError("get_account", "Failed to fetch account")

        if account is None:
            logger.warning("get_account() | Account not found | id=%s", account_id)
            raise AccountNotFoundError(account_id)
        return AccountRead.model_validate(account)

    # ==================== 写入 ====================

    def create_account(self, data: AccountCreate) -> AccountRead:
        """
        创建账户

        流程：
        1. 登录名唯一性检查（包括已软删除的账户）
        2. Argon2 哈希密码
        3. 写入（role 默认 STUDENT，is_active 默认 True）
        4. 返回不含密码哈希的视图

        Raises:
            LoginConflictError: 登录名已被占用（包括并发写入时由唯一约束拒绝）
            AccountOperationError: 写入失败
        """
        logger.info("create_account() | login=%s", data.login)
        try:
            if self.repository.login_exists(data.login):
                raise LoginConflictError(data.login)

            account = Account(
                login=data.login,
                password_hash=hash_password(data.password),
                role=data.role,
                is_active=data.is_active,
            )
            account = self.repository.add(account)
        except AthenaError:
            raise
        except IntegrityError as e:
            self.repository.rollback()
            if _is_login_violation(e):
                logger.warning("create_account() | Login taken by a concurrent write | login=%s", data.login)
                raise LoginConflictError(data.login)
            logger.exception("create_account() failed | login=%s", data.login)
            raise AccountOperationError("create_account", "Failed to create account")
        except Exception:
            self.repository.rollback()
            logger.exception("create_account() failed | login=%s", data.login)
            raise AccountOperationError("create_account", "Failed to create account")

        logger.info("create_account() | Account created | id=%s", account.id)
        return AccountRead.model_validate(account)

    def update_account(self, account_id: str, patch: AccountUpdate) -> AccountRead:
        """
        更新账户

        只应用 patch 中显式给出的字段：未给出 is_active 时保持不变，
        显式给出 False 时写入 False

        Raises:
            AccountNotFoundError: 账户不存在或已软删除
            LoginConflictError: 新登录名已被占用
            AccountOperationError: 写入失败
        """
        fields = patch.model_dump(exclude_unset=True)
        logger.info("update_account() | id=%s, fields=%s", account_id, sorted(fields))
        try:
            account = self.repository.get_by_id(account_id)
            if account is None:
                logger.warning("update_account() | Account not found | id=%s", account_id)
                raise AccountNotFoundError(account_id)

            new_login = fields.get("login")
            if new_login and new_login != account.login:
                if self.repository.login_exists(new_login):
                    raise LoginConflictError(new_login)
                account.login = new_login

            if fields.get("password"):
                account.password_hash = hash_password(fields["password"])
            if fields.get("role") is not None:
                account.role = fields["role"]
            if fields.get("is_active") is not None:
                account.is_active = fields["is_active"]

            account = self.repository.add(account)
        except AthenaError:
            raise
        except IntegrityError as e:
            self.repository.rollback()
            if _is_login_violation(e):
                logger.warning("update_account() | Login taken by a concurrent write | id=%s", account_id)
                raise LoginConflictError(fields.get("login"))
            logger.exception("update_account() failed | id=%s", account_id)
            raise AccountOperationError("update_account", "Failed to update account")
        except Exception:
            self.repository.rollback()
            logger.exception("update_account() failed | id=%s", account_id)
            raise AccountOperationError("update_account", "Failed to update account")

        logger.info("update_account() | Account updated | id=%s", account.id)
        return AccountRead.model_validate(account)

    def soft_delete_account(self, account_id: str) -> bool:
        """
        软删除账户：写入 deleted_at，行保留在表中，之后的默认查询不可见

        Returns:
            成功返回 True

        Raises:
            AccountNotFoundError: 没有可见的账户
            AccountOperationError: 写入失败
        """
        logger.info("soft_delete_account() | id=%s", account_id)
        try:
            affected = self.repository.soft_delete(account_id)
        except Exception:
            self.repository.rollback()
            logger.exception("soft_delete_account() failed | id=%s", account_id)
            raise AccountOperationError("soft_delete_account", "Failed to delete account")

        if not affected:
            logger.warning("soft_delete_account() | Account not found | id=%s", account_id)
            raise AccountNotFoundError(account_id)

        logger.info("soft_delete_account() | Account soft-deleted | id=%s", account_id)
        return True
