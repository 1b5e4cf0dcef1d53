"""
账户 Repository
提供 accounts 表的查询构建、分页和读写操作

软删除过滤由 db/soft_delete.py 在会话层统一附加，这里的查询条件只包含调用方给出的筛选项
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import case, func, update
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from athena.db.soft_delete import INCLUDE_DELETED
from athena.models.account import Account, AccountRole
from athena.schemas.account import AccountFilter

# 可排序列（AccountFilter.sort_by 的取值 -> 排序表达式）
SORTABLE_COLUMNS = {
    "login": Account.login,
    # 角色按声明顺序排序（student < teacher < admin < superadmin），而不是按存储的名称字母序
    "role": case(
        *[(col(Account.role) == role, rank) for rank, role in enumerate(AccountRole)],
        else_=len(AccountRole),
    ),
    "is_active": Account.is_active,
    "created_at": Account.created_at,
    "updated_at": Account.updated_at,
}


class AccountRepository:
    """
    账户数据访问对象
    封装所有与 accounts 表相关的数据库操作
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    # ==================== 查询 ====================

    @staticmethod
    def build_conditions(filters: AccountFilter) -> List[Any]:
        """
        按固定顺序构建筛选条件：search -> role -> is_active
        未提供的筛选项不产生条件

        Args:
            filters: 筛选参数

        Returns:
            条件列表，调用方以 AND 组合
        """
        conditions = []
        if filters.search:
            conditions.append(col(Account.login).ilike(f"%{filters.search}%"))
        if filters.role is not None:
            conditions.append(col(Account.role) == filters.role)
        if filters.is_active is not None:
            conditions.append(col(Account.is_active) == filters.is_active)
        return conditions

    @staticmethod
    def build_list_statement(filters: AccountFilter):
        """
        构建分页列表查询（含资料记录预加载、排序和分页）

        排序列相同时以 id 升序作为次级排序，保证分页结果稳定
        """
        sort_key = SORTABLE_COLUMNS[filters.sort_by]
        ordering = sort_key.asc() if filters.sort_order == "ASC" else sort_key.desc()

        return (
            select(Account)
            .options(selectinload(Account.profile_records))
            .where(*AccountRepository.build_conditions(filters))
            .order_by(ordering, col(Account.id).asc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
        )

    @staticmethod
    def build_count_statement(filters: AccountFilter):
        """构建计数查询，只应用筛选条件，不分页"""
        matching = select(Account.id).where(*AccountRepository.build_conditions(filters)).subquery()
        return select(func.count()).select_from(matching)

    def list_accounts(self, filters: AccountFilter) -> Tuple[Sequence[Account], int]:
        """
        获取一页账户及筛选后的总数

        Returns:
            (当前页账户列表, 总数)
        """
        total = self.session.exec(self.build_count_statement(filters)).one()
        accounts = self.session.exec(self.build_list_statement(filters)).all()
        return accounts, total

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """
        根据 ID 获取账户（含资料记录）

        Returns:
            Account 对象，不存在或已软删除则返回 None
        """
        statement = (
            select(Account)
            .options(selectinload(Account.profile_records))
            .where(Account.id == account_id)
        )
        return self.session.exec(statement).first()

    def login_exists(self, login: str) -> bool:
        """
        登录名是否已被占用
        唯一约束覆盖已软删除的账户，所以这里也包含它们
        """
        statement = (
            select(Account.id)
            .where(Account.login == login)
            .execution_options(**{INCLUDE_DELETED: True})
        )
        return self.session.exec(statement).first() is not None

    # ==================== 写入 ====================

    def add(self, account: Account) -> Account:
        """
        持久化新建或修改过的账户并刷新

        Returns:
            刷新后的 Account 对象
        """
        self.session.add(account)
        self.session.commit()
        self.session.refresh(account)
        return account

    def soft_delete(self, account_id: str) -> int:
        """
        软删除账户：写入 deleted_at，不物理删除

        Returns:
            受影响的行数，0 表示没有可见的账户
        """
        statement = (
            update(Account)
            .where(col(Account.id) == account_id, col(Account.deleted_at).is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(statement)
        self.session.commit()
        return result.rowcount

    def rollback(self) -> None:
        """回滚当前事务，写入失败后调用"""
        self.session.rollback()
