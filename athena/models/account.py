"""
账户域模型 - 账户表
存储身份、凭证、角色和状态；个人资料以动态键值记录形式存放在 profile_records 表
"""

from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from sqlmodel import Field, Relationship

from .base import SoftDeleteModel, new_uuid

if TYPE_CHECKING:
    from .profile_record import ProfileRecord


class AccountRole(str, Enum):
    """系统角色枚举"""
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class Account(SoftDeleteModel, table=True):
    """
    账户表
    用于认证与权限控制，软删除
    """
    __tablename__ = "accounts"

    # 主键：创建时生成，不可变
    id: str = Field(default_factory=new_uuid, primary_key=True)

    # 登录名，唯一约束不区分是否已软删除
    login: str = Field(unique=True, index=True, nullable=False)

    # 密码哈希，任何对外输出都不能包含此字段
    password_hash: str = Field(nullable=False)

    role: AccountRole = Field(default=AccountRole.STUDENT, nullable=False)

    # 封禁/停用标记
    is_active: bool = Field(default=True, nullable=False)

    # 删除账户时级联删除其资料记录
    profile_records: List["ProfileRecord"] = Relationship(
        back_populates="account",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
