"""
账户管理数据结构
定义调用方（管理后台、API 层）与 AccountService 之间的契约

输入结构负责类型和范围校验，服务层假定收到的载荷已经合法。
AccountRead 是账户离开服务层的唯一形态，不包含任何密码字段。
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from athena.models.account import AccountRole

SortField = Literal["login", "role", "is_active", "created_at", "updated_at"]
SortOrder = Literal["ASC", "DESC"]

# 前端使用的 camelCase 写法
_SORT_FIELD_ALIASES = {
    "isActive": "is_active",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

# ==================== 输入结构 ====================


class AccountCreate(BaseModel):
    """
    管理后台创建账户的请求体
    password 为明文，由服务层哈希后存储
    """

    login: str = Field(..., min_length=3, description="唯一登录名")
    password: str = Field(..., min_length=8, description="明文密码（至少 8 位，存储前哈希）")
    role: AccountRole = Field(default=AccountRole.STUDENT, description="系统角色")
    is_active: bool = Field(default=True, description="是否启用")


class AccountUpdate(BaseModel):
    """
    更新账户的请求体，所有字段可选

    只应用载荷中显式给出的字段（model_dump(exclude_unset=True)），
    因此 is_active=False 与不传 is_active 含义不同
    """

    login: Optional[str] = Field(default=None, min_length=3, description="新登录名")
    password: Optional[str] = Field(default=None, min_length=8, description="新密码，给出时重新哈希")
    role: Optional[AccountRole] = Field(default=None, description="新角色")
    is_active: Optional[bool] = Field(default=None, description="新启用状态")


class AccountFilter(BaseModel):
    """
    账户列表的筛选、排序和分页参数
    """

    search: Optional[str] = Field(default=None, description="登录名子串，不区分大小写")
    role: Optional[AccountRole] = Field(default=None, description="角色精确匹配")
    is_active: Optional[bool] = Field(default=None, description="启用状态精确匹配")
    page: int = Field(default=1, ge=1, description="页码（从 1 开始）")
    limit: int = Field(default=20, ge=1, le=100, description="每页条数")
    sort_by: SortField = Field(default="created_at", description="排序列")
    sort_order: SortOrder = Field(default="DESC", description="排序方向")

    @field_validator("search")
    @classmethod
    def _blank_search_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("sort_by", mode="before")
    @classmethod
    def _normalize_sort_by(cls, value):
        if isinstance(value, str):
            return _SORT_FIELD_ALIASES.get(value, value)
        return value

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_sort_order(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


# ==================== 输出结构 ====================


class AccountRead(BaseModel):
    """
    账户对外视图
    从 ORM 对象映射，只保留这里列出的字段；password_hash 和 deleted_at 永远不会出现
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="账户 ID")
    login: str = Field(..., description="登录名")
    role: AccountRole = Field(..., description="系统角色")
    is_active: bool = Field(..., description="是否启用")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="最后更新时间")
