"""
Pydantic 数据结构：经过校验的输入载荷和对外视图
"""

from .account import (
    AccountCreate,
    AccountUpdate,
    AccountFilter,
    AccountRead,
    SortField,
    SortOrder,
)
from .common import Page, PageMeta

__all__ = [
    "AccountCreate",
    "AccountUpdate",
    "AccountFilter",
    "AccountRead",
    "SortField",
    "SortOrder",
    "Page",
    "PageMeta",
]
