"""
通用分页结构，所有列表查询共用
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageMeta(BaseModel):
    total: int = Field(..., ge=0, description="筛选后、分页前的总行数")
    page: int = Field(..., ge=1, description="页码（从 1 开始）")
    limit: int = Field(..., ge=1, description="每页条数")
    pages: int = Field(..., ge=0, description="总页数")


class Page(BaseModel, Generic[T]):
    """一页数据及分页元信息"""

    data: List[T]
    meta: PageMeta

    @classmethod
    def build(cls, data: List[T], total: int, page: int, limit: int) -> "Page[T]":
        """
        组装分页结果，pages = ceil(total / limit)

        Args:
            data: 当前页数据
            total: 筛选后的总数
            page: 当前页码
            limit: 每页条数

        Returns:
            Page 对象
        """
        return cls(
            data=data,
            meta=PageMeta(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
        )
