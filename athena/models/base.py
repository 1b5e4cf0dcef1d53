"""
基础数据库模型模块
提供所有模型共用的时间戳和软删除字段
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    """当前 UTC 时间（timezone-aware）"""
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    """生成新的 UUID4 字符串主键"""
    return str(uuid.uuid4())


# 全局基础模型，包含创建和更新时间戳
class TimestampModel(SQLModel):
    """时间戳基类，为所有模型提供 created_at 和 updated_at 字段

    使用 timezone-aware datetime 替代已弃用的 utcnow()
    """
    created_at: Optional[datetime] = Field(
        default_factory=utc_now,
        nullable=False
    )
    updated_at: Optional[datetime] = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"onupdate": utc_now}
    )


class SoftDeleteModel(TimestampModel):
    """软删除基类

    deleted_at 非空表示记录已被逻辑删除，行仍保留在表中。
    默认查询会自动排除这些行，见 athena/db/soft_delete.py
    """
    deleted_at: Optional[datetime] = Field(default=None, index=True, nullable=True)
