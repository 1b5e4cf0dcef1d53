"""
账户资料域模型 - 动态资料记录表
无需迁移即可为账户增加任意字段；值一律以文本存储，data_type 仅作解析提示
"""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship

from .base import TimestampModel, new_uuid

if TYPE_CHECKING:
    from .account import Account


class ProfileRecordType(str, Enum):
    """资料值类型枚举"""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"


class ProfileRecord(TimestampModel, table=True):
    """
    资料记录表
    每个账户下 name 唯一
    """
    __tablename__ = "profile_records"

    # 复合唯一约束：同一账户同名字段只能有一条
    __table_args__ = (UniqueConstraint("account_id", "name", name="uix_account_record_name"),)

    id: str = Field(default_factory=new_uuid, primary_key=True)

    # 外键：归属账户，账户物理删除时级联删除
    account_id: str = Field(foreign_key="accounts.id", ondelete="CASCADE", index=True, nullable=False)

    # 字段名，如 "first_name"、"city"、"degree"
    name: str = Field(nullable=False)

    # 文本化的值
    value: str = Field(nullable=False)

    data_type: ProfileRecordType = Field(default=ProfileRecordType.STRING, nullable=False)

    account: Optional["Account"] = Relationship(back_populates="profile_records")

    @property
    def typed_value(self) -> Any:
        """按 data_type 解析后的值"""
        return deserialize_value(self.value, self.data_type)


_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def serialize_value(value: Any, data_type: ProfileRecordType) -> str:
    """
    把逻辑值转换为存储用的文本

    Args:
        value: 逻辑值
        data_type: 值类型

    Returns:
        文本形式的值
    """
    if data_type == ProfileRecordType.BOOLEAN:
        if isinstance(value, str):
            return "true" if _parse_bool(value) else "false"
        return "true" if value else "false"
    if data_type == ProfileRecordType.NUMBER:
        if isinstance(value, bool):
            raise ValueError("Boolean is not a number")
        if isinstance(value, float):
            return repr(value)
        return str(value)
    if data_type == ProfileRecordType.DATE:
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return str(value)
    if data_type == ProfileRecordType.JSON:
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def deserialize_value(text: str, data_type: ProfileRecordType) -> Any:
    """
    把存储的文本解析为逻辑值

    Raises:
        ValueError: 文本与 data_type 不符
    """
    if data_type == ProfileRecordType.BOOLEAN:
        return _parse_bool(text)
    if data_type == ProfileRecordType.NUMBER:
        try:
            return int(text)
        except ValueError:
            return float(text)
    if data_type == ProfileRecordType.DATE:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text)
        return date.fromisoformat(text)
    if data_type == ProfileRecordType.JSON:
        return json.loads(text)
    return text


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"Not a boolean value: {text!r}")
