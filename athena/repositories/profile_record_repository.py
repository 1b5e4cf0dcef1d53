"""
资料记录 Repository
提供 profile_records 的增删改查操作
"""

from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from athena.models.profile_record import ProfileRecord, ProfileRecordType, serialize_value


class ProfileRecordRepository:
    """
    资料记录数据访问对象
    封装所有与 profile_records 表相关的数据库操作
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    def create(
        self,
        account_id: str,
        name: str,
        value: Any,
        data_type: ProfileRecordType = ProfileRecordType.STRING
    ) -> ProfileRecord:
        """
        创建新的资料记录

        Args:
            account_id: 账户 ID
            name: 字段名（同一账户内唯一）
            value: 逻辑值，按 data_type 转为文本存储
            data_type: 值类型

        Returns:
            创建的 ProfileRecord 对象
        """
        record = ProfileRecord(
            account_id=account_id,
            name=name,
            value=serialize_value(value, data_type),
            data_type=data_type
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def get_by_id(self, record_id: str) -> Optional[ProfileRecord]:
        """
        根据 ID 获取资料记录

        Args:
            record_id: 记录 ID

        Returns:
            ProfileRecord 对象，不存在则返回 None
        """
        return self.session.get(ProfileRecord, record_id)

    def get_by_account_and_name(self, account_id: str, name: str) -> Optional[ProfileRecord]:
        """
        获取账户的指定字段

        Returns:
            ProfileRecord 对象，不存在则返回 None
        """
        statement = select(ProfileRecord).where(
            ProfileRecord.account_id == account_id,
            ProfileRecord.name == name
        )
        return self.session.exec(statement).first()

    def get_all_by_account(self, account_id: str) -> List[ProfileRecord]:
        """
        获取账户的所有资料记录（按字段名排序）
        """
        statement = select(ProfileRecord).where(
            ProfileRecord.account_id == account_id
        ).order_by(ProfileRecord.name)
        return list(self.session.exec(statement).all())

    def get_account_profile_dict(self, account_id: str) -> Dict[str, Any]:
        """
        获取账户的完整资料，组装为字典格式

        Returns:
            字典，键为字段名，值为按 data_type 解析后的值
            例如: {"city": "Berlin", "age": 21, "graduated": False}
        """
        return {record.name: record.typed_value for record in self.get_all_by_account(account_id)}

    def upsert(
        self,
        account_id: str,
        name: str,
        value: Any,
        data_type: ProfileRecordType = ProfileRecordType.STRING
    ) -> ProfileRecord:
        """
        更新账户的指定字段（如果不存在则创建）

        Returns:
            更新或创建的 ProfileRecord 对象
        """
        record = self.get_by_account_and_name(account_id, name)
        if record is None:
            return self.create(account_id, name, value, data_type)

        record.value = serialize_value(value, data_type)
        record.data_type = data_type
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete(self, record_id: str) -> bool:
        """
        删除资料记录

        Returns:
            删除成功返回 True，记录不存在返回 False
        """
        record = self.get_by_id(record_id)
        if record:
            self.session.delete(record)
            self.session.commit()
            return True
        return False
