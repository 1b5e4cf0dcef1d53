"""
Pytest 测试配置
提供测试数据库、测试账户和 Repository / Service 等测试基础设施
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
from sqlmodel import Session

# 添加项目根目录到 sys.path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from athena.core.security import hash_password
from athena.db.init_db import create_tables, get_engine
from athena.models import Account, AccountRole, ProfileRecord, ProfileRecordType

TEST_PASSWORD = "s3cret-passw0rd"


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def test_db_engine():
    """
    创建测试用的内存数据库引擎
    每个测试函数都会获得一个全新的数据库
    """
    # 使用内存 SQLite 数据库（同样开启外键约束）
    engine = get_engine("sqlite:///:memory:")

    # 创建所有表
    create_tables(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """
    创建测试用的数据库会话
    """
    with Session(test_db_engine) as session:
        yield session


# ==================== 测试数据 Fixtures ====================

@pytest.fixture(scope="session")
def test_password_hash() -> str:
    """
    测试密码的哈希，只计算一次
    """
    return hash_password(TEST_PASSWORD)


def _make_account(session: Session, password_hash: str, **kwargs) -> Account:
    account = Account(password_hash=password_hash, **kwargs)
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


@pytest.fixture(scope="function")
def make_account(test_db_session: Session, test_password_hash: str):
    """
    账户工厂，直接写库，不经过 Service
    """
    def factory(**kwargs) -> Account:
        return _make_account(test_db_session, test_password_hash, **kwargs)
    return factory


@pytest.fixture(scope="function")
def test_account(make_account) -> Account:
    """
    创建测试账户
    """
    return make_account(login="test_student")


@pytest.fixture(scope="function")
def test_accounts(make_account) -> list[Account]:
    """
    创建一组角色、状态各不相同的测试账户
    """
    data = [
        ("anna", AccountRole.STUDENT, True),
        ("annabel", AccountRole.TEACHER, True),
        ("boris", AccountRole.STUDENT, False),
        ("carla", AccountRole.ADMIN, True),
        ("JOANNA", AccountRole.TEACHER, False),
    ]
    return [make_account(login=login, role=role, is_active=active) for login, role, active in data]


@pytest.fixture(scope="function")
def test_profile_records(test_db_session: Session, test_account: Account) -> list[ProfileRecord]:
    """
    创建测试资料记录（覆盖所有值类型）
    """
    records = [
        ProfileRecord(account_id=test_account.id, name="city", value="Berlin"),
        ProfileRecord(account_id=test_account.id, name="age", value="21", data_type=ProfileRecordType.NUMBER),
        ProfileRecord(account_id=test_account.id, name="graduated", value="false", data_type=ProfileRecordType.BOOLEAN),
        ProfileRecord(account_id=test_account.id, name="birthday", value="2004-05-17", data_type=ProfileRecordType.DATE),
        ProfileRecord(account_id=test_account.id, name="links", value='{"github": "anna"}', data_type=ProfileRecordType.JSON),
    ]
    for record in records:
        test_db_session.add(record)
    test_db_session.commit()
    for record in records:
        test_db_session.refresh(record)
    return records


# ==================== Repository / Service Fixtures ====================

@pytest.fixture(scope="function")
def account_repository(test_db_session: Session):
    """
    创建 AccountRepository 实例
    """
    from athena.repositories.account_repository import AccountRepository
    return AccountRepository(test_db_session)


@pytest.fixture(scope="function")
def profile_record_repository(test_db_session: Session):
    """
    创建 ProfileRecordRepository 实例
    """
    from athena.repositories.profile_record_repository import ProfileRecordRepository
    return ProfileRecordRepository(test_db_session)


@pytest.fixture(scope="function")
def account_service(test_db_session: Session):
    """
    创建 AccountService 实例
    """
    from athena.services.account_service import AccountService
    return AccountService(test_db_session)


# ==================== Pytest 配置 ====================

def pytest_configure(config):
    """
    Pytest 初始化配置
    """
    # 标记测试分类
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
