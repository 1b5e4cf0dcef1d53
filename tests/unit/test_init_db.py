"""
数据库初始化单元测试
验证数据库表的创建、连接 URL 解析和默认管理员账户的生成
"""

import importlib

import pytest
from sqlmodel import Session, select

from athena.core.config import settings
from athena.core.security import verify_password
from athena.db.init_db import create_default_admin, create_default_data, create_tables, get_database_url, get_engine
from athena.models.account import Account, AccountRole

# athena.db 包导出了同名的 init_db 函数，这里需要模块本身
init_db_module = importlib.import_module("athena.db.init_db")


@pytest.fixture
def memory_engine():
    engine = get_engine("sqlite:///:memory:")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def admin_settings(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_ADMIN_LOGIN", "root")
    monkeypatch.setattr(settings, "DEFAULT_ADMIN_PASSWORD", "root-passw0rd")


class TestDatabaseUrl:
    """测试连接 URL 解析"""

    def test_database_url_takes_precedence(self, monkeypatch):
        """测试优先使用 DATABASE_URL"""
        monkeypatch.setattr(settings, "DATABASE_URL", "postgresql+psycopg2://u:p@localhost/athena")

        assert get_database_url() == "postgresql+psycopg2://u:p@localhost/athena"

    def test_relative_sqlite_path_is_resolved(self, monkeypatch):
        """测试相对路径从项目根目录解析"""
        monkeypatch.setattr(settings, "DATABASE_URL", None)
        monkeypatch.setattr(settings, "DATABASE_PATH", "data/test.db")

        url = get_database_url()

        assert url.startswith("sqlite:///")
        assert url.endswith("data/test.db")
        assert url != "sqlite:///data/test.db"


class TestDatabaseInit:
    """测试数据库初始化"""

    def test_create_tables(self, memory_engine):
        """测试创建所有表"""
        with Session(memory_engine) as session:
            assert session.exec(select(Account)).all() == []

    def test_sqlite_foreign_keys_enabled(self, memory_engine):
        """测试 SQLite 连接开启外键约束"""
        with memory_engine.connect() as connection:
            assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1

    def test_default_admin_skipped_when_not_configured(self, memory_engine, monkeypatch):
        """测试未配置默认管理员时跳过"""
        monkeypatch.setattr(settings, "DEFAULT_ADMIN_LOGIN", None)

        with Session(memory_engine) as session:
            assert create_default_admin(session) is None
            assert session.exec(select(Account)).all() == []

    def test_create_default_admin(self, memory_engine, admin_settings):
        """测试创建默认超级管理员，重复调用返回已有账户"""
        with Session(memory_engine) as session:
            admin = create_default_admin(session)

            assert admin.login == "root"
            assert admin.role == AccountRole.SUPERADMIN
            assert verify_password("root-passw0rd", admin.password_hash)

            admin2 = create_default_admin(session)
            assert admin2.id == admin.id

    def test_create_default_data(self, memory_engine, admin_settings):
        """测试创建所有默认数据"""
        with Session(memory_engine) as session:
            create_default_data(session)

            accounts = session.exec(select(Account)).all()
            assert [a.login for a in accounts] == ["root"]

    def test_init_db(self, memory_engine, admin_settings, monkeypatch):
        """测试完整初始化流程"""
        monkeypatch.setattr(init_db_module, "get_engine", lambda: memory_engine)

        init_db_module.init_db()

        with Session(memory_engine) as session:
            assert session.exec(select(Account)).first().login == "root"
