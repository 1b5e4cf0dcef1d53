"""
数据库初始化脚本
负责创建数据库表结构和初始数据（可选的超级管理员账户）
"""

import logging
import os
from pathlib import Path
from typing import Optional

from sqlalchemy import event
from sqlmodel import SQLModel, Session, create_engine, select

from athena.core.config import settings
from athena.core.security import hash_password
from athena.models.account import Account, AccountRole
# 注册 ProfileRecord 表以及软删除过滤
from athena.models.profile_record import ProfileRecord  # noqa: F401
import athena.db.soft_delete  # noqa: F401

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """
    获取数据库连接 URL
    优先使用 DATABASE_URL，否则使用 DATABASE_PATH 指向的 SQLite 文件
    """
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    db_path = settings.DATABASE_PATH
    # 确保路径是绝对路径
    if not os.path.isabs(db_path):
        # 从项目根目录解析
        project_root = Path(__file__).parent.parent.parent
        db_path = str(project_root / db_path)
    return f"sqlite:///{db_path}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite 默认不执行外键约束，ON DELETE CASCADE 需要显式开启
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_url: Optional[str] = None):
    """
    创建并返回数据库引擎

    Args:
        database_url: 连接 URL，默认使用 get_database_url()
    """
    database_url = database_url or get_database_url()
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=settings.SQL_ECHO,
            connect_args={"check_same_thread": False}  # SQLite 特有配置
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(database_url, echo=settings.SQL_ECHO, pool_pre_ping=True)
    return engine


def create_tables(engine) -> None:
    """
    创建所有数据库表
    SQLModel 会自动根据模型创建表结构
    """
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created (%s)", engine.url.render_as_string(hide_password=True))


def create_default_admin(session: Session) -> Optional[Account]:
    """
    创建默认超级管理员
    未配置 DEFAULT_ADMIN_LOGIN / DEFAULT_ADMIN_PASSWORD 时跳过；
    登录名已存在（包括已软删除的账户）时返回 None 或现有账户
    """
    login = settings.DEFAULT_ADMIN_LOGIN
    password = settings.DEFAULT_ADMIN_PASSWORD
    if not login or not password:
        print("Default admin not configured, skipping")
        return None

    statement = select(Account).where(Account.login == login).execution_options(include_deleted=True)
    existing = session.exec(statement).first()
    if existing:
        print(f"Default admin '{login}' already exists (ID: {existing.id})")
        return existing

    admin = Account(
        login=login,
        password_hash=hash_password(password),
        role=AccountRole.SUPERADMIN,
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    print(f"Created default admin '{login}' (ID: {admin.id})")
    return admin


def create_default_data(session: Session) -> None:
    """
    创建所有默认数据
    """
    print("\n=== Creating default data ===")
    create_default_admin(session)
    print("=== Default data creation completed ===\n")


def init_db() -> None:
    """
    完整的数据库初始化流程
    1. 创建数据库引擎
    2. 创建所有表结构
    3. 创建默认数据
    """
    print("\n=== Initializing database ===")

    engine = get_engine()
    create_tables(engine)

    with Session(engine) as session:
        create_default_data(session)

    print("=== Database initialization completed ===\n")


if __name__ == "__main__":
    # 直接运行此脚本时，执行数据库初始化
    from athena.core.logging_config import setup_logging

    setup_logging()
    init_db()
