"""
配置模块
所有配置项都可以通过环境变量或 .env 文件覆盖
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PROJECT_NAME: str = "Athena Accounts"

    # 数据库
    # DATABASE_URL 优先；未设置时使用 DATABASE_PATH 指向的 SQLite 文件
    DATABASE_URL: Optional[str] = None
    DATABASE_PATH: str = "database.db"
    SQL_ECHO: bool = False

    # 日志
    LOG_LEVEL: str = "INFO"

    # Argon2 成本参数（与 argon2-cffi 默认值一致）
    ARGON2_TIME_COST: int = 3
    ARGON2_MEMORY_COST: int = 65536
    ARGON2_PARALLELISM: int = 4

    # 初始化数据库时创建的超级管理员，不设置则跳过
    DEFAULT_ADMIN_LOGIN: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None


settings = Settings()
