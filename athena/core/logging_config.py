"""
日志配置
"""

import logging
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    配置根 logger

    Args:
        level: 日志级别名称，默认读取 settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # SQL 日志由 SQL_ECHO 单独控制
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
