import logging
import os

# 数据库配置
SQLITE_DEV_DB = "sqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite:///./test.db"
SQLITE_PROD_DB = "sqlite:///./prod.db"

# 分页配置
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
PAGE_LINK_COUNT = int(os.getenv("PAGE_LINK_COUNT", "10"))

API_PREFIX = "/api/v1"


def get_database_url() -> str:
    """根据 APP_ENV 选择数据库地址"""
    env = os.getenv("APP_ENV", "development")
    if env == "test":
        return SQLITE_TEST_DB
    if env == "production":
        return os.getenv("DATABASE_URL", SQLITE_PROD_DB)
    return SQLITE_DEV_DB


def configure_logging():
    """Apply LOG_LEVEL to the root logger"""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
