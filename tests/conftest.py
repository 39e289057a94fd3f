import pytest
import os
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from app.main import app
from app.core.config import SQLITE_TEST_DB
from app.db.database import get_session, create_tables

# 设置测试环境
os.environ["APP_ENV"] = "test"

# 测试数据库配置
test_engine = create_engine(SQLITE_TEST_DB, connect_args={"check_same_thread": False})
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)

TABLES = ["hash_tags", "posts", "tbl_product", "students"]


def drop_tables():
    with test_engine.connect() as conn:
        # 先删除依赖表
        for table in TABLES:
            conn.execute(text(f"DROP TABLE IF EXISTS {table}"))
        conn.commit()


@pytest.fixture(autouse=True)
def clean_db():
    """清理并重建测试数据库"""
    drop_tables()
    create_tables(test_engine)
    yield
    drop_tables()

@pytest.fixture
def session(clean_db):
    """直接访问数据库的会话"""
    test_session = TestSessionLocal()
    try:
        yield test_session
    finally:
        test_session.close()

@pytest.fixture
def client(clean_db):
    """创建测试客户端"""
    test_session = TestSessionLocal()

    # 覆盖依赖
    def override_get_session():
        try:
            yield test_session
        finally:
            test_session.close()

    app.dependency_overrides[get_session] = override_get_session

    client = TestClient(app)
    yield client

    test_session.close()
    app.dependency_overrides.clear()
