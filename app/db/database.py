from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from typing import Iterator, Optional
from functools import lru_cache

from app.core.config import get_database_url

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _record):
    """SQLite 默认不检查外键，连接时打开"""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@lru_cache()
def get_engine():
    """获取数据库引擎"""
    database_url = get_database_url()
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args)

def get_session_maker():
    """获取会话工厂"""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

def get_session():
    """获取数据库会话"""
    SessionLocal = get_session_maker()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Run a block of writes as one unit.

    Commits when the block exits normally and rolls back on any exception,
    which is re-raised unchanged.
    """
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise

def create_tables(db_engine: Optional[object] = None):
    """创建所有表

    Args:
        db_engine: 可选的数据库引擎，如果不提供则使用默认引擎
    """
    # 注册所有模型
    from app.models import post, hash_tag, product, student  # noqa: F401

    engine = db_engine or get_engine()
    Base.metadata.create_all(bind=engine)
