# database.py
import logging
from typing import Any, Dict

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from app.models import Base
from app.config import (
    SQLALCHEMY_DATABASE_URL, DB_PATH, DATABASE_TIMEOUT, DATABASE_POOL_SIZE
)

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """根据数据库类型构建 create_engine 参数（含查询超时）"""
    if url.startswith("sqlite"):
        # check_same_thread=False 允许 FastAPI 线程池中的请求使用连接
        # 每个请求仍然创建独立的 Session
        return {
            "connect_args": {"check_same_thread": False, "timeout": DATABASE_TIMEOUT},
        }

    options: Dict[str, Any] = {
        "pool_pre_ping": True,  # 连接前检查连接是否有效
        "pool_size": DATABASE_POOL_SIZE,
        "max_overflow": DATABASE_POOL_SIZE * 2,
    }
    if url.startswith("postgresql"):
        timeout_ms = int(DATABASE_TIMEOUT * 1000)
        options["connect_args"] = {"options": f"-c statement_timeout={timeout_ms}"}
    return options


engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_options(SQLALCHEMY_DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """初始化数据库表结构（只创建缺失的表，不修改已有数据）"""
    Base.metadata.create_all(bind=engine)
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
        print(f"Database initialized at {DB_PATH}")
    else:
        print("Database initialized")


def get_db():
    """FastAPI 依赖项：获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> bool:
    """检查数据库连接是否正常"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        print("Database connection OK")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False
    finally:
        db.close()
