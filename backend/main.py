# main.py
import os
import time
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.database import init_db, check_db_connection
from app.config import (
    DATA_DIR, HOST, PORT, API_VERSION, SQLALCHEMY_DATABASE_URL,
    CORS_ALLOWED_ORIGINS, CORS_ALLOW_CREDENTIALS, LOG_LEVEL, EXPOSE_ERROR_DETAILS
)
from app.routers import dictionary, cefr, config

logger = logging.getLogger(__name__)


def _setup_logging():
    """配置日志级别"""
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时
    print("=" * 50)
    print("Dictionary API 启动中...")
    print("=" * 50)

    _setup_logging()
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
        os.makedirs(DATA_DIR, exist_ok=True)
    init_db()
    check_db_connection()

    print(f"后端地址: http://{HOST}:{PORT}")
    print(f"CORS 允许源: {', '.join(CORS_ALLOWED_ORIGINS)}")
    print("=" * 50)

    yield

    # 关闭时
    print("Shutting down...")


# 创建 FastAPI 应用
app = FastAPI(
    title="Dictionary API",
    description="Read-only English dictionary: definitions, examples, CEFR levels and pronunciations",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS 配置（从配置读取）
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ================= 请求日志 =================
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """记录每个请求的方法、路径、状态码和耗时"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


# ================= 统一异常处理 =================
def jsonable_errors(exc: RequestValidationError) -> list:
    """只保留可 JSON 序列化的错误字段"""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """参数缺失或格式错误统一返回 400"""
    logger.info(f"Bad request on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_errors(exc)},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    """数据库查询失败返回 500"""
    logger.error(f"Query failed on {request.url.path}: {exc}", exc_info=exc)
    detail = str(exc) if EXPOSE_ERROR_DETAILS else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


# 注册 API 路由
app.include_router(dictionary.router)
app.include_router(cefr.router)
app.include_router(config.router)


# 健康检查
@app.get("/health")
async def health_check():
    """健康检查端点"""
    return {"status": "ok"}


@app.get("/")
async def serve_root():
    """根路径"""
    return {
        "message": "Dictionary API",
        "docs": "/docs",
        "health": "/health",
        "config": "/config"
    }


def main():
    """开发服务器启动入口"""
    uvicorn.run(
        "main:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
