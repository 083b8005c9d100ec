"""FastAPI主应用入口

实现裁床批次对账的RESTful API服务
- 使用依赖注入管理数据库会话
- 业务异常统一转换为 JSON 错误响应：校验失败 422、未找到 404、冲突 409
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from .api.v1 import batches_router
from .config.settings import settings
from .database.connection import get_db
from .exceptions import ConflictError, NotFoundError, ValidationError
from .logging_conf import configure_logging
from .utils.helpers import loc_to_field

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# 创建FastAPI应用实例
app = FastAPI(title=settings.APP_TITLE, description=settings.APP_DESCRIPTION, version=settings.APP_VERSION)

# 挂载API路由
app.include_router(batches_router, prefix="/api/v1")


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": {"field": exc.field, "message": exc.reason}})


# 请求体解析失败（缺少必填字段、JSON 结构不对）与引擎校验失败返回同一格式，只报告第一个错误
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    return JSONResponse(
        status_code=422,
        content={"detail": {"field": loc_to_field(error.get("loc", ())), "message": error.get("msg", "invalid value")}},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


# 健康检查端点
@app.get("/health/db")
def health_check(db: Session = Depends(get_db)):
    """检查数据库连接状态"""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "reachable"}
    except Exception:
        logger.exception("Database health check failed")
        raise HTTPException(status_code=503, detail="Database connection failed")


# 根路径 - 返回服务状态
@app.get("/")
def read_root():
    """返回服务运行状态"""
    return {"service": settings.APP_TITLE, "version": settings.APP_VERSION, "status": "running"}
