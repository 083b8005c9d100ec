"""裁床批次对账系统

提供统一的模块导入接口
"""

from . import (
    config,
    core,
    crud,
    db,
    exceptions,
    models,
    schemas,
)

# 从子模块导入关键组件
from .config import settings
from .db import get_db, engine, Base
from .exceptions import ReconciliationError, ValidationError, NotFoundError, ConflictError

__all__ = [
    "config",
    "core",
    "crud",
    "db",
    "exceptions",
    "models",
    "schemas",
    "settings",
    "get_db",
    "engine",
    "Base",
    "ReconciliationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
