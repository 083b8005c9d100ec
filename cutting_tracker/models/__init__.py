"""数据库模型模块

定义所有 SQLAlchemy ORM 模型
"""

from ..database.connection import Base
from .batch import CuttingBatch

__all__ = ["Base", "CuttingBatch"]
