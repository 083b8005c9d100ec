"""API数据模型模块

定义所有 Pydantic 模型（记录结构与请求/响应结构体）
"""

from .batch import (
    ProcessStatus,
    CuttingStage,
    SizeBucketSet,
    Roll,
    WorkerProcess,
    OrderColorSizeEntry,
    OrderDetails,
    Batch,
    BatchRead,
    RollCreate,
    RollUpdate,
    WorkerProcessCreate,
    WorkerProcessUpdate,
    OrderColorSizeEntryIn,
    OrderDetailsIn,
    BatchCreate,
    BatchUpdate,
    StageUpdate,
)

__all__ = [
    "ProcessStatus",
    "CuttingStage",
    "SizeBucketSet",
    "Roll",
    "WorkerProcess",
    "OrderColorSizeEntry",
    "OrderDetails",
    "Batch",
    "BatchRead",
    "RollCreate",
    "RollUpdate",
    "WorkerProcessCreate",
    "WorkerProcessUpdate",
    "OrderColorSizeEntryIn",
    "OrderDetailsIn",
    "BatchCreate",
    "BatchUpdate",
    "StageUpdate",
]
