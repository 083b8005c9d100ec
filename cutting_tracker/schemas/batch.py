"""裁床批次数据结构定义

记录模型（Batch、Roll、WorkerProcess 等）为不可变对象，对账引擎每次
重算都返回新对象；*Create / *Update 模型为接口请求体，其中尺码数据保持
原样交给引擎校验。
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class ProcessStatus(str, Enum):
    OK = "OK"
    PENDING = "PENDING"
    ERROR = "ERROR"


class CuttingStage(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    BEFORE_CUTTING_COMPLETE = "BEFORE_CUTTING_COMPLETE"
    AFTER_CUTTING_COMPLETE = "AFTER_CUTTING_COMPLETE"


class SizeBucketSet(BaseModel):
    """尺码计数及合计

    JSON 形式为扁平结构：{"S": 5, "M": 10, ..., "total": 15}
    """
    model_config = ConfigDict(frozen=True)

    counts: Dict[str, int] = Field(default_factory=dict)
    total: int = 0

    @model_validator(mode="before")
    @classmethod
    def _from_flat(cls, data: Any) -> Any:
        if isinstance(data, dict) and "counts" not in data:
            counts = {key: value for key, value in data.items() if key != "total"}
            return {"counts": counts, "total": data.get("total", 0)}
        return data

    @model_serializer
    def _to_flat(self) -> Dict[str, int]:
        return {**self.counts, "total": self.total}


class Roll(BaseModel):
    """布卷"""
    model_config = ConfigDict(frozen=True)

    roll_number: str
    color: str
    weight: float
    layers: Tuple[int, ...]
    size_distribution: SizeBucketSet = Field(default_factory=SizeBucketSet)
    remarks: Optional[str] = None


class WorkerProcess(BaseModel):
    """工人工序记录，out_pieces 为 None 表示尚未登记产出"""
    model_config = ConfigDict(frozen=True)

    id: str
    worker_name: str
    operation: str
    in_pieces: SizeBucketSet = Field(default_factory=SizeBucketSet)
    out_pieces: Optional[SizeBucketSet] = None
    status: ProcessStatus = ProcessStatus.PENDING
    salary: float = 0
    total_amount: float = 0


class OrderColorSizeEntry(BaseModel):
    """订单单色配码"""
    model_config = ConfigDict(frozen=True)

    color: str
    sizes: SizeBucketSet = Field(default_factory=SizeBucketSet)
    total: int = 0


class OrderDetails(BaseModel):
    """订单信息"""
    model_config = ConfigDict(frozen=True)

    order_code: Optional[str] = None
    client: Optional[str] = None
    recipient: Optional[str] = None
    ready_by: Optional[datetime] = None
    color_size_matrix: Tuple[OrderColorSizeEntry, ...] = ()
    order_total: int = 0


class Batch(BaseModel):
    """裁床批次（聚合根）"""
    model_config = ConfigDict(frozen=True)

    program_number: str
    pattern: str
    cutting_datetime: datetime
    line_number: str
    sizes: Tuple[str, ...]
    rolls: Tuple[Roll, ...] = ()
    worker_processes: Tuple[WorkerProcess, ...] = ()
    order_details: Optional[OrderDetails] = None
    additional_info: Optional[str] = None
    cutting_stage: CuttingStage = CuttingStage.NOT_STARTED
    created_at: datetime
    updated_at: datetime


class BatchRead(Batch):
    """读取批次时的模型"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    version: int


# ---- 请求体 ----
# 数值字段不声明类型，原样交给引擎做严格校验（不接受 "12.5"、true 之类的值）

class RollCreate(BaseModel):
    """新增布卷"""
    roll_number: str
    color: str
    weight: Any
    layers: Any
    size_distribution: Optional[Dict[str, Any]] = None
    remarks: Optional[str] = None


class RollUpdate(BaseModel):
    """修改布卷，尺码按桶合并"""
    roll_number: Optional[str] = None
    color: Optional[str] = None
    weight: Optional[Any] = None
    layers: Optional[Any] = None
    size_distribution: Optional[Dict[str, Any]] = None
    remarks: Optional[str] = None


class WorkerProcessCreate(BaseModel):
    """新增工序记录，status 由引擎计算，请求中的 status 会被忽略"""
    id: Optional[str] = None
    worker_name: str
    operation: str
    in_pieces: Optional[Dict[str, Any]] = None
    out_pieces: Optional[Dict[str, Any]] = None
    salary: Optional[Any] = None
    total_amount: Optional[Any] = None


class WorkerProcessUpdate(BaseModel):
    """修改工序记录；显式传 out_pieces=null 表示清除产出"""
    worker_name: Optional[str] = None
    operation: Optional[str] = None
    in_pieces: Optional[Dict[str, Any]] = None
    out_pieces: Optional[Dict[str, Any]] = None
    salary: Optional[Any] = None
    total_amount: Optional[Any] = None


class OrderColorSizeEntryIn(BaseModel):
    color: str
    sizes: Optional[Dict[str, Any]] = None


class OrderDetailsIn(BaseModel):
    """订单信息（整体替换）"""
    order_code: Optional[str] = None
    client: Optional[str] = None
    recipient: Optional[str] = None
    ready_by: Optional[datetime] = None
    color_size_matrix: List[OrderColorSizeEntryIn] = []


class BatchCreate(BaseModel):
    """创建批次"""
    program_number: str
    pattern: str
    cutting_datetime: Optional[datetime] = None
    line_number: str
    sizes: List[str]
    rolls: List[RollCreate] = []
    worker_processes: List[WorkerProcessCreate] = []
    order_details: Optional[OrderDetailsIn] = None
    additional_info: Optional[str] = None


class BatchUpdate(BaseModel):
    """修改批次基础信息与订单信息"""
    program_number: Optional[str] = None
    pattern: Optional[str] = None
    cutting_datetime: Optional[datetime] = None
    line_number: Optional[str] = None
    sizes: Optional[List[str]] = None
    order_details: Optional[OrderDetailsIn] = None
    additional_info: Optional[str] = None


class StageUpdate(BaseModel):
    """推进裁剪阶段"""
    stage: CuttingStage
