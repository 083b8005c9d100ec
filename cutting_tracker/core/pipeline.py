"""批次重算流水线

批次在每次写入数据库前都要经过 recompute_batch：
1. 每个布卷的分码合计
2. 每道工序的收发合计与状态
3. 订单配码合计（有订单信息时）
4. 刷新 updated_at

三类汇总互不依赖且幂等，重复执行结果不变；created_at 只在创建时设置。
"""

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ValidationError
from ..schemas import Batch, CuttingStage
from ..utils.helpers import optional_datetime, optional_text, require_text, utcnow
from .orders import recompute_order_details, set_order_details
from .rolls import add_roll, recompute_roll
from .worker_processes import add_worker_process, recompute_worker_process

logger = logging.getLogger(__name__)

BATCH_SCALAR_FIELDS = (
    "program_number",
    "pattern",
    "cutting_datetime",
    "line_number",
    "sizes",
    "additional_info",
)

# 裁剪阶段只能按顺序前进一步
NEXT_STAGE = {
    CuttingStage.NOT_STARTED: CuttingStage.BEFORE_CUTTING_COMPLETE,
    CuttingStage.BEFORE_CUTTING_COMPLETE: CuttingStage.AFTER_CUTTING_COMPLETE,
}


def _validate_sizes(sizes: Any) -> tuple:
    if not isinstance(sizes, (list, tuple)) or not sizes:
        raise ValidationError("sizes", "at least one size label is required")
    for index, label in enumerate(sizes):
        if not isinstance(label, str) or not label.strip():
            raise ValidationError(f"sizes[{index}]", "must be a non-empty string")
    return tuple(label.strip() for label in sizes)


def _validate_scalars(data: Mapping, now: datetime) -> Dict[str, Any]:
    return {
        "program_number": require_text(data, "program_number"),
        "pattern": require_text(data, "pattern"),
        "cutting_datetime": optional_datetime(data, "cutting_datetime") or now,
        "line_number": require_text(data, "line_number"),
        "sizes": _validate_sizes(data.get("sizes")),
        "additional_info": optional_text(data, "additional_info"),
    }


def _children(data: Mapping, key: str) -> list:
    children = data.get(key) or []
    if not isinstance(children, (list, tuple)):
        raise ValidationError(key, "must be a list")
    return list(children)


def build_batch(data: Mapping, now: Optional[datetime] = None) -> Batch:
    """由请求数据创建批次记录并完成首次重算"""
    if not isinstance(data, Mapping):
        raise ValidationError("batch", "must be an object")
    now = now or utcnow()

    batch = Batch(**_validate_scalars(data, now), created_at=now, updated_at=now)
    for roll_data in _children(data, "rolls"):
        batch = add_roll(batch, roll_data)
    for process_data in _children(data, "worker_processes"):
        batch = add_worker_process(batch, process_data)
    if data.get("order_details") is not None:
        batch = set_order_details(batch, data["order_details"])

    return recompute_batch(batch, now)


def update_batch_fields(batch: Batch, patch: Mapping) -> Batch:
    """合并基础字段；patch 含 order_details 时整体替换订单信息

    created_at、updated_at、派生合计等字段即使出现在 patch 中也被忽略
    """
    merged = {field: getattr(batch, field) for field in BATCH_SCALAR_FIELDS}
    for key, value in patch.items():
        # None 表示不修改，additional_info 允许清空
        if key in BATCH_SCALAR_FIELDS and (value is not None or key == "additional_info"):
            merged[key] = value

    updated = batch.model_copy(update=_validate_scalars(merged, batch.cutting_datetime))
    if "order_details" in patch:
        updated = set_order_details(updated, patch["order_details"])
    return updated


def recompute_batch(batch: Batch, now: Optional[datetime] = None) -> Batch:
    """重算全部派生字段，返回新的批次记录"""
    rolls = tuple(recompute_roll(roll) for roll in batch.rolls)
    processes = tuple(recompute_worker_process(process) for process in batch.worker_processes)
    order_details = recompute_order_details(batch.order_details)

    logger.debug(
        "Recomputed batch %s: %d rolls, %d worker processes, order total %s",
        batch.program_number,
        len(rolls),
        len(processes),
        order_details.order_total if order_details else None,
    )
    return batch.model_copy(
        update={
            "rolls": rolls,
            "worker_processes": processes,
            "order_details": order_details,
            "updated_at": now or utcnow(),
        }
    )


def advance_cutting_stage(batch: Batch, target: Any) -> Batch:
    """推进裁剪阶段：NOT_STARTED -> BEFORE_CUTTING_COMPLETE -> AFTER_CUTTING_COMPLETE"""
    try:
        target = CuttingStage(target)
    except ValueError:
        raise ValidationError("cutting_stage", f"unknown stage {target!r}") from None

    current = batch.cutting_stage
    if current == CuttingStage.AFTER_CUTTING_COMPLETE:
        raise ValidationError("cutting_stage", "cutting has already been completed")
    if NEXT_STAGE[current] != target:
        raise ValidationError("cutting_stage", f"cannot move from {current.value} to {target.value}")
    if target == CuttingStage.BEFORE_CUTTING_COMPLETE and not batch.rolls:
        raise ValidationError("rolls", "at least one roll is required before cutting")
    return batch.model_copy(update={"cutting_stage": target})
