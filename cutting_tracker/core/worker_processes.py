"""工人工序台账

记录每个工人对批次的一道工序：收件数（in_pieces）、交件数（out_pieces）及对账状态。
状态只由收发合计决定：
- 尚未登记交件（out_pieces 为 None）时为 PENDING
- 收发合计相等为 OK，否则为 ERROR
工资与金额按输入保存，不在此计算。
"""

import uuid
from typing import Any, Mapping, Optional

from ..exceptions import NotFoundError, ValidationError
from ..schemas import Batch, ProcessStatus, SizeBucketSet, WorkerProcess
from ..utils.helpers import field_path, require_number, require_text
from .sizes import aggregate_sizes, merge_sizes

PROCESS_FIELDS = ("worker_name", "operation", "in_pieces", "out_pieces", "salary", "total_amount")


def _index_of(batch: Batch, process_id: str) -> Optional[int]:
    for index, process in enumerate(batch.worker_processes):
        if process.id == process_id:
            return index
    return None


def has_output(out_pieces: Any) -> bool:
    """是否已登记交件；空映射或只含 total 视为未登记"""
    if out_pieces is None:
        return False
    if isinstance(out_pieces, Mapping):
        return any(key != "total" for key in out_pieces)
    return True


def reconcile_status(in_pieces: SizeBucketSet, out_pieces: Optional[SizeBucketSet]) -> ProcessStatus:
    if out_pieces is None:
        return ProcessStatus.PENDING
    if in_pieces.total == out_pieces.total:
        return ProcessStatus.OK
    return ProcessStatus.ERROR


def recompute_status(process: WorkerProcess) -> WorkerProcess:
    return process.model_copy(
        update={"status": reconcile_status(process.in_pieces, process.out_pieces)}
    )


def recompute_worker_process(process: WorkerProcess) -> WorkerProcess:
    """重算收发合计，再重算状态"""
    in_pieces = aggregate_sizes(process.in_pieces, "in_pieces")
    out_pieces = None
    if process.out_pieces is not None:
        out_pieces = aggregate_sizes(process.out_pieces, "out_pieces")
    return recompute_status(
        process.model_copy(update={"in_pieces": in_pieces, "out_pieces": out_pieces})
    )


def build_worker_process(process_data: Mapping, field: str = "worker_process") -> WorkerProcess:
    """校验工序数据，未提供 id 时自动生成"""
    if not isinstance(process_data, Mapping):
        raise ValidationError(field, "must be an object")

    process_id = process_data.get("id")
    if process_id is None:
        process_id = uuid.uuid4().hex
    else:
        process_id = require_text(process_data, "id", field)

    out_pieces = process_data.get("out_pieces")
    process = WorkerProcess(
        id=process_id,
        worker_name=require_text(process_data, "worker_name", field),
        operation=require_text(process_data, "operation", field),
        in_pieces=aggregate_sizes(process_data.get("in_pieces"), field_path(field, "in_pieces")),
        out_pieces=(
            aggregate_sizes(out_pieces, field_path(field, "out_pieces"))
            if has_output(out_pieces) else None
        ),
        salary=require_number(process_data, "salary", field, default=0),
        total_amount=require_number(process_data, "total_amount", field, default=0),
    )
    return recompute_status(process)


def add_worker_process(batch: Batch, process_data: Mapping) -> Batch:
    field = f"worker_processes[{len(batch.worker_processes)}]"
    process = build_worker_process(process_data, field)
    if _index_of(batch, process.id) is not None:
        raise ValidationError(field_path(field, "id"), f"duplicate worker process id {process.id!r}")
    return batch.model_copy(update={"worker_processes": batch.worker_processes + (process,)})


def update_worker_process(batch: Batch, process_id: str, patch: Mapping) -> Batch:
    """修改工序记录；patch 中的 status、id 被忽略"""
    index = _index_of(batch, process_id)
    if index is None:
        raise NotFoundError("worker process", process_id)

    current = batch.worker_processes[index]
    merged = current.model_dump()
    for key, value in patch.items():
        if key not in PROCESS_FIELDS:
            continue
        if key == "in_pieces":
            merged[key] = merge_sizes(current.in_pieces, value)
        elif key == "out_pieces":
            merged[key] = None if value is None else merge_sizes(current.out_pieces, value)
        else:
            merged[key] = value

    process = build_worker_process(merged, f"worker_processes[{index}]")
    processes = batch.worker_processes[:index] + (process,) + batch.worker_processes[index + 1:]
    return batch.model_copy(update={"worker_processes": processes})


def remove_worker_process(batch: Batch, process_id: str) -> Batch:
    index = _index_of(batch, process_id)
    if index is None:
        raise NotFoundError("worker process", process_id)
    processes = batch.worker_processes[:index] + batch.worker_processes[index + 1:]
    return batch.model_copy(update={"worker_processes": processes})
