"""数据库操作（CRUD）- 裁床批次

封装批次的读写，路由层只调用这里的函数。
- 每次写入前都经过对账引擎 recompute_batch，派生字段从不信任输入
- 引擎抛出异常时不修改数据库行，已存储的批次保持原状
- version 列为乐观锁；调用方传入的 version 与库中不一致时拒绝写入
"""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .. import models, schemas
from ..core import orders as order_ledger
from ..core import pipeline
from ..core import rolls as roll_ledger
from ..core import worker_processes as process_ledger
from ..exceptions import ConflictError, NotFoundError, ReconciliationError

logger = logging.getLogger(__name__)

SCALAR_COLUMNS = (
    "program_number",
    "pattern",
    "cutting_datetime",
    "line_number",
    "additional_info",
    "created_at",
    "updated_at",
)
JSON_COLUMNS = ("sizes", "rolls", "worker_processes", "order_details")


def to_record(db_batch: models.CuttingBatch) -> schemas.Batch:
    """数据库行 -> 引擎记录"""
    return schemas.Batch.model_validate(db_batch, from_attributes=True)


def _apply_record(db_batch: models.CuttingBatch, record: schemas.Batch):
    """引擎记录原样写回数据库行"""
    document = record.model_dump(mode="json")
    for column in SCALAR_COLUMNS:
        setattr(db_batch, column, getattr(record, column))
    for column in JSON_COLUMNS:
        setattr(db_batch, column, document[column])
    db_batch.cutting_stage = record.cutting_stage.value


def _commit(db: Session, db_batch: models.CuttingBatch, label: str):
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("Concurrent write rejected for batch %s", label)
        raise ConflictError("batch was modified by another request, reload and retry", {"batch": label}) from exc
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity error writing batch %s: %s", label, exc.orig)
        raise ConflictError("program number already exists", {"batch": label}) from exc
    db.refresh(db_batch)


def get_batch(db: Session, batch_id: int):
    """根据ID获取批次"""
    return db.query(models.CuttingBatch).filter(models.CuttingBatch.id == batch_id).first()


def get_batch_by_program_number(db: Session, program_number: str):
    return db.query(models.CuttingBatch).filter(models.CuttingBatch.program_number == program_number).first()


def list_batches(db: Session, skip: int = 0, limit: int = 100):
    """获取批次列表，按创建时间倒序"""
    return (
        db.query(models.CuttingBatch)
        .order_by(models.CuttingBatch.created_at.desc(), models.CuttingBatch.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_batches(db: Session) -> int:
    return db.query(models.CuttingBatch).count()


def create_batch(db: Session, batch_in: schemas.BatchCreate):
    """创建批次：校验、重算后入库"""
    data = batch_in.model_dump(exclude_unset=True)
    try:
        record = pipeline.build_batch(data)
    except ReconciliationError as exc:
        logger.warning("Rejected new batch %s: %s", data.get("program_number"), exc)
        raise

    if get_batch_by_program_number(db, record.program_number):
        raise ConflictError(f"program number already exists: {record.program_number}")

    db_batch = models.CuttingBatch()
    _apply_record(db_batch, record)
    db.add(db_batch)
    _commit(db, db_batch, record.program_number)
    logger.info(
        "Batch %s created (id=%s, %d rolls, %d worker processes)",
        db_batch.program_number, db_batch.id, len(record.rolls), len(record.worker_processes),
    )
    return db_batch


def _mutate(
    db: Session,
    batch_id: int,
    change: Callable[[schemas.Batch], schemas.Batch],
    action: str,
    version: Optional[int] = None,
):
    """读取批次 -> 引擎修改 -> 重算 -> 写回"""
    db_batch = get_batch(db, batch_id)
    if not db_batch:
        raise NotFoundError("batch", batch_id)
    if version is not None and version != db_batch.version:
        logger.warning("Stale version %s for batch %s (current %s)", version, batch_id, db_batch.version)
        raise ConflictError(
            "batch was modified by another request, reload and retry",
            {"batch": batch_id, "expected_version": version, "current_version": db_batch.version},
        )

    try:
        record = pipeline.recompute_batch(change(to_record(db_batch)))
    except ReconciliationError as exc:
        logger.warning("Rejected %s on batch %s: %s", action, batch_id, exc)
        raise

    _apply_record(db_batch, record)
    _commit(db, db_batch, str(batch_id))
    logger.info("Batch %s: %s (version %s)", batch_id, action, db_batch.version)
    return db_batch


def update_batch(db: Session, batch_id: int, batch_update: schemas.BatchUpdate, version: Optional[int] = None):
    """更新批次基础信息"""
    patch = batch_update.model_dump(exclude_unset=True)
    new_number = patch.get("program_number")
    if new_number:
        existing = get_batch_by_program_number(db, new_number.strip())
        if existing and existing.id != batch_id:
            raise ConflictError(f"program number already exists: {new_number}")
    return _mutate(db, batch_id, lambda batch: pipeline.update_batch_fields(batch, patch), "update", version)


def recompute(db: Session, batch_id: int, version: Optional[int] = None):
    """重新计算并保存（例如 SIZE_BUCKETS 新增尺码后补齐 0 值）

    SIZE_BUCKETS 只能新增不能删除：已存储的记录若含被删除的尺码，重算会抛出 ValidationError
    """
    return _mutate(db, batch_id, lambda batch: batch, "recompute", version)


def delete_batch(db: Session, batch_id: int):
    """删除指定ID的批次（布卷、工序、订单信息随之删除）"""
    db_batch = get_batch(db, batch_id)
    if not db_batch:
        return False
    db.delete(db_batch)
    db.commit()
    logger.info("Batch %s deleted", batch_id)
    return True


# 布卷
def add_roll(db: Session, batch_id: int, roll_in: schemas.RollCreate, version: Optional[int] = None):
    data = roll_in.model_dump(exclude_unset=True)
    return _mutate(db, batch_id, lambda batch: roll_ledger.add_roll(batch, data), "add roll", version)


def update_roll(db: Session, batch_id: int, roll_number: str, roll_update: schemas.RollUpdate, version: Optional[int] = None):
    patch = roll_update.model_dump(exclude_unset=True)
    return _mutate(
        db, batch_id, lambda batch: roll_ledger.update_roll(batch, roll_number, patch),
        f"update roll {roll_number}", version,
    )


def remove_roll(db: Session, batch_id: int, roll_number: str, version: Optional[int] = None):
    return _mutate(
        db, batch_id, lambda batch: roll_ledger.remove_roll(batch, roll_number),
        f"remove roll {roll_number}", version,
    )


# 工人工序
def add_worker_process(db: Session, batch_id: int, process_in: schemas.WorkerProcessCreate, version: Optional[int] = None):
    data = process_in.model_dump(exclude_unset=True)
    return _mutate(
        db, batch_id, lambda batch: process_ledger.add_worker_process(batch, data),
        "add worker process", version,
    )


def update_worker_process(
    db: Session,
    batch_id: int,
    process_id: str,
    process_update: schemas.WorkerProcessUpdate,
    version: Optional[int] = None,
):
    patch = process_update.model_dump(exclude_unset=True)
    return _mutate(
        db, batch_id, lambda batch: process_ledger.update_worker_process(batch, process_id, patch),
        f"update worker process {process_id}", version,
    )


def remove_worker_process(db: Session, batch_id: int, process_id: str, version: Optional[int] = None):
    return _mutate(
        db, batch_id, lambda batch: process_ledger.remove_worker_process(batch, process_id),
        f"remove worker process {process_id}", version,
    )


# 订单信息
def set_order_details(db: Session, batch_id: int, details_in: Optional[schemas.OrderDetailsIn], version: Optional[int] = None):
    data = details_in.model_dump(exclude_unset=True) if details_in is not None else None
    action = "set order details" if data is not None else "clear order details"
    return _mutate(db, batch_id, lambda batch: order_ledger.set_order_details(batch, data), action, version)


# 裁剪阶段
def advance_stage(db: Session, batch_id: int, stage: schemas.CuttingStage, version: Optional[int] = None):
    return _mutate(
        db, batch_id, lambda batch: pipeline.advance_cutting_stage(batch, stage),
        f"advance stage to {stage.value}", version,
    )
