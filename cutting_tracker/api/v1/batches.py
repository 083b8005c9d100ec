"""裁床批次API路由

定义批次、布卷、工人工序、订单信息相关的API端点。
业务异常（ValidationError / NotFoundError / ConflictError）由 main.py 统一处理。
写操作可通过 ?version= 携带读取时的版本号，版本不一致返回 409。
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...config.settings import settings
from ...database.connection import get_db

router = APIRouter(prefix="/batches", tags=["batches"])


@router.post("/", response_model=schemas.BatchRead)
def create_batch(batch: schemas.BatchCreate, db: Session = Depends(get_db)):
    """创建新批次"""
    return crud.create_batch(db, batch)


@router.get("/", response_model=List[schemas.BatchRead])
def list_batches(
    response: Response,
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """获取批次列表（总数在 X-Total-Count 响应头中）"""
    response.headers["X-Total-Count"] = str(crud.count_batches(db))
    return crud.list_batches(db, skip=skip, limit=limit)


@router.get("/{batch_id}", response_model=schemas.BatchRead)
def get_batch(batch_id: int, db: Session = Depends(get_db)):
    db_batch = crud.get_batch(db, batch_id)
    if not db_batch:
        raise HTTPException(status_code=404, detail="Batch not found")
    return db_batch


@router.put("/{batch_id}", response_model=schemas.BatchRead)
def update_batch(
    batch_id: int,
    batch_update: schemas.BatchUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """更新批次基础信息"""
    return crud.update_batch(db, batch_id, batch_update, version)


@router.delete("/{batch_id}")
def delete_batch(batch_id: int, db: Session = Depends(get_db)):
    """删除指定ID的批次"""
    success = crud.delete_batch(db, batch_id)
    if not success:
        raise HTTPException(status_code=404, detail="Batch not found")
    return {"message": "Batch deleted successfully"}


@router.post("/{batch_id}/recompute", response_model=schemas.BatchRead)
def recompute_batch(batch_id: int, version: Optional[int] = None, db: Session = Depends(get_db)):
    """重新计算派生字段并保存"""
    return crud.recompute(db, batch_id, version)


@router.post("/{batch_id}/stage", response_model=schemas.BatchRead)
def advance_stage(
    batch_id: int,
    stage_update: schemas.StageUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """推进裁剪阶段（裁前完成 -> 裁后完成）"""
    return crud.advance_stage(db, batch_id, stage_update.stage, version)


# 布卷
@router.post("/{batch_id}/rolls", response_model=schemas.BatchRead)
def add_roll(
    batch_id: int,
    roll: schemas.RollCreate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return crud.add_roll(db, batch_id, roll, version)


@router.put("/{batch_id}/rolls/{roll_number}", response_model=schemas.BatchRead)
def update_roll(
    batch_id: int,
    roll_number: str,
    roll_update: schemas.RollUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return crud.update_roll(db, batch_id, roll_number, roll_update, version)


@router.delete("/{batch_id}/rolls/{roll_number}", response_model=schemas.BatchRead)
def remove_roll(batch_id: int, roll_number: str, version: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.remove_roll(db, batch_id, roll_number, version)


# 工人工序
@router.post("/{batch_id}/worker-processes", response_model=schemas.BatchRead)
def add_worker_process(
    batch_id: int,
    process: schemas.WorkerProcessCreate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return crud.add_worker_process(db, batch_id, process, version)


@router.put("/{batch_id}/worker-processes/{process_id}", response_model=schemas.BatchRead)
def update_worker_process(
    batch_id: int,
    process_id: str,
    process_update: schemas.WorkerProcessUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return crud.update_worker_process(db, batch_id, process_id, process_update, version)


@router.delete("/{batch_id}/worker-processes/{process_id}", response_model=schemas.BatchRead)
def remove_worker_process(batch_id: int, process_id: str, version: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.remove_worker_process(db, batch_id, process_id, version)


# 订单信息
@router.put("/{batch_id}/order-details", response_model=schemas.BatchRead)
def set_order_details(
    batch_id: int,
    order_details: schemas.OrderDetailsIn,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return crud.set_order_details(db, batch_id, order_details, version)


@router.delete("/{batch_id}/order-details", response_model=schemas.BatchRead)
def clear_order_details(batch_id: int, version: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.set_order_details(db, batch_id, None, version)
