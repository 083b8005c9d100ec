"""对账引擎

纯函数实现，不依赖数据库、网络或界面；每个函数返回新的记录对象。
"""

from .sizes import SIZE_BUCKETS, aggregate_sizes
from .rolls import add_roll, update_roll, remove_roll, recompute_roll
from .worker_processes import (
    add_worker_process,
    update_worker_process,
    remove_worker_process,
    recompute_status,
    recompute_worker_process,
    reconcile_status,
)
from .orders import build_order_details, recompute_order_details, set_order_details
from .pipeline import build_batch, update_batch_fields, recompute_batch, advance_cutting_stage

__all__ = [
    "SIZE_BUCKETS",
    "aggregate_sizes",
    "add_roll",
    "update_roll",
    "remove_roll",
    "recompute_roll",
    "add_worker_process",
    "update_worker_process",
    "remove_worker_process",
    "recompute_status",
    "recompute_worker_process",
    "reconcile_status",
    "build_order_details",
    "recompute_order_details",
    "set_order_details",
    "build_batch",
    "update_batch_fields",
    "recompute_batch",
    "advance_cutting_stage",
]
