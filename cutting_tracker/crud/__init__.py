from .batch import (
    to_record,
    get_batch,
    get_batch_by_program_number,
    list_batches,
    count_batches,
    create_batch,
    update_batch,
    recompute,
    delete_batch,
    add_roll,
    update_roll,
    remove_roll,
    add_worker_process,
    update_worker_process,
    remove_worker_process,
    set_order_details,
    advance_stage,
)

__all__ = [
    # Batch functions
    "to_record",
    "get_batch",
    "get_batch_by_program_number",
    "list_batches",
    "count_batches",
    "create_batch",
    "update_batch",
    "recompute",
    "delete_batch",

    # Roll functions
    "add_roll",
    "update_roll",
    "remove_roll",

    # Worker process functions
    "add_worker_process",
    "update_worker_process",
    "remove_worker_process",

    # Order details / stage
    "set_order_details",
    "advance_stage",
]
