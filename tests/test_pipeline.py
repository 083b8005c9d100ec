from datetime import timedelta

import pytest

from cutting_tracker.core import pipeline
from cutting_tracker.exceptions import ValidationError
from cutting_tracker.schemas import CuttingStage, ProcessStatus


@pytest.fixture
def full_data(batch_data):
    return {
        **batch_data,
        "rolls": [
            {"roll_number": "R1", "color": "Red", "weight": 10.0, "layers": [10],
             "size_distribution": {"S": 5, "M": 10, "total": 1}},
        ],
        "worker_processes": [
            {"id": "wp-1", "worker_name": "Asha", "operation": "Stitching",
             "in_pieces": {"S": 10, "M": 5}, "out_pieces": {"S": 10, "M": 5}, "status": "ERROR"},
            {"id": "wp-2", "worker_name": "Ravi", "operation": "Finishing", "in_pieces": {"S": 10}},
        ],
        "order_details": {
            "color_size_matrix": [
                {"color": "Red", "sizes": {"S": 3, "M": 2}},
                {"color": "Blue", "sizes": {"S": 1}},
            ],
        },
    }


def test_build_batch_computes_everything(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    assert batch.rolls[0].size_distribution.total == 15
    assert batch.worker_processes[0].status == ProcessStatus.OK
    assert batch.worker_processes[1].status == ProcessStatus.PENDING
    assert batch.order_details.order_total == 6
    assert batch.created_at == now
    assert batch.updated_at == now
    assert batch.cutting_datetime == now
    assert batch.cutting_stage == CuttingStage.NOT_STARTED


def test_recompute_is_idempotent(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    later = now + timedelta(minutes=5)
    first = pipeline.recompute_batch(batch, later)
    second = pipeline.recompute_batch(first, later)
    assert first.model_dump_json() == second.model_dump_json()


def test_created_at_fixed_updated_at_moves(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    later = now + timedelta(hours=1)
    recomputed = pipeline.recompute_batch(batch, later)
    assert recomputed.created_at == now
    assert recomputed.updated_at == later


def test_recompute_repairs_stale_derived_fields(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    roll = batch.rolls[0]
    stale_roll = roll.model_copy(
        update={"size_distribution": roll.size_distribution.model_copy(update={"total": 0})}
    )
    process = batch.worker_processes[0].model_copy(update={"status": ProcessStatus.ERROR})
    stale = batch.model_copy(update={"rolls": (stale_roll,), "worker_processes": (process,)})

    fixed = pipeline.recompute_batch(stale, now)
    assert fixed.rolls[0].size_distribution.total == 15
    assert fixed.worker_processes[0].status == ProcessStatus.OK


@pytest.mark.parametrize("missing", ["program_number", "pattern", "line_number"])
def test_required_batch_fields(batch_data, missing):
    del batch_data[missing]
    with pytest.raises(ValidationError) as exc:
        pipeline.build_batch(batch_data)
    assert exc.value.field == missing


def test_sizes_required(batch_data):
    batch_data["sizes"] = []
    with pytest.raises(ValidationError) as exc:
        pipeline.build_batch(batch_data)
    assert exc.value.field == "sizes"


def test_invalid_child_rejects_whole_batch(full_data):
    full_data["rolls"].append({"roll_number": "R2", "color": "Red", "weight": -1, "layers": [1]})
    with pytest.raises(ValidationError) as exc:
        pipeline.build_batch(full_data)
    assert exc.value.field == "rolls[1].weight"


def test_update_batch_fields(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    updated = pipeline.update_batch_fields(
        batch, {"pattern": "Tee", "line_number": None, "additional_info": "rush", "created_at": None}
    )
    assert updated.pattern == "Tee"
    assert updated.line_number == "L1"
    assert updated.additional_info == "rush"
    assert updated.created_at == now
    assert updated.order_details.order_total == 6

    cleared = pipeline.update_batch_fields(updated, {"order_details": None, "additional_info": None})
    assert cleared.order_details is None
    assert cleared.additional_info is None


def test_update_batch_fields_validates(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    with pytest.raises(ValidationError):
        pipeline.update_batch_fields(batch, {"pattern": "  "})


def test_stage_moves_forward_one_step(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    batch = pipeline.advance_cutting_stage(batch, "BEFORE_CUTTING_COMPLETE")
    assert batch.cutting_stage == CuttingStage.BEFORE_CUTTING_COMPLETE
    batch = pipeline.advance_cutting_stage(batch, CuttingStage.AFTER_CUTTING_COMPLETE)
    assert batch.cutting_stage == CuttingStage.AFTER_CUTTING_COMPLETE
    with pytest.raises(ValidationError):
        pipeline.advance_cutting_stage(batch, CuttingStage.AFTER_CUTTING_COMPLETE)


def test_stage_cannot_skip_or_go_back(full_data, now):
    batch = pipeline.build_batch(full_data, now)
    with pytest.raises(ValidationError):
        pipeline.advance_cutting_stage(batch, CuttingStage.AFTER_CUTTING_COMPLETE)
    with pytest.raises(ValidationError):
        pipeline.advance_cutting_stage(batch, CuttingStage.NOT_STARTED)
    with pytest.raises(ValidationError):
        pipeline.advance_cutting_stage(batch, "CUTTING")


def test_stage_requires_rolls(batch_data, now):
    batch = pipeline.build_batch(batch_data, now)
    with pytest.raises(ValidationError) as exc:
        pipeline.advance_cutting_stage(batch, CuttingStage.BEFORE_CUTTING_COMPLETE)
    assert exc.value.field == "rolls"
