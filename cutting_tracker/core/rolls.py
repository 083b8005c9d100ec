"""布卷台账

批次内布卷的新增、修改、删除。布卷之间相互独立，只计算单卷的分码合计。
所有函数返回新的 Batch，不修改传入对象。
"""

from typing import Any, Mapping, Optional

from ..exceptions import NotFoundError, ValidationError
from ..schemas import Batch, Roll
from ..utils.helpers import field_path, is_count, optional_text, require_number, require_text
from .sizes import aggregate_sizes, merge_sizes

ROLL_FIELDS = ("roll_number", "color", "weight", "layers", "size_distribution", "remarks")


def _index_of(batch: Batch, roll_number: str) -> Optional[int]:
    for index, roll in enumerate(batch.rolls):
        if roll.roll_number == roll_number:
            return index
    return None


def _validate_layers(layers: Any, field: str) -> tuple:
    if not isinstance(layers, (list, tuple)) or not layers:
        raise ValidationError(field, "at least one layer entry is required")
    for index, layer in enumerate(layers):
        if not is_count(layer) or layer < 0:
            raise ValidationError(f"{field}[{index}]", "must be a non-negative integer")
    return tuple(layers)


def build_roll(roll_data: Mapping, field: str = "roll") -> Roll:
    """校验布卷数据并计算分码合计"""
    if not isinstance(roll_data, Mapping):
        raise ValidationError(field, "must be an object")
    return Roll(
        roll_number=require_text(roll_data, "roll_number", field),
        color=require_text(roll_data, "color", field),
        weight=require_number(roll_data, "weight", field, positive=True),
        layers=_validate_layers(roll_data.get("layers"), field_path(field, "layers")),
        size_distribution=aggregate_sizes(
            roll_data.get("size_distribution"), field_path(field, "size_distribution")
        ),
        remarks=optional_text(roll_data, "remarks", field),
    )


def recompute_roll(roll: Roll) -> Roll:
    return roll.model_copy(
        update={"size_distribution": aggregate_sizes(roll.size_distribution, "size_distribution")}
    )


def add_roll(batch: Batch, roll_data: Mapping) -> Batch:
    """追加布卷，卷号在批次内必须唯一"""
    field = f"rolls[{len(batch.rolls)}]"
    roll = build_roll(roll_data, field)
    if _index_of(batch, roll.roll_number) is not None:
        raise ValidationError(field_path(field, "roll_number"), f"duplicate roll number {roll.roll_number!r}")
    return batch.model_copy(update={"rolls": batch.rolls + (roll,)})


def update_roll(batch: Batch, roll_number: str, patch: Mapping) -> Batch:
    """按卷号修改布卷，分码按尺码合并"""
    index = _index_of(batch, roll_number)
    if index is None:
        raise NotFoundError("roll", roll_number)

    current = batch.rolls[index]
    merged = current.model_dump()
    for key, value in patch.items():
        if key not in ROLL_FIELDS:
            continue
        if key == "size_distribution":
            merged[key] = merge_sizes(current.size_distribution, value)
        else:
            merged[key] = value

    field = f"rolls[{index}]"
    roll = build_roll(merged, field)
    other = _index_of(batch, roll.roll_number)
    if other is not None and other != index:
        raise ValidationError(field_path(field, "roll_number"), f"duplicate roll number {roll.roll_number!r}")

    rolls = batch.rolls[:index] + (roll,) + batch.rolls[index + 1:]
    return batch.model_copy(update={"rolls": rolls})


def remove_roll(batch: Batch, roll_number: str) -> Batch:
    index = _index_of(batch, roll_number)
    if index is None:
        raise NotFoundError("roll", roll_number)
    return batch.model_copy(update={"rolls": batch.rolls[:index] + batch.rolls[index + 1:]})
