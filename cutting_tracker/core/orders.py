"""订单配码汇总

订单信息可选；存在时先算每个颜色的配码合计，再算订单总数。
"""

from typing import Mapping, Optional

from ..exceptions import ValidationError
from ..schemas import Batch, OrderColorSizeEntry, OrderDetails
from ..utils.helpers import field_path, optional_datetime, optional_text, require_text
from .sizes import aggregate_sizes


def build_order_entry(entry_data: Mapping, field: str) -> OrderColorSizeEntry:
    if not isinstance(entry_data, Mapping):
        raise ValidationError(field, "must be an object")
    sizes = aggregate_sizes(entry_data.get("sizes"), field_path(field, "sizes"))
    return OrderColorSizeEntry(
        color=require_text(entry_data, "color", field),
        sizes=sizes,
        total=sizes.total,
    )


def build_order_details(data: Optional[Mapping]) -> Optional[OrderDetails]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ValidationError("order_details", "must be an object")

    matrix = data.get("color_size_matrix") or []
    if not isinstance(matrix, (list, tuple)):
        raise ValidationError("order_details.color_size_matrix", "must be a list")

    details = OrderDetails(
        order_code=optional_text(data, "order_code", "order_details"),
        client=optional_text(data, "client", "order_details"),
        recipient=optional_text(data, "recipient", "order_details"),
        ready_by=optional_datetime(data, "ready_by", "order_details"),
        color_size_matrix=tuple(
            build_order_entry(entry, f"order_details.color_size_matrix[{index}]")
            for index, entry in enumerate(matrix)
        ),
    )
    return recompute_order_details(details)


def recompute_order_details(details: Optional[OrderDetails]) -> Optional[OrderDetails]:
    """重算每行合计与订单总数；没有订单信息时原样返回 None"""
    if details is None:
        return None
    entries = []
    for entry in details.color_size_matrix:
        sizes = aggregate_sizes(entry.sizes, "sizes")
        entries.append(entry.model_copy(update={"sizes": sizes, "total": sizes.total}))
    return details.model_copy(
        update={
            "color_size_matrix": tuple(entries),
            "order_total": sum(entry.total for entry in entries),
        }
    )


def set_order_details(batch: Batch, data: Optional[Mapping]) -> Batch:
    """整体替换订单信息，data 为 None 时清除"""
    return batch.model_copy(update={"order_details": build_order_details(data)})
