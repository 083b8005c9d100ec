import pytest

from cutting_tracker.core import orders, pipeline
from cutting_tracker.exceptions import ValidationError


def test_order_total_is_sum_of_entries():
    details = orders.build_order_details({
        "order_code": "ORD-1",
        "color_size_matrix": [
            {"color": "Red", "sizes": {"S": 3, "M": 2}},
            {"color": "Blue", "sizes": {"S": 1}},
        ],
    })
    assert [entry.total for entry in details.color_size_matrix] == [5, 1]
    assert details.order_total == 6


def test_empty_matrix_total_zero():
    details = orders.build_order_details({"client": "ACME"})
    assert details.color_size_matrix == ()
    assert details.order_total == 0


def test_no_order_details():
    assert orders.build_order_details(None) is None
    assert orders.recompute_order_details(None) is None


def test_entry_requires_color():
    with pytest.raises(ValidationError) as exc:
        orders.build_order_details({"color_size_matrix": [{"sizes": {"S": 1}}]})
    assert exc.value.field == "order_details.color_size_matrix[0].color"


def test_entry_negative_size():
    with pytest.raises(ValidationError) as exc:
        orders.build_order_details({"color_size_matrix": [{"color": "Red", "sizes": {"M": -4}}]})
    assert exc.value.field == "order_details.color_size_matrix[0].sizes.M"


def test_recompute_overwrites_stale_totals():
    details = orders.build_order_details({"color_size_matrix": [{"color": "Red", "sizes": {"S": 3}}]})
    stale = details.model_copy(update={"order_total": 99})
    assert orders.recompute_order_details(stale).order_total == 3


def test_set_and_clear_on_batch(batch_data, now):
    batch = pipeline.build_batch(batch_data, now)
    with_order = orders.set_order_details(batch, {"color_size_matrix": [{"color": "Red", "sizes": {"L": 7}}]})
    assert with_order.order_details.order_total == 7
    assert orders.set_order_details(with_order, None).order_details is None
