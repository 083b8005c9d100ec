import pytest

from cutting_tracker.core import pipeline, rolls
from cutting_tracker.exceptions import NotFoundError, ValidationError


def roll(**overrides):
    data = {
        "roll_number": "R1",
        "color": "Red",
        "weight": 12.5,
        "layers": [20, 18],
        "size_distribution": {"S": 5, "M": 10, "L": 0, "XL": 0, "XXL": 0},
    }
    data.update(overrides)
    return data


@pytest.fixture
def batch(batch_data, now):
    return pipeline.build_batch(batch_data, now)


def test_add_roll_computes_total(batch):
    updated = rolls.add_roll(batch, roll())
    assert len(updated.rolls) == 1
    assert updated.rolls[0].size_distribution.total == 15
    # input batch untouched
    assert batch.rolls == ()


def test_negative_weight_rejected(batch):
    with pytest.raises(ValidationError) as exc:
        rolls.add_roll(batch, roll(weight=-1))
    assert exc.value.field == "rolls[0].weight"
    assert len(batch.rolls) == 0


def test_zero_weight_rejected(batch):
    with pytest.raises(ValidationError):
        rolls.add_roll(batch, roll(weight=0))


@pytest.mark.parametrize("missing", ["roll_number", "color", "weight"])
def test_required_fields(batch, missing):
    data = roll()
    del data[missing]
    with pytest.raises(ValidationError) as exc:
        rolls.add_roll(batch, data)
    assert exc.value.field == f"rolls[0].{missing}"


def test_blank_color_rejected(batch):
    with pytest.raises(ValidationError):
        rolls.add_roll(batch, roll(color="   "))


def test_layers_required(batch):
    with pytest.raises(ValidationError) as exc:
        rolls.add_roll(batch, roll(layers=[]))
    assert exc.value.field == "rolls[0].layers"
    with pytest.raises(ValidationError):
        rolls.add_roll(batch, roll(layers=[3, -1]))


def test_negative_bucket_rejected(batch):
    with pytest.raises(ValidationError) as exc:
        rolls.add_roll(batch, roll(size_distribution={"S": -2}))
    assert exc.value.field == "rolls[0].size_distribution.S"


def test_duplicate_roll_number(batch):
    batch = rolls.add_roll(batch, roll())
    with pytest.raises(ValidationError):
        rolls.add_roll(batch, roll(color="Blue"))


def test_update_roll_merges_buckets(batch):
    batch = rolls.add_roll(batch, roll())
    updated = rolls.update_roll(batch, "R1", {"size_distribution": {"L": 4}, "remarks": "shaded"})
    r = updated.rolls[0]
    assert r.size_distribution.counts["S"] == 5
    assert r.size_distribution.counts["L"] == 4
    assert r.size_distribution.total == 19
    assert r.remarks == "shaded"
    assert r.color == "Red"


def test_update_roll_validates(batch):
    batch = rolls.add_roll(batch, roll())
    with pytest.raises(ValidationError):
        rolls.update_roll(batch, "R1", {"weight": -3})
    assert batch.rolls[0].weight == 12.5


def test_update_roll_renumber_conflict(batch):
    batch = rolls.add_roll(batch, roll())
    batch = rolls.add_roll(batch, roll(roll_number="R2"))
    with pytest.raises(ValidationError):
        rolls.update_roll(batch, "R2", {"roll_number": "R1"})


def test_update_missing_roll(batch):
    with pytest.raises(NotFoundError):
        rolls.update_roll(batch, "nope", {"color": "Blue"})


def test_remove_roll(batch):
    batch = rolls.add_roll(batch, roll())
    batch = rolls.add_roll(batch, roll(roll_number="R2"))
    updated = rolls.remove_roll(batch, "R1")
    assert [r.roll_number for r in updated.rolls] == ["R2"]
    with pytest.raises(NotFoundError):
        rolls.remove_roll(updated, "R1")
