"""尺码汇总

布卷分码、工序收发数、订单配码共用同一组尺码桶，合计统一在此计算。
"""

from typing import Any, Mapping, Optional, Sequence

from ..config.settings import settings
from ..exceptions import ValidationError
from ..schemas import SizeBucketSet
from ..utils.helpers import field_path, is_count

# 尺码桶顺序即输出顺序；已有数据后只能新增尺码，删除的尺码会使旧记录无法通过校验
SIZE_BUCKETS = tuple(settings.SIZE_BUCKETS)


def aggregate_sizes(
    counts: Optional[Any],
    field: str,
    buckets: Sequence[str] = SIZE_BUCKETS,
) -> SizeBucketSet:
    """校验尺码计数并返回带合计的新 SizeBucketSet

    - 缺省的尺码桶按 0 计，None 视为全 0
    - 输入中的 total 一律忽略
    - 未知尺码、非整数、负数均抛出 ValidationError
    """
    if counts is None:
        counts = {}
    elif isinstance(counts, SizeBucketSet):
        counts = counts.counts
    elif not isinstance(counts, Mapping):
        raise ValidationError(field, "must be a mapping of size to piece count")

    values = {}
    for key, value in counts.items():
        if key == "total":
            continue
        path = field_path(field, str(key))
        if key not in buckets:
            raise ValidationError(path, f"unknown size, expected one of {', '.join(buckets)}")
        if value is None:
            continue
        if not is_count(value):
            raise ValidationError(path, "must be an integer")
        if value < 0:
            raise ValidationError(path, "must not be negative")
        values[key] = value

    ordered = {key: values.get(key, 0) for key in buckets}
    return SizeBucketSet(counts=ordered, total=sum(ordered.values()))


def merge_sizes(current: Optional[SizeBucketSet], patch: Optional[Mapping]) -> Mapping:
    """按尺码桶合并修改，未出现在 patch 中的尺码保持原值"""
    merged = dict(current.counts) if current is not None else {}
    if patch is None:
        return merged
    if isinstance(patch, Mapping):
        merged.update({key: value for key, value in patch.items() if key != "total"})
        return merged
    # 非映射类型原样返回，交给 aggregate_sizes 报错
    return patch
