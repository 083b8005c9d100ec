"""工具函数模块

包含字段校验与时间相关的常用函数。校验失败统一抛出 ValidationError，
不做类型转换（例如字符串 "5" 不会被当作数字 5）。
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from ..exceptions import ValidationError


def utcnow() -> datetime:
    """当前 UTC 时间（不带时区信息，与数据库 DateTime 列保持一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def field_path(parent: Optional[str], key: str) -> str:
    """拼接字段路径，例如 rolls[0] + weight -> rolls[0].weight"""
    return f"{parent}.{key}" if parent else key


def loc_to_field(loc) -> str:
    """请求校验错误的位置转为字段路径，例如 ("body", "rolls", 0, "weight") -> rolls[0].weight"""
    path = ""
    for part in loc[1:] if loc and loc[0] == "body" else loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = field_path(path, str(part))
    return path or "body"


def is_number(value: Any) -> bool:
    # bool 是 int 的子类，需要单独排除
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_text(data: Mapping, key: str, parent: Optional[str] = None) -> str:
    """必填字符串字段，去除首尾空白后不能为空"""
    value = data.get(key)
    if value is None:
        raise ValidationError(field_path(parent, key), "is required")
    if not isinstance(value, str):
        raise ValidationError(field_path(parent, key), "must be a string")
    value = value.strip()
    if not value:
        raise ValidationError(field_path(parent, key), "must not be empty")
    return value


def optional_text(data: Mapping, key: str, parent: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field_path(parent, key), "must be a string")
    return value


def require_number(
    data: Mapping,
    key: str,
    parent: Optional[str] = None,
    *,
    positive: bool = False,
    default: Optional[float] = None,
) -> float:
    """数值字段

    positive=True 时要求 > 0，否则要求 >= 0；提供 default 时字段可缺省
    """
    value = data.get(key)
    if value is None:
        if default is not None:
            return default
        raise ValidationError(field_path(parent, key), "is required")
    if not is_number(value):
        raise ValidationError(field_path(parent, key), "must be a number")
    if positive and value <= 0:
        raise ValidationError(field_path(parent, key), "must be greater than 0")
    if not positive and value < 0:
        raise ValidationError(field_path(parent, key), "must not be negative")
    return value


def optional_datetime(data: Mapping, key: str, parent: Optional[str] = None) -> Optional[datetime]:
    """可选时间字段，接受 datetime 或 ISO 8601 字符串"""
    value = data.get(key)
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError(field_path(parent, key), "must be an ISO 8601 datetime")
