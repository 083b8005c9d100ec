"""自定义异常

异常层级:
    ReconciliationError (基类)
    ├── ValidationError - 必填字段缺失、数值非法、状态流转非法
    ├── NotFoundError   - 批次、布卷或工序不存在
    └── ConflictError   - 版本冲突、批次号重复

路由层不捕获这些异常，由 main.py 中注册的异常处理器统一转换为 HTTP 响应。
"""

from typing import Any, Dict, Optional


class ReconciliationError(Exception):
    """所有业务异常的基类"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ReconciliationError):
    """字段校验失败

    field 为出错字段的路径，例如 "rolls[0].weight"、"in_pieces.S"
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


class NotFoundError(ReconciliationError):
    """更新或删除的目标不存在"""

    def __init__(self, kind: str, identifier: Any):
        super().__init__(f"{kind} not found: {identifier}", {"kind": kind, "identifier": identifier})
        self.kind = kind
        self.identifier = identifier


class ConflictError(ReconciliationError):
    """并发写入冲突或唯一性冲突"""
