"""日志配置

应用启动时调用一次 configure_logging，各模块使用 logging.getLogger(__name__)
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """配置根日志记录器"""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    # 格式: "2025-10-27 10:00:00 [INFO] cutting_tracker.crud.batch: Batch created..."
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # 重复加载时避免重复输出
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(handler)

    if numeric_level != getattr(logging, level.upper(), None):
        root_logger.warning("Invalid log level %r, defaulting to INFO", level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
