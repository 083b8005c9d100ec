"""配置模块"""

from .settings import settings, Settings

__all__ = ["settings", "Settings"]
