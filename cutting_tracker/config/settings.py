"""应用配置模块

使用 Pydantic Settings 管理应用配置，支持从 .env 文件加载环境变量
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # 应用配置
    APP_TITLE: str = "裁床批次对账系统"
    APP_DESCRIPTION: str = "裁床批次、布卷与工人工序对账API"
    APP_VERSION: str = "1.0.0"

    # 日志级别
    LOG_LEVEL: str = "INFO"

    # 尺码桶（顺序即输出顺序），布卷分码、工序收发数、订单配码共用；上线后只能新增
    SIZE_BUCKETS: List[str] = ["S", "M", "L", "XL", "XXL"]

    # 列表接口默认分页大小
    DEFAULT_PAGE_LIMIT: int = 100

    # MySQL 配置 - 从环境变量加载
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = "yourrootpw"
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: str = "3306"
    MYSQL_DB: str = "cutting_db"

    # 数据库配置 - 优先使用DATABASE_URL，否则从MySQL配置构建
    DATABASE_URL: str = ""
    ECHO_SQL: bool = False  # 是否打印SQL日志

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # 如果没有显式设置DATABASE_URL，从MySQL配置构建
        if not self.DATABASE_URL:
            if os.path.exists("dev.db"):  # 检查开发数据库文件是否存在
                self.DATABASE_URL = "sqlite:///./dev.db"
            else:
                self.DATABASE_URL = f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"


# 创建全局配置实例
settings = Settings()
