"""裁床批次数据库模型

布卷、工人工序、订单信息归批次独有，以 JSON 文档形式存放在批次行内，
内容即对账引擎重算后的记录。
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from ..database.connection import Base


class CuttingBatch(Base):
    """裁床批次表"""
    __tablename__ = "cutting_batches"

    id = Column(Integer, primary_key=True, index=True)
    program_number = Column(String(64), nullable=False, unique=True, index=True)  # 床次号
    pattern = Column(String(255), nullable=False)  # 款式
    cutting_datetime = Column(DateTime, nullable=False)  # 裁剪时间
    line_number = Column(String(64), nullable=False)  # 生产线
    sizes = Column(JSON, nullable=False)  # 适用尺码
    rolls = Column(JSON, nullable=False, default=list)  # 布卷
    worker_processes = Column(JSON, nullable=False, default=list)  # 工人工序
    order_details = Column(JSON(none_as_null=True), nullable=True)  # 订单信息
    additional_info = Column(Text, nullable=True)  # 备注
    cutting_stage = Column(String(32), nullable=False, default="NOT_STARTED")  # 裁剪阶段
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    # 乐观锁版本号，每次 UPDATE 自动加一
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
