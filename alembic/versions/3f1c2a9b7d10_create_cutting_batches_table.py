"""create cutting_batches table

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-18 09:12:40.512733

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c2a9b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # 创建cutting_batches表，布卷/工序/订单信息以JSON文档存放
    op.create_table('cutting_batches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('program_number', sa.String(length=64), nullable=False),
        sa.Column('pattern', sa.String(length=255), nullable=False),
        sa.Column('cutting_datetime', sa.DateTime(), nullable=False),
        sa.Column('line_number', sa.String(length=64), nullable=False),
        sa.Column('sizes', sa.JSON(), nullable=False),
        sa.Column('rolls', sa.JSON(), nullable=False),
        sa.Column('worker_processes', sa.JSON(), nullable=False),
        sa.Column('order_details', sa.JSON(none_as_null=True), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('cutting_stage', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cutting_batches_id'), 'cutting_batches', ['id'], unique=False)
    op.create_index(op.f('ix_cutting_batches_program_number'), 'cutting_batches', ['program_number'], unique=True)


def downgrade():
    # 删除cutting_batches表
    op.drop_index(op.f('ix_cutting_batches_program_number'), table_name='cutting_batches')
    op.drop_index(op.f('ix_cutting_batches_id'), table_name='cutting_batches')
    op.drop_table('cutting_batches')
