"""create_tasks_table

Revision ID: 4f1c2a9e7b3d
Revises: 
Create Date: 2026-10-19 10:12:31.408215

"""
from alembic import op
import sqlalchemy as sa


revision = '4f1c2a9e7b3d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("isCompleted", sa.Integer(), server_default="0", nullable=False),
        sa.Column("createdDate", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("tasks")
