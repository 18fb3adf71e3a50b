"""Initial schema.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None

DEFAULT_CATEGORIES = [
    {"name": "Health", "color": "#10B981", "icon": "heart"},
    {"name": "Academic", "color": "#6366F1", "icon": "school"},
    {"name": "Physical", "color": "#F59E0B", "icon": "fitness"},
    {"name": "Personal", "color": "#EC4899", "icon": "person"},
    {"name": "Work", "color": "#3B82F6", "icon": "briefcase"},
]


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("frequency", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=False, server_default="#6366F1"),
        sa.Column("icon", sa.String(length=50), nullable=False, server_default="checkmark-circle"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "habit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("habit_id", "date", name="uq_habit_logs_habit_id_date"),
    )
    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=False, server_default="#6366F1"),
        sa.Column("icon", sa.String(length=50), nullable=False, server_default="folder"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.bulk_insert(categories, DEFAULT_CATEGORIES)


def downgrade() -> None:
    op.drop_table("categories")
    op.drop_table("habit_logs")
    op.drop_table("habits")
