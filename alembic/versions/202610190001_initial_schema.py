"""Create users, trainings and assignments tables

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "202610190001"
down_revision = None
branch_labels = None
depends_on = None

user_role_enum = sa.Enum("admin", "employee", name="user_role")
assignment_status_enum = sa.Enum("pending", "in_progress", "completed", name="assignment_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", user_role_enum, nullable=False, server_default="employee"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "trainings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=128), nullable=False),
        sa.Column("duration_hours", sa.Float(), nullable=False),
        sa.Column("created_by_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("duration_hours >= 0.5", name="ck_trainings_min_duration"),
    )
    op.create_index("ix_trainings_created_by_id", "trainings", ["created_by_id"])

    op.create_table(
        "assignments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("employee_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "training_id",
            sa.String(length=36),
            sa.ForeignKey("trainings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assigned_by_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", assignment_status_enum, nullable=False, server_default="pending"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("employee_id", "training_id", name="uq_assignment_employee_training"),
    )
    op.create_index("ix_assignments_employee_id", "assignments", ["employee_id"])
    op.create_index("ix_assignments_training_id", "assignments", ["training_id"])


def downgrade() -> None:
    op.drop_index("ix_assignments_training_id", "assignments")
    op.drop_index("ix_assignments_employee_id", "assignments")
    op.drop_table("assignments")
    op.drop_index("ix_trainings_created_by_id", "trainings")
    op.drop_table("trainings")
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
    assignment_status_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
