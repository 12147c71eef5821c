"""Scheduling tables: shifts, assignments, templates, time off

Revision ID: 20241203_090000
Revises:
Create Date: 2024-12-03 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20241203_090000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

shift_status = sa.Enum("OPEN", "FULL", "CANCELLED", name="shift_status")
assignment_status = sa.Enum("ASSIGNED", "CONFIRMED", "DECLINED", name="assignment_status")
time_off_type = sa.Enum("VACATION", "SICK", "PERSONAL", "OTHER", name="time_off_type")
time_off_status = sa.Enum("PENDING", "APPROVED", "REJECTED", name="time_off_status")


def upgrade() -> None:
    op.create_table(
        "shifts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_minutes", sa.Integer(), nullable=False),
        sa.Column("end_minutes", sa.Integer(), nullable=False),
        sa.Column("is_overnight", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role", sa.String(length=120), nullable=False),
        sa.Column("required_skills", sa.JSON(), nullable=False),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("team", sa.String(length=120), nullable=True),
        sa.Column("min_employees", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_employees", sa.Integer(), nullable=True),
        sa.Column("assigned_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", shift_status, nullable=False, server_default="OPEN"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("min_employees >= 1", name="ck_shift_min_employees"),
        sa.CheckConstraint(
            "max_employees IS NULL OR assigned_count <= max_employees",
            name="ck_shift_capacity",
        ),
    )
    op.create_index("ix_shifts_date", "shifts", ["date"])
    op.create_index("ix_shifts_role", "shifts", ["role"])
    op.create_index("ix_shifts_location", "shifts", ["location"])
    op.create_index("ix_shifts_team", "shifts", ["team"])
    op.create_index("ix_shifts_status", "shifts", ["status"])

    op.create_table(
        "shift_assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shift_id", sa.Integer(), sa.ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("assigned_by", sa.Integer(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(), nullable=False),
        sa.Column("status", assignment_status, nullable=False, server_default="ASSIGNED"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint("shift_id", "employee_id", name="uq_shift_assignment_employee"),
    )
    op.create_index("ix_shift_assignments_shift_id", "shift_assignments", ["shift_id"])
    op.create_index("ix_shift_assignments_employee_id", "shift_assignments", ["employee_id"])
    op.create_index("ix_shift_assignments_status", "shift_assignments", ["status"])

    op.create_table(
        "shift_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_minutes", sa.Integer(), nullable=False),
        sa.Column("end_minutes", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(length=120), nullable=False),
        sa.Column("required_skills", sa.JSON(), nullable=False),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("team", sa.String(length=120), nullable=True),
        sa.Column("min_employees", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_employees", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "time_off_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_minutes", sa.Integer(), nullable=True),
        sa.Column("end_minutes", sa.Integer(), nullable=True),
        sa.Column("type", time_off_type, nullable=False),
        sa.Column("status", time_off_status, nullable=False, server_default="PENDING"),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("approved_by", sa.Integer(), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_time_off_requests_employee_id", "time_off_requests", ["employee_id"])
    op.create_index("ix_time_off_requests_start_date", "time_off_requests", ["start_date"])
    op.create_index("ix_time_off_requests_end_date", "time_off_requests", ["end_date"])
    op.create_index("ix_time_off_requests_status", "time_off_requests", ["status"])


def downgrade() -> None:
    op.drop_table("time_off_requests")
    op.drop_table("shift_templates")
    op.drop_table("shift_assignments")
    op.drop_table("shifts")

    bind = op.get_bind()
    for enum in (time_off_status, time_off_type, assignment_status, shift_status):
        enum.drop(bind, checkfirst=True)
