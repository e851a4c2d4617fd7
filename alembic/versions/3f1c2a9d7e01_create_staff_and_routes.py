"""create users, staff_compliance and routes tables

Revision ID: 3f1c2a9d7e01
Revises:
Create Date: 2026-10-17 09:00:00
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1c2a9d7e01"
down_revision = None
branch_labels = None
depends_on = None


def _has_table(name: str) -> bool:
    return name in sa.inspect(op.get_bind()).get_table_names()


def upgrade():
    if not _has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("hashed_password", sa.String, nullable=False),
            sa.Column("role", sa.String(length=20), nullable=True),
            sa.Column("full_name", sa.String(length=255), nullable=True),
            sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("1")),
            sa.Column("failed_login_attempts", sa.Integer, nullable=False, server_default=sa.text("0")),
            sa.Column("locked_until", sa.DateTime, nullable=True),
            sa.Column("last_login_at", sa.DateTime, nullable=True),
            sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.CheckConstraint("role IS NULL OR role IN ('admin', 'ops')", name="ck_users_role_allowed"),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)
        op.create_index("ix_users_role", "users", ["role"])
        op.create_index("ix_users_locked_until", "users", ["locked_until"])

    if not _has_table("staff_compliance"):
        op.create_table(
            "staff_compliance",
            sa.Column("id", sa.String(length=32), primary_key=True),
            sa.Column("staff_name", sa.String(length=255), nullable=False),
            sa.Column("role", sa.String(length=20), nullable=False),
            sa.Column("dbs_expiry_date", sa.Date, nullable=False),
            sa.Column("license_expiry_date", sa.Date, nullable=False),
            sa.Column("compliance_status_label", sa.String(length=20), nullable=True),
            sa.Column("created_by", sa.Integer, nullable=True),
            sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.CheckConstraint("role IN ('Admin', 'Operations')", name="ck_staff_compliance_role_allowed"),
            sa.CheckConstraint("length(trim(staff_name)) > 0", name="ck_staff_compliance_name_not_blank"),
            sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        )
        op.create_index("ix_staff_compliance_staff_name", "staff_compliance", ["staff_name"])
        op.create_index("ix_staff_compliance_license_expiry_date", "staff_compliance", ["license_expiry_date"])

    if not _has_table("routes"):
        op.create_table(
            "routes",
            sa.Column("id", sa.String(length=32), primary_key=True),
            sa.Column("route_name", sa.String(length=255), nullable=False),
            sa.Column("planned_journey_minutes", sa.Integer, nullable=False),
            sa.Column("staff_id", sa.String(length=32), nullable=True),
            sa.Column("approved", sa.Boolean, nullable=False, server_default=sa.text("0")),
            sa.Column("approved_at", sa.DateTime, nullable=True),
            sa.Column("approved_by", sa.Integer, nullable=True),
            sa.Column("created_by", sa.Integer, nullable=True),
            sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.CheckConstraint("planned_journey_minutes >= 0", name="ck_routes_minutes_non_negative"),
            sa.CheckConstraint("length(trim(route_name)) > 0", name="ck_routes_name_not_blank"),
            sa.ForeignKeyConstraint(["approved_by"], ["users.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        )
        op.create_index("ix_routes_route_name", "routes", ["route_name"])
        op.create_index("ix_routes_staff_id", "routes", ["staff_id"])
        op.create_index("ix_routes_approved_minutes", "routes", ["approved", "planned_journey_minutes"])


def downgrade():
    for table in ("routes", "staff_compliance", "users"):
        if _has_table(table):
            op.drop_table(table)
