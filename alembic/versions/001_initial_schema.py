"""Initial schema - catalog, grants, change requests, sessions, IP rules, audit log.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("resource", sa.String(100), nullable=True),
        sa.Column("action", sa.String(100), nullable=True),
        sa.Column("requires_mfa", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_permission_slug", "permission", ["slug"], unique=True)

    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("session_timeout_minutes", sa.Integer(), nullable=True),
        sa.Column("concurrent_session_limit", sa.Integer(), nullable=True),
        sa.Column("mfa_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_role_slug", "role", ["slug"], unique=True)

    op.create_table(
        "permission_dependency",
        sa.Column(
            "permission_slug",
            sa.String(100),
            sa.ForeignKey("permission.slug", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "depends_on_slug",
            sa.String(100),
            sa.ForeignKey("permission.slug"),
            primary_key=True,
        ),
        sa.CheckConstraint("permission_slug <> depends_on_slug", name="ck_dependency_no_self"),
    )
    op.create_index("ix_dependency_depends_on", "permission_dependency", ["depends_on_slug"])

    op.create_table(
        "catalog_version",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("version", sa.BigInteger(), nullable=False),
    )
    op.execute("INSERT INTO catalog_version (id, version) VALUES (1, 0)")

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "permission_slug",
            sa.String(100),
            sa.ForeignKey("permission.slug"),
            primary_key=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "user_role",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id"), nullable=False),
    )
    op.create_index("ix_user_role_role", "user_role", ["role_id"])

    op.create_table(
        "user_permission_override",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column(
            "permission_slug",
            sa.String(100),
            sa.ForeignKey("permission.slug"),
            primary_key=True,
        ),
        sa.Column("allowed", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "temporary_permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("permission_slug", sa.String(100), sa.ForeignKey("permission.slug"), nullable=False),
        sa.Column("granted_by", sa.String(255), nullable=False),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint(
            "expires_at IS NULL OR expires_at > granted_at", name="ck_temporary_expiry"
        ),
    )
    op.create_index("ix_temporary_permission_user", "temporary_permission", ["user_id"])

    op.create_table(
        "permission_change_request",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("requested_by", sa.String(255), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("permissions_to_add", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("permissions_to_remove", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("approved_by", sa.String(255), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decision_reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'expired')",
            name="ck_change_request_status",
        ),
    )
    op.create_index(
        "ix_change_request_status_expires",
        "permission_change_request",
        ["status", "expires_at"],
    )

    op.create_table(
        "permission_session",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_action_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_permission_session_token", "permission_session", ["token"], unique=True)
    op.create_index("ix_permission_session_user", "permission_session", ["user_id"])

    op.create_table(
        "permission_session_action",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "session_id",
            sa.UUID(),
            sa.ForeignKey("permission_session.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action_type", sa.String(100), nullable=False),
        sa.Column("action_data", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("performed_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_session_action_session", "permission_session_action", ["session_id"])

    op.create_table(
        "permission_ip_restriction",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("ip_address", sa.String(100), nullable=False),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type IN ('allow', 'deny')", name="ck_ip_restriction_type"),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("actor_id", sa.String(255), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("target_type", sa.String(50), nullable=False),
        sa.Column("target_id", sa.String(255), nullable=False),
        sa.Column("old_values", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("new_values", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_log_target", "audit_log", ["target_type", "target_id"])
    op.create_index("ix_audit_log_actor", "audit_log", ["actor_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("permission_ip_restriction")
    op.drop_table("permission_session_action")
    op.drop_table("permission_session")
    op.drop_table("permission_change_request")
    op.drop_table("temporary_permission")
    op.drop_table("user_permission_override")
    op.drop_table("user_role")
    op.drop_table("role_permission")
    op.drop_table("catalog_version")
    op.drop_table("permission_dependency")
    op.drop_table("role")
    op.drop_table("permission")
