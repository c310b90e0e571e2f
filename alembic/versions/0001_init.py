"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False, unique=True),
        sa.Column("role", sa.String(length=50), nullable=False, server_default="Viewer"),
        sa.Column("password_hash", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("photo_url", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_updated_at", "users", ["updated_at"])

    op.create_table(
        "roles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(length=200), nullable=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
    )
    op.create_index("ix_roles_updated_at", "roles", ["updated_at"])

    op.create_table(
        "pages",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=True, unique=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Draft"),
        sa.Column("author", sa.String(length=50), nullable=False),
        sa.Column("page_type", sa.String(length=30), nullable=False, server_default="generic"),
        sa.Column("content", sa.JSON(), nullable=False),
    )
    op.create_index("ix_pages_status", "pages", ["status"])
    op.create_index("ix_pages_page_type", "pages", ["page_type"])
    op.create_index("ix_pages_updated_at", "pages", ["updated_at"])

    op.create_table(
        "content_schemas",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("fields", sa.JSON(), nullable=False),
    )
    op.create_index("ix_content_schemas_updated_at", "content_schemas", ["updated_at"])

    op.create_table(
        "content_blocks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False, server_default="Generic"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Draft"),
        sa.Column("content", sa.Text(), nullable=False),
    )
    op.create_index("ix_content_blocks_updated_at", "content_blocks", ["updated_at"])

    op.create_table(
        "audit_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(length=80), nullable=False),
        sa.Column("user_name", sa.String(length=200), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=80), nullable=False),
        sa.Column("entity_name", sa.String(length=300), nullable=True),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_timestamp", "audit_logs", ["timestamp"])

    op.create_table(
        "tasks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("completed_by", sa.JSON(), nullable=False),
        sa.Column("assigned_to", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.String(length=80), nullable=True),
    )
    op.create_index("ix_tasks_updated_at", "tasks", ["updated_at"])

    op.create_table(
        "media_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("file_name", sa.String(length=300), nullable=False),
        sa.Column("object_key", sa.String(length=500), nullable=False, unique=True),
        sa.Column("mime_type", sa.String(length=150), nullable=False),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("alt_text", sa.String(length=300), nullable=True),
        sa.Column("uploaded_by", sa.String(length=80), nullable=True),
    )
    op.create_index("ix_media_items_updated_at", "media_items", ["updated_at"])

    op.create_table(
        "site_settings",
        sa.Column("key", sa.String(length=50), primary_key=True),
        *_timestamps(),
        sa.Column("values", sa.JSON(), nullable=False),
    )
    op.create_index("ix_site_settings_updated_at", "site_settings", ["updated_at"])


def downgrade():
    for table in (
        "site_settings",
        "media_items",
        "tasks",
        "audit_logs",
        "content_blocks",
        "content_schemas",
        "pages",
        "roles",
        "users",
    ):
        op.drop_table(table)
