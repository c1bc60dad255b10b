"""Create websites, chat_requests, prompt_sets and code_configs tables

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "websites",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("website_name", sa.String, nullable=False, server_default=""),
        sa.Column("website_url", sa.String, nullable=False, server_default=""),
        sa.Column("system_prompt", sa.JSON, nullable=False),
        sa.Column("custom_prompt", sa.JSON, nullable=False),
        sa.Column("category", sa.JSON, nullable=False),
        sa.Column("urls", sa.JSON, nullable=False),
        sa.Column("library", sa.JSON, nullable=False),
        sa.Column("api_key", sa.String, nullable=False),
        sa.Column("status", sa.String, nullable=False, server_default="active"),
        sa.Column("knowledge_base", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("ix_websites_api_key", "websites", ["api_key"], unique=True)

    op.create_table(
        "chat_requests",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("website_id", sa.String, nullable=False),
        sa.Column("backend_api_key", sa.String, nullable=False),
        sa.Column("collected_data", sa.JSON, nullable=False),
        sa.Column("status", sa.String, nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_chat_requests_website_id", "chat_requests", ["website_id"])
    op.create_index("ix_chat_requests_backend_api_key", "chat_requests", ["backend_api_key"])
    op.create_index("ix_chat_requests_status", "chat_requests", ["status"])

    op.create_table(
        "prompt_sets",
        sa.Column("website_id", sa.String, primary_key=True),
        sa.Column("prompt_name", sa.String, primary_key=True),
        sa.Column("summary_list", sa.JSON, nullable=True),
        sa.Column("prompts", sa.JSON, nullable=False),
        sa.Column("prompts_with_params", sa.JSON, nullable=False),
        sa.Column("urls", sa.JSON, nullable=False),
        sa.Column("backend_api_key", sa.String, nullable=True),
        sa.Column("api_keys", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("ix_prompt_sets_backend_api_key", "prompt_sets", ["backend_api_key"])

    op.create_table(
        "code_configs",
        sa.Column("api_key", sa.String, primary_key=True),
        sa.Column("super_admin_url", sa.String, nullable=False, server_default=""),
        sa.Column("super_admin_chat_url", sa.String, nullable=False, server_default=""),
        sa.Column("integration_code", sa.Text, nullable=False, server_default=""),
        sa.Column("website_name", sa.String, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("code_configs")
    op.drop_index("ix_prompt_sets_backend_api_key", table_name="prompt_sets")
    op.drop_table("prompt_sets")
    op.drop_index("ix_chat_requests_status", table_name="chat_requests")
    op.drop_index("ix_chat_requests_backend_api_key", table_name="chat_requests")
    op.drop_index("ix_chat_requests_website_id", table_name="chat_requests")
    op.drop_table("chat_requests")
    op.drop_index("ix_websites_api_key", table_name="websites")
    op.drop_table("websites")
