"""Users, provider accounts, sessions and groceries

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String),
        sa.Column("email", sa.String, unique=True, index=True),
        sa.Column("email_verified", sa.DateTime(timezone=True)),
        sa.Column("image", sa.String),
        *_timestamps(),
    )

    # --- accounts ---
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("type", sa.String, nullable=False, server_default="oauth"),
        sa.Column("provider", sa.String, nullable=False),
        sa.Column("provider_account_id", sa.String, nullable=False),
        sa.Column("refresh_token", sa.Text),
        sa.Column("access_token", sa.Text),
        sa.Column("expires_at", sa.Integer),
        sa.Column("token_type", sa.String),
        sa.Column("scope", sa.String),
        sa.Column("id_token", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("provider", "provider_account_id"),
    )

    # --- sessions ---
    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("session_token", sa.String, unique=True, index=True, nullable=False),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("expires", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )

    # --- groceries ---
    op.create_table(
        "groceries",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("category", sa.String, server_default="other"),
        sa.Column("purchase_date", sa.Date),
        sa.Column("expiry_date", sa.Date),
        sa.Column("shelf_life_days", sa.Integer),
        sa.Column("eaten", sa.Boolean, server_default=sa.false()),
        sa.Column("eaten_at", sa.DateTime(timezone=True)),
        sa.Column("marked_expired", sa.Boolean, server_default=sa.false()),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("groceries")
    op.drop_table("sessions")
    op.drop_table("accounts")
    op.drop_table("users")
