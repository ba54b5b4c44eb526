"""initial meterpay schema

Revision ID: 5c1e9a7d2b40
Revises: 
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e9a7d2b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=100)),
        sa.Column("email", sa.String(length=100)),
        sa.Column("phone", sa.String(length=30)),
        sa.Column("address", sa.String(length=255)),
        sa.Column("wallet_balance_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "meters",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("meter_number", sa.String(length=32), nullable=False),
        sa.Column("nickname", sa.String(length=100)),
        sa.Column("address", sa.String(length=255)),
        sa.Column("customer_name", sa.String(length=100)),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="STS"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_meters_user_id", "meters", ["user_id"])
    op.create_index("ix_meters_meter_number", "meters", ["meter_number"], unique=True)

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("meter_number", sa.String(length=32)),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("total_cents", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        sa.Column("transaction_type", sa.String(length=20), nullable=False, server_default="recharge"),
        sa.Column("reference", sa.String(length=50)),
        sa.Column("token", sa.String(length=40)),
        sa.Column("units", sa.String(length=20)),
        sa.Column("created_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_meter_number", "transactions", ["meter_number"])
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"])

    op.create_table(
        "debts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("meter_number", sa.String(length=32), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False, server_default="electricity"),
        sa.Column("description", sa.String(length=255)),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("paid_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_debts_user_id", "debts", ["user_id"])

    op.create_table(
        "wallet_transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("description", sa.String(length=255)),
        sa.Column("reference", sa.String(length=50)),
        sa.Column("created_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_wallet_transactions_user_id", "wallet_transactions", ["user_id"])
    op.create_index("ix_wallet_transactions_created_at", "wallet_transactions", ["created_at"])

    op.create_table(
        "scheduled_notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("template_id", sa.String(length=50), nullable=False),
        sa.Column("schedule", sa.Text(), nullable=False),
        sa.Column("personalizations", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_scheduled_notifications_user_id", "scheduled_notifications", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_scheduled_notifications_user_id", table_name="scheduled_notifications")
    op.drop_table("scheduled_notifications")
    op.drop_index("ix_wallet_transactions_created_at", table_name="wallet_transactions")
    op.drop_index("ix_wallet_transactions_user_id", table_name="wallet_transactions")
    op.drop_table("wallet_transactions")
    op.drop_index("ix_debts_user_id", table_name="debts")
    op.drop_table("debts")
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index("ix_transactions_meter_number", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_meters_meter_number", table_name="meters")
    op.drop_index("ix_meters_user_id", table_name="meters")
    op.drop_table("meters")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
