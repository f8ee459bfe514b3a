"""create balances and ledger tables

Revision ID: 7c1e0b9d4a21
Revises: 
Create Date: 2026-10-19 21:10:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c1e0b9d4a21"
down_revision = None
branch_labels = None
depends_on = None


def _amount(name: str, precision: int = 14) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision, 2), nullable=False, server_default="0")


def upgrade() -> None:
    op.create_table(
        "balances",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("balance_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        _amount("cash_sos", 18),
        _amount("cash_usd", 18),
        _amount("evc", 18),
        _amount("edahab", 18),
        _amount("merchant", 18),
        sa.Column("note", sa.Text()),
    )
    op.create_index("ix_balances_balance_date", "balances", ["balance_date"], unique=True)

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        _amount("total"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("channel", sa.String(length=20), nullable=False, server_default="pos"),
        sa.Column("note", sa.Text()),
    )
    op.create_index("ix_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "credit_payments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("credit_id", sa.String(length=36)),
        _amount("amount"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_credit_payments_credit_id", "credit_payments", ["credit_id"])
    op.create_index("ix_credit_payments_created_at", "credit_payments", ["created_at"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _amount("amount"),
        sa.Column("note", sa.Text()),
        sa.Column("payment_method", sa.String(length=50)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_expenses_created_at", "expenses", ["created_at"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        _amount("total_amount"),
        sa.Column("comments", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_invoices_invoice_date", "invoices", ["invoice_date"])


def downgrade() -> None:
    op.drop_index("ix_invoices_invoice_date", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_expenses_created_at", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_credit_payments_created_at", table_name="credit_payments")
    op.drop_index("ix_credit_payments_credit_id", table_name="credit_payments")
    op.drop_table("credit_payments")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_balances_balance_date", table_name="balances")
    op.drop_table("balances")
