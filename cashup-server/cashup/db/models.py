"""SQLAlchemy ORM models.

``balances`` is owned by the cash-up flow. The four ledger tables are written
by the point-of-sale, credits, expenses and invoices screens; they are mapped
here for reads only.
"""
import uuid

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from cashup.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Balance(Base):
    __tablename__ = "balances"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    balance_date = Column(Date, unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    cash_sos = Column(Numeric(18, 2), nullable=False, default=0)
    cash_usd = Column(Numeric(18, 2), nullable=False, default=0)
    evc = Column(Numeric(18, 2), nullable=False, default=0)
    edahab = Column(Numeric(18, 2), nullable=False, default=0)
    merchant = Column(Numeric(18, 2), nullable=False, default=0)
    note = Column(Text)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="completed")  # pending, completed, cancelled
    channel = Column(String(20), nullable=False, default="pos")  # pos, online
    note = Column(Text)


class CreditPayment(Base):
    __tablename__ = "credit_payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    credit_id = Column(String(36), index=True)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    note = Column(Text)
    payment_method = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_date = Column(Date, nullable=False, index=True)
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    comments = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
