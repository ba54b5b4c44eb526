"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from meterpay.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100))
    email = Column(String(100))
    phone = Column(String(30))
    address = Column(String(255))
    wallet_balance_cents = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class Meter(Base):
    __tablename__ = "meters"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    meter_number = Column(String(32), unique=True, nullable=False, index=True)
    nickname = Column(String(100))
    address = Column(String(255))
    customer_name = Column(String(100))
    type = Column(String(20), nullable=False, default="STS")
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    meter_number = Column(String(32), index=True)
    amount_cents = Column(Integer, nullable=False)
    total_cents = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, success, failed
    payment_method = Column(String(20), nullable=False)
    transaction_type = Column(String(20), nullable=False, default="recharge")
    reference = Column(String(50))
    token = Column(String(40))
    units = Column(String(20))
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)


class Debt(Base):
    __tablename__ = "debts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    meter_number = Column(String(32), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    category = Column(String(20), nullable=False, default="electricity")
    description = Column(String(255))
    due_date = Column(DateTime(timezone=True), nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    type = Column(String(20), nullable=False)  # deposit, payment
    description = Column(String(255))
    reference = Column(String(50))
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)


class ScheduledNotification(Base):
    __tablename__ = "scheduled_notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(String(50), nullable=False)
    schedule = Column(Text, nullable=False)  # JSON
    personalizations = Column(Text, nullable=False, default="{}")  # JSON
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)
