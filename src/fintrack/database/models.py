"""SQLAlchemy models for fintrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Integer,
    Enum,
    Uuid,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from fintrack.domain.entities import AccountType, RecurringTransactionType, TransactionType
from fintrack.domain.money import Currency
from fintrack.domain.recurrence import RecurrenceType

Base = declarative_base()


def _enum(enum_cls):
    # Store the readable value ("CreditCard") rather than the member name
    return Enum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    email_confirmed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)
    last_login_at = Column(DateTime, nullable=True)


class Account(Base):
    """Account model; the balance is stored as amount + currency columns."""

    __tablename__ = "accounts"

    id = Column(Uuid, primary_key=True)
    name = Column(String(100), nullable=False)
    account_type = Column(_enum(AccountType), nullable=False)
    balance_amount = Column(Numeric(18, 2), nullable=False)
    balance_currency = Column(_enum(Currency), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)


class Category(Base):
    """Category model with hierarchical structure."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    parent_category_id = Column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True
    )
    icon = Column(String, nullable=True)
    color = Column(String(7), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True)
    transaction_type = Column(_enum(TransactionType), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(_enum(Currency), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String(500), nullable=False)
    account_id = Column(
        Uuid, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True
    )
    to_account_id = Column(
        Uuid, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=True
    )
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime, nullable=True)


class RecurringTransaction(Base):
    """Recurring transaction template model."""

    __tablename__ = "recurring_transactions"

    id = Column(Uuid, primary_key=True)
    transaction_type = Column(_enum(RecurringTransactionType), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    currency = Column(_enum(Currency), nullable=False)
    description = Column(String(500), nullable=False)
    account_id = Column(
        Uuid, ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False
    )
    category_id = Column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    start_date = Column(Date, nullable=False)
    recurrence_type = Column(_enum(RecurrenceType), nullable=False)
    recurrence_interval = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine: Engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
