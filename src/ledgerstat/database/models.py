"""SQLAlchemy models for the ledger tables."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class User(Base):
    """Ledger owner model."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False, default="checking")
    currency = Column(String(3), nullable=False, default="CAD")
    opening_balance = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    entries = relationship("Entry", back_populates="account")


class Category(Base):
    """Category model; parent links are one level deep at most."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    name = Column(String, nullable=False)

    parent = relationship("Category", remote_side=[id], backref="children")


class Transaction(Base):
    """Transaction model: a dated container of entries."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    occurred_at = Column(Date, nullable=False)
    payee = Column(String, nullable=True)
    memo = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    entries = relationship("Entry", back_populates="transaction", cascade="all, delete-orphan")


class Entry(Base):
    """Entry model: one signed posting."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    tx_id = Column(String(36), ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    note = Column(String, nullable=True)

    transaction = relationship("Transaction", back_populates="entries")
    account = relationship("Account", back_populates="entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    The schema is not created; the tables belong to whoever writes them.
    """
    engine = create_engine(database_url, echo=False)
    return sessionmaker(bind=engine)
