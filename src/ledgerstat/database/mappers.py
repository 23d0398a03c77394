"""Mapper functions to convert SQLAlchemy rows into domain entities.

Rows map 1:1 onto the same dataclasses the snapshot decoder produces, so the
engine cannot tell which collaborator filled the ledger.
"""

from decimal import Decimal
from uuid import UUID

from ledgerstat.domain import entities as domain
from ledgerstat.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Entry as ORMEntry,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=UUID(orm_user.id),
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=UUID(orm_account.user_id),
        name=orm_account.name,
        account_type=domain.AccountType.parse(orm_account.account_type),
        currency=orm_account.currency,
        opening_balance=Decimal(orm_account.opening_balance or 0),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=UUID(orm_category.user_id),
        name=orm_category.name,
        parent_id=orm_category.parent_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=UUID(orm_transaction.id),
        user_id=UUID(orm_transaction.user_id),
        occur_date=orm_transaction.occurred_at,
        payee=orm_transaction.payee,
        memo=orm_transaction.memo,
        created_at=orm_transaction.created_at,
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        user_id=UUID(orm_entry.user_id),
        transaction_id=UUID(orm_entry.tx_id),
        account_id=orm_entry.account_id,
        category_id=orm_entry.category_id,
        amount=Decimal(orm_entry.amount),
        note=orm_entry.note,
    )
