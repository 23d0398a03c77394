"""Shared pytest fixtures for ledgerstat tests."""

import json
import os
import tempfile
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine

from ledgerstat.database.models import Base
from ledgerstat.domain.account import AccountService
from ledgerstat.domain.demo import build_demo_ledger
from ledgerstat.domain.entities import (
    Account,
    AccountType,
    Category,
    Entry,
    Ledger,
    Transaction,
    User,
)
from ledgerstat.domain.reconcile import ReconcileService
from ledgerstat.domain.summary import SummaryService


@pytest.fixture
def user_id():
    """Fixed user ID for tests."""
    return UUID("6f1c8a52-2d1e-4a4b-9a53-3f0c2b9d7e10")


@pytest.fixture
def demo_ledger(user_id):
    """The December 2025 demo ledger."""
    return build_demo_ledger(user_id)


@pytest.fixture
def summary_service(demo_ledger):
    """Create a SummaryService over the demo ledger."""
    return SummaryService(demo_ledger)


@pytest.fixture
def account_service(demo_ledger):
    """Create an AccountService over the demo ledger."""
    return AccountService(demo_ledger)


@pytest.fixture
def reconcile_service(demo_ledger):
    """Create a ReconcileService over the demo ledger."""
    return ReconcileService(demo_ledger)


@pytest.fixture
def make_ledger(user_id):
    """Build a ledger from (date, account_id, category_id, amount) rows.

    Accounts 1-3 and categories 1-3 always exist. Each row becomes one
    transaction holding one entry; entry IDs follow row order starting at 1.
    """

    def _make(rows, extra_entries=(), accounts=None):
        if accounts is None:
            accounts = [
                Account(
                    id=account_id,
                    user_id=user_id,
                    name=name,
                    account_type=account_type,
                    currency="CAD",
                    opening_balance=Decimal("0"),
                )
                for account_id, name, account_type in (
                    (1, "Chequing", AccountType.CHECKING),
                    (2, "Visa", AccountType.CREDIT),
                    (3, "Wallet", AccountType.CASH),
                )
            ]
        categories = [
            Category(id=category_id, user_id=user_id, name=name)
            for category_id, name in ((1, "Food"), (2, "Rent"), (3, "Salary"))
        ]
        transactions = []
        entries = []
        for index, (occur_date, account_id, category_id, amount) in enumerate(rows, start=1):
            tx = Transaction(id=uuid4(), user_id=user_id, occur_date=occur_date)
            transactions.append(tx)
            entries.append(
                Entry(
                    id=index,
                    user_id=user_id,
                    transaction_id=tx.id,
                    account_id=account_id,
                    category_id=category_id,
                    amount=Decimal(str(amount)),
                )
            )
        entries.extend(extra_entries)
        return Ledger(
            users=[User(id=user_id, email="test@example.com")],
            accounts=accounts,
            categories=categories,
            transactions=transactions,
            entries=entries,
        )

    return _make


@pytest.fixture
def sample_ledger(make_ledger):
    """Ledger spanning November 2025 to January 2026."""
    return make_ledger(
        [
            (date(2025, 11, 1), 1, 3, "3000.00"),
            (date(2025, 11, 3), 1, 2, "-1200.00"),
            (date(2025, 11, 15), 2, 1, "-80.25"),
            (date(2025, 12, 1), 1, 3, "3000.00"),
            (date(2025, 12, 2), 1, 2, "-1200.00"),
            (date(2025, 12, 20), 2, 1, "-150.50"),
            (date(2025, 12, 24), 3, None, "-40.00"),
            (date(2026, 1, 5), 2, 1, "-60.00"),
            (date(2026, 1, 9), 3, None, "0"),
        ]
    )


@pytest.fixture
def snapshot_data(user_id):
    """A ledger snapshot document with nested and flat entries."""
    tx_food = "0b0c6a9e-7a57-4e7e-8f5d-2d5f2ab7c001"
    tx_rent = "0b0c6a9e-7a57-4e7e-8f5d-2d5f2ab7c002"
    food_entry = {
        "id": 10,
        "tx_id": tx_food,
        "account_id": 1,
        "category_id": 1,
        "amount": "-50.00",
        "note": None,
    }
    rent_entry = {
        "id": 11,
        "tx_id": tx_rent,
        "account_id": 1,
        "category_id": 2,
        "amount": -700,
        "note": "December",
    }
    return {
        "user": {
            "id": str(user_id),
            "email": "demo@example.com",
            "created_at": "2025-01-01T00:00:00Z",
        },
        "accounts": [
            {
                "id": 1,
                "name": "Chequing",
                "account_type": "checking",
                "currency": "cad",
                "opening_balance": "1000.00",
                "created_at": "2025-01-01T00:00:00Z",
            },
            {
                "id": 2,
                "name": "Visa",
                "account_type": "credit",
                "currency": "CAD",
                "opening_balance": 0,
                "created_at": "2025-01-01T00:00:00Z",
            },
        ],
        "categories": [
            {"id": 1, "name": "Food", "parent_id": None},
            {"id": 2, "name": "Rent", "parent_id": None},
        ],
        "transactions": [
            {
                "id": tx_food,
                "occurred_at": "2025-12-01",
                "payee": "Supermarket",
                "memo": "Groceries",
                "created_at": "2025-12-01T10:00:00Z",
                "entries": [food_entry],
            },
            {
                "id": tx_rent,
                "occurred_at": "2025-12-02",
                "payee": "Landlord",
                "memo": None,
                "created_at": "2025-12-02T10:00:00Z",
                "entries": [rent_entry],
            },
        ],
        "entries": [food_entry, rent_entry],
    }


@pytest.fixture
def snapshot_file(snapshot_data):
    """Write the snapshot document to a temporary JSON file."""
    fd, path = tempfile.mkstemp(suffix=".json")
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(snapshot_data, f)

    yield path

    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def temp_db_path():
    """Path to a temporary SQLite database holding the ledger tables."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
