"""Tests for the SQLAlchemy ledger source."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from ledgerstat.config import get_settings
from ledgerstat.database import create_database, create_sqlite_database
from ledgerstat.database.models import (
    Account,
    Category,
    Entry,
    Transaction,
    User,
    create_session_factory,
)
from ledgerstat.domain.errors import NotFoundError
from ledgerstat.domain.summary import SummaryService

OTHER_USER = "1d7f9b3e-5a0c-4c2e-8f61-7b2d4e6a9c01"


@pytest.fixture
def populated_db_path(temp_db_path, user_id):
    """A SQLite database holding the demo rows plus one other user."""
    session = create_session_factory(f"sqlite:///{temp_db_path}")()
    owner = str(user_id)
    session.add_all(
        [
            User(id=owner, email="demo@example.com", created_at=datetime(2025, 1, 1)),
            User(id=OTHER_USER, email="other@example.com", created_at=datetime(2025, 6, 1)),
            Account(id=1, user_id=owner, name="Chequing", account_type="checking",
                    currency="CAD", opening_balance=Decimal("1000.00")),
            Account(id=2, user_id=owner, name="Visa", account_type="credit",
                    currency="CAD", opening_balance=Decimal("0.00")),
            Account(id=3, user_id=OTHER_USER, name="Other", account_type="cash",
                    currency="CAD", opening_balance=Decimal("0.00")),
            Category(id=1, user_id=owner, name="Food"),
            Category(id=2, user_id=owner, name="Rent"),
        ]
    )
    rows = [
        (1, owner, date(2025, 12, 1), 1, 1, "-50.00"),
        (2, owner, date(2025, 12, 2), 1, 2, "-700.00"),
        (3, owner, date(2025, 12, 3), 2, 1, "-10.00"),
        (4, OTHER_USER, date(2025, 12, 4), 3, None, "-999.00"),
    ]
    for entry_id, row_user, occurred_at, account_id, category_id, amount in rows:
        tx_id = str(uuid4())
        session.add(Transaction(id=tx_id, user_id=row_user, occurred_at=occurred_at))
        session.add(
            Entry(
                id=entry_id,
                user_id=row_user,
                tx_id=tx_id,
                account_id=account_id,
                category_id=category_id,
                amount=Decimal(amount),
            )
        )
    session.commit()
    session.close()
    return temp_db_path


def test_list_users_oldest_first(populated_db_path, user_id):
    db = create_sqlite_database(populated_db_path)
    db.connect()
    try:
        users = db.list_users()
    finally:
        db.disconnect()

    assert [user.id for user in users] == [user_id, UUID(OTHER_USER)]


def test_load_ledger_scopes_to_user(populated_db_path, user_id):
    db = create_sqlite_database(populated_db_path)
    ledger = db.load_ledger(user_id)
    db.disconnect()

    assert [account.id for account in ledger.accounts] == [1, 2]
    assert [entry.id for entry in ledger.entries] == [1, 2, 3]
    assert ledger.get_user(user_id).email == "demo@example.com"
    assert all(tx.user_id == user_id for tx in ledger.transactions)


def test_loaded_ledger_feeds_summaries(populated_db_path, user_id):
    db = create_sqlite_database(populated_db_path)
    ledger = db.load_ledger(user_id)
    db.disconnect()
    december = ((2025, 12), (2025, 12))

    total = SummaryService(ledger).month_summary(user_id, december)

    assert total == pytest.approx(-760.0)


def test_load_ledger_unknown_user(populated_db_path):
    db = create_sqlite_database(populated_db_path)

    with pytest.raises(NotFoundError, match="not found"):
        db.load_ledger(uuid4())
    db.disconnect()


def test_empty_database_has_no_users(temp_db_path):
    db = create_sqlite_database(temp_db_path)

    assert db.list_users() == []
    db.disconnect()


def test_create_database_from_url(temp_db_path):
    db = create_database(f"sqlite:///{temp_db_path}")

    assert db.database_url.endswith(temp_db_path)


def test_create_database_from_settings(monkeypatch, temp_db_path):
    monkeypatch.setenv("LEDGERSTAT_DATABASE_URL", f"sqlite:///{temp_db_path}")
    get_settings.cache_clear()
    try:
        db = create_database()
    finally:
        get_settings.cache_clear()

    assert db.database_url == f"sqlite:///{temp_db_path}"


def test_create_database_requires_url(monkeypatch):
    monkeypatch.delenv("LEDGERSTAT_DATABASE_URL", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError, match="No database URL"):
            create_database()
    finally:
        get_settings.cache_clear()


def test_missing_sqlite_file_is_not_created(tmp_path):
    path = tmp_path / "typo.db"

    with pytest.raises(NotFoundError, match="Database file not found"):
        create_sqlite_database(str(path))

    assert not path.exists()


def test_session_factory_does_not_create_tables(tmp_path):
    path = tmp_path / "blank.db"
    path.touch()
    session = create_session_factory(f"sqlite:///{path}")()
    engine = session.get_bind()

    assert inspect(engine).get_table_names() == []
    session.close()
    engine.dispose()


def test_database_without_tables(tmp_path):
    path = tmp_path / "blank.db"
    path.touch()
    db = create_sqlite_database(str(path))

    with pytest.raises(SQLAlchemyError):
        db.list_users()
    db.disconnect()
