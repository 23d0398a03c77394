"""JSON ledger snapshot decoding.

A snapshot is the document a ledger server hands out for one user:

    {"user": {...}, "accounts": [...], "categories": [...],
     "transactions": [{..., "entries": [...]}], "entries": [...]}

Entries may be nested under their transaction, listed flat, or both. They
are flattened and de-duplicated by ID before the ledger is built.
"""

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID

from dateutil import parser as date_parser

from ledgerstat.domain.entities import (
    Account,
    AccountType,
    Category,
    Entry,
    Ledger,
    Transaction,
    User,
)
from ledgerstat.domain.errors import SnapshotError, snapshot_field_error
from ledgerstat.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)


def _require(record: dict[str, Any], kind: str, field: str) -> Any:
    if field not in record or record[field] is None:
        raise SnapshotError(f"Missing {kind} field '{field}'")
    return record[field]


def _uuid(value: Any, kind: str, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise SnapshotError(snapshot_field_error(kind, field, value)) from e


def _int(value: Any, kind: str, field: str) -> int:
    if isinstance(value, bool):
        raise SnapshotError(snapshot_field_error(kind, field, value))
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SnapshotError(snapshot_field_error(kind, field, value)) from e


def _optional_int(value: Any, kind: str, field: str) -> Optional[int]:
    return None if value is None else _int(value, kind, field)


def _datetime(value: Any, kind: str, field: str) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return date_parser.isoparse(str(value))
    except (TypeError, ValueError) as e:
        raise SnapshotError(snapshot_field_error(kind, field, value)) from e


def _date(value: Any, kind: str, field: str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = _datetime(value, kind, field)
    if parsed is None:
        raise SnapshotError(f"Missing {kind} field '{field}'")
    return parsed.date()


def _text(value: Any, kind: str, field: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise SnapshotError(snapshot_field_error(kind, field, value))


def _decimal(value: Any, kind: str, field: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        raise SnapshotError(snapshot_field_error(kind, field, value)) from e


def decode_user(record: dict[str, Any]) -> User:
    return User(
        id=_uuid(_require(record, "user", "id"), "user", "id"),
        email=_text(record.get("email"), "user", "email") or "",
        created_at=_datetime(record.get("created_at"), "user", "created_at"),
    )


def decode_account(record: dict[str, Any], user_id: UUID) -> Account:
    return Account(
        id=_int(_require(record, "account", "id"), "account", "id"),
        user_id=_uuid(record.get("user_id", user_id), "account", "user_id"),
        name=_text(record.get("name"), "account", "name") or "",
        account_type=AccountType.parse(_text(record.get("account_type"), "account", "account_type")),
        currency=(_text(record.get("currency"), "account", "currency") or "").strip().upper(),
        opening_balance=_decimal(record.get("opening_balance", 0), "account", "opening_balance"),
        created_at=_datetime(record.get("created_at"), "account", "created_at"),
    )


def decode_category(record: dict[str, Any], user_id: UUID) -> Category:
    return Category(
        id=_int(_require(record, "category", "id"), "category", "id"),
        user_id=_uuid(record.get("user_id", user_id), "category", "user_id"),
        name=_text(record.get("name"), "category", "name") or "",
        parent_id=_optional_int(record.get("parent_id"), "category", "parent_id"),
    )


def decode_transaction(record: dict[str, Any], user_id: UUID) -> Transaction:
    return Transaction(
        id=_uuid(_require(record, "transaction", "id"), "transaction", "id"),
        user_id=_uuid(record.get("user_id", user_id), "transaction", "user_id"),
        occur_date=_date(_require(record, "transaction", "occurred_at"), "transaction", "occurred_at"),
        payee=_text(record.get("payee"), "transaction", "payee"),
        memo=_text(record.get("memo"), "transaction", "memo"),
        created_at=_datetime(record.get("created_at"), "transaction", "created_at"),
    )


def decode_entry(
    record: dict[str, Any], user_id: UUID, transaction_id: Optional[UUID] = None
) -> Entry:
    tx_id = record.get("tx_id")
    if tx_id is None:
        if transaction_id is None:
            raise SnapshotError("Missing entry field 'tx_id'")
        tx_id = transaction_id
    return Entry(
        id=_int(_require(record, "entry", "id"), "entry", "id"),
        user_id=_uuid(record.get("user_id", user_id), "entry", "user_id"),
        transaction_id=_uuid(tx_id, "entry", "tx_id"),
        account_id=_int(_require(record, "entry", "account_id"), "entry", "account_id"),
        category_id=_optional_int(record.get("category_id"), "entry", "category_id"),
        amount=_decimal(_require(record, "entry", "amount"), "entry", "amount"),
        note=_text(record.get("note"), "entry", "note"),
    )


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise SnapshotError(f"Snapshot field '{key}' must be a list of objects")
    return value


def ledger_from_snapshot(data: Any) -> Ledger:
    """Build a Ledger from a decoded snapshot document.

    Args:
        data: Parsed JSON object

    Returns:
        Ledger holding every row of the snapshot

    Raises:
        SnapshotError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot root must be an object")

    if isinstance(data.get("user"), dict):
        users = [decode_user(data["user"])]
    else:
        users = [decode_user(record) for record in _records(data, "users")]
    if not users:
        raise SnapshotError("Snapshot has no user")
    owner = users[0].id

    accounts = [decode_account(record, owner) for record in _records(data, "accounts")]
    categories = [decode_category(record, owner) for record in _records(data, "categories")]

    transactions: list[Transaction] = []
    entries: dict[int, Entry] = {}
    for record in _records(data, "transactions"):
        tx = decode_transaction(record, owner)
        transactions.append(tx)
        for nested in _records(record, "entries"):
            entry = decode_entry(nested, tx.user_id, transaction_id=tx.id)
            entries.setdefault(entry.id, entry)
    for record in _records(data, "entries"):
        entry = decode_entry(record, owner)
        entries.setdefault(entry.id, entry)

    logger.debug(
        "Decoded snapshot: %d accounts, %d categories, %d transactions, %d entries",
        len(accounts),
        len(categories),
        len(transactions),
        len(entries),
    )
    return Ledger(
        users=users,
        accounts=accounts,
        categories=categories,
        transactions=transactions,
        entries=list(entries.values()),
    )


def load_snapshot(path: Union[str, Path]) -> Ledger:
    """Read a JSON snapshot file into a Ledger.

    Raises:
        FileNotFoundError: If the file does not exist
        SnapshotError: If the file is not a valid snapshot
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise FileNotFoundError(f"Ledger snapshot not found: {path}")

    try:
        with open(snapshot_path, "r", encoding="utf-8") as f:
            data = json.load(f, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Ledger snapshot is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise SnapshotError(f"Ledger snapshot is not UTF-8 text: {e}") from e
    except OSError as e:
        raise SnapshotError(f"Could not read ledger snapshot {path}: {e}") from e
    return ledger_from_snapshot(data)
