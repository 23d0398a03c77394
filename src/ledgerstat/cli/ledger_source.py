"""CLI helpers for loading the ledger a command runs against."""

from typing import Optional
from uuid import UUID

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerstat.cli.error_handling import handle_domain_error
from ledgerstat.database.factories import create_database
from ledgerstat.domain.demo import build_demo_ledger
from ledgerstat.domain.entities import Ledger
from ledgerstat.domain.errors import DomainError, NotFoundError, ValidationError, user_not_found
from ledgerstat.domain.snapshot import load_snapshot


def _parse_user(user: Optional[str]) -> Optional[UUID]:
    if not user:
        return None
    try:
        return UUID(user)
    except ValueError as e:
        raise ValidationError(f"Invalid user ID '{user}'") from e


def _load_from_database(database_url: str, user_id: Optional[UUID]) -> tuple[Ledger, UUID]:
    db = create_database(database_url)
    db.connect()
    try:
        if user_id is None:
            users = db.list_users()
            if not users:
                raise NotFoundError("Database has no users")
            user_id = users[0].id
        return db.load_ledger(user_id), user_id
    finally:
        db.disconnect()


def load_ledger_or_exit(
    ctx: click.Context,
    *,
    ledger_path: Optional[str],
    database_url: Optional[str],
    user: Optional[str],
    demo: bool,
) -> tuple[Ledger, UUID]:
    """Load the ledger selected on the command line, or exit with an error.

    Precedence: --demo, then --ledger, then --database-url. Without --user
    the first user of the source is used.
    """
    try:
        user_id = _parse_user(user)
        if demo:
            ledger = build_demo_ledger(user_id)
        elif ledger_path:
            ledger = load_snapshot(ledger_path)
        elif database_url:
            return _load_from_database(database_url, user_id)
        else:
            raise ValidationError(
                "No ledger given: use --ledger, --database-url or --demo "
                "(or set LEDGERSTAT_LEDGER / LEDGERSTAT_DATABASE_URL)"
            )

        if user_id is None:
            user_id = ledger.users[0].id
        elif ledger.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        return ledger, user_id
    except (DomainError, FileNotFoundError, SQLAlchemyError) as e:
        handle_domain_error(ctx, e)
