"""Built-in demo ledger."""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from ledgerstat.domain.entities import (
    Account,
    AccountType,
    Category,
    Entry,
    Ledger,
    Transaction,
    User,
)

DEMO_EMAIL = "demo@example.com"


def build_demo_ledger(user_id: Optional[UUID] = None) -> Ledger:
    """Build a small December 2025 ledger for one user.

    Accounts: Chequing (id 1, opening 1000) and Visa (id 2).
    Categories: Food (id 1) and Rent (id 2).
    Entries: -50 Food on Chequing, -700 Rent on Chequing, -10 Food on Visa.
    """
    user_id = user_id or uuid4()
    now = datetime.now(UTC)

    user = User(id=user_id, email=DEMO_EMAIL, created_at=now)
    checking = Account(
        id=1,
        user_id=user_id,
        name="Chequing",
        account_type=AccountType.CHECKING,
        currency="CAD",
        opening_balance=Decimal("1000.00"),
        created_at=now,
    )
    credit = Account(
        id=2,
        user_id=user_id,
        name="Visa",
        account_type=AccountType.CREDIT,
        currency="CAD",
        opening_balance=Decimal("0.00"),
        created_at=now,
    )
    food = Category(id=1, user_id=user_id, name="Food")
    rent = Category(id=2, user_id=user_id, name="Rent")

    groceries = Transaction(
        id=uuid4(),
        user_id=user_id,
        occur_date=date(2025, 12, 1),
        payee="Supermarket",
        memo="Groceries",
        created_at=now,
    )
    rent_payment = Transaction(
        id=uuid4(),
        user_id=user_id,
        occur_date=date(2025, 12, 2),
        payee="Landlord",
        memo="December rent",
        created_at=now,
    )
    coffee = Transaction(
        id=uuid4(),
        user_id=user_id,
        occur_date=date(2025, 12, 3),
        payee="Cafe",
        created_at=now,
    )

    entries = [
        Entry(
            id=1,
            user_id=user_id,
            transaction_id=groceries.id,
            account_id=checking.id,
            category_id=food.id,
            amount=Decimal("-50.00"),
        ),
        Entry(
            id=2,
            user_id=user_id,
            transaction_id=rent_payment.id,
            account_id=checking.id,
            category_id=rent.id,
            amount=Decimal("-700.00"),
        ),
        Entry(
            id=3,
            user_id=user_id,
            transaction_id=coffee.id,
            account_id=credit.id,
            category_id=food.id,
            amount=Decimal("-10.00"),
            note="Latte",
        ),
    ]

    return Ledger(
        users=[user],
        accounts=[checking, credit],
        categories=[food, rent],
        transactions=[groceries, rent_payment, coffee],
        entries=entries,
    )
