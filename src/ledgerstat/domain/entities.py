"""Domain model entities for ledgerstat.

These are pure data classes representing the ledger and the derived views the
engine computes over it. Ledger rows are immutable; only the per-month
accumulators are mutated, and only while the aggregator is building them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Iterator, Optional, TypeVar
from uuid import UUID

MonthKey = tuple[int, int]
Timephase = tuple[MonthKey, MonthKey]

K = TypeVar("K")


class AccountType(Enum):
    """Kind of account an entry is posted against."""

    CHECKING = "checking"
    CASH = "cash"
    CREDIT = "credit"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AccountType":
        """Map a free-text account type onto the enum.

        Unknown or empty values map to OTHER.
        """
        if not value:
            return cls.OTHER
        text = value.strip().lower()
        if text == "chequing":
            return cls.CHECKING
        for member in cls:
            if member.value == text:
                return member
        return cls.OTHER


class Purpose(Enum):
    """Which of the three sums a query reports."""

    INCOME = "income"
    OUTCOME = "outcome"
    NET = "net"

    @classmethod
    def from_onlyspend(cls, onlyspend: Optional[bool]) -> "Purpose":
        """Convert the legacy tri-state spend flag.

        True means spending only, False means income only, None means net.
        """
        if onlyspend is None:
            return cls.NET
        return cls.OUTCOME if onlyspend else cls.INCOME

    @classmethod
    def parse(cls, value: str) -> "Purpose":
        """Parse a purpose name; 'spend' is accepted as an alias for outcome."""
        text = value.strip().lower()
        if text not in _SPEND_FLAGS:
            raise ValueError(f"Unknown kind '{value}', must be one of: spend, income, net")
        return cls.from_onlyspend(_SPEND_FLAGS[text])


_SPEND_FLAGS: dict[str, Optional[bool]] = {
    "spend": True,
    "outcome": True,
    "expense": True,
    "income": False,
    "net": None,
}


@dataclass(frozen=True)
class User:
    """Identity scope for every other entity."""

    id: UUID
    email: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    The balance is derived from entries; only the opening balance is stored.
    """

    id: int
    user_id: UUID
    name: str
    account_type: AccountType
    currency: str
    opening_balance: Decimal
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Category:
    """Category domain entity. Parent links are informational only."""

    id: int
    user_id: UUID
    name: str
    parent_id: Optional[int] = None


@dataclass(frozen=True)
class Transaction:
    """Dated container for one or more entries."""

    id: UUID
    user_id: UUID
    occur_date: date
    payee: Optional[str] = None
    memo: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def month_key(self) -> MonthKey:
        return (self.occur_date.year, self.occur_date.month)


@dataclass(frozen=True)
class Entry:
    """A signed posting against one account and an optional category."""

    id: int
    user_id: UUID
    transaction_id: UUID
    account_id: int
    category_id: Optional[int]
    amount: Decimal
    note: Optional[str] = None


@dataclass(frozen=True)
class Ledger:
    """In-memory store of every ledger row the engine reads.

    Lookups only; the transaction index is built once so that resolving an
    entry's date is constant time.
    """

    users: tuple[User, ...] = ()
    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    entries: tuple[Entry, ...] = ()
    _transaction_index: dict[UUID, Transaction] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        for name in ("users", "accounts", "categories", "transactions", "entries"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(
            self, "_transaction_index", {tx.id: tx for tx in self.transactions}
        )

    def get_user(self, user_id: UUID) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def get_account(self, account_id: int) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None

    def get_category(self, category_id: int) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        return self._transaction_index.get(transaction_id)

    def resolve_transaction(self, entry: Entry) -> Optional[Transaction]:
        """Return the entry's transaction, or None if it is orphaned.

        A transaction owned by a different user does not resolve.
        """
        tx = self._transaction_index.get(entry.transaction_id)
        if tx is None or tx.user_id != entry.user_id:
            return None
        return tx

    def entries_for_user(self, user_id: UUID) -> Iterator[Entry]:
        return (entry for entry in self.entries if entry.user_id == user_id)


@dataclass
class Totals:
    """Income, outcome and net sums for one scope."""

    income: float = 0.0
    outcome: float = 0.0
    net: float = 0.0

    def add(self, amount: float) -> None:
        # Zero counts as income.
        if amount < 0:
            self.outcome += amount
        else:
            self.income += amount
        self.net += amount

    def value(self, purpose: Purpose) -> float:
        if purpose is Purpose.INCOME:
            return self.income
        if purpose is Purpose.OUTCOME:
            return self.outcome
        return self.net


@dataclass
class MonthStats:
    """Breakdown of one calendar month.

    The by-category and by-account-category maps use None for uncategorized
    entries.
    """

    totals: Totals = field(default_factory=Totals)
    by_category: dict[Optional[int], Totals] = field(default_factory=dict)
    by_account: dict[int, Totals] = field(default_factory=dict)
    by_account_category: dict[tuple[int, Optional[int]], Totals] = field(
        default_factory=dict
    )

    def add(self, account_id: int, category_id: Optional[int], amount: float) -> None:
        self.totals.add(amount)
        self.by_category.setdefault(category_id, Totals()).add(amount)
        self.by_account.setdefault(account_id, Totals()).add(amount)
        self.by_account_category.setdefault((account_id, category_id), Totals()).add(
            amount
        )


def _normalize_series(values: tuple[float, ...]) -> tuple[float, ...]:
    total = sum(values)
    if total == 0:
        return tuple(0.0 for _ in values)
    return tuple(value / total for value in values)


@dataclass(frozen=True)
class Trend(Generic[K]):
    """Parallel series keyed by an axis of months or entity IDs."""

    axis: tuple[K, ...] = ()
    income: tuple[float, ...] = ()
    outcome: tuple[float, ...] = ()
    summary: tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.axis)

    @property
    def is_empty(self) -> bool:
        return not self.axis

    def points(self) -> Iterator[tuple[K, float, float, float]]:
        return zip(self.axis, self.income, self.outcome, self.summary)

    def value(self, index: int, purpose: Purpose) -> float:
        if purpose is Purpose.INCOME:
            return self.income[index]
        if purpose is Purpose.OUTCOME:
            return self.outcome[index]
        return self.summary[index]

    def normalize(self) -> "Trend[K]":
        """Express each series as fractions of its own total.

        A series whose total is exactly zero becomes all zeros.
        """
        return Trend(
            axis=self.axis,
            income=_normalize_series(self.income),
            outcome=_normalize_series(self.outcome),
            summary=_normalize_series(self.summary),
        )


@dataclass(frozen=True)
class AccountSummary:
    """All-time balance of one account, for display."""

    account_id: int
    name: str
    account_type: AccountType
    balance: float
    currency: str


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of comparing the computed balance with an external one."""

    good: bool
    internal_balance: float
    external_balance: float
    difference: float
    suspicious_entries: tuple[Entry, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "good": self.good,
            "internal_balance": self.internal_balance,
            "external_balance": self.external_balance,
            "difference": self.difference,
            "suspicious_entries": [entry.id for entry in self.suspicious_entries],
        }
