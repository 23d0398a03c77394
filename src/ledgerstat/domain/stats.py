"""Per-month aggregation domain service."""

import logging
from typing import Optional
from uuid import UUID

from ledgerstat.domain.entities import (
    Ledger,
    MonthKey,
    MonthStats,
    Purpose,
    Timephase,
    Totals,
)
from ledgerstat.domain.months import expand_month_range

logger = logging.getLogger(__name__)


def select_totals(
    stats: MonthStats,
    account_id: Optional[int] = None,
    category_id: Optional[int] = None,
) -> Optional[Totals]:
    """Pick the breakdown matching the account/category filters.

    Returns None when the month has no entries in that scope.
    """
    if account_id is None and category_id is None:
        return stats.totals
    if account_id is None:
        return stats.by_category.get(category_id)
    if category_id is None:
        return stats.by_account.get(account_id)
    return stats.by_account_category.get((account_id, category_id))


def select_value(
    stats: MonthStats,
    purpose: Purpose,
    account_id: Optional[int] = None,
    category_id: Optional[int] = None,
) -> float:
    """Filter primitive shared by every query.

    Args:
        stats: Breakdown of one month
        purpose: Which sum to report
        account_id: Optional account filter
        category_id: Optional category filter

    Returns:
        The selected sum, 0.0 if the scope is empty
    """
    totals = select_totals(stats, account_id=account_id, category_id=category_id)
    if totals is None:
        return 0.0
    return totals.value(purpose)


class MonthStatsService:
    """Service building the per-month breakdown of a ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize month stats service.

        Args:
            ledger: Ledger store to read from
        """
        self.ledger = ledger

    def monthstats(self, user_id: UUID, timephase: Timephase) -> dict[MonthKey, MonthStats]:
        """Aggregate a user's entries month by month.

        Every month of the window is present in the result, even with no
        entries. Entries whose transaction does not resolve are skipped.

        Args:
            user_id: User whose entries are aggregated
            timephase: ((start_year, start_month), (end_year, end_month))

        Returns:
            Mapping of (year, month) to MonthStats, in chronological order
        """
        start, end = timephase
        result: dict[MonthKey, MonthStats] = {
            key: MonthStats() for key in expand_month_range(start, end)
        }
        if not result:
            return result

        orphaned = 0
        for entry in self.ledger.entries_for_user(user_id):
            tx = self.ledger.resolve_transaction(entry)
            if tx is None:
                orphaned += 1
                continue
            stats = result.get(tx.month_key)
            if stats is None:
                continue
            stats.add(entry.account_id, entry.category_id, float(entry.amount))

        if orphaned:
            logger.debug("Skipped %d orphaned entries for user %s", orphaned, user_id)
        logger.debug("Aggregated %d months for user %s", len(result), user_id)
        return result
