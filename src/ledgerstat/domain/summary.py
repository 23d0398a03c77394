"""Summary query domain service.

Every query here is computed from the month breakdown produced by
MonthStatsService; none of them scans raw entries.
"""

import logging
from typing import Callable, Hashable, Optional, TypeVar
from uuid import UUID

from ledgerstat.domain.entities import (
    Ledger,
    MonthKey,
    MonthStats,
    Purpose,
    Timephase,
    Totals,
    Trend,
)
from ledgerstat.domain.stats import MonthStatsService, select_value

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


def _id_order(key: Optional[int]) -> tuple[bool, int]:
    # IDs ascending, uncategorized last
    return (key is None, key if key is not None else 0)


def _trend_from_totals(collected: dict[K, Totals]) -> Trend[K]:
    axis = tuple(sorted(collected, key=_id_order))
    return Trend(
        axis=axis,
        income=tuple(collected[key].income for key in axis),
        outcome=tuple(collected[key].outcome for key in axis),
        summary=tuple(collected[key].net for key in axis),
    )


def _merge(target: dict[K, Totals], key: K, totals: Totals) -> None:
    merged = target.setdefault(key, Totals())
    merged.income += totals.income
    merged.outcome += totals.outcome
    merged.net += totals.net


def _ranking_key(purpose: Purpose) -> Callable[[tuple[float, float, float]], float]:
    if purpose is Purpose.INCOME:
        return lambda point: point[0]
    if purpose is Purpose.OUTCOME:
        return lambda point: abs(point[1])
    return lambda point: point[2]


def rank_trend(trend: Trend[K], k: int, purpose: Purpose) -> Trend[K]:
    """Keep the k largest points of a pie trend.

    Sorting is stable, so exact ties keep their order in the input trend.
    Outcome is ranked by absolute value. k <= 0 or an empty trend returns
    the trend unchanged.

    Args:
        trend: Pie trend to rank
        k: Number of points to keep
        purpose: Series to rank by

    Returns:
        Trend with at most k points, largest first
    """
    if k <= 0 or trend.is_empty:
        return trend

    key = _ranking_key(purpose)
    order = sorted(
        range(len(trend)),
        key=lambda i: key((trend.income[i], trend.outcome[i], trend.summary[i])),
        reverse=True,
    )[:k]
    return Trend(
        axis=tuple(trend.axis[i] for i in order),
        income=tuple(trend.income[i] for i in order),
        outcome=tuple(trend.outcome[i] for i in order),
        summary=tuple(trend.summary[i] for i in order),
    )


class SummaryService:
    """Service answering summary, trend and ranking queries."""

    def __init__(self, ledger: Ledger):
        """Initialize summary service.

        Args:
            ledger: Ledger store to read from
        """
        self.ledger = ledger
        self.stats_service = MonthStatsService(ledger)

    def monthstats(self, user_id: UUID, timephase: Timephase) -> dict[MonthKey, MonthStats]:
        return self.stats_service.monthstats(user_id, timephase)

    def month_summary(
        self,
        user_id: UUID,
        timephase: Timephase,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        purpose: Purpose = Purpose.OUTCOME,
    ) -> float:
        """Total of one purpose over a window.

        Args:
            user_id: User to report on
            timephase: Month window, start before end
            account_id: Optional account filter
            category_id: Optional category filter
            purpose: Income, outcome (negative) or net

        Returns:
            Sum over every month of the window
        """
        stats = self.monthstats(user_id, timephase)
        return sum(
            select_value(month, purpose, account_id=account_id, category_id=category_id)
            for month in stats.values()
        )

    def data_linetrend(
        self,
        user_id: UUID,
        timephase: Timephase,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> Trend[MonthKey]:
        """Month-by-month income, outcome and net, oldest month first."""
        stats = self.monthstats(user_id, timephase)
        axis = tuple(sorted(stats))

        def series(purpose: Purpose) -> tuple[float, ...]:
            return tuple(
                select_value(stats[key], purpose, account_id=account_id, category_id=category_id)
                for key in axis
            )

        return Trend(
            axis=axis,
            income=series(Purpose.INCOME),
            outcome=series(Purpose.OUTCOME),
            summary=series(Purpose.NET),
        )

    def category_pietrend(
        self,
        user_id: UUID,
        timephase: Timephase,
        account_id: Optional[int] = None,
    ) -> Trend[Optional[int]]:
        """One point per category seen in the window, summed over all months.

        The axis is ordered by category ID with uncategorized (None) last.
        """
        collected: dict[Optional[int], Totals] = {}
        for month in self.monthstats(user_id, timephase).values():
            if account_id is None:
                for category_id, totals in month.by_category.items():
                    _merge(collected, category_id, totals)
            else:
                for (acc_id, category_id), totals in month.by_account_category.items():
                    if acc_id == account_id:
                        _merge(collected, category_id, totals)
        return _trend_from_totals(collected)

    def account_pietrend(
        self,
        user_id: UUID,
        timephase: Timephase,
        category_id: Optional[int] = None,
    ) -> Trend[int]:
        """One point per account seen in the window, summed over all months."""
        collected: dict[int, Totals] = {}
        for month in self.monthstats(user_id, timephase).values():
            if category_id is None:
                for account_id, totals in month.by_account.items():
                    _merge(collected, account_id, totals)
            else:
                for (account_id, cat_id), totals in month.by_account_category.items():
                    if cat_id == category_id:
                        _merge(collected, account_id, totals)
        return _trend_from_totals(collected)

    def top_category(
        self,
        user_id: UUID,
        timephase: Timephase,
        k: int,
        account_id: Optional[int] = None,
        purpose: Purpose = Purpose.OUTCOME,
    ) -> Trend[Optional[int]]:
        """Top k categories of the window by the given purpose."""
        trend = self.category_pietrend(user_id, timephase, account_id=account_id)
        ranked = rank_trend(trend, k, purpose)
        logger.debug("Ranked %d of %d categories by %s", len(ranked), len(trend), purpose.value)
        return ranked

    def top_account(
        self,
        user_id: UUID,
        timephase: Timephase,
        k: int,
        category_id: Optional[int] = None,
        purpose: Purpose = Purpose.OUTCOME,
    ) -> Trend[int]:
        """Top k accounts of the window by the given purpose."""
        trend = self.account_pietrend(user_id, timephase, category_id=category_id)
        ranked = rank_trend(trend, k, purpose)
        logger.debug("Ranked %d of %d accounts by %s", len(ranked), len(trend), purpose.value)
        return ranked
