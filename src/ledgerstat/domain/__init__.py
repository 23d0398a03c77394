"""Domain layer for ledgerstat application."""

from ledgerstat.domain.stats import MonthStatsService
from ledgerstat.domain.summary import SummaryService
from ledgerstat.domain.account import AccountService
from ledgerstat.domain.reconcile import ReconcileService

__all__ = [
    "MonthStatsService",
    "SummaryService",
    "AccountService",
    "ReconcileService",
]
