"""Balance reconciliation domain service."""

import logging
from typing import Optional
from uuid import UUID

from ledgerstat.domain.entities import Entry, Ledger, Purpose, ReconcileResult, Timephase
from ledgerstat.domain.months import expand_month_range
from ledgerstat.domain.summary import SummaryService

logger = logging.getLogger(__name__)

# Two-decimal currency tolerance
RECONCILE_TOLERANCE = 0.01


class ReconcileService:
    """Service comparing the ledger with an externally reported balance."""

    def __init__(self, ledger: Ledger):
        """Initialize reconcile service.

        Args:
            ledger: Ledger store to read from
        """
        self.ledger = ledger
        self.summary_service = SummaryService(ledger)

    def reconcile(
        self,
        user_id: UUID,
        account_id: Optional[int],
        external_balance: float,
        timephase: Timephase,
        top_k: int,
    ) -> ReconcileResult:
        """Compare the window's net with an external balance.

        When the gap exceeds RECONCILE_TOLERANCE, the entries whose amount
        alone comes closest to explaining it are returned as suspects. This is
        a heuristic for human review, not a proof of the cause.

        Args:
            user_id: User to reconcile
            account_id: Optional account to restrict to
            external_balance: Balance reported by the bank or statement
            timephase: Month window, start before end
            top_k: Maximum number of suspicious entries

        Returns:
            ReconcileResult
        """
        internal_balance = self.summary_service.month_summary(
            user_id, timephase, account_id=account_id, purpose=Purpose.NET
        )
        difference = external_balance - internal_balance

        if abs(difference) <= RECONCILE_TOLERANCE:
            logger.debug("Reconciled user %s: difference %.4f", user_id, difference)
            return ReconcileResult(
                good=True,
                internal_balance=internal_balance,
                external_balance=external_balance,
                difference=difference,
            )

        suspects = self.suspicious_entries(user_id, account_id, difference, timephase, top_k)
        logger.debug(
            "Reconcile mismatch for user %s: difference %.2f, %d suspects",
            user_id,
            difference,
            len(suspects),
        )
        return ReconcileResult(
            good=False,
            internal_balance=internal_balance,
            external_balance=external_balance,
            difference=difference,
            suspicious_entries=tuple(suspects),
        )

    def suspicious_entries(
        self,
        user_id: UUID,
        account_id: Optional[int],
        difference: float,
        timephase: Timephase,
        top_k: int,
    ) -> list[Entry]:
        """Entries ranked by how well each alone explains the difference.

        The score is |difference - amount|, best first; equal scores keep
        ledger order.
        """
        if top_k <= 0:
            return []

        months = set(expand_month_range(*timephase))
        candidates: list[tuple[float, Entry]] = []
        for entry in self.ledger.entries_for_user(user_id):
            if account_id is not None and entry.account_id != account_id:
                continue
            tx = self.ledger.resolve_transaction(entry)
            if tx is None or tx.month_key not in months:
                continue
            candidates.append((abs(difference - float(entry.amount)), entry))

        candidates.sort(key=lambda candidate: candidate[0])
        return [entry for _, entry in candidates[:top_k]]
