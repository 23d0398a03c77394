"""Account domain service."""

from typing import Optional
from uuid import UUID

from ledgerstat.domain.entities import Account, AccountSummary, Category, Ledger
from ledgerstat.domain.errors import NotFoundError, account_not_found, category_not_found


class AccountService:
    """Service for account lookups and all-time balances."""

    def __init__(self, ledger: Ledger):
        """Initialize account service.

        Args:
            ledger: Ledger store to read from
        """
        self.ledger = ledger

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.ledger.get_account(account_id)

    def require_account(self, account_id: int) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def require_category(self, category_id: int) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If category not found
        """
        category = self.ledger.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_accounts(self, user_id: Optional[UUID] = None) -> list[Account]:
        """List accounts, optionally only those of one user."""
        return [
            account
            for account in self.ledger.accounts
            if user_id is None or account.user_id == user_id
        ]

    def cal_balance(self, account_id: int) -> float:
        """All-time balance of an account.

        Opening balance plus every entry ever posted to the account,
        regardless of date. An unknown account has an opening balance of 0.

        Args:
            account_id: Account ID

        Returns:
            Balance as float
        """
        account = self.get_account(account_id)
        opening = float(account.opening_balance) if account is not None else 0.0
        return opening + sum(
            float(entry.amount)
            for entry in self.ledger.entries
            if entry.account_id == account_id
        )

    def all_account_summary(self, user_id: Optional[UUID] = None) -> list[AccountSummary]:
        """Balances of every account, in ledger order."""
        return [
            AccountSummary(
                account_id=account.id,
                name=account.name,
                account_type=account.account_type,
                balance=self.cal_balance(account.id),
                currency=account.currency,
            )
            for account in self.list_accounts(user_id)
        ]

    def display_name(self, account_id: int) -> str:
        """Account name for display, falling back to the ID."""
        account = self.get_account(account_id)
        return account.name if account is not None else f"#{account_id}"

    def category_display_name(self, category_id: Optional[int]) -> str:
        """Category name for display."""
        if category_id is None:
            return "Uncategorized"
        category = self.ledger.get_category(category_id)
        return category.name if category is not None else f"#{category_id}"
