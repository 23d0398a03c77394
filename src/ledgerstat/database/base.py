"""Abstract read-only ledger source interface."""

from abc import ABC, abstractmethod
from uuid import UUID

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerstat.domain.entities import Ledger, User


class Database(ABC):
    """Abstract database interface for loading ledgers."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def load_ledger(self, user_id: UUID) -> Ledger:
        """Load every row owned by one user into a Ledger."""
        pass
