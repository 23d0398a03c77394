"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class SnapshotError(ValidationError):
    """A ledger snapshot could not be decoded."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def user_not_found(user_id: object) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def invalid_month(value: str) -> str:
    """Return message for a month string that is not YYYY-MM."""
    return f"Invalid month '{value}', expected YYYY-MM with month 1-12"


def snapshot_field_error(kind: str, field: str, value: object) -> str:
    """Return message for an undecodable snapshot field."""
    return f"Invalid {kind} field '{field}': {value!r}"
