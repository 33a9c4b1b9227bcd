"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidDateError(ValidationError):
    """A transaction date could not be parsed into a calendar date."""

    def __init__(self, transaction_id: str, value: str):
        super().__init__(invalid_transaction_date(transaction_id, value))
        self.transaction_id = transaction_id
        self.value = value


class UnknownPeriodError(ValidationError):
    """Period value outside daily, weekly, monthly and yearly."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ConfigError(DomainError):
    """Missing or invalid configuration."""


class StoreError(DomainError):
    """A transaction store could not be read or written."""


def invalid_transaction_date(transaction_id: str, value: str) -> str:
    """Return message for a transaction date that does not parse."""
    return f"Transaction '{transaction_id}' has an invalid date: {value!r}"


def unknown_period(value: object) -> str:
    """Return message for an unrecognized period."""
    return (
        f"Unknown period: {value!r}. "
        "Supported periods: daily, weekly, monthly, yearly"
    )


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def duplicate_transaction_id(transaction_id: str) -> str:
    """Return message for duplicate transaction ID."""
    return f"Transaction with id '{transaction_id}' already exists"
