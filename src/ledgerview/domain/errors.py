"""Shared error types and error messages."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class StoreError(Exception):
    """Base class for failures talking to the record store."""


class TransportError(StoreError):
    """The store could not be reached (connection refused, timeout, ...)."""


class ServerError(StoreError):
    """The store answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Server returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class RecordNotFoundError(ServerError, NotFoundError):
    """The store reported that a record does not exist."""

    def __init__(self, record_id: int, message: str = "not_found"):
        ServerError.__init__(self, 404, message)
        self.record_id = record_id

    def __str__(self) -> str:
        return record_not_found(self.record_id)


class ResponseShapeError(StoreError):
    """The store answered with a payload of unexpected shape."""


def record_not_found(record_id: int) -> str:
    """Return message for missing record."""
    return f"Record {record_id} not found"


def invalid_amount(raw: str) -> str:
    """Return message for an amount that is not a positive number."""
    return f"Amount must be a positive number, got '{raw}'"


def invalid_date_range(date_from: date, date_to: date) -> str:
    """Return message when a period starts after it ends."""
    return f"Start date {date_from} is after end date {date_to}"


def missing_field(name: str) -> str:
    """Return message for a required field left empty."""
    return f"Missing required field: {name}"
