"""Structured error types for investdb."""

from __future__ import annotations


class InvestdbError(Exception):
    """Base error for all investdb errors."""


class ConfigurationError(InvestdbError):
    """Raised when required configuration is missing or malformed."""


class StorageBackendError(InvestdbError):
    """Raised when a DynamoDB operation fails for any reason other than a precondition."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Storage backend error during {operation}: {detail}")


class ValidationError(InvestdbError):
    """Raised when input carries nothing usable (bad body, no update fields)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConflictError(InvestdbError):
    """Raised when a create targets a key that already exists."""

    def __init__(self, key: int | None = None, message: str = "Investment ID already exists") -> None:
        self.key = key
        super().__init__(message)


class NotFoundError(InvestdbError):
    """Raised when a read, update or delete targets a missing key."""

    def __init__(self, key: int | None = None, message: str = "Investment Not Found") -> None:
        self.key = key
        super().__init__(message)
