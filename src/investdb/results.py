"""Explicit outcomes for guarded reads and writes.

Expected domain outcomes (conflict, not found, validation) are returned as
values. Only store failures travel as exceptions (``StorageBackendError``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from investdb.errors import ConflictError, InvestdbError, NotFoundError, ValidationError


class OutcomeKind(str, Enum):
    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


_ERRORS: dict[OutcomeKind, type[InvestdbError]] = {
    OutcomeKind.CONFLICT: ConflictError,
    OutcomeKind.NOT_FOUND: NotFoundError,
    OutcomeKind.VALIDATION: ValidationError,
}


@dataclass(frozen=True)
class Outcome:
    """Result of a single guarded operation."""

    kind: OutcomeKind
    record: dict[str, Any] | None = None
    message: str = "OK"

    def __post_init__(self) -> None:
        if self.kind is OutcomeKind.OK and self.record is None:
            raise ValueError("An OK outcome must carry a record")

    @classmethod
    def ok(cls, record: dict[str, Any]) -> Outcome:
        return cls(OutcomeKind.OK, record=record)

    @classmethod
    def conflict(cls, message: str = "Investment ID already exists") -> Outcome:
        return cls(OutcomeKind.CONFLICT, message=message)

    @classmethod
    def not_found(cls, message: str = "Investment Not Found") -> Outcome:
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def invalid(cls, message: str) -> Outcome:
        return cls(OutcomeKind.VALIDATION, message=message)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    def unwrap(self) -> dict[str, Any]:
        """Return the record, or raise the domain error matching this outcome."""
        if self.kind is OutcomeKind.OK and self.record is not None:
            return self.record
        error_cls = _ERRORS[self.kind]
        if error_cls is ValidationError:
            raise ValidationError(self.message)
        raise error_cls(message=self.message)  # type: ignore[call-arg]
