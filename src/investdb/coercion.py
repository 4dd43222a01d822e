"""Field coercion for write payloads and filter values.

Both contexts share one rule set so a filter value always matches a record
written through the same coercion.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

NUMERIC_FIELDS: frozenset[str] = frozenset({"id", "price"})
YEAR_FIELD = "year"

# DynamoDB number limits: 38 significant digits, magnitude 1e-130 to 1e126.
MAX_DIGITS = 38
MAX_ADJUSTED_EXPONENT = 125
MIN_ADJUSTED_EXPONENT = -130

# Sentinel for values that must not reach the store.
DROP: Any = object()


def _fits_store(value: Decimal) -> bool:
    if not value.is_finite():
        return False
    if value.is_zero():
        return True
    digits = value.as_tuple().digits
    significant = len(digits)
    while significant > 1 and digits[significant - 1] == 0:
        significant -= 1
    if significant > MAX_DIGITS:
        return False
    return MIN_ADJUSTED_EXPONENT <= value.adjusted() <= MAX_ADJUSTED_EXPONENT


def _normalize_decimal(value: Decimal) -> int | Decimal | None:
    # Range check comes first: int() on a huge exponent never finishes.
    if not _fits_store(value):
        return None
    if value == value.to_integral_value():
        return int(value)
    return value


def to_number(value: Any) -> int | Decimal | None:
    """Convert a scalar to a store number, or None when it is not numeric."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value if _fits_store(Decimal(value)) else None
    if isinstance(value, Decimal):
        return _normalize_decimal(value)
    if isinstance(value, float):
        return _normalize_decimal(Decimal(repr(value)))
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            return _normalize_decimal(Decimal(text))
        except InvalidOperation:
            return None
    return None


def to_year(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float, Decimal)):
        number = to_number(value)
        if number is not None:
            return str(number)
    return str(value)


def to_store_value(value: Any) -> Any:
    """Make a pass-through value acceptable to the DynamoDB serializer.

    Floats become ``Decimal`` (through ``repr``, so ``2.5`` stays ``2.5``),
    nested lists and maps are converted element by element, and numbers the
    store cannot hold come back as DROP. Inside a container such elements are
    omitted.
    """
    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, float):
        number = to_number(value)
        return DROP if number is None else number
    if isinstance(value, (int, Decimal)):
        return value if _fits_store(Decimal(value)) else DROP
    if isinstance(value, Mapping):
        converted = {}
        for key, item in value.items():
            item = to_store_value(item)
            if item is not DROP:
                converted[key] = item
        return converted
    if isinstance(value, (list, tuple)):
        return [item for item in map(to_store_value, value) if item is not DROP]
    return value


def coerce_field(field: str, value: Any) -> Any:
    """Return ``value`` in the type the store expects for ``field``, or DROP."""
    if value is None:
        return DROP
    if field in NUMERIC_FIELDS:
        number = to_number(value)
        return DROP if number is None else number
    if field == YEAR_FIELD:
        return to_year(value)
    return to_store_value(value)


def sanitize_payload(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Coerce a create/update payload, dropping fields that cannot be stored."""
    sanitized: dict[str, Any] = {}
    for key, value in (payload or {}).items():
        coerced = coerce_field(key, value)
        if coerced is not DROP:
            sanitized[key] = coerced
    return sanitized


def sanitize_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Coerce filter values; empty strings mean "no constraint" and are dropped."""
    sanitized: dict[str, Any] = {}
    for key, value in (filters or {}).items():
        if value == "":
            continue
        coerced = coerce_field(key, value)
        if coerced is not DROP:
            sanitized[key] = coerced
    return sanitized
