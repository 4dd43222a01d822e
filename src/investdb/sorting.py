"""In-memory multi-key sorting for scanned records."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import cmp_to_key
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class SortField:
    field: str
    direction: int  # 1 ascending, -1 descending


def parse_sort_by(sort_by: str | None) -> list[SortField]:
    """Parse ``"-price,year"`` into ordered sort fields.

    A leading ``-`` sorts descending, ``+`` or no prefix ascending. Tokens that
    are empty after stripping the prefix are discarded.
    """
    fields: list[SortField] = []
    for token in (sort_by or "").split(","):
        token = token.strip()
        if not token:
            continue
        direction = -1 if token.startswith("-") else 1
        name = token[1:] if token[0] in "-+" else token
        if name:
            fields.append(SortField(field=name, direction=direction))
    return fields


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _type_rank(value: Any) -> int:
    if _is_number(value):
        return 0
    if isinstance(value, str):
        return 1
    if isinstance(value, bool):
        return 2
    return 3


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison; missing values sort after present ones."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    rank_a, rank_b = _type_rank(a), _type_rank(b)
    if rank_a != rank_b:
        return _cmp(rank_a, rank_b)
    if rank_a == 1:
        return _cmp(a.casefold(), b.casefold()) or _cmp(a, b)
    if rank_a == 3:
        return _cmp(str(a), str(b))
    return _cmp(a, b)


def sort_items(
    items: Sequence[Mapping[str, Any]], sort_by: str | None = None
) -> list[Mapping[str, Any]]:
    """Return ``items`` stably ordered by the directive; unsorted when it is empty."""
    sort_fields = parse_sort_by(sort_by)
    if not sort_fields:
        return list(items)

    def _compare(item_a: Mapping[str, Any], item_b: Mapping[str, Any]) -> int:
        for sort_field in sort_fields:
            comparison = compare_values(item_a.get(sort_field.field), item_b.get(sort_field.field))
            if comparison:
                return comparison * sort_field.direction
        return 0

    return sorted(items, key=cmp_to_key(_compare))
