"""Existence-guarded writes.

Each write is one conditioned store call. A failed precondition is read as a
domain outcome (conflict on create, not found on update) and every other
store error propagates unchanged.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Mapping
from typing import Any, Callable

from investdb.results import Outcome
from investdb.store import PreconditionFailed, RecordStore, UpdateRequest

logger = logging.getLogger(__name__)

NO_UPDATE_FIELDS = "No valid fields provided for update"


def generate_investment_id(
    now: Callable[[], float] | None = None,
    rng: random.Random | None = None,
) -> int:
    """Millisecond timestamp followed by a zero-padded 3-digit random suffix.

    Unique enough for one writer at a time. Two creates in the same
    millisecond can collide; the create precondition then reports a conflict.
    """
    millis = int((now or time.time)() * 1000)
    suffix = (rng or random).randint(0, 999)
    return int(f"{millis}{suffix:03d}")


def build_update_request(updates: Mapping[str, Any], key_field: str = "id") -> UpdateRequest:
    """Build ``SET #field_0 = :value_0, ...`` guarded by ``attribute_exists(#id)``."""
    names: dict[str, str] = {"#id": key_field}
    values: dict[str, Any] = {}
    set_parts: list[str] = []
    for index, (name, value) in enumerate(updates.items()):
        name_key = f"#field_{index}"
        value_key = f":value_{index}"
        names[name_key] = name
        values[value_key] = value
        set_parts.append(f"{name_key} = {value_key}")
    return UpdateRequest(
        expression=f"SET {', '.join(set_parts)}",
        names=names,
        values=values,
        condition="attribute_exists(#id)",
    )


class WriteGuard:
    """Wraps create/update/delete with existence preconditions."""

    def __init__(self, store: RecordStore, *, key_field: str = "id") -> None:
        self._store = store
        self.key_field = key_field

    def create(self, record: dict[str, Any]) -> Outcome:
        key = record.get(self.key_field)
        try:
            self._store.put_item_if_absent(record)
        except PreconditionFailed:
            logger.warning("Create rejected, investment %s already exists", key)
            return Outcome.conflict()
        logger.info("Created investment %s", key)
        return Outcome.ok(record)

    def update(self, key: int, updates: Mapping[str, Any]) -> Outcome:
        entries = {name: value for name, value in updates.items() if value is not None}
        if not entries:
            return Outcome.invalid(NO_UPDATE_FIELDS)
        request = build_update_request(entries, self.key_field)
        try:
            updated = self._store.update_item_if_present(key, request)
        except PreconditionFailed:
            logger.warning("Update rejected, investment %s not found", key)
            return Outcome.not_found()
        logger.info("Updated investment %s (%d field(s))", key, len(entries))
        return Outcome.ok(updated)

    def delete(self, key: int) -> Outcome:
        previous = self._store.delete_item(key)
        if not previous:
            logger.warning("Delete found no investment %s", key)
            return Outcome.not_found()
        logger.info("Deleted investment %s", key)
        return Outcome.ok(previous)
