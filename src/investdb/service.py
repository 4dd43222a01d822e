"""Query/mutation facade over a record store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable

from investdb.coercion import sanitize_payload
from investdb.filters import build_filter, compile_filter
from investdb.guard import WriteGuard, generate_investment_id
from investdb.results import Outcome
from investdb.scanner import scan_all
from investdb.sorting import sort_items
from investdb.store import RecordStore

logger = logging.getLogger(__name__)

SORT_PARAM = "sort_by"
CREATED_AT_FIELD = "createdAt"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class InvestmentService:
    """Get, list, create, update and delete investment records.

    The store is injected so the same service runs against DynamoDB in
    production and an in-memory double in tests.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        key_field: str = "id",
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], int] | None = None,
    ) -> None:
        self.store = store
        self.key_field = key_field
        self._guard = WriteGuard(store, key_field=key_field)
        self._clock = clock or _utc_now
        self._id_factory = id_factory or generate_investment_id

    def get_by_key(self, key: int) -> Outcome:
        record = self.store.get_item(key)
        if record is None:
            return Outcome.not_found()
        return Outcome.ok(record)

    def list(
        self,
        filters: Mapping[str, Any] | None = None,
        sort_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Scan every matching record, then sort in memory."""
        compiled = compile_filter(build_filter(filters))
        if compiled is not None:
            logger.debug("Scan filter: %s", compiled.expression)
        items = scan_all(self.store, compiled)
        return sort_items(items, sort_by)  # type: ignore[return-value]

    def list_from_query(self, params: Mapping[str, Any] | None) -> list[dict[str, Any]]:
        """List using API query parameters: ``sort_by`` orders, everything else filters."""
        filters = dict(params or {})
        sort_by = filters.pop(SORT_PARAM, None)
        return self.list(filters, sort_by)

    def create(self, payload: Mapping[str, Any]) -> Outcome:
        record = sanitize_payload(payload)
        if self.key_field not in record:
            record[self.key_field] = self._id_factory()
        if not record.get(CREATED_AT_FIELD):
            record[CREATED_AT_FIELD] = format_timestamp(self._clock())
        return self._guard.create(record)

    def update(self, key: int, payload: Mapping[str, Any]) -> Outcome:
        updates = sanitize_payload(payload)
        updates.pop(self.key_field, None)
        return self._guard.update(key, updates)

    def delete(self, key: int) -> Outcome:
        return self._guard.delete(key)
