"""Exhaustive scan: follow continuation keys until the table is drained."""

from __future__ import annotations

import logging
from typing import Any

from investdb.filters import CompiledFilter
from investdb.store import RecordStore

logger = logging.getLogger(__name__)


def scan_all(store: RecordStore, compiled: CompiledFilter | None = None) -> list[dict[str, Any]]:
    """Return every record matching ``compiled``, across as many pages as the store needs.

    Pages are read one after another and concatenated in store order. A
    failure on any page propagates and discards what was read so far. The
    result is not a snapshot: records changed mid-scan may show either state.
    """
    items: list[dict[str, Any]] = []
    start_key: dict[str, Any] | None = None
    pages = 0
    while True:
        page = store.scan_page(compiled, start_key)
        pages += 1
        items.extend(page.items)
        start_key = page.last_evaluated_key
        if not start_key:
            break
    logger.debug("Scanned %d page(s), %d item(s)", pages, len(items))
    return items
