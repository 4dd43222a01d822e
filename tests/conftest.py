"""Shared test fixtures for investdb tests."""

from __future__ import annotations

import copy
from collections import Counter
from datetime import datetime, timezone
from typing import Any

import pytest

from investdb.errors import StorageBackendError
from investdb.filters import CompiledFilter
from investdb.service import InvestmentService
from investdb.store import PreconditionFailed, ScanPage, UpdateRequest


class FakeStore:
    """In-memory RecordStore with DynamoDB-like paging and conditional writes.

    ``page_size`` caps how many records each scan page *evaluates* before the
    filter is applied, so a page can come back empty while still carrying a
    continuation key, as DynamoDB's ``Limit`` does.
    """

    def __init__(self, page_size: int = 100, key_field: str = "id") -> None:
        self.page_size = page_size
        self.key_field = key_field
        self.records: dict[Any, dict[str, Any]] = {}
        self.calls: Counter[str] = Counter()
        self.fail_on_page: int | None = None
        self.scan_requests: list[tuple[CompiledFilter | None, dict[str, Any] | None]] = []

    def seed(self, *records: dict[str, Any]) -> None:
        for record in records:
            self.records[record[self.key_field]] = copy.deepcopy(record)

    def get_item(self, key: int) -> dict[str, Any] | None:
        self.calls["get_item"] += 1
        record = self.records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def scan_page(
        self,
        compiled: CompiledFilter | None = None,
        start_key: dict[str, Any] | None = None,
    ) -> ScanPage:
        self.calls["scan_page"] += 1
        self.scan_requests.append((compiled, start_key))
        if self.fail_on_page is not None and self.calls["scan_page"] == self.fail_on_page:
            raise StorageBackendError("scan", "ProvisionedThroughputExceededException")

        keys = list(self.records)
        start = 0
        if start_key is not None:
            start = keys.index(start_key[self.key_field]) + 1
        window = keys[start : start + self.page_size]
        items = [
            copy.deepcopy(self.records[k]) for k in window if _matches(self.records[k], compiled)
        ]
        last_key = None
        if window and start + len(window) < len(keys):
            last_key = {self.key_field: window[-1]}
        return ScanPage(items=items, last_evaluated_key=last_key)

    def put_item_if_absent(self, record: dict[str, Any]) -> None:
        self.calls["put_item_if_absent"] += 1
        _reject_floats(record)
        key = record[self.key_field]
        if key in self.records:
            raise PreconditionFailed("put_item")
        self.records[key] = copy.deepcopy(record)

    def update_item_if_present(self, key: int, update: UpdateRequest) -> dict[str, Any]:
        self.calls["update_item_if_present"] += 1
        _reject_floats(update.values)
        if key not in self.records:
            raise PreconditionFailed("update_item")
        record = self.records[key]
        assignments = update.expression.removeprefix("SET ").split(", ")
        for assignment in assignments:
            name_key, value_key = assignment.split(" = ")
            record[update.names[name_key]] = copy.deepcopy(update.values[value_key])
        return copy.deepcopy(record)

    def delete_item(self, key: int) -> dict[str, Any] | None:
        self.calls["delete_item"] += 1
        return self.records.pop(key, None)


def _reject_floats(value: Any) -> None:
    """Fail the way boto3's serializer does when a float reaches the store."""
    if isinstance(value, float):
        raise TypeError("Float types are not supported. Use Decimal types instead.")
    if isinstance(value, dict):
        for item in value.values():
            _reject_floats(item)
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            _reject_floats(item)


def _matches(record: dict[str, Any], compiled: CompiledFilter | None) -> bool:
    if compiled is None:
        return True
    for clause in compiled.expression.split(" AND "):
        name_key, value_key = clause.split(" = ")
        field_name = compiled.names[name_key]
        if field_name not in record or record[field_name] != compiled.values[value_key]:
            return False
    return True


FIXED_NOW = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def service(store: FakeStore) -> InvestmentService:
    ids = iter(range(9001, 10000))
    return InvestmentService(store, clock=lambda: FIXED_NOW, id_factory=lambda: next(ids))


@pytest.fixture
def seeded_store(store: FakeStore) -> FakeStore:
    store.seed(
        {"id": 1, "year": "2024", "price": 100, "owner": "Alice", "currency": "USD"},
        {"id": 2, "year": "2023", "price": 50, "owner": "bob", "currency": "EUR"},
        {"id": 3, "year": "2024", "price": 75, "owner": "Carol", "currency": "USD"},
    )
    return store
