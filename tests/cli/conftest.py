"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from investdb.cli import app
from investdb.service import InvestmentService
from tests.conftest import FIXED_NOW, FakeStore

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_store(monkeypatch) -> FakeStore:
    """Seed an in-memory store and route every CLI command to it."""
    store = FakeStore(page_size=2)
    store.seed(
        {"id": 1, "year": "2024", "price": 100, "owner": "Alice"},
        {"id": 2, "year": "2023", "price": 50, "owner": "Bob"},
        {"id": 3, "year": "2024", "price": 75, "owner": "Carol"},
    )
    ids = iter(range(500, 600))
    service = InvestmentService(store, clock=lambda: FIXED_NOW, id_factory=lambda: next(ids))
    monkeypatch.setattr("investdb.cli.records.open_service", lambda: service)
    monkeypatch.setattr("investdb.cli.export_cmd.open_service", lambda: service)
    return store


def invoke(runner: CliRunner, args: list[str]) -> "Result":
    """Invoke the CLI with a table name set."""
    return runner.invoke(app, ["--table", "investments"] + args, catch_exceptions=False)
