"""investdb get/list/create/update/delete: record reads and guarded writes."""

from __future__ import annotations

from typing import Optional

import typer

from investdb.cli import _exitcodes as ec
from investdb.cli._args import build_payload, parse_pairs
from investdb.cli._output import print_error, print_object, print_records
from investdb.cli._storage import open_service
from investdb.errors import ConfigurationError, StorageBackendError
from investdb.results import Outcome, OutcomeKind
from investdb.service import InvestmentService

_OUTCOME_EXIT = {
    OutcomeKind.NOT_FOUND: ec.NOT_FOUND,
    OutcomeKind.CONFLICT: ec.CONFLICT,
    OutcomeKind.VALIDATION: ec.USAGE_ERROR,
}


def _service() -> InvestmentService:
    try:
        return open_service()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)
    except StorageBackendError as e:
        print_error(f"Cannot open storage backend: {e}")
        raise typer.Exit(ec.DATABASE_ERROR)


def _emit(outcome: Outcome) -> None:
    from investdb.cli import state

    if not outcome.is_ok:
        print_error(outcome.message)
        raise typer.Exit(_OUTCOME_EXIT[outcome.kind])
    print_object(outcome.unwrap(), json_mode=state.json_output)


def _payload_or_exit(data: str | None, pairs: list[str] | None) -> dict:
    try:
        return build_payload(data, pairs)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)


def get_cmd(
    investment_id: int = typer.Argument(..., help="Investment ID"),
) -> None:
    """Show one investment."""
    service = _service()
    try:
        outcome = service.get_by_key(investment_id)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    _emit(outcome)


def list_cmd(
    filter_args: Optional[list[str]] = typer.Option(
        None, "--filter", "-f", help="FIELD=VALUE equality filter (repeatable)"
    ),
    sort_by: Optional[str] = typer.Option(
        None, "--sort-by", help="Comma-separated fields, '-' prefix for descending"
    ),
) -> None:
    """List investments matching all filters."""
    from investdb.cli import state

    try:
        filters = parse_pairs(filter_args)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)

    service = _service()
    try:
        records = service.list(filters, sort_by)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    print_records(records, json_mode=state.json_output)


def create_cmd(
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON object payload"),
    set_args: Optional[list[str]] = typer.Option(
        None, "--set", help="FIELD=VALUE_JSON (repeatable)"
    ),
) -> None:
    """Create an investment; fails if its ID already exists."""
    payload = _payload_or_exit(data, set_args)
    service = _service()
    try:
        outcome = service.create(payload)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    _emit(outcome)


def update_cmd(
    investment_id: int = typer.Argument(..., help="Investment ID"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON object payload"),
    set_args: Optional[list[str]] = typer.Option(
        None, "--set", help="FIELD=VALUE_JSON (repeatable)"
    ),
) -> None:
    """Update fields of an existing investment."""
    payload = _payload_or_exit(data, set_args)
    service = _service()
    try:
        outcome = service.update(investment_id, payload)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    _emit(outcome)


def delete_cmd(
    investment_id: int = typer.Argument(..., help="Investment ID"),
) -> None:
    """Delete an investment and print its last state."""
    service = _service()
    try:
        outcome = service.delete(investment_id)
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)
    _emit(outcome)
