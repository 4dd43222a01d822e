"""investdb export: dump every investment as JSON or YAML."""

from __future__ import annotations

import json
from typing import Any, Optional

import typer
import yaml

from investdb.cli import _exitcodes as ec
from investdb.cli._output import print_error
from investdb.cli._storage import open_service
from investdb.errors import ConfigurationError, StorageBackendError
from investdb.handler import to_jsonable


def export_cmd(
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    fmt: str = typer.Option("json", "--format", help="Output format: json or yaml"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Sort directive"),
) -> None:
    """Export all investments."""
    if fmt not in ("json", "yaml"):
        print_error(f"Unsupported format '{fmt}'. Use json or yaml.")
        raise typer.Exit(ec.USAGE_ERROR)

    try:
        service = open_service()
    except (ConfigurationError, StorageBackendError) as e:
        print_error(f"Cannot open storage backend: {e}")
        raise typer.Exit(ec.DATABASE_ERROR)

    try:
        records = to_jsonable(service.list(None, sort_by))
    except StorageBackendError as e:
        print_error(str(e))
        raise typer.Exit(ec.EXECUTION_FAILURE)

    _write_output(records, output, fmt)


def _write_output(data: list[dict[str, Any]], output: str | None, fmt: str) -> None:
    if fmt == "yaml":
        content = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    else:
        content = json.dumps(data, indent=2, default=str)

    if output:
        with open(output, "w") as f:
            f.write(content)
        print(f"Exported {len(data)} investment(s) to {output}")
    else:
        print(content)
