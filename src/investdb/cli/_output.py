"""Output formatting helpers for the CLI."""

from __future__ import annotations

import json
import sys
from typing import Any

from investdb.handler import to_jsonable


def _dump(data: Any) -> None:
    print(json.dumps(to_jsonable(data), indent=2, default=str))


def print_records(records: list[dict[str, Any]], *, json_mode: bool = False) -> None:
    """Print records as a table whose columns are the union of their fields."""
    if json_mode:
        _dump(records)
        return
    if not records:
        print("No results.")
        return

    columns: dict[str, int] = {}
    for record in records:
        for name in record:
            columns.setdefault(name, len(name))
    cells = [
        {name: "" if record.get(name) is None else str(record[name]) for name in columns}
        for record in records
    ]
    for row in cells:
        for name, text in row.items():
            columns[name] = max(columns[name], len(text))

    print("  ".join(name.ljust(width) for name, width in columns.items()))
    print("  ".join("-" * width for width in columns.values()))
    for row in cells:
        print("  ".join(row[name].ljust(width) for name, width in columns.items()))


def print_object(data: dict[str, Any], *, json_mode: bool = False) -> None:
    """Print a single record as JSON or ``field: value`` lines."""
    if json_mode:
        _dump(data)
        return
    for name, value in data.items():
        print(f"{name}: {value}")


def print_error(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)
