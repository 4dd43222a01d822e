"""CLI argument parsing: FIELD=VALUE pairs and JSON payloads."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any


def parse_pairs(pairs: list[str] | None, *, json_values: bool = False) -> dict[str, Any]:
    """Parse ``FIELD=VALUE`` tokens into a mapping.

    Filter values stay raw strings, as they would arrive in a query string.
    With ``json_values`` a value is decoded as JSON when it parses, so
    ``--set price=12.5`` yields a number and ``--set owner=ann`` a string.
    """
    parsed: dict[str, Any] = {}
    for pair in pairs or []:
        name, sep, raw = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid pair (expected 'FIELD=VALUE'): {pair}")
        value: Any = raw
        if json_values:
            try:
                value = json.loads(raw, parse_float=Decimal)
            except ValueError:
                value = raw
        parsed[name] = value
    return parsed


def build_payload(data: str | None, pairs: list[str] | None) -> dict[str, Any]:
    """Merge a ``--data`` JSON object with ``--set`` pairs (pairs win)."""
    payload: dict[str, Any] = {}
    if data:
        decoded = json.loads(data, parse_float=Decimal)
        if not isinstance(decoded, dict):
            raise ValueError("--data must be a JSON object")
        payload.update(decoded)
    payload.update(parse_pairs(pairs, json_values=True))
    return payload
