"""Filter expression types and their DynamoDB compilation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from investdb.coercion import sanitize_filters


class FilterExpression:
    """Base class for filter expressions."""

    def __and__(self, other: FilterExpression) -> LogicalExpression:
        return LogicalExpression(op="AND", children=[self, other])


@dataclass
class ComparisonExpression(FilterExpression):
    """Equality between a record field and a coerced value."""

    field_name: str
    value: Any
    op: str = "="


@dataclass
class LogicalExpression(FilterExpression):
    """A conjunction of filter expressions."""

    op: str  # "AND"
    children: list[FilterExpression] = field(default_factory=list)


@dataclass
class CompiledFilter:
    """A DynamoDB FilterExpression with its placeholder bindings."""

    expression: str
    names: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)

    def scan_kwargs(self) -> dict[str, Any]:
        return {
            "FilterExpression": self.expression,
            "ExpressionAttributeNames": dict(self.names),
            "ExpressionAttributeValues": dict(self.values),
        }


def build_filter(filter_set: Mapping[str, Any] | None) -> FilterExpression | None:
    """Build an AND of equalities from a raw filter set.

    Returns None when nothing survives sanitisation, which means "scan
    everything" rather than "match nothing".
    """
    clauses: list[FilterExpression] = [
        ComparisonExpression(name, value) for name, value in sanitize_filters(filter_set).items()
    ]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return LogicalExpression(op="AND", children=clauses)


def compile_filter(expr: FilterExpression | None) -> CompiledFilter | None:
    """Compile an expression tree into placeholder-bound DynamoDB syntax."""
    if expr is None:
        return None
    names: dict[str, str] = {}
    values: dict[str, Any] = {}
    expression = _compile(expr, names, values)
    return CompiledFilter(expression=expression, names=names, values=values)


def _compile(expr: FilterExpression, names: dict[str, str], values: dict[str, Any]) -> str:
    if isinstance(expr, ComparisonExpression):
        index = len(names)
        name_key = f"#f{index}"
        value_key = f":v{index}"
        names[name_key] = expr.field_name
        values[value_key] = expr.value
        return f"{name_key} {expr.op} {value_key}"
    if isinstance(expr, LogicalExpression):
        if expr.op != "AND":
            raise ValueError(f"Unsupported logical operator: {expr.op}")
        parts = [_compile(child, names, values) for child in expr.children]
        if len(parts) == 1:
            return parts[0]
        return " AND ".join(parts)
    raise ValueError(f"Unknown filter expression type: {type(expr)}")
