"""Tests for filter expressions and DynamoDB compilation."""

from __future__ import annotations

from investdb.filters import (
    ComparisonExpression,
    LogicalExpression,
    build_filter,
    compile_filter,
)


class TestBuildFilter:
    def test_empty_set_emits_no_filter(self):
        assert build_filter({}) is None
        assert build_filter(None) is None

    def test_only_empty_values_emits_no_filter(self):
        assert build_filter({"owner": "", "year": None, "price": "abc"}) is None

    def test_single_field(self):
        expr = build_filter({"owner": "Alice"})
        assert expr == ComparisonExpression("owner", "Alice")

    def test_multiple_fields_are_anded(self):
        expr = build_filter({"owner": "Alice", "year": 2024})
        assert isinstance(expr, LogicalExpression)
        assert expr.op == "AND"
        assert expr.children == [
            ComparisonExpression("owner", "Alice"),
            ComparisonExpression("year", "2024"),
        ]

    def test_values_are_coerced(self):
        expr = build_filter({"price": "100"})
        assert expr == ComparisonExpression("price", 100)

    def test_and_operator(self):
        combined = ComparisonExpression("a", 1) & ComparisonExpression("b", 2)
        assert isinstance(combined, LogicalExpression)
        assert len(combined.children) == 2


class TestCompileFilter:
    def test_none_compiles_to_none(self):
        assert compile_filter(None) is None

    def test_single_clause(self):
        compiled = compile_filter(build_filter({"owner": "Alice"}))
        assert compiled is not None
        assert compiled.expression == "#f0 = :v0"
        assert compiled.names == {"#f0": "owner"}
        assert compiled.values == {":v0": "Alice"}

    def test_conjunction_uses_unique_placeholders(self):
        compiled = compile_filter(build_filter({"owner": "Alice", "year": 2024, "price": "50"}))
        assert compiled is not None
        assert compiled.expression == "#f0 = :v0 AND #f1 = :v1 AND #f2 = :v2"
        assert compiled.names == {"#f0": "owner", "#f1": "year", "#f2": "price"}
        assert compiled.values == {":v0": "Alice", ":v1": "2024", ":v2": 50}

    def test_arbitrary_field_names_are_bound_not_inlined(self):
        compiled = compile_filter(build_filter({"type 1": "x", "size": "L", "a.b": 1}))
        assert compiled is not None
        assert "type 1" not in compiled.expression
        assert "size" not in compiled.expression
        assert set(compiled.names.values()) == {"type 1", "size", "a.b"}

    def test_nested_and_flattens(self):
        expr = (ComparisonExpression("a", 1) & ComparisonExpression("b", 2)) & ComparisonExpression(
            "c", 3
        )
        compiled = compile_filter(expr)
        assert compiled is not None
        assert compiled.expression == "#f0 = :v0 AND #f1 = :v1 AND #f2 = :v2"

    def test_scan_kwargs(self):
        compiled = compile_filter(build_filter({"owner": "Alice"}))
        assert compiled is not None
        assert compiled.scan_kwargs() == {
            "FilterExpression": "#f0 = :v0",
            "ExpressionAttributeNames": {"#f0": "owner"},
            "ExpressionAttributeValues": {":v0": "Alice"},
        }
