"""Tests for investdb export."""

from __future__ import annotations

import json

import yaml

from investdb.cli import _exitcodes as ec
from tests.cli.conftest import invoke


def test_export_json_stdout(runner, cli_store):
    result = invoke(runner, ["export", "--sort-by", "-price"])
    assert result.exit_code == 0
    assert [d["id"] for d in json.loads(result.output)] == [1, 3, 2]


def test_export_yaml_file(runner, cli_store, tmp_path):
    out = tmp_path / "investments.yaml"
    result = invoke(runner, ["export", "--format", "yaml", "--output", str(out)])
    assert result.exit_code == 0
    assert "Exported 3 investment(s)" in result.output
    data = yaml.safe_load(out.read_text())
    assert [d["owner"] for d in data] == ["Alice", "Bob", "Carol"]


def test_export_unknown_format(runner, cli_store):
    result = invoke(runner, ["export", "--format", "xml"])
    assert result.exit_code == ec.USAGE_ERROR
