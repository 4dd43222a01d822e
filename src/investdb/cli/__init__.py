"""investdb CLI: operator console for the investment table."""

from __future__ import annotations

from typing import Optional

import typer

from investdb.cli import export_cmd, records

app = typer.Typer(
    name="investdb",
    help="investdb CLI: inspect and edit investment records in DynamoDB.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    table: str | None = None
    region: str | None = None
    endpoint_url: str | None = None
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        try:
            from importlib.metadata import version

            v = version("investdb")
        except Exception:
            v = "unknown"
        print(f"investdb {v}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    table: Optional[str] = typer.Option(
        None,
        "--table",
        envvar="INVESTMENT_TABLE_NAME",
        help="DynamoDB table holding investments",
    ),
    region: Optional[str] = typer.Option(None, "--region", help="AWS region"),
    endpoint_url: Optional[str] = typer.Option(
        None,
        "--endpoint-url",
        envvar="DYNAMODB_ENDPOINT",
        help="DynamoDB endpoint override (e.g. http://localhost:8000)",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all investdb commands."""
    state.table = table
    state.region = region
    state.endpoint_url = endpoint_url
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        print(ctx.get_help())
        raise typer.Exit()


app.command(name="get")(records.get_cmd)
app.command(name="list")(records.list_cmd)
app.command(name="create")(records.create_cmd)
app.command(name="update")(records.update_cmd)
app.command(name="delete")(records.delete_cmd)
app.command(name="export")(export_cmd.export_cmd)


def main() -> None:
    """Entry point for the investdb CLI."""
    app()
