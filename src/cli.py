import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer

from api.error_handling import QueryFetchError
from api.query_client import QueryResultClient
from ui.state.query_view_state import QueryViewStore
from utils.logger_setup import setup_logging

logger = setup_logging(logger_name="baroboard_cli_app", file_output=False)

app = typer.Typer(
    name="baroboard",
    help="CLI tool to inspect query results and the charts derived from them.",
    add_completion=False,
)


def _load_payload(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        typer.secho(f"Could not read payload from {path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


@app.command()
def inspect(
    payload_file: Path = typer.Argument(..., help="JSON file holding a query service response."),
    x: Optional[str] = typer.Option(None, "--x", help="Column to use as the X axis."),
    y: Optional[str] = typer.Option(None, "--y", help="Numeric column to use as the Y axis."),
    hide: Optional[List[str]] = typer.Option(None, "--hide", help="Column to hide (repeatable)."),
):
    """
    Show the inferred column types and the derived chart for a saved payload.
    """
    store = QueryViewStore(logger_obj=logger)
    store.on_new_query_selected(str(payload_file))
    store.on_payload_received(str(payload_file), _load_payload(payload_file))

    if not store.state.is_tabular:
        typer.secho("Payload is not tabular.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    for name in hide or []:
        store.on_column_hide(name)
    if x:
        store.on_column_click(x)
    if y:
        store.on_column_click(y, modified=True)

    table = store.state.table
    typer.echo(f"Rows: {table.row_count}")
    typer.echo("Columns:")
    for column in table.columns:
        marker = " (hidden)" if store.state.visibility.is_hidden(column.name) else ""
        typer.echo(f"  {column.name}: {store.column_types[column.name].value}{marker}")

    config = store.chart_config()
    if config is None:
        typer.echo("Chart: none (no visible numeric column)")
        return
    typer.echo(f"Chart: {config.kind.value} (x={config.x_key}, y={config.y_key})")


@app.command()
def fetch(
    query_id: int = typer.Argument(..., help="ID of the query to fetch."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the payload to this file."),
):
    """
    Fetch the latest result of a query from the query service.
    """
    typer.echo(f"Fetching query {query_id}...")
    try:
        result = asyncio.run(QueryResultClient(logger_obj=logger).fetch(query_id))
    except QueryFetchError as e:
        typer.secho(f"Error: {e.user_message()}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    text = json.dumps(result.payload, ensure_ascii=False, indent=2)
    if output:
        output.write_text(text, encoding="utf-8")
        typer.secho(f"Saved payload of '{result.title or query_id}' to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(text)


if __name__ == "__main__":
    app()
