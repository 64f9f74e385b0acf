"""CLI for daily-folder (goto, today, existing, tree, MCP server)."""

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from daily_folder.config import DEFAULT_SCOPE, resolve_data_directory
from daily_folder.core.path.model import derive_path, format_date, parse_date
from daily_folder.core.tree.view import CollectionTreeView
from daily_folder.logging_config import configure_logging
from daily_folder.service import DailyFolder, open_sqlite_service

app = typer.Typer(help="Daily folder: date-keyed collection folders.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding the collection database"),
]
ScopeOption = Annotated[str, typer.Option("--scope", "-s", help="Library scope")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_service(data_dir: Path | None, scope: str) -> tuple[DailyFolder, CollectionTreeView]:
    return open_sqlite_service(data_dir or resolve_data_directory(), scope)


def _validate_date(date_string: str) -> None:
    try:
        parse_date(date_string)
    except ValueError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _run_goto(
    date_string: str,
    *,
    create: bool,
    scope: str,
    data_dir: Path | None,
    output_json: bool,
) -> None:
    service, _view = _open_service(data_dir, scope)
    try:
        leaf = asyncio.run(service.goto_date(date_string, scope, create_if_missing=create))
        if leaf is None:
            typer.echo(f"Date folder for {date_string} not found.")
            raise typer.Exit(1)

        path = list(derive_path(parse_date(date_string), service.root_label))
        if output_json:
            output = {"date": date_string, "node_id": leaf.id, "path": path}
            typer.echo(json.dumps(output, indent=2))
        else:
            typer.echo(" / ".join(path) + f"  [id={leaf.id}]")
    finally:
        service.sessions.detach_all()


@app.command()
def goto(
    date_string: str = typer.Argument(..., metavar="DATE", help="Date as YYYY-MM-DD"),
    create: bool = typer.Option(
        True, "--create/--no-create", help="Create the folder if it does not exist"
    ),
    scope: ScopeOption = DEFAULT_SCOPE,
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Open the folder for a date, creating it unless --no-create is given."""
    _validate_date(date_string)
    _run_goto(date_string, create=create, scope=scope, data_dir=data_dir, output_json=output_json)


@app.command()
def today(
    scope: ScopeOption = DEFAULT_SCOPE,
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Open today's folder, creating it if needed."""
    _run_goto(
        format_date(date.today()),
        create=True,
        scope=scope,
        data_dir=data_dir,
        output_json=output_json,
    )


@app.command()
def existing(
    month: Annotated[
        str | None,
        typer.Option("--month", "-m", help="Only dates in this month (YYYY-MM)"),
    ] = None,
    scope: ScopeOption = DEFAULT_SCOPE,
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the dates that already have a folder."""
    service, _view = _open_service(data_dir, scope)
    try:
        dates = sorted(asyncio.run(service.refresh_existing(scope)))
        if month:
            dates = [d for d in dates if d.startswith(month + "-")]

        if output_json:
            typer.echo(json.dumps({"dates": dates, "count": len(dates)}, indent=2))
        else:
            typer.echo(f"{len(dates)} date folders:\n")
            for d in dates:
                typer.echo(f"  {d}")
    finally:
        service.sessions.detach_all()


@app.command()
def tree(
    scope: ScopeOption = DEFAULT_SCOPE,
    data_dir: DataDirOption = None,
) -> None:
    """Print the collection tree of a scope, fully expanded."""
    service, view = _open_service(data_dir, scope)

    async def expand_all() -> None:
        await view.load()
        i = 0
        while i < view.row_count:
            if view.is_container_row(i) and not view.is_container_expanded(i):
                view.toggle_container_open(i)
                await view.settle()
            i += 1

    try:
        asyncio.run(expand_all())
        for depth, node in view.rows():
            typer.echo(f"{'    ' * depth}- {node.name}  [id={node.id}]")
    finally:
        service.sessions.detach_all()


@app.command(name="root-label")
def root_label(
    value: Annotated[
        str | None,
        typer.Argument(help="New root collection name; omit to show the current one"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show or change the name of the root collection."""
    service, _view = _open_service(data_dir, DEFAULT_SCOPE)
    try:
        if value is not None:
            try:
                service.set_root_label(value)
            except ValueError as e:
                logger.error("{}", e)
                raise typer.Exit(1) from e
        typer.echo(service.root_label)
    finally:
        service.sessions.detach_all()


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from daily_folder.mcp.server import run_mcp_server

    run_mcp_server()
