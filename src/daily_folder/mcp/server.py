"""MCP server exposing date-folder navigation tools."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from daily_folder.config import DB_FILENAME, DEFAULT_SCOPE, DEFAULT_SESSION, resolve_data_directory
from daily_folder.core.path.model import derive_path, format_date, parse_date
from daily_folder.service import DailyFolder, open_sqlite_service

# --- Core functions (testable without MCP context) ---


async def daily_folder_goto_date(
    service: DailyFolder,
    *,
    date_string: str,
    create_if_missing: bool = True,
    session_id: str = DEFAULT_SESSION,
) -> dict[str, Any]:
    """Open the folder for a date in the session's tree view.

    The folder is resolved in the scope that view shows.

    Args:
        date_string: Date as YYYY-MM-DD.
        create_if_missing: Create the folder chain when it does not exist.
        session_id: Session whose tree view is driven.
    """
    try:
        day = parse_date(date_string)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    session = service.sessions.get(session_id)
    if session is None or session.view is None:
        return {"success": False, "error": f"No tree view attached to session '{session_id}'."}

    leaf = await service.goto_date(
        date_string, create_if_missing=create_if_missing, session_id=session_id
    )
    if leaf is None:
        return {"success": False, "error": f"Date folder for {date_string} not found."}

    return {
        "success": True,
        "date": date_string,
        "node_id": leaf.id,
        "path": list(derive_path(day, service.root_label)),
    }


async def daily_folder_existing(
    service: DailyFolder,
    *,
    month: str | None = None,
    scope: str | None = None,
    session_id: str = DEFAULT_SESSION,
) -> dict[str, Any]:
    """List the dates that already have a folder.

    Args:
        month: Only dates in this month (YYYY-MM).
        scope: Library scope (None = default scope).
        session_id: Session whose existing-date cache is refreshed.
    """
    dates = sorted(await service.refresh_existing(scope, session_id=session_id))
    if month:
        dates = [d for d in dates if d.startswith(month + "-")]
    return {"dates": dates, "count": len(dates), "root": service.root_label}


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    service: DailyFolder
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Open database on startup, close on shutdown."""
    data_dir = resolve_data_directory()
    service, _view = open_sqlite_service(data_dir, DEFAULT_SCOPE)
    logger.info("Serving date folders from {}", data_dir / DB_FILENAME)
    try:
        yield ServerContext(service=service)
    finally:
        service.sessions.detach_all()


mcp_server = FastMCP(
    "daily-folder",
    instructions="""\
Daily Folder keeps one collection per day, nested as Root > YYYY > YYYY-MM > YYYY-MM-DD.

- Use daily_folder_today_tool to open (and create) today's folder.
- Use daily_folder_existing_tool to see which dates already have folders.
- Use daily_folder_goto_date_tool with create_if_missing=false to open a past
  date without creating it.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def daily_folder_goto_date_tool(
    ctx: Context,
    date_string: str,
    create_if_missing: bool = True,
) -> dict[str, Any]:
    """Open the date folder for a date, creating it if requested.

    Args:
        date_string: Date as YYYY-MM-DD.
        create_if_missing: Create the folder chain if it does not exist yet.
    """
    server = _ctx(ctx)
    async with server.lock:
        return await daily_folder_goto_date(
            server.service, date_string=date_string, create_if_missing=create_if_missing
        )


@mcp_server.tool()
async def daily_folder_today_tool(ctx: Context) -> dict[str, Any]:
    """Open today's date folder, creating it if needed."""
    server = _ctx(ctx)
    async with server.lock:
        return await daily_folder_goto_date(
            server.service, date_string=format_date(date.today()), create_if_missing=True
        )


@mcp_server.tool()
async def daily_folder_existing_tool(ctx: Context, month: str | None = None) -> dict[str, Any]:
    """List dates that already have a folder.

    Args:
        month: Only dates in this month (YYYY-MM).
    """
    server = _ctx(ctx)
    async with server.lock:
        return await daily_folder_existing(server.service, month=month)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from daily_folder.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
