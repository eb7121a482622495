"""The mcp command: serve read-only workspace queries over stdio."""

from __future__ import annotations

import asyncio

import click

from .. import server
from ._helpers import main, _status, _workspace_option, _workspace_path


@main.command()
@_workspace_option
@click.pass_context
def mcp(ctx):
    """Serve workspace queries to AI tools over MCP (stdio).

    Tools: dunelin_get_workspace, dunelin_get_project,
    dunelin_list_projects.

    \b
    Examples:
        dunelin mcp
        DUNELIN_WORKSPACE=~/work dunelin mcp
    """
    workspace = _workspace_path(ctx)
    _status(ctx, f"Serving {workspace} on stdio")
    try:
        asyncio.run(server.run_stdio_server(workspace))
    except KeyboardInterrupt:
        _status(ctx, "Stopped.")
