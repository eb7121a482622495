"""MCP server exposing the workspace queries over stdio."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .query import TOOL_DESCRIPTIONS, TOOL_MAP

logger = logging.getLogger(__name__)

SERVER_NAME = "dunelin"


def build_server(workspace: str | Path) -> Server:
    """Return an MCP server answering the query tools for *workspace*.

    Tool results are JSON objects serialized as a single text block.
    Protocol housekeeping (``initialize``, ``ping``, request validation)
    is handled by the SDK.
    """
    workspace = Path(workspace)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=name, description=description, inputSchema=schema)
            for name, (description, schema) in TOOL_DESCRIPTIONS.items()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        if name not in TOOL_MAP:
            raise ValueError(f"Unknown tool: {name}")
        logger.debug("tool %s %r", name, arguments)
        result = TOOL_MAP[name](workspace, arguments or {})
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def run_stdio_server(workspace: str | Path) -> None:
    """Serve *workspace* over stdin/stdout until the client disconnects."""
    server = build_server(workspace)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
