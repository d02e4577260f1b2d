"""MCP server bootstrap: tool catalog over the stdio transport."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .config import AppConfig
from .render.client import RenderClient
from .tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "render-mcp"


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Create the low-level MCP server and register the list/call handlers."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    # Arguments are validated by the dispatcher, which answers bad input
    # with the same error envelope as any other failure.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        return await dispatcher.call(name, arguments)

    return server


async def serve(dispatcher: ToolDispatcher) -> None:
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Render MCP server running on stdio (%d tools)", len(dispatcher.tool_names))
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_server(config: AppConfig, api_key: str) -> None:
    """Serve until stdin closes."""
    client = RenderClient(api_key, config.api)
    try:
        asyncio.run(serve(ToolDispatcher(client)))
    finally:
        client.close()
        logger.info("Render MCP server stopped")
