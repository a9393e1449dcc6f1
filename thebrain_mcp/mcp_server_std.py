#!/usr/bin/env python3
"""
TheBrain MCP Server (stdio)

Exposes TheBrain's REST API as MCP tools over stdin/stdout.

Configuration is read from the environment (or a .env file), see
thebrain_mcp.config. THEBRAIN_API_KEY is required.
"""

import asyncio
import sys
from typing import Any, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from thebrain_mcp import __version__
from thebrain_mcp.api_client import BrainAPIClient
from thebrain_mcp.config import load_settings
from thebrain_mcp.errors import ConfigurationError
from thebrain_mcp.logging_utils import configure_logging, get_logger
from thebrain_mcp.mcp_handlers import SessionContext, ToolDispatcher
from thebrain_mcp.mcp_handlers.decorators import set_timeout_override
from thebrain_mcp.mcp_handlers.utils import format_tool_result, is_failure
from thebrain_mcp.tool_schemas import get_tool_definitions

logger = get_logger("thebrain_mcp.server")

SERVER_NAME = "thebrain-mcp"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build the MCP server bound to a dispatcher."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List all available MCP tools"""
        return get_tool_definitions()

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        """Handle tool calls from MCP client"""
        result = await dispatcher.run_tool(request.params.name, request.params.arguments)
        return types.ServerResult(types.CallToolResult(
            content=format_tool_result(result),
            isError=is_failure(result),
        ))

    # Registered as a raw request handler so an McpError (unknown tool) reaches
    # the client as a JSON-RPC error instead of a tool result.
    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(client: Any, default_brain_id: Optional[str] = None) -> None:
    dispatcher = ToolDispatcher(client, SessionContext(active_brain_id=default_brain_id))
    server = create_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


async def main() -> None:
    """Main entry point for MCP server"""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)
    set_timeout_override(settings.tool_timeout)

    if settings.default_brain_id:
        logger.info(f"Default brain: {settings.default_brain_id}")
    logger.info(f"TheBrain MCP server {__version__} starting ({settings.base_url})")

    async with BrainAPIClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.http_timeout,
    ) as client:
        await serve(client, settings.default_brain_id)


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
