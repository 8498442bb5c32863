"""MCP GitHub Image Server - stdio transport wiring."""

import asyncio
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, List

import git
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from .configuration import ServerConfig
from .core.handlers import CallToolHandler

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-server-gh-image"


def get_server_version() -> str:
    try:
        return version(SERVER_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def create_server(handler: CallToolHandler) -> Server:
    """Create the MCP server and register the tool endpoints on it"""
    server = Server(SERVER_NAME, version=get_server_version())

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return handler.registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
        return await handler.call_tool(name, arguments)

    return server


async def serve(config: ServerConfig) -> None:
    """Run the server over stdin/stdout until the client disconnects"""
    logger.info(f"Starting {SERVER_NAME} {get_server_version()}")
    logger.info(f"Repository: {config.repository or '.'}")

    if config.git_executable != "git":
        git.refresh(config.git_executable)
        logger.info(f"Using git executable: {config.git_executable}")

    handler = CallToolHandler(repository=config.repository)
    server = create_server(handler)

    if config.test_mode:
        logger.info("Running in test mode - staying alive for CI testing")
        await asyncio.sleep(10)
        logger.info("Test mode completed successfully")
        return

    options = server.create_initialization_options()
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server running. Waiting for requests...")
            await server.run(read_stream, write_stream, options, raise_exceptions=False)
    finally:
        logger.info(f"{SERVER_NAME} shutting down.")
