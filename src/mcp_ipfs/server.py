"""MCP server wiring over stdio."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.tool_notes import ToolNoteRegistry, default_note_roots
from mcp_ipfs.tool_registry import ToolRegistry
from mcp_ipfs.w3_client import W3Client
from mcp_ipfs.w3_tools import W3Tools

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-ipfs"
SERVER_INSTRUCTIONS = (
    "Tools for storacha.network content-addressed storage via the w3 CLI. "
    "Run w3_login and confirm with w3_account_ls before using other tools."
)


def server_version() -> str:
    try:
        return version(SERVER_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def build_registry(settings: ServerSettings, notes_dir: Path | None = None) -> ToolRegistry:
    client = W3Client.from_settings(settings)
    notes = ToolNoteRegistry(default_note_roots(notes_dir))
    return ToolRegistry(W3Tools(client, settings), notes)


def build_server(registry: ToolRegistry) -> Server:
    server: Server = Server(SERVER_NAME, version=server_version(), instructions=SERVER_INSTRUCTIONS)

    @server.list_tools()  # type: ignore[misc]
    async def _list_tools() -> list[types.Tool]:
        return registry.list_tools()

    # Arguments are validated by the tool's own model, not the SDK.
    @server.call_tool(validate_input=False)  # type: ignore[misc]
    async def _call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await registry.call(name, arguments)

    return server


async def serve(settings: ServerSettings, notes_dir: Path | None = None) -> None:
    registry = build_registry(settings, notes_dir)
    server = build_server(registry)
    logger.info("Connecting MCP transport (stdio)...")
    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s connected and listening on stdio with %d tools.", SERVER_NAME, len(registry.names()))
        await server.run(read_stream, write_stream, server.create_initialization_options())
