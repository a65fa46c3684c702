"""Public package exports."""

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.server import build_registry
from mcp_ipfs.server import build_server
from mcp_ipfs.server import serve
from mcp_ipfs.tool_registry import ToolRegistry
from mcp_ipfs.w3_client import W3Client
from mcp_ipfs.w3_tools import W3Tools

__all__ = ["ServerSettings", "ToolRegistry", "W3Client", "W3Tools", "build_registry", "build_server", "serve"]
