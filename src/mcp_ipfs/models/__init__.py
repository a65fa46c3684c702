"""Model types for the tool catalog and command results."""

from mcp_ipfs.models.command_result import CommandResult
from mcp_ipfs.models.space_entry import SpaceEntry
from mcp_ipfs.models.tool_descriptor import ToolDescriptor
from mcp_ipfs.models.tool_note import ToolNote

__all__ = [
    "CommandResult",
    "SpaceEntry",
    "ToolDescriptor",
    "ToolNote",
]
