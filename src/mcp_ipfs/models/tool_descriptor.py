"""Catalog entry for one MCP tool."""

from __future__ import annotations

from typing import Any, Type

from mcp import types
from pydantic import BaseModel, ConfigDict

from mcp_ipfs.schemas.tool_args import ToolArgs


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    input_schema: dict[str, Any]
    args_model: Type[ToolArgs]

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema)

    def to_catalog_entry(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}
