"""Tool catalog derived from the argument models, plus call dispatch."""

from __future__ import annotations

import inspect
import json
import logging
import re
from typing import Any, Awaitable, Callable, Iterable, Mapping, Type

from mcp import types
from pydantic import ValidationError

from mcp_ipfs.errors import ToolArgumentError, UnknownToolError, W3McpError
from mcp_ipfs.models.tool_descriptor import ToolDescriptor
from mcp_ipfs.schemas.tool_args import ToolArgs, iter_tool_args
from mcp_ipfs.tool_notes import ToolNoteRegistry

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[dict[str, Any]]]

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def tool_name_for(args_model: Type[ToolArgs]) -> str:
    """``W3CanUploadLsArgs`` -> ``w3_can_upload_ls``."""
    class_name = args_model.__name__
    if class_name.endswith("Args"):
        class_name = class_name[: -len("Args")]
    return _CAMEL_BOUNDARY_RE.sub("_", class_name).lower()


def base_description(args_model: Type[ToolArgs], tool_name: str) -> str:
    doc = args_model.__dict__.get("__doc__")
    if doc:
        return inspect.cleandoc(doc)
    return f"Tool for {tool_name} operation."


def build_descriptor(args_model: Type[ToolArgs], notes: ToolNoteRegistry | None = None) -> ToolDescriptor:
    name = tool_name_for(args_model)
    description = base_description(args_model, name)
    if notes is not None:
        description = notes.describe(name, description)
    return ToolDescriptor(
        name=name,
        description=description.strip(),
        input_schema=args_model.model_json_schema(by_alias=True),
        args_model=args_model,
    )


def text_result(payload: Any, *, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload))],
        isError=is_error,
    )


def error_result(message: str) -> types.CallToolResult:
    return text_result({"error": message}, is_error=True)


class ToolRegistry:
    def __init__(
        self,
        handlers: object,
        notes: ToolNoteRegistry | None = None,
        args_models: Iterable[Type[ToolArgs]] | None = None,
    ) -> None:
        self._descriptors: dict[str, ToolDescriptor] = {}
        self._handlers: dict[str, ToolHandler] = {}
        for args_model in args_models if args_models is not None else iter_tool_args():
            descriptor = build_descriptor(args_model, notes)
            handler = getattr(handlers, descriptor.name, None)
            if handler is None or not callable(handler):
                raise ValueError(
                    f"No handler for tool {descriptor.name!r} on {type(handlers).__name__}."
                )
            if descriptor.name in self._descriptors:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")
            self._descriptors[descriptor.name] = descriptor
            self._handlers[descriptor.name] = handler
        logger.debug("Registered %d tools", len(self._descriptors))

    def names(self) -> list[str]:
        return list(self._descriptors)

    def descriptors(self) -> list[ToolDescriptor]:
        return list(self._descriptors.values())

    def get(self, name: str) -> ToolDescriptor:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise UnknownToolError(name)
        return descriptor

    def list_tools(self) -> list[types.Tool]:
        return [descriptor.to_mcp_tool() for descriptor in self._descriptors.values()]

    def validate(self, name: str, arguments: Mapping[str, Any] | None) -> ToolArgs:
        descriptor = self.get(name)
        try:
            return descriptor.args_model.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            raise ToolArgumentError(name, str(exc)) from exc

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        args = self.validate(name, arguments)
        return await self._handlers[name](args)

    async def call(self, name: str, arguments: Mapping[str, Any] | None) -> types.CallToolResult:
        """
        Runs a tool and wraps its payload as JSON text content.
        Every failure becomes an ``{"error": ...}`` error result.
        """
        logger.info("Handling CallTool request for: %s", name)
        try:
            payload = await self.invoke(name, arguments)
        except W3McpError as exc:
            logger.error("Error handling tool '%s': %s", name, exc)
            return error_result(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error handling tool '%s'", name)
            return error_result(str(exc) or type(exc).__name__)
        return text_result(payload)
