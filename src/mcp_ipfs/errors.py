"""Errors surfaced to MCP callers as error results."""

from __future__ import annotations


class W3McpError(Exception):
    pass


class ToolArgumentError(W3McpError, ValueError):
    def __init__(self, tool_name: str, details: str) -> None:
        super().__init__(f"Invalid arguments for {tool_name}: {details}")
        self.tool_name = tool_name


class UnknownToolError(W3McpError, LookupError):
    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ToolUnavailableError(W3McpError):
    pass


class W3CommandError(W3McpError, RuntimeError):
    def __init__(
        self,
        command_line: str,
        reason: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        message = f"Failed to execute '{command_line}': {reason}"
        if stderr.strip():
            message = f"{message}\nStderr: {stderr.strip()}"
        super().__init__(message)
        self.command_line = command_line
        self.returncode = returncode
        self.stderr = stderr


class OutputParseError(W3McpError, ValueError):
    def __init__(self, message: str, raw_output: str = "") -> None:
        super().__init__(message)
        self.raw_output = raw_output


class NdjsonParseError(OutputParseError):
    def __init__(self, message: str, *, line_number: int, line: str, raw_output: str = "") -> None:
        super().__init__(message, raw_output)
        self.line_number = line_number
        self.line = line
