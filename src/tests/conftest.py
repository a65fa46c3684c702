from pathlib import Path
from typing import Sequence

import pytest

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.models.command_result import CommandResult
from mcp_ipfs.tool_notes import ToolNoteRegistry
from mcp_ipfs.tool_notes import default_note_roots
from mcp_ipfs.tool_registry import ToolRegistry
from mcp_ipfs.w3_client import W3Client
from mcp_ipfs.w3_tools import W3Tools


class RecordingW3Client(W3Client):
    def __init__(self, stdout: str = "", stderr: str = "") -> None:
        super().__init__(("w3",))
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[list[str]] = []

    async def run(self, args: Sequence[str]) -> CommandResult:
        self.calls.append(list(args))
        return CommandResult(argv=("w3", *args), stdout=self.stdout, stderr=self.stderr, returncode=0)


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings(
        login_email="me@example.com",
        command="w3",
        gateway_url="https://w3s.link/ipfs/",
        _env_file=None,
    )


@pytest.fixture
def client() -> RecordingW3Client:
    return RecordingW3Client()


@pytest.fixture
def tools(client: RecordingW3Client, settings: ServerSettings) -> W3Tools:
    return W3Tools(client, settings)


@pytest.fixture
def registry(tools: W3Tools) -> ToolRegistry:
    return ToolRegistry(tools, ToolNoteRegistry(default_note_roots()))


@pytest.fixture
def empty_notes(tmp_path: Path) -> ToolNoteRegistry:
    return ToolNoteRegistry([tmp_path / "no-notes"])


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
