"""Runs the w3 command-line client as a subprocess."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Sequence

import anyio

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.errors import W3CommandError
from mcp_ipfs.models.command_result import CommandResult

logger = logging.getLogger(__name__)

LOG_PREVIEW_CHARS = 100


class W3Client:
    def __init__(self, base_argv: Sequence[str] = ("w3",), timeout: float | None = None) -> None:
        if not base_argv:
            raise ValueError("base_argv must name the w3 executable.")
        self._base_argv: tuple[str, ...] = tuple(base_argv)
        self._timeout: float | None = timeout

    @classmethod
    def from_settings(cls, settings: ServerSettings) -> "W3Client":
        return cls(settings.command_argv(), timeout=settings.command_timeout_seconds)

    @property
    def base_argv(self) -> tuple[str, ...]:
        return self._base_argv

    async def run(self, args: Sequence[str]) -> CommandResult:
        """
        Runs ``w3 <args>`` and returns its decoded output.
        Raises W3CommandError when the process cannot start, times out or exits non-zero.
        """
        argv = (*self._base_argv, *args)
        command_line = shlex.join(argv)
        logger.debug("Executing: %s", command_line)
        try:
            # The MCP transport owns our stdin; w3 must never read from it.
            with anyio.fail_after(self._timeout):
                completed = await anyio.run_process(list(argv), stdin=subprocess.DEVNULL, check=False)
        except TimeoutError as exc:
            logger.error("w3 command timed out after %ss: %s", self._timeout, command_line)
            raise W3CommandError(command_line, f"timed out after {self._timeout}s") from exc
        except OSError as exc:
            logger.error("Could not start w3 command %r: %s", command_line, exc)
            raise W3CommandError(command_line, str(exc)) from exc

        stdout = completed.stdout.decode("utf-8", errors="replace") if completed.stdout else ""
        stderr = completed.stderr.decode("utf-8", errors="replace") if completed.stderr else ""

        if completed.returncode != 0:
            logger.error("w3 command failed with exit status %d: %s", completed.returncode, command_line)
            raise W3CommandError(
                command_line,
                f"exited with status {completed.returncode}",
                returncode=completed.returncode,
                stderr=stderr,
            )
        if stderr.strip():
            # w3 prints progress and informational messages on stderr.
            logger.warning("w3 command stderr: %s", stderr.strip())
        logger.debug("w3 command stdout: %s", stdout[:LOG_PREVIEW_CHARS])
        return CommandResult(argv=argv, stdout=stdout, stderr=stderr, returncode=completed.returncode)
