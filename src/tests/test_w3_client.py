import json
import logging
import sys
import textwrap
from pathlib import Path

import pytest

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.errors import W3CommandError
from mcp_ipfs.w3_client import W3Client


def _fake_w3(tmp_path: Path, body: str) -> list[str]:
    script = tmp_path / "fake_w3.py"
    script.write_text(textwrap.dedent(body), encoding="utf-8")
    return [sys.executable, str(script)]


@pytest.mark.anyio
async def test_run_passes_arguments_without_shell(tmp_path: Path) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import json, sys
        print(json.dumps(sys.argv[1:]))
        """,
    )
    client = W3Client(base)

    result = await client.run(["up", "/tmp/my file.txt", "--no-wrap", "$(rm -rf /)"])

    assert json.loads(result.stdout) == ["up", "/tmp/my file.txt", "--no-wrap", "$(rm -rf /)"]
    assert result.returncode == 0
    assert result.argv[-4:] == ("up", "/tmp/my file.txt", "--no-wrap", "$(rm -rf /)")
    assert "'/tmp/my file.txt'" in result.command_line


@pytest.mark.anyio
async def test_run_logs_stderr_as_warning_on_success(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import sys
        sys.stderr.write("Uploading 1 file\\n")
        print("bafyroot")
        """,
    )
    client = W3Client(base)

    with caplog.at_level(logging.WARNING):
        result = await client.run(["up", "/tmp/a"])

    assert result.output == "bafyroot"
    assert result.stderr.strip() == "Uploading 1 file"
    assert "w3 command stderr: Uploading 1 file" in caplog.text


@pytest.mark.anyio
async def test_run_raises_on_non_zero_exit_with_stderr(tmp_path: Path) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import sys
        sys.stderr.write("Error: no current space\\n")
        sys.exit(3)
        """,
    )
    client = W3Client(base)

    with pytest.raises(W3CommandError) as excinfo:
        await client.run(["ls", "--json"])

    assert excinfo.value.returncode == 3
    assert "exited with status 3" in str(excinfo.value)
    assert "Stderr: Error: no current space" in str(excinfo.value)
    assert str(excinfo.value).startswith("Failed to execute '")


@pytest.mark.anyio
async def test_run_raises_when_executable_missing(tmp_path: Path) -> None:
    client = W3Client([str(tmp_path / "missing-w3")])

    with pytest.raises(W3CommandError) as excinfo:
        await client.run(["space", "ls"])

    assert excinfo.value.returncode is None
    assert "missing-w3" in excinfo.value.command_line


@pytest.mark.anyio
async def test_run_times_out(tmp_path: Path) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import time
        time.sleep(30)
        """,
    )
    client = W3Client(base, timeout=0.5)

    with pytest.raises(W3CommandError) as excinfo:
        await client.run(["ls"])

    assert "timed out after 0.5s" in str(excinfo.value)


@pytest.mark.anyio
async def test_run_does_not_share_server_stdin(tmp_path: Path) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import json, sys
        print(json.dumps(sys.stdin.read()))
        """,
    )
    client = W3Client(base, timeout=10)

    result = await client.run(["login", "me@example.com"])

    assert json.loads(result.stdout) == ""


@pytest.mark.anyio
@pytest.mark.skipif(not Path("/proc/self/fd/0").exists(), reason="needs /proc")
async def test_run_attaches_devnull_as_stdin(tmp_path: Path) -> None:
    base = _fake_w3(
        tmp_path,
        """
        import os
        print(os.readlink("/proc/self/fd/0"))
        """,
    )
    client = W3Client(base, timeout=10)

    result = await client.run(["space", "ls"])

    assert result.output == "/dev/null"


def test_from_settings_splits_command() -> None:
    settings = ServerSettings(command="npx -y w3", command_timeout_seconds=12.5, _env_file=None)

    client = W3Client.from_settings(settings)

    assert client.base_argv == ("npx", "-y", "w3")


def test_empty_base_argv_is_rejected() -> None:
    with pytest.raises(ValueError):
        W3Client(())
