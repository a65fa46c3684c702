import json
from typing import Any

import pytest
from pydantic import Field

from mcp_ipfs.schemas import tool_args as ta
from mcp_ipfs.schemas.tool_args import ToolArgs
from mcp_ipfs.tool_notes import ToolNoteRegistry
from mcp_ipfs.tool_registry import ToolRegistry
from mcp_ipfs.tool_registry import build_descriptor
from mcp_ipfs.tool_registry import tool_name_for
from mcp_ipfs.w3_tools import W3Tools

from conftest import RecordingW3Client


class EchoThingArgs(ToolArgs):
    value: str = Field(description="Value to echo.")


class EchoHandlers:
    async def echo_thing(self, args: EchoThingArgs) -> dict[str, Any]:
        return {"echo": args.value}


def _payload(result: Any) -> Any:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


def test_tool_name_for_converts_class_names() -> None:
    assert tool_name_for(ta.W3CanUploadLsArgs) == "w3_can_upload_ls"
    assert tool_name_for(ta.W3BridgeGenerateTokensArgs) == "w3_bridge_generate_tokens"
    assert tool_name_for(ta.W3UpArgs) == "w3_up"
    assert tool_name_for(EchoThingArgs) == "echo_thing"


def test_catalog_has_every_tool_with_a_handler(registry: ToolRegistry) -> None:
    names = registry.names()

    assert len(names) == 35
    assert names[0] == "w3_login"
    assert {"w3_space_ls", "w3_up", "w3_ls", "w3_rm", "w3_delegation_create", "w3_reset"} <= set(names)
    for name in names:
        assert callable(getattr(W3Tools, name))


def test_registry_requires_handler_for_each_model(tools: W3Tools) -> None:
    with pytest.raises(ValueError, match="No handler for tool 'echo_thing'"):
        ToolRegistry(tools, args_models=[EchoThingArgs])


def test_undocumented_model_gets_default_description(empty_notes: ToolNoteRegistry) -> None:
    descriptor = build_descriptor(EchoThingArgs, empty_notes)

    assert descriptor.description == "Tool for echo_thing operation."
    assert descriptor.input_schema["properties"]["value"]["description"] == "Value to echo."


def test_descriptions_include_packaged_notes(registry: ToolRegistry) -> None:
    login = registry.get("w3_login").description
    assert login.startswith("Initiates the w3 login process")
    assert "Agent was authorized by" in login

    assert registry.get("w3_up").description.endswith("Requires ABSOLUTE paths for file arguments.")
    assert "first make sure you are logged in" in registry.get("w3_space_ls").description
    assert "cannot be run via MCP" in registry.get("w3_space_create").description
    assert "ABSOLUTE paths for file arguments" not in registry.get("w3_ls").description


def test_list_tools_exposes_json_schemas(registry: ToolRegistry) -> None:
    tools = {tool.name: tool for tool in registry.list_tools()}

    up_schema = tools["w3_up"].inputSchema
    assert up_schema["type"] == "object"
    assert set(up_schema["properties"]) == {"paths", "noWrap", "hidden"}
    assert up_schema["required"] == ["paths"]
    assert tools["w3_reset"].inputSchema["properties"]["confirmReset"]["const"] == "yes-i-am-sure"


@pytest.mark.anyio
async def test_call_returns_json_text_payload(client: RecordingW3Client, registry: ToolRegistry) -> None:
    client.stdout = "did:key:abc  my-space\n"

    result = await registry.call("w3_space_ls", {})

    assert result.isError is False
    assert _payload(result) == {"spaces": [{"did": "did:key:abc", "name": "my-space", "isCurrent": False}]}


@pytest.mark.anyio
async def test_call_accepts_missing_arguments(client: RecordingW3Client, registry: ToolRegistry) -> None:
    result = await registry.call("w3_ls", None)

    assert result.isError is False
    assert client.calls == [["ls", "--json"]]


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("tool", "arguments"),
    [
        ("w3_up", {"paths": []}),
        ("w3_up", {"paths": "/tmp/a"}),
        ("w3_space_use", {"spaceDid": "not-a-did"}),
        ("w3_rm", {}),
        ("w3_rm", {"cid": "bafy", "removeShards": "true"}),
        ("w3_delegation_create", {"audienceDid": "did:key:a", "capabilities": []}),
        ("w3_can_blob_ls", {"size": -1}),
        ("w3_reset", {"confirmReset": "sure"}),
        ("w3_space_provision", {"customerId": "me@example.com", "spaceDid": "did:web:x"}),
    ],
)
async def test_invalid_arguments_never_reach_subprocess(
    client: RecordingW3Client,
    registry: ToolRegistry,
    tool: str,
    arguments: dict[str, Any],
) -> None:
    result = await registry.call(tool, arguments)

    assert result.isError is True
    assert _payload(result)["error"].startswith(f"Invalid arguments for {tool}:")
    assert client.calls == []


@pytest.mark.anyio
async def test_unknown_tool_is_error_result(registry: ToolRegistry) -> None:
    result = await registry.call("w3_fly", {})

    assert result.isError is True
    assert _payload(result) == {"error": "Unknown tool: w3_fly"}


@pytest.mark.anyio
async def test_handler_failures_become_error_results(client: RecordingW3Client, registry: ToolRegistry) -> None:
    client.stdout = "not json\n"

    result = await registry.call("w3_proof_ls", {})

    assert result.isError is True
    assert "Failed to parse NDJSON output" in _payload(result)["error"]


@pytest.mark.anyio
async def test_space_create_is_error_result(client: RecordingW3Client, registry: ToolRegistry) -> None:
    result = await registry.call("w3_space_create", {"name": "photos"})

    assert result.isError is True
    assert "cannot be run via MCP" in _payload(result)["error"]
    assert client.calls == []


@pytest.mark.anyio
async def test_custom_handlers_can_back_a_registry(empty_notes: ToolNoteRegistry) -> None:
    registry = ToolRegistry(EchoHandlers(), empty_notes, args_models=[EchoThingArgs])

    result = await registry.call("echo_thing", {"value": "hi"})

    assert registry.names() == ["echo_thing"]
    assert _payload(result) == {"echo": "hi"}


class BrokenHandlers:
    async def echo_thing(self, args: EchoThingArgs) -> dict[str, Any]:
        raise RuntimeError(f"cannot echo {args.value}")


@pytest.mark.anyio
async def test_unexpected_handler_errors_become_error_results(empty_notes: ToolNoteRegistry) -> None:
    registry = ToolRegistry(BrokenHandlers(), empty_notes, args_models=[EchoThingArgs])

    result = await registry.call("echo_thing", {"value": "hi"})

    assert result.isError is True
    assert _payload(result) == {"error": "cannot echo hi"}
