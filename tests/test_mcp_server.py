"""End-to-end tests through an in-memory FastMCP client."""
import json

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from tools.mcp_server import build_server


@pytest.fixture
def server(config, client):
    return build_server(config, client)


@pytest.mark.asyncio
async def test_lists_three_tools_with_bounded_schemas(server) -> None:
    async with Client(server) as mcp_client:
        tools = {tool.name: tool for tool in await mcp_client.list_tools()}

    assert set(tools) == {"chat", "quick_test", "health_check"}
    dumped = tools["chat"].model_dump(by_alias=True)
    chat_schema = dumped.get("inputSchema") or dumped["input_schema"]
    properties = chat_schema["properties"]
    assert properties["temperature"]["maximum"] == 2.0
    assert properties["max_tokens"]["minimum"] == 1
    assert properties["max_tokens"]["maximum"] == 2048
    assert chat_schema["required"] == ["message"]


@pytest.mark.asyncio
async def test_chat_round_trip(server, fake_server) -> None:
    fake_server.json_on("/completion", {"content": "Hello!", "tokens_predicted": 3, "model": "gigi-7b"})

    async with Client(server) as mcp_client:
        result = await mcp_client.call_tool("chat", {"message": "hi"})

    text = result.content[0].text
    assert "Hello!" in text
    assert "Tokens: 3 | Model: gigi-7b" in text


@pytest.mark.asyncio
async def test_backend_error_surfaces_as_tool_error(server, fake_server) -> None:
    fake_server.on("/completion", lambda r: httpx.Response(500))

    async with Client(server) as mcp_client:
        with pytest.raises(ToolError, match="500"):
            await mcp_client.call_tool("chat", {"message": "hi"})


@pytest.mark.asyncio
async def test_out_of_range_argument_never_reaches_backend(server, fake_server) -> None:
    async with Client(server) as mcp_client:
        with pytest.raises(ToolError):
            await mcp_client.call_tool("chat", {"message": "hi", "temperature": 5})

    assert fake_server.requests == []


@pytest.mark.asyncio
async def test_resources_are_readable(server, config) -> None:
    async with Client(server) as mcp_client:
        [config_doc] = await mcp_client.read_resource("libremodel://config")
        [instructions_doc] = await mcp_client.read_resource("libremodel://instructions")

    assert json.loads(config_doc.text)["url"] == config.url
    assert f"- Server URL: {config.url}" in instructions_doc.text
