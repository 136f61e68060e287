"""Unit tests for the config and instructions resources."""
import json

from core.config import ServerConfig
from core.resources import render_config, render_instructions


def test_config_resource_is_json_of_settings() -> None:
    config = ServerConfig(url="http://llama.local:8081")

    data = json.loads(render_config(config))

    assert data["url"] == "http://llama.local:8081"
    assert data["default_max_tokens"] == 512
    assert data["stop_sequences"] == ["Human:", "\nHuman:", "User:", "\nUser:", "<|user|>"]


def test_instructions_interpolate_current_config() -> None:
    config = ServerConfig(url="http://llama.local:8081", default_temperature=0.4, default_max_tokens=300)

    text = render_instructions(config)

    assert text.startswith("# LibreModel MCP Server")
    assert "- Server URL: http://llama.local:8081" in text
    assert "- Default Temperature: 0.4" in text
    assert "- Default Max Tokens: 300" in text
    for tool in ("`chat`", "`quick_test`", "`health_check`"):
        assert tool in text
