"""Unit tests for ServerConfig loading and validation."""
import pytest

from core.config import DEFAULT_SERVER_URL, ServerConfig, load_config
from core.errors import ConfigurationError


def test_default_url_when_env_missing() -> None:
    assert load_config({}).url == DEFAULT_SERVER_URL


def test_url_from_env_is_stripped() -> None:
    config = load_config({"LLAMA_SERVER_URL": " http://gpu-box:9000/ "})
    assert config.url == "http://gpu-box:9000"


def test_defaults_match_tool_contracts() -> None:
    config = ServerConfig()
    assert config.default_temperature == 0.7
    assert config.default_max_tokens == 512
    assert config.default_top_p == 0.95
    assert config.default_top_k == 40
    assert config.health_timeout_seconds == 5.0


def test_out_of_range_default_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="default_max_tokens"):
        ServerConfig(default_max_tokens=4096)


def test_config_is_immutable() -> None:
    config = ServerConfig()
    with pytest.raises(AttributeError):
        config.url = "http://elsewhere"
