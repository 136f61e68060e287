# =============================================================================
# core/resources.py  -  Read-only MCP Resources
# =============================================================================
#
#   libremodel://config        -> current ServerConfig as JSON
#   libremodel://instructions  -> markdown usage guide
#
# Both are pure functions of the config passed in.
# =============================================================================

import json

from core.config import MAX_TOKENS_RANGE, ServerConfig


CONFIG_URI = "libremodel://config"
INSTRUCTIONS_URI = "libremodel://instructions"


def render_config(config: ServerConfig) -> str:
    return json.dumps(config.to_dict(), indent=2)


_INSTRUCTIONS_TEMPLATE = """# LibreModel MCP Server

This MCP server provides a bridge between Claude Desktop and your local LibreModel (Gigi) instance running via llama-server.

## Available Tools

### `chat`
Main tool for conversing with LibreModel. Supports full parameter control.

**Parameters:**
- `message` (required): Your message to LibreModel
- `temperature`: Sampling temperature (0.0-2.0, default: {temperature})
- `max_tokens`: Maximum tokens to generate ({min_tokens}-{max_tokens_limit}, default: {max_tokens})
- `top_p`: Nucleus sampling (0.0-1.0, default: {top_p})
- `top_k`: Top-k sampling (default: {top_k})
- `system_prompt`: Optional system prompt prefix

### `quick_test`
Run predefined tests to check LibreModel's capabilities.

**Test types:** hello, math, creative, knowledge

### `health_check`
Check if your llama-server is running and responsive.

## Setup

1. Make sure llama-server is running: `./llama-server -m your_model.gguf -c 2048 --port 8080`
2. Configure Claude Desktop to use this MCP server
3. Start chatting with LibreModel through Claude!

## Current Configuration

- Server URL: {url}
- Default Temperature: {temperature}
- Default Max Tokens: {max_tokens}

Made with ❤️ for open-source AI!"""


def render_instructions(config: ServerConfig) -> str:
    return _INSTRUCTIONS_TEMPLATE.format(
        url=config.url,
        temperature=config.default_temperature,
        max_tokens=config.default_max_tokens,
        top_p=config.default_top_p,
        top_k=config.default_top_k,
        min_tokens=MAX_TOKENS_RANGE[0],
        max_tokens_limit=MAX_TOKENS_RANGE[1],
    )
