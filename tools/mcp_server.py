# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools and resources)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the MCP tools and resources exposed to Claude Desktop (or any
#   MCP client).  Each tool is a thin wrapper around core/ logic: validate
#   the arguments, call llama-server, format the answer.
#
# HOW IT WORKS (the flow):
#   1. The MCP client calls a tool by name (e.g. "chat")
#   2. FastMCP checks the arguments against the advertised schema and routes
#      the call to the wrapper registered in build_server()
#   3. The wrapper delegates to LibreModelTools, which validates against
#      core/contracts.py, calls core/llama_client.py and formats the result
#      with core/formatting.py
#   4. Success -> markdown text.  Failure -> ToolError with the formatted
#      text, which FastMCP returns as a result with isError=true
#
# TOOLS:
#   chat          -> one completion with full sampling control
#   quick_test    -> canned prompt with fixed sampling, to smoke-test the model
#   health_check  -> GET /health (+ /props) on llama-server
#
# RESOURCES:
#   libremodel://config, libremodel://instructions (see core/resources.py)
#
# RUNNING THIS SERVER:
#   python main.py      (stdio transport, launched by the MCP client)
# =============================================================================

import logging
from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import (
    MAX_TOKENS_RANGE,
    TEMPERATURE_RANGE,
    TOP_K_MIN,
    TOP_P_RANGE,
    ServerConfig,
)
from core.contracts import (
    ChatArguments,
    QuickTestArguments,
    validate_arguments,
)
from core.errors import LibreModelError
from core.formatting import (
    format_chat_error,
    format_chat_response,
    format_health_error,
    format_health_status,
    format_quick_test_error,
    format_quick_test_response,
)
from core.llama_client import CompletionClient
from core.models import ToolOutcome
from core.resources import (
    CONFIG_URI,
    INSTRUCTIONS_URI,
    render_config,
    render_instructions,
)


SERVER_NAME = "libremodel-mcp-server"
SERVER_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# =============================================================================
# Logging helpers
# =============================================================================
# Logs go to STDERR (configured in main.py).  STDOUT carries the MCP JSON
# stream; anything printed there would corrupt it.
#
#   CYAN   -> incoming tool calls with parameters
#   GREEN  -> responses
#   YELLOW -> intermediate status
#   RED    -> error outcomes
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, outcome: ToolOutcome) -> ToolOutcome:
    """Log the size of the outcome (GREEN) or the error text (RED), then return it."""
    if outcome.is_error:
        first_line = outcome.text.splitlines()[0] if outcome.text else ""
        logger.info(f"{_RED}  ← {tool_name} failed: {first_line}{_RESET}")
    else:
        logger.info(f"{_GREEN}  ← {tool_name} response: {len(outcome.text)} chars{_RESET}")
    return outcome


# =============================================================================
# Quick-test prompts
# =============================================================================
QUICK_TEST_PROMPTS: dict[str, str] = {
    "hello": "Hello! Can you introduce yourself?",
    "math": "What is 15 + 27?",
    "creative": "Write a short haiku about artificial intelligence.",
    "knowledge": "What is the capital of France?",
}

# Fixed sampling for quick_test, independent of the server defaults.
QUICK_TEST_SAMPLING = {
    "temperature": 0.7,
    "max_tokens": 256,
    "top_p": 0.95,
    "top_k": 40,
}


def quick_test_prompt(test_type: str) -> str:
    """Prompt for a test type; unknown types get the hello prompt."""
    return QUICK_TEST_PROMPTS.get(test_type, QUICK_TEST_PROMPTS["hello"])


# =============================================================================
# LibreModelTools: the tool logic, independent of FastMCP
# =============================================================================
class LibreModelTools:
    """Validate -> call llama-server -> format, for each tool.

    Every method returns a ToolOutcome and never raises: backend failures,
    invalid arguments and unexpected bugs all become error outcomes.
    """

    def __init__(self, config: ServerConfig, client: CompletionClient):
        self.config = config
        self.client = client

    async def chat(
        self,
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> ToolOutcome:
        _log_request("chat", message=message, temperature=temperature,
                     max_tokens=max_tokens, top_p=top_p, top_k=top_k,
                     system_prompt=system_prompt)
        try:
            args = validate_arguments(ChatArguments, {
                "message": message,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
                "top_k": top_k,
                "system_prompt": system_prompt,
            })
            params = args.resolve(self.config)
            response = await self.client.complete(
                message=params.message,
                temperature=params.temperature,
                max_tokens=params.max_tokens,
                top_p=params.top_p,
                top_k=params.top_k,
                system_prompt=params.system_prompt,
            )
        except LibreModelError as e:
            return _log_response("chat", format_chat_error(e))
        except Exception as e:
            logger.exception("Unexpected failure in chat")
            return _log_response("chat", format_chat_error(e))

        _log_status(f"Generated {response.tokens_predicted} tokens")
        return _log_response("chat", format_chat_response(response))

    async def quick_test(self, test_type: str = "hello") -> ToolOutcome:
        _log_request("quick_test", test_type=test_type)
        try:
            args = validate_arguments(QuickTestArguments, {"test_type": test_type})
        except LibreModelError as e:
            return _log_response("quick_test", format_quick_test_error(test_type, e))

        prompt = quick_test_prompt(args.test_type)
        if args.test_type not in QUICK_TEST_PROMPTS:
            _log_status(f"Unknown test type {args.test_type!r}, using hello prompt")

        try:
            response = await self.client.complete(message=prompt, system_prompt="", **QUICK_TEST_SAMPLING)
        except LibreModelError as e:
            return _log_response("quick_test", format_quick_test_error(args.test_type, e))
        except Exception as e:
            logger.exception("Unexpected failure in quick_test")
            return _log_response("quick_test", format_quick_test_error(args.test_type, e))

        return _log_response(
            "quick_test", format_quick_test_response(args.test_type, prompt, response)
        )

    async def health_check(self) -> ToolOutcome:
        _log_request("health_check")
        server_url = self.client.base_url
        try:
            status = await self.client.check_health()
        except LibreModelError as e:
            return _log_response("health_check", format_health_error(e, server_url))
        except Exception as e:
            logger.exception("Unexpected failure in health_check")
            return _log_response("health_check", format_health_error(e, server_url))

        _log_status(f"/health -> HTTP {status.http_status}")
        return _log_response("health_check", format_health_status(status, server_url))


def _deliver(outcome: ToolOutcome) -> str:
    # FastMCP marks the result isError=true when a ToolError is raised.
    if outcome.is_error:
        raise ToolError(outcome.text)
    return outcome.text


# =============================================================================
# Server factory
# =============================================================================
def build_server(
    config: ServerConfig, client: Optional[CompletionClient] = None
) -> FastMCP:
    """Create the FastMCP server with all tools and resources registered.

    Args:
        config: The process-wide configuration.
        client: Completion client to use.  Defaults to one built from
                ``config``; tests pass one backed by httpx.MockTransport.
    """
    tools = LibreModelTools(config, client or CompletionClient(config))
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    # -------------------------------------------------------------------------
    # TOOL: chat
    # -------------------------------------------------------------------------
    @mcp.tool(name="chat")
    async def chat(
        message: Annotated[str, Field(description="Your message to LibreModel")],
        temperature: Annotated[float, Field(
            ge=TEMPERATURE_RANGE[0], le=TEMPERATURE_RANGE[1],
            description="Sampling temperature (0.0-2.0)",
        )] = config.default_temperature,
        max_tokens: Annotated[int, Field(
            ge=MAX_TOKENS_RANGE[0], le=MAX_TOKENS_RANGE[1],
            description="Maximum tokens to generate",
        )] = config.default_max_tokens,
        top_p: Annotated[float, Field(
            ge=TOP_P_RANGE[0], le=TOP_P_RANGE[1],
            description="Nucleus sampling parameter",
        )] = config.default_top_p,
        top_k: Annotated[int, Field(
            ge=TOP_K_MIN, description="Top-k sampling parameter",
        )] = config.default_top_k,
        system_prompt: Annotated[str, Field(
            description="Optional system prompt to prefix the conversation",
        )] = "",
    ) -> str:
        """Have a conversation with LibreModel (Gigi).

        Sends one message to the local llama-server and returns the reply
        with a token-count footer.  Every call is independent; no history
        is kept between calls.
        """
        return _deliver(await tools.chat(
            message=message, temperature=temperature, max_tokens=max_tokens,
            top_p=top_p, top_k=top_k, system_prompt=system_prompt,
        ))

    # -------------------------------------------------------------------------
    # TOOL: quick_test
    # -------------------------------------------------------------------------
    @mcp.tool(name="quick_test")
    async def quick_test(
        test_type: Annotated[
            Literal["hello", "math", "creative", "knowledge"], Field(description="Type of test to run")
        ] = "hello",
    ) -> str:
        """Run a quick test to see if LibreModel is responding.

        Test types: hello, math, creative, knowledge.
        """
        return _deliver(await tools.quick_test(test_type))

    # -------------------------------------------------------------------------
    # TOOL: health_check
    # -------------------------------------------------------------------------
    @mcp.tool(name="health_check")
    async def health_check() -> str:
        """Check if the llama-server is running and responsive."""
        return _deliver(await tools.health_check())

    # -------------------------------------------------------------------------
    # RESOURCES
    # -------------------------------------------------------------------------
    @mcp.resource(
        CONFIG_URI,
        name="config",
        description="Current server configuration and settings",
        mime_type="application/json",
    )
    def config_resource() -> str:
        return render_config(config)

    @mcp.resource(
        INSTRUCTIONS_URI,
        name="instructions",
        description="How to use this MCP server with LibreModel",
        mime_type="text/markdown",
    )
    def instructions_resource() -> str:
        return render_instructions(config)

    return mcp
