# =============================================================================
# core/formatting.py  -  Tool Output Formatting
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns completion results, health results and errors into the markdown
#   text that MCP clients show to the user.  Every function returns a
#   ToolOutcome so the tool layer only has to decide how to hand it over.
#
# These are pure functions: no I/O, no logging, easy to test.
# =============================================================================

from core.models import CompletionResponse, HealthStatus, ToolOutcome


DEFAULT_MODEL_NAME = "LibreModel"


def format_chat_response(response: CompletionResponse) -> ToolOutcome:
    text = (
        f"**LibreModel (Gigi) responds:**\n\n"
        f"{response.content}\n\n"
        f"---\n"
        f"*Tokens: {response.tokens_predicted} | Model: {response.model or DEFAULT_MODEL_NAME}*"
    )
    return ToolOutcome(text=text)


def format_chat_error(error: Exception) -> ToolOutcome:
    return ToolOutcome(
        text=f"**Error communicating with LibreModel:**\n{error}",
        is_error=True,
    )


def format_quick_test_response(
    test_type: str, prompt: str, response: CompletionResponse
) -> ToolOutcome:
    text = (
        f"**{test_type} test result:**\n\n"
        f"**Prompt:** {prompt}\n\n"
        f"**LibreModel Response:**\n{response.content}\n\n"
        f"**Performance:**\n"
        f"- Tokens generated: {response.tokens_predicted}\n"
        f"- Tokens evaluated: {response.tokens_evaluated}\n"
        f"- Success: ✅"
    )
    return ToolOutcome(text=text)


def format_quick_test_error(test_type: str, error: Exception) -> ToolOutcome:
    return ToolOutcome(text=f"**{test_type} test failed:**\n{error}", is_error=True)


def format_health_status(status: HealthStatus, server_url: str) -> ToolOutcome:
    """Render a completed health check.

    An unhealthy status (non-2xx from /health) is still a successful tool
    call: the server answered, it just reported a problem.
    """
    state = "✅ Healthy" if status.healthy else "❌ Unhealthy"
    text = (
        f"**LibreModel Server Health Check:**\n\n"
        f"**Status:** {state}\n"
        f"**HTTP Status:** {status.http_status}\n"
        f"**Server URL:** {server_url}\n\n"
        f"**Server Information:**\n"
        f"```json\n{status.server_info}\n```"
    )
    return ToolOutcome(text=text)


def format_health_error(error: Exception, server_url: str) -> ToolOutcome:
    """Render a health check that never got an answer.

    The headline is the same for every failure; the error line tells a
    timeout apart from a refused connection.
    """
    headline = f"❌ Cannot reach LibreModel server at {server_url}"
    text = (
        f"**Health check failed:**\n"
        f"{headline}\n\n"
        f"**Error:** {error}\n\n"
        f"**Troubleshooting:**\n"
        f"- Is llama-server running?\n"
        f"- Is it listening on {server_url}?\n"
        f"- Check firewall/network settings"
    )
    return ToolOutcome(text=text, is_error=True)
