"""Unit tests for output formatting."""
from core.errors import BackendTimeoutError, BackendUnreachableError
from core.formatting import (
    format_chat_response,
    format_health_error,
    format_health_status,
)
from core.models import CompletionResponse, HealthStatus


def test_chat_footer_uses_reported_model() -> None:
    outcome = format_chat_response(CompletionResponse(content="x", model="gigi", tokens_predicted=5))
    assert outcome.text.endswith("*Tokens: 5 | Model: gigi*")


def test_unhealthy_status_is_not_an_error_outcome() -> None:
    outcome = format_health_status(
        HealthStatus(healthy=False, http_status=503, server_info="{}"), "http://x"
    )
    assert outcome.is_error is False
    assert "❌ Unhealthy" in outcome.text
    assert "**HTTP Status:** 503" in outcome.text


def test_timeout_and_unreachable_read_differently() -> None:
    timeout = format_health_error(BackendTimeoutError(5), "http://x")
    refused = format_health_error(BackendUnreachableError("Connection refused"), "http://x")

    assert "Request timed out after 5 seconds" in timeout.text
    assert "Connection refused" not in timeout.text
    assert "Cannot reach LibreModel server at http://x" in refused.text
    assert "Cannot reach LibreModel server at http://x" in timeout.text
    assert "timed out" not in refused.text
    assert timeout.is_error and refused.is_error
