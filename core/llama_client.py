# =============================================================================
# core/llama_client.py  -  Completion Client for llama-server
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns one normalized chat request into ONE HTTP call against a local
#   llama.cpp llama-server, and hands back either a CompletionResponse or a
#   classified BackendError.
#
# ENDPOINTS USED:
#   POST {url}/completion   -> generate text (no client-side timeout)
#   GET  {url}/health       -> liveness, bounded by health_timeout_seconds
#   GET  {url}/props        -> optional server metadata, best effort
#
# PROMPT FRAMING:
#   llama-server's /completion endpoint takes a raw prompt, not chat
#   messages.  We frame the message as a single "Human: ... Assistant:" turn
#   and send stop sequences for the next human turn so the model answers
#   once instead of writing both sides of a conversation.
#
# There is no retry and no backoff: a failed call is reported as-is.
# =============================================================================

import asyncio
import json
import logging
from typing import Optional

import httpx

from core.config import ServerConfig
from core.errors import (
    BackendEmptyResponseError,
    BackendHTTPError,
    BackendTimeoutError,
    BackendUnreachableError,
)
from core.models import CompletionRequest, CompletionResponse, HealthStatus


logger = logging.getLogger(__name__)

# Placeholder shown when /props is missing or fails.
NO_SERVER_INFO = "No additional info available"


def build_prompt(message: str, system_prompt: str = "") -> str:
    """Frame a single user message as one Human/Assistant turn.

    >>> build_prompt("hi")
    'Human: hi\\n\\nAssistant:'
    >>> build_prompt("hi", "Be terse.")
    'Be terse.\\n\\nHuman: hi\\n\\nAssistant:'
    """
    if system_prompt:
        return f"{system_prompt}\n\nHuman: {message}\n\nAssistant:"
    return f"Human: {message}\n\nAssistant:"


class CompletionClient:
    """Async HTTP client for one llama-server instance."""

    def __init__(
        self,
        config: ServerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._base_url = config.url.rstrip("/")
        # Tests inject httpx.MockTransport here.
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _http_client(self) -> httpx.AsyncClient:
        # timeout=None: deadlines are applied explicitly where they exist.
        return httpx.AsyncClient(timeout=None, transport=self._transport)

    def build_request(
        self,
        message: str,
        temperature: float,
        max_tokens: int,
        top_p: float,
        top_k: int,
        system_prompt: str = "",
    ) -> CompletionRequest:
        return CompletionRequest(
            prompt=build_prompt(message, system_prompt),
            temperature=temperature,
            n_predict=max_tokens,
            top_p=top_p,
            top_k=top_k,
            stop=list(self._config.stop_sequences),
            stream=False,
        )

    async def complete(
        self,
        message: str,
        temperature: float,
        max_tokens: int,
        top_p: float,
        top_k: int,
        system_prompt: str = "",
    ) -> CompletionResponse:
        """Run one completion.

        Bounds on the sampling parameters are enforced by core/contracts.py
        before this is called; they are not re-checked here.

        Raises:
            BackendHTTPError: llama-server returned a non-2xx status.
            BackendEmptyResponseError: 2xx but ``content`` missing or empty.
            BackendUnreachableError: connection, DNS or body decoding failure.
        """
        request = self.build_request(
            message, temperature, max_tokens, top_p, top_k, system_prompt
        )
        url = f"{self._base_url}/completion"
        logger.debug("POST %s (n_predict=%d)", url, request.n_predict)

        try:
            async with self._http_client() as client:
                response = await client.post(url, json=request.to_payload())
        except httpx.HTTPError as e:
            raise BackendUnreachableError(
                f"Cannot reach llama-server at {self._base_url}: {e}"
            ) from e

        if not response.is_success:
            raise BackendHTTPError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise BackendUnreachableError(f"Malformed response from llama-server: {e}") from e
        if not isinstance(data, dict):
            raise BackendUnreachableError("Malformed response from llama-server: expected a JSON object")

        if not data.get("content"):
            raise BackendEmptyResponseError()
        try:
            return CompletionResponse.from_payload(data)
        except (TypeError, ValueError) as e:
            raise BackendUnreachableError(f"Malformed response from llama-server: {e}") from e

    async def check_health(self) -> HealthStatus:
        """Probe GET /health, then enrich with /props.

        Raises:
            BackendTimeoutError: /health did not answer within the deadline.
            BackendUnreachableError: /health could not be reached at all.
        """
        timeout = self._config.health_timeout_seconds
        url = f"{self._base_url}/health"

        try:
            async with self._http_client() as client:
                response = await asyncio.wait_for(client.get(url), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise BackendTimeoutError(timeout) from e
        except httpx.HTTPError as e:
            raise BackendUnreachableError(str(e) or type(e).__name__) from e

        server_info = await self.fetch_server_info()
        return HealthStatus(
            healthy=response.is_success,
            http_status=response.status_code,
            server_info=server_info,
        )

    async def fetch_server_info(self) -> str:
        """Best-effort GET /props.

        Returns the properties as pretty JSON, or NO_SERVER_INFO when the
        endpoint is missing, fails, or returns something that is not JSON.
        Never raises.
        """
        url = f"{self._base_url}/props"
        try:
            async with self._http_client() as client:
                response = await asyncio.wait_for(
                    client.get(url), timeout=self._config.health_timeout_seconds
                )
            if not response.is_success:
                logger.debug("/props returned HTTP %d", response.status_code)
                return NO_SERVER_INFO
            return json.dumps(response.json(), indent=2)
        except Exception as e:
            logger.debug("/props unavailable: %r", e)
            return NO_SERVER_INFO
