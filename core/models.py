# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the bridge)
# =============================================================================
#
# Every value here is request-scoped: built for one tool call, dropped after.
# Nothing is cached and nothing is shared between calls except ServerConfig
# (see core/config.py).
# =============================================================================

from dataclasses import asdict, dataclass, field
from typing import Any


# -----------------------------------------------------------------------------
# CompletionRequest - the JSON body sent to POST /completion
# -----------------------------------------------------------------------------
@dataclass
class CompletionRequest:
    """One llama-server completion request."""

    prompt: str
    temperature: float
    n_predict: int                     # llama-server's name for max_tokens
    top_p: float
    top_k: int
    stop: list[str] = field(default_factory=list)
    stream: bool = False               # this bridge never streams

    def to_payload(self) -> dict:
        return asdict(self)


# -----------------------------------------------------------------------------
# CompletionResponse - the parsed body of a successful /completion call
# -----------------------------------------------------------------------------
# llama-server returns a lot more than we need.  Only the fields below are
# kept; anything else in the body is ignored.
# -----------------------------------------------------------------------------
@dataclass
class CompletionResponse:
    """Generated text plus the metadata the formatters show."""

    content: str
    model: str = ""
    tokens_predicted: int = 0
    tokens_evaluated: int = 0
    tokens_cached: int = 0
    truncated: bool = False
    stopped_eos: bool = False
    stopped_word: bool = False
    stopped_limit: bool = False
    stopping_word: str = ""
    timings: dict = field(default_factory=dict)
    generation_settings: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CompletionResponse":
        """Build a response from the decoded JSON body.

        Missing optional keys fall back to their defaults.  The caller is
        responsible for rejecting an empty ``content``.
        """
        return cls(
            content=data.get("content") or "",
            model=data.get("model") or "",
            tokens_predicted=int(data.get("tokens_predicted") or 0),
            tokens_evaluated=int(data.get("tokens_evaluated") or 0),
            tokens_cached=int(data.get("tokens_cached") or 0),
            truncated=bool(data.get("truncated", False)),
            stopped_eos=bool(data.get("stopped_eos", False)),
            stopped_word=bool(data.get("stopped_word", False)),
            stopped_limit=bool(data.get("stopped_limit", False)),
            stopping_word=data.get("stopping_word") or "",
            timings=data.get("timings") or {},
            generation_settings=data.get("generation_settings") or {},
        )


@dataclass
class HealthStatus:
    """Result of GET /health, enriched with /props when available."""

    healthy: bool                      # True iff /health returned 2xx
    http_status: int
    server_info: str                   # pretty JSON, or NO_SERVER_INFO


@dataclass
class ToolOutcome:
    """Display text for one tool call, and whether it represents a failure."""

    text: str
    is_error: bool = False
