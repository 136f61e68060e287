# =============================================================================
# core/config.py  -  Server Configuration (built once, never mutated)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the llama-server URL and the default sampling parameters that the
#   tools fall back to when the caller omits them.
#
# DATA SOURCE:
#   LLAMA_SERVER_URL   -> base URL of llama-server (default localhost:8080)
#
#   main.py calls load_dotenv() before load_config(), so a local .env file
#   works the same as exported variables.
#
# The config is a frozen dataclass.  It is created once at startup and passed
# explicitly into the client, the tools and the resources.  Nothing reads
# os.environ after that.
# =============================================================================

from dataclasses import asdict, dataclass
from typing import Mapping, Optional
import os

from core.errors import ConfigurationError


DEFAULT_SERVER_URL = "http://localhost:8080"

# Stop sequences sent with every completion.  Order matters for parity with
# the prompt framing in core/llama_client.py.
STOP_SEQUENCES = ("Human:", "\nHuman:", "User:", "\nUser:", "<|user|>")

# -----------------------------------------------------------------------------
# Sampling bounds accepted by the tool contracts (core/contracts.py)
# -----------------------------------------------------------------------------
TEMPERATURE_RANGE = (0.0, 2.0)
MAX_TOKENS_RANGE = (1, 2048)
TOP_P_RANGE = (0.0, 1.0)
TOP_K_MIN = 1


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings for the bridge."""

    url: str = DEFAULT_SERVER_URL
    default_temperature: float = 0.7
    default_max_tokens: int = 512
    default_top_p: float = 0.95
    default_top_k: int = 40
    stop_sequences: tuple[str, ...] = STOP_SEQUENCES
    health_timeout_seconds: float = 5.0

    def __post_init__(self) -> None:
        problems = []
        if not self.url:
            problems.append("url must not be empty")
        if not TEMPERATURE_RANGE[0] <= self.default_temperature <= TEMPERATURE_RANGE[1]:
            problems.append(f"default_temperature {self.default_temperature} outside {TEMPERATURE_RANGE}")
        if not MAX_TOKENS_RANGE[0] <= self.default_max_tokens <= MAX_TOKENS_RANGE[1]:
            problems.append(f"default_max_tokens {self.default_max_tokens} outside {MAX_TOKENS_RANGE}")
        if not TOP_P_RANGE[0] <= self.default_top_p <= TOP_P_RANGE[1]:
            problems.append(f"default_top_p {self.default_top_p} outside {TOP_P_RANGE}")
        if self.default_top_k < TOP_K_MIN:
            problems.append(f"default_top_k {self.default_top_k} below {TOP_K_MIN}")
        if self.health_timeout_seconds <= 0:
            problems.append("health_timeout_seconds must be positive")
        if problems:
            raise ConfigurationError("; ".join(problems))

    def to_dict(self) -> dict:
        """JSON-friendly view used by the config resource."""
        data = asdict(self)
        data["stop_sequences"] = list(self.stop_sequences)
        return data


def load_config(environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build the ServerConfig from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass a
                 plain dict.

    Returns:
        A validated, immutable ServerConfig.
    """
    env = os.environ if environ is None else environ
    url = env.get("LLAMA_SERVER_URL", "").strip() or DEFAULT_SERVER_URL
    return ServerConfig(url=url.rstrip("/"))
