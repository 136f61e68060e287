# =============================================================================
# core/errors.py  -  Error Taxonomy
# =============================================================================
#
#   LibreModelError
#     ├── ConfigurationError         bad settings at startup (fatal)
#     ├── ArgumentValidationError    tool arguments outside their contract
#     └── BackendError               anything that went wrong talking to llama-server
#           ├── BackendUnreachableError     connection / DNS / malformed body
#           ├── BackendHTTPError            non-2xx status
#           ├── BackendEmptyResponseError   2xx but no content
#           └── BackendTimeoutError         health check deadline elapsed
#
# The tool layer catches LibreModelError and turns it into an error outcome,
# so none of these ever reach the MCP transport as an unhandled exception.
# =============================================================================

from dataclasses import dataclass


class LibreModelError(Exception):
    """Base class for every error raised by the bridge."""


class ConfigurationError(LibreModelError):
    """The server configuration is invalid."""


@dataclass(frozen=True)
class Violation:
    """One broken constraint on one argument."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ArgumentValidationError(LibreModelError):
    """Tool arguments were rejected before any network call."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        details = "\n".join(f"- {v}" for v in self.violations)
        super().__init__(f"Invalid arguments:\n{details}")


class BackendError(LibreModelError):
    """Base class for llama-server failures."""


class BackendUnreachableError(BackendError):
    """The request never produced a usable HTTP response."""


class BackendHTTPError(BackendError):
    """llama-server answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}")


class BackendEmptyResponseError(BackendError):
    """llama-server answered 2xx but the completion had no content."""

    def __init__(self, message: str = "No content in response from llama-server"):
        super().__init__(message)


class BackendTimeoutError(BackendError, TimeoutError):
    """The health check did not answer within its deadline."""

    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"Request timed out after {seconds:g} seconds")
