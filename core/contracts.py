# =============================================================================
# core/contracts.py  -  Tool Input Contracts
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares, per tool, the arguments it accepts (types, bounds, defaults)
#   and validates raw argument dicts against them.
#
# HOW IT WORKS:
#   1. Each tool has a pydantic model describing its arguments.
#   2. validate_arguments() runs the model and, on failure, raises an
#      ArgumentValidationError listing EVERY broken constraint (not just the
#      first one pydantic hit).
#   3. Optional sampling fields stay None when omitted; resolve() fills them
#      from ServerConfig.  An explicit 0.0 temperature or top_p is kept as-is.
#
# Validation happens before the completion client is touched, so an invalid
# call never reaches llama-server.
# =============================================================================

from dataclasses import dataclass
from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import (
    MAX_TOKENS_RANGE,
    TEMPERATURE_RANGE,
    TOP_K_MIN,
    TOP_P_RANGE,
    ServerConfig,
)
from core.errors import ArgumentValidationError, Violation


ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class SamplingParameters:
    """Fully-resolved arguments for CompletionClient.complete()."""

    message: str
    temperature: float
    max_tokens: int
    top_p: float
    top_k: int
    system_prompt: str = ""


class ChatArguments(BaseModel):
    """Arguments of the ``chat`` tool."""

    model_config = ConfigDict(extra="forbid")

    message: str = Field(description="Your message to LibreModel")
    temperature: Optional[float] = Field(
        default=None, ge=TEMPERATURE_RANGE[0], le=TEMPERATURE_RANGE[1],
        description="Sampling temperature (0.0-2.0)",
    )
    max_tokens: Optional[int] = Field(
        default=None, ge=MAX_TOKENS_RANGE[0], le=MAX_TOKENS_RANGE[1],
        description="Maximum tokens to generate",
    )
    top_p: Optional[float] = Field(
        default=None, ge=TOP_P_RANGE[0], le=TOP_P_RANGE[1],
        description="Nucleus sampling parameter",
    )
    top_k: Optional[int] = Field(
        default=None, ge=TOP_K_MIN,
        description="Top-k sampling parameter",
    )
    system_prompt: Optional[str] = Field(
        default=None,
        description="Optional system prompt to prefix the conversation",
    )

    def resolve(self, config: ServerConfig) -> SamplingParameters:
        """Fill omitted fields from the server defaults."""
        return SamplingParameters(
            message=self.message,
            temperature=config.default_temperature if self.temperature is None else self.temperature,
            max_tokens=config.default_max_tokens if self.max_tokens is None else self.max_tokens,
            top_p=config.default_top_p if self.top_p is None else self.top_p,
            top_k=config.default_top_k if self.top_k is None else self.top_k,
            system_prompt=self.system_prompt or "",
        )


class QuickTestArguments(BaseModel):
    """Arguments of the ``quick_test`` tool.

    ``test_type`` is a plain string here: unknown values are not rejected,
    the tool falls back to the ``hello`` prompt instead.
    """

    model_config = ConfigDict(extra="forbid")

    test_type: str = Field(default="hello", description="Type of test to run")


def validate_arguments(model: type[ModelT], arguments: dict) -> ModelT:
    """Validate raw tool arguments against a contract model.

    Args:
        model: The pydantic contract class (e.g. ChatArguments).
        arguments: Raw arguments as received from the caller.  Keys whose
                   value is None are treated as omitted.

    Returns:
        The validated model instance.

    Raises:
        ArgumentValidationError: with one Violation per broken constraint.
    """
    present = {k: v for k, v in arguments.items() if v is not None}
    try:
        return model.model_validate(present)
    except ValidationError as e:
        violations = [
            Violation(
                field=".".join(str(part) for part in err["loc"]) or "arguments",
                message=err["msg"],
            )
            for err in e.errors()
        ]
        raise ArgumentValidationError(violations) from e
