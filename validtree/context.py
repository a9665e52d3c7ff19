"""
Context manager for validation configuration (e.g., the required message).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

DEFAULT_REQUIRED_MESSAGE = "is required"


@dataclass(frozen=True)
class ValidationConfig:
    """Settings captured into validation nodes when a builder compiles."""

    required_message: str = DEFAULT_REQUIRED_MESSAGE
    render_value: Callable[[Any], str] = str


# Context variable for the active configuration
_config: ContextVar[ValidationConfig] = ContextVar(
    "validation_config", default=ValidationConfig()
)


def current_config() -> ValidationConfig:
    """Return the configuration active in the current context."""
    return _config.get()


@contextmanager
def validation_context(
    *,
    required_message: Optional[str] = None,
    render_value: Optional[Callable[[Any], str]] = None,
):
    """
    Context manager for validation configuration.

    Args:
        required_message: Message recorded when a required field is absent.
        render_value: Converts the validated value to text for the {0}
                      placeholder of constraint messages.

    Settings are read when a validation is built, not when it runs:

        with validation_context(required_message="must be provided"):
            check = validation(define_rules)

        check(subject)  # still reports "must be provided"
    """
    overrides: dict[str, Any] = {}
    if required_message is not None:
        overrides["required_message"] = required_message
    if render_value is not None:
        overrides["render_value"] = render_value

    token = _config.set(replace(_config.get(), **overrides))
    try:
        yield
    finally:
        _config.reset(token)
