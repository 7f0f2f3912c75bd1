"""Error types for the mcps invocation pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field

# Upper bound for the context part of str(PipelineError).
MAX_CONTEXT_CHARS = 300


@dataclass(frozen=True)
class PipelineError:
    """Structured error for a failed invocation stage.

    Carried as the failure value of IOResult/Result; never
    raised. error_type names the failure class (ValidationError,
    UpstreamTransportError, ConfigurationError, ...). message
    is the text the caller sees; str() is the stderr form.
    """

    step_name: str
    error_type: str
    message: str
    context: dict[str, object] = field(default_factory=dict)

    def __str__(self) -> str:
        """One-line diagnostic: type, message, step, then context."""
        line = f"{self.error_type}: {self.message} (in {self.step_name})"
        if not self.context:
            return line
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        if len(details) > MAX_CONTEXT_CHARS:
            details = details[: MAX_CONTEXT_CHARS - 3] + "..."
        return f"{line} [{details}]"


class DuplicateCommandError(RuntimeError):
    """A command or resource name was registered twice.

    Raised during service construction only. Indicates a
    programming error, so it is allowed to end the process.
    """


class RegistryFrozenError(RuntimeError):
    """Registration attempted after the registry was frozen."""
