"""Shared type definitions for the mcps pipeline."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BlockKind = Literal["text"]

ValidatedArgs = MappingProxyType[str, object]

DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class TextBlock:
    """A single content block of a response envelope."""

    text: str
    kind: BlockKind = "text"

    def to_dict(self) -> dict[str, str]:
        """Return the wire shape of the block."""
        return {"type": self.kind, "text": self.text}


@dataclass(frozen=True)
class ResponseEnvelope:
    """Uniform success/error wrapper returned for every invocation.

    Built fresh per invocation and never mutated afterwards.
    Every failure, whatever its class, is a single text block
    with is_error=True.
    """

    blocks: tuple[TextBlock, ...] = ()
    is_error: bool = False

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> ResponseEnvelope:
        """Build a success envelope with one block per line."""
        return cls(blocks=tuple(TextBlock(text=line) for line in lines))

    @classmethod
    def error(cls, message: str) -> ResponseEnvelope:
        """Build an error envelope carrying a single message."""
        return cls(blocks=(TextBlock(text=message),), is_error=True)

    @property
    def texts(self) -> list[str]:
        """Return the text of every block, in order."""
        return [block.text for block in self.blocks]

    def to_dict(self) -> dict[str, object]:
        """Return the wire shape of the envelope."""
        return {
            "content": [block.to_dict() for block in self.blocks],
            "isError": self.is_error,
        }


HandlerOutput = list[str] | ResponseEnvelope


@dataclass(frozen=True)
class HttpResponse:
    """Parsed result of a successful outbound GET."""

    status_code: int
    url: str
    payload: object = None


class ServiceSettings(BaseModel):
    """Process configuration, read once at startup.

    Credentials left unset are reported by the handler that
    needs them as a ConfigurationError envelope.
    """

    model_config = ConfigDict(frozen=True)

    openweather_api_key: str | None = None
    openweather_base_url: str = "https://api.openweathermap.org"
    weather_api_key: str | None = None
    weather_api_base_url: str = "https://api.weatherapi.com"
    daily_hot_base_url: str = "http://localhost:6688"
    http_timeout_seconds: float = Field(
        DEFAULT_HTTP_TIMEOUT_SECONDS, gt=0,
    )


@dataclass(frozen=True)
class ToolContext:
    """Input handed to a tool handler.

    args holds the validated arguments; it is read-only and
    owned by the invocation that produced it.
    """

    args: ValidatedArgs
    settings: ServiceSettings = field(default_factory=ServiceSettings)


@dataclass(frozen=True)
class ResourceContext:
    """Input handed to a resource handler."""

    uri: str
    params: Mapping[str, str] = field(default_factory=dict)
    settings: ServiceSettings = field(default_factory=ServiceSettings)
