"""Tests for ResponseEnvelope and shared types."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType

import pytest
from pydantic import ValidationError

from mcps.mcp_modules.types import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    ResourceContext,
    ResponseEnvelope,
    ServiceSettings,
    TextBlock,
    ToolContext,
)


class TestResponseEnvelope:
    """Tests for envelope construction and wire shape."""

    def test_from_lines_one_block_per_line(self) -> None:
        """Every line becomes its own text block."""
        envelope = ResponseEnvelope.from_lines(["a", "b", "c"])
        assert envelope.texts == ["a", "b", "c"]
        assert all(block.kind == "text" for block in envelope.blocks)
        assert envelope.is_error is False

    def test_from_lines_empty(self) -> None:
        """Zero lines is a valid success with zero blocks."""
        envelope = ResponseEnvelope.from_lines([])
        assert envelope.blocks == ()
        assert envelope.is_error is False

    def test_error_single_block(self) -> None:
        """error() carries exactly one block and is_error=True."""
        envelope = ResponseEnvelope.error("boom")
        assert envelope.texts == ["boom"]
        assert envelope.is_error is True

    def test_default_is_not_error(self) -> None:
        """isError defaults to false."""
        assert ResponseEnvelope().is_error is False

    def test_to_dict_wire_shape(self) -> None:
        """to_dict matches the content/isError wire format."""
        envelope = ResponseEnvelope.from_lines(["hi"])
        assert envelope.to_dict() == {
            "content": [{"type": "text", "text": "hi"}],
            "isError": False,
        }

    def test_envelope_is_frozen(self) -> None:
        """Envelopes are never mutated after construction."""
        envelope = ResponseEnvelope.error("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            envelope.is_error = False  # type: ignore[misc]

    def test_text_block_to_dict(self) -> None:
        """TextBlock serializes with type=text."""
        assert TextBlock(text="t").to_dict() == {"type": "text", "text": "t"}


class TestServiceSettings:
    """Tests for the settings model."""

    def test_defaults(self) -> None:
        """Credentials unset, timeout bounded by default."""
        settings = ServiceSettings()
        assert settings.openweather_api_key is None
        assert settings.weather_api_key is None
        assert settings.daily_hot_base_url == "http://localhost:6688"
        assert settings.http_timeout_seconds == DEFAULT_HTTP_TIMEOUT_SECONDS

    def test_rejects_non_positive_timeout(self) -> None:
        """Timeout must be positive."""
        with pytest.raises(ValidationError):
            ServiceSettings(http_timeout_seconds=0)

    def test_is_frozen(self) -> None:
        """Settings cannot be changed after startup."""
        settings = ServiceSettings()
        with pytest.raises(ValidationError):
            settings.weather_api_key = "x"  # type: ignore[misc]


def test_contexts_default_settings() -> None:
    """Tool and resource contexts fall back to default settings."""
    tool_ctx = ToolContext(args=MappingProxyType({"a": 1}))
    resource_ctx = ResourceContext(uri="system://info")
    assert tool_ctx.settings == ServiceSettings()
    assert resource_ctx.params == {}
