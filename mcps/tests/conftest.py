"""Shared test fixtures for the mcps test suite."""
from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from returns.io import IOSuccess

from mcps.mcp_modules.commands.registry import CommandRegistry
from mcps.mcp_modules.commands.types import CommandSpec, FieldKind, FieldSpec
from mcps.mcp_modules.types import HttpResponse, ServiceSettings

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from returns.io import IOResult

    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, ToolContext


class RecordingHandler:
    """Handler double that records every call it receives."""

    def __init__(self, lines: list[str] | None = None) -> None:
        self.calls: list[ToolContext] = []
        self.lines = lines if lines is not None else ["ok"]

    def __call__(
        self,
        ctx: ToolContext,
    ) -> IOResult[HandlerOutput, PipelineError]:
        self.calls.append(ctx)
        return IOSuccess(list(self.lines))


@pytest.fixture
def settings() -> ServiceSettings:
    """Return settings with every credential configured."""
    return ServiceSettings(
        openweather_api_key="ow-key",
        openweather_base_url="https://ow.test",
        weather_api_key="wa-key",
        weather_api_base_url="https://wa.test",
        daily_hot_base_url="http://hot.test",
        http_timeout_seconds=5.0,
    )


@pytest.fixture
def recording_handler() -> RecordingHandler:
    """Return a fresh RecordingHandler."""
    return RecordingHandler(lines=["first", "second"])


@pytest.fixture
def sample_spec(recording_handler: RecordingHandler) -> CommandSpec:
    """Return a command with one field of every kind."""
    return CommandSpec(
        name="sample",
        description="Sample command",
        handler=recording_handler,
        input_shape={
            "text": FieldSpec(kind=FieldKind.STRING),
            "count": FieldSpec(
                kind=FieldKind.NUMBER, required=False, default=3,
            ),
            "flag": FieldSpec(kind=FieldKind.BOOLEAN, required=False),
            "mode": FieldSpec(
                kind=FieldKind.ENUM,
                values=("fast", "slow"),
                required=False,
                default="fast",
            ),
        },
    )


@pytest.fixture
def sample_registry(sample_spec: CommandSpec) -> CommandRegistry:
    """Return a frozen registry holding sample_spec."""
    registry = CommandRegistry()
    registry.register(sample_spec)
    return registry.freeze()


@pytest.fixture
def mock_http_get(mocker: MagicMock) -> MagicMock:
    """Patch the outbound GET seam with a default empty success."""
    return mocker.patch(  # type: ignore[no-any-return]
        "mcps.mcp_modules.io_ops.http_get",
        return_value=IOSuccess(
            HttpResponse(status_code=200, url="http://test", payload={}),
        ),
    )


@pytest.fixture(autouse=True)
def mock_write_stderr(mocker: MagicMock) -> MagicMock:
    """Keep pipeline diagnostics out of the test output."""
    return mocker.patch(  # type: ignore[no-any-return]
        "mcps.mcp_modules.io_ops.write_stderr",
        return_value=IOSuccess(None),
    )
