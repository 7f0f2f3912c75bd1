"""Tests for the daily hot-list tool."""
from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
from returns.io import IOFailure, IOSuccess

from mcps.mcp_modules.commands.dispatch import run_command
from mcps.mcp_modules.commands.registry import CommandRegistry
from mcps.mcp_modules.errors import PipelineError
from mcps.mcp_modules.tools.daily_hot import (
    GET_DAILY_HOT,
    SOURCE_DISPLAY_NAMES,
    HotListItem,
    HotListSource,
    render_item,
)
from mcps.mcp_modules.types import HttpResponse

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture

    from mcps.mcp_modules.types import ServiceSettings

ZHIHU = {
    "code": 200,
    "name": "zhihu",
    "updateTime": "2026-01-01T00:00:00.000Z",
    "fromCache": True,
    "data": [
        {
            "id": 1,
            "title": "First",
            "desc": "about first",
            "hot": 1200,
            "url": "https://z.test/1",
            "mobileUrl": "https://m.z.test/1",
        },
        {
            "id": "b2",
            "title": "Second",
            "url": "https://z.test/2",
            "mobileUrl": "https://m.z.test/2",
        },
    ],
}


@pytest.fixture
def registry() -> CommandRegistry:
    """Return a frozen registry holding only get_daily_hot."""
    registry = CommandRegistry()
    registry.register(GET_DAILY_HOT)
    return registry.freeze()


def test_renders_header_and_items(
    registry: CommandRegistry,
    settings: ServiceSettings,
    mock_http_get: MagicMock,
) -> None:
    """Header names the list; the body joins every item."""
    mock_http_get.return_value = IOSuccess(
        HttpResponse(status_code=200, url="http://hot.test/zhihu", payload=ZHIHU),
    )
    envelope = run_command(registry, "get_daily_hot", {"type": "zhihu"}, settings)
    assert envelope.is_error is False
    assert envelope.texts == [
        "榜单类型: 知乎",
        "榜单数据:\n\n"
        "标题📖：First \n热度🔥：1200 \n链接🔗：https://z.test/1 \n"
        "描述📖： about first\n\n"
        "\n"
        "标题📖：Second \n热度🔥： \n链接🔗：https://z.test/2 \n"
        "描述📖： \n\n",
    ]
    mock_http_get.assert_called_once_with(
        "http://hot.test/zhihu", params={"cache": "true"}, timeout=5.0,
    )


def test_unreachable_aggregator(
    registry: CommandRegistry,
    settings: ServiceSettings,
    mock_http_get: MagicMock,
) -> None:
    """A refused connection is one transport error block."""
    mock_http_get.return_value = IOFailure(
        PipelineError(
            step_name="io_ops.http_get",
            error_type="UpstreamTransportError",
            message="[Errno 111] Connection refused",
        ),
    )
    envelope = run_command(registry, "get_daily_hot", {"type": "weibo"}, settings)
    assert envelope.is_error is True
    assert envelope.texts == [
        "Error fetching daily news data: [Errno 111] Connection refused",
    ]


def test_undecodable_error_body_keeps_label(
    registry: CommandRegistry,
    settings: ServiceSettings,
    mocker: MockerFixture,
) -> None:
    """A non-UTF-8 502 body is reported as the status failure."""
    mocker.patch(
        "mcps.mcp_modules.io_ops.httpx.get",
        return_value=httpx.Response(
            502,
            content=b"\xe9chec \xff gateway",
            request=httpx.Request("GET", "http://hot.test/zhihu"),
        ),
    )
    envelope = run_command(registry, "get_daily_hot", {"type": "zhihu"}, settings)
    assert envelope.is_error is True
    assert envelope.texts == [
        "Error fetching daily news data: Request failed with status code 502",
    ]


def test_status_field_preferred(
    registry: CommandRegistry,
    settings: ServiceSettings,
    mock_http_get: MagicMock,
) -> None:
    """The aggregator's status text describes the failure."""
    mock_http_get.return_value = IOFailure(
        PipelineError(
            step_name="io_ops.http_get",
            error_type="UpstreamApplicationError",
            message="Request failed with status code 500",
            context={
                "status_code": 500,
                "body": {"message": "boom", "status": "source unavailable"},
            },
        ),
    )
    envelope = run_command(registry, "get_daily_hot", {"type": "weibo"}, settings)
    assert envelope.texts == [
        "Error fetching daily news data: source unavailable",
    ]


def test_unknown_source_rejected(
    registry: CommandRegistry,
    settings: ServiceSettings,
    mock_http_get: MagicMock,
) -> None:
    """Sources outside the closed set never reach the network."""
    envelope = run_command(registry, "get_daily_hot", {"type": "myspace"}, settings)
    assert envelope.is_error is True
    assert envelope.texts[0].startswith(
        "Invalid value for field 'type': expected one of: zhihu, weibo",
    )
    mock_http_get.assert_not_called()


def test_every_source_has_display_name() -> None:
    """All sources are described and listed in the field schema."""
    assert len(HotListSource) == 33
    assert set(SOURCE_DISPLAY_NAMES) == set(HotListSource)
    description = GET_DAILY_HOT.input_shape["type"].description
    for source in HotListSource:
        assert f"{source.value}({SOURCE_DISPLAY_NAMES[source]})" in description


def test_render_item_accepts_field_names() -> None:
    """Items build from python names as well as aliases."""
    item = HotListItem(
        id=7, title="T", url="u", mobile_url="m", hot="9万",
    )
    assert render_item(item) == (
        "标题📖：T \n热度🔥：9万 \n链接🔗：u \n描述📖： \n\n"
    )
