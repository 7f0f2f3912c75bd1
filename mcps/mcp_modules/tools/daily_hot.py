"""Ranked hot-list tool backed by a DailyHot aggregation endpoint."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from returns.io import IOResult

from mcps.mcp_modules import io_ops
from mcps.mcp_modules.commands.types import CommandSpec, FieldKind, FieldSpec
from mcps.mcp_modules.upstream import classify_upstream_failure, parse_payload

if TYPE_CHECKING:
    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, HttpResponse, ToolContext

ERROR_LABEL = "Error fetching daily news data"
# The aggregator reports failures in "status" first.
DETAIL_FIELDS: tuple[str, ...] = ("status", "message", "error")


class HotListSource(Enum):
    """Closed set of list sources the aggregator serves."""

    ZHIHU = "zhihu"
    WEIBO = "weibo"
    BAIDU = "baidu"
    DOUBAN = "douban"
    TOUTIAO = "toutiao"
    BILIBILI = "bilibili"
    DOUYIN = "douyin"
    KUAISHOU = "kuaishou"
    HUPU = "hupu"
    WEREAD = "weread"
    GEEKPARK = "geekpark"
    GUOKR = "guokr"
    NETEASE_NEWS = "netease-news"
    SINA_NEWS = "sina-news"
    KR36 = "36kr"
    ITHOME = "ithome"
    THEPAPER = "thepaper"
    QQ_NEWS = "qq-news"
    CLS = "cls"
    JIN10 = "jin10"
    WALLSTREET = "wallstreet"
    YICAI = "yicai"
    CAIXIN = "caixin"
    JUEJIN = "juejin"
    CSDN = "csdn"
    HELLOGITHUB = "hellogithub"
    GITHUB = "github"
    DOUBAN_GROUP = "douban-group"
    TIEBA = "tieba"
    DOUBAN_MOVIE = "douban-movie"
    STARRAIL = "starrail"
    GENSHIN = "genshin"
    LOL = "lol"


SOURCE_DISPLAY_NAMES: MappingProxyType[HotListSource, str] = (
    MappingProxyType(
        {
            HotListSource.ZHIHU: "知乎",
            HotListSource.WEIBO: "微博",
            HotListSource.BAIDU: "百度",
            HotListSource.DOUBAN: "豆瓣",
            HotListSource.TOUTIAO: "头条",
            HotListSource.BILIBILI: "哔哩哔哩",
            HotListSource.DOUYIN: "抖音",
            HotListSource.KUAISHOU: "快手",
            HotListSource.HUPU: "虎扑",
            HotListSource.WEREAD: "微信读书",
            HotListSource.GEEKPARK: "极客公园",
            HotListSource.GUOKR: "果壳",
            HotListSource.NETEASE_NEWS: "网易新闻",
            HotListSource.SINA_NEWS: "新浪新闻",
            HotListSource.KR36: "36氪",
            HotListSource.ITHOME: "IT之家",
            HotListSource.THEPAPER: "澎湃新闻",
            HotListSource.QQ_NEWS: "QQ新闻",
            HotListSource.CLS: "财联社",
            HotListSource.JIN10: "金十数据",
            HotListSource.WALLSTREET: "华尔街见闻",
            HotListSource.YICAI: "第一财经",
            HotListSource.CAIXIN: "财新网",
            HotListSource.JUEJIN: "掘金",
            HotListSource.CSDN: "CSDN",
            HotListSource.HELLOGITHUB: "HelloGitHub",
            HotListSource.GITHUB: "GitHub 趋势",
            HotListSource.DOUBAN_GROUP: "豆瓣小组",
            HotListSource.TIEBA: "百度贴吧",
            HotListSource.DOUBAN_MOVIE: "豆瓣电影",
            HotListSource.STARRAIL: "崩坏：星穹铁道",
            HotListSource.GENSHIN: "原神",
            HotListSource.LOL: "英雄联盟",
        }
    )
)


class HotListItem(BaseModel):
    """One ranked entry of a hot list."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    title: str
    cover: str | None = None
    author: str | None = None
    desc: str | None = None
    hot: int | float | str | None = None
    timestamp: int | float | str | None = None
    url: str
    mobile_url: str = Field(alias="mobileUrl")


class HotListPayload(BaseModel):
    """Aggregator response for one list source."""

    model_config = ConfigDict(populate_by_name=True)

    update_time: int | str = Field(alias="updateTime")
    from_cache: bool = Field(False, alias="fromCache")
    data: list[HotListItem]


def render_item(item: HotListItem) -> str:
    """Format one entry with the fixed list template."""
    hot = "" if item.hot is None else item.hot
    return (
        f"标题📖：{item.title} \n"
        f"热度🔥：{hot} \n"
        f"链接🔗：{item.url} \n"
        f"描述📖： {item.desc or ''}\n\n"
    )


def render_hot_list(
    source: HotListSource,
    payload: HotListPayload,
) -> list[str]:
    """Header block naming the list, then one body block."""
    body = "\n".join(render_item(item) for item in payload.data)
    return [
        f"榜单类型: {SOURCE_DISPLAY_NAMES[source]}",
        f"榜单数据:\n\n{body}",
    ]


def get_daily_hot(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Fetch one ranked list from the aggregator (cache preferred)."""
    source = HotListSource(ctx.args["type"])

    def _parse(
        response: HttpResponse,
    ) -> IOResult[HotListPayload, PipelineError]:
        return parse_payload(
            HotListPayload, response, step_name="get_daily_hot",
        )

    def _render(payload: HotListPayload) -> list[str]:
        return render_hot_list(source, payload)

    def _classify(error: PipelineError) -> PipelineError:
        return classify_upstream_failure(
            error, label=ERROR_LABEL, detail_fields=DETAIL_FIELDS,
        )

    return (
        io_ops.http_get(
            f"{ctx.settings.daily_hot_base_url}/{source.value}",
            params={"cache": "true"},
            timeout=ctx.settings.http_timeout_seconds,
        )
        .bind(_parse)
        .map(_render)
        .alt(_classify)
    )


def _source_catalog() -> str:
    return ", ".join(
        f"{source.value}({SOURCE_DISPLAY_NAMES[source]})"
        for source in HotListSource
    )


GET_DAILY_HOT = CommandSpec(
    name="get_daily_hot",
    description="获取榜单信息",
    handler=get_daily_hot,
    input_shape={
        "type": FieldSpec(
            kind=FieldKind.ENUM,
            values=tuple(source.value for source in HotListSource),
            description=f"榜单类型: {_source_catalog()}",
        ),
    },
)
