"""Current weather tool backed by the OpenWeatherMap API."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from returns.io import IOFailure, IOResult

from mcps.mcp_modules import io_ops
from mcps.mcp_modules.commands.types import CommandSpec, FieldKind, FieldSpec
from mcps.mcp_modules.errors import PipelineError
from mcps.mcp_modules.formatting import format_number
from mcps.mcp_modules.upstream import (
    NotFoundRule,
    classify_upstream_failure,
    parse_payload,
)

if TYPE_CHECKING:
    from mcps.mcp_modules.types import HandlerOutput, HttpResponse, ToolContext

MISSING_KEY_MESSAGE = (
    "Error: OpenWeather API key not found."
    " Please set OPENWEATHER_API_KEY environment variable."
)
ERROR_LABEL = "Error fetching weather data"


class _Main(BaseModel):
    temp: float
    feels_like: float
    humidity: float


class _Condition(BaseModel):
    description: str


class _Wind(BaseModel):
    speed: float


class CurrentWeatherPayload(BaseModel):
    """Subset of the /data/2.5/weather response we render."""

    name: str
    main: _Main
    weather: list[_Condition] = Field(min_length=1)
    wind: _Wind


def render_current_weather(payload: CurrentWeatherPayload) -> list[str]:
    """Format a current-weather payload as a single text block."""
    return [
        f"Weather in {payload.name}:\n"
        f"- Temperature: {format_number(payload.main.temp)}°C\n"
        f"- Feels like: {format_number(payload.main.feels_like)}°C\n"
        f"- Humidity: {format_number(payload.main.humidity)}%\n"
        f"- Weather: {payload.weather[0].description}\n"
        f"- Wind speed: {format_number(payload.wind.speed)} m/s",
    ]


def get_weather(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Fetch current weather for a city.

    Missing API key is a ConfigurationError reported before any
    outbound call. A 404 means the location is unknown.
    """
    api_key = ctx.settings.openweather_api_key
    if not api_key:
        return IOFailure(
            PipelineError(
                step_name="get_weather",
                error_type="ConfigurationError",
                message=MISSING_KEY_MESSAGE,
                context={"setting": "OPENWEATHER_API_KEY"},
            ),
        )

    city = str(ctx.args["city"])
    country = ctx.args.get("country")
    location = f"{city},{country}" if country else city

    def _parse(
        response: HttpResponse,
    ) -> IOResult[CurrentWeatherPayload, PipelineError]:
        return parse_payload(
            CurrentWeatherPayload, response, step_name="get_weather",
        )

    def _classify(error: PipelineError) -> PipelineError:
        return classify_upstream_failure(
            error,
            label=ERROR_LABEL,
            not_found=NotFoundRule(message=f"Location not found: {city}"),
        )

    return (
        io_ops.http_get(
            f"{ctx.settings.openweather_base_url}/data/2.5/weather",
            params={"q": location, "appid": api_key, "units": "metric"},
            timeout=ctx.settings.http_timeout_seconds,
        )
        .bind(_parse)
        .map(render_current_weather)
        .alt(_classify)
    )


GET_WEATHER = CommandSpec(
    name="get_weather",
    description="Get current weather information for a location",
    handler=get_weather,
    input_shape={
        "city": FieldSpec(
            kind=FieldKind.STRING,
            description="The city name to get weather for",
        ),
        "country": FieldSpec(
            kind=FieldKind.STRING,
            required=False,
            description="The country code (optional)",
        ),
    },
)
