"""Multi-day forecast tool backed by the WeatherAPI.com forecast endpoint."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, cast

from pydantic import BaseModel
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
    "Error: Weather API key not found."
    " Please set WEATHER_API_KEY environment variable."
)
ERROR_LABEL = "Error fetching forecast data"
MIN_DAYS = 1
MAX_DAYS = 7
DEFAULT_DAYS = 3
# WeatherAPI.com: "No matching location found."
NO_LOCATION_ERROR_CODE = 1006


class TemperatureUnit(Enum):
    """Unit selector for rendered temperatures."""

    CELSIUS = "c"
    FAHRENHEIT = "f"


class _ConditionText(BaseModel):
    text: str


class _Location(BaseModel):
    name: str
    region: str = ""
    country: str = ""
    localtime: str = ""


class _Current(BaseModel):
    temp_c: float
    temp_f: float
    feelslike_c: float
    feelslike_f: float
    humidity: float
    wind_kph: float
    wind_mph: float
    condition: _ConditionText


class _Day(BaseModel):
    maxtemp_c: float
    maxtemp_f: float
    mintemp_c: float
    mintemp_f: float
    daily_chance_of_rain: float = 0
    condition: _ConditionText


class _ForecastDay(BaseModel):
    date: str
    day: _Day


class _Forecast(BaseModel):
    forecastday: list[_ForecastDay]


class ForecastPayload(BaseModel):
    """Subset of the /v1/forecast.json response we render."""

    location: _Location
    current: _Current
    forecast: _Forecast


def render_forecast(
    payload: ForecastPayload,
    unit: TemperatureUnit,
) -> list[str]:
    """Format a forecast as header, current and per-day blocks."""
    fahrenheit = unit is TemperatureUnit.FAHRENHEIT
    degree = "°F" if fahrenheit else "°C"
    speed = "mph" if fahrenheit else "kph"
    loc = payload.location
    place = ", ".join(part for part in (loc.name, loc.region, loc.country) if part)

    header = f"Forecast for {place}"
    if loc.localtime:
        header += f"\nLocal time: {loc.localtime}"

    cur = payload.current
    temp = cur.temp_f if fahrenheit else cur.temp_c
    feels = cur.feelslike_f if fahrenheit else cur.feelslike_c
    wind = cur.wind_mph if fahrenheit else cur.wind_kph
    current = (
        "Current conditions:\n"
        f"- Temperature: {format_number(temp)}{degree}\n"
        f"- Feels like: {format_number(feels)}{degree}\n"
        f"- Humidity: {format_number(cur.humidity)}%\n"
        f"- Weather: {cur.condition.text}\n"
        f"- Wind speed: {format_number(wind)} {speed}"
    )

    day_lines = []
    for entry in payload.forecast.forecastday:
        day = entry.day
        low = day.mintemp_f if fahrenheit else day.mintemp_c
        high = day.maxtemp_f if fahrenheit else day.maxtemp_c
        day_lines.append(
            f"- {entry.date}: {format_number(low)}{degree}"
            f" ~ {format_number(high)}{degree},"
            f" {day.condition.text},"
            f" chance of rain {format_number(day.daily_chance_of_rain)}%",
        )
    daily = "Daily forecast:\n" + "\n".join(day_lines)
    return [header, current, daily]


def get_forecast(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Fetch a forecast of up to MAX_DAYS days for a location.

    Missing API key is a ConfigurationError reported before any
    outbound call. The provider answers an unknown location
    with HTTP 400 and error code 1006.
    """
    api_key = ctx.settings.weather_api_key
    if not api_key:
        return IOFailure(
            PipelineError(
                step_name="get_forecast",
                error_type="ConfigurationError",
                message=MISSING_KEY_MESSAGE,
                context={"setting": "WEATHER_API_KEY"},
            ),
        )

    location = str(ctx.args["location"])
    days = int(cast("float", ctx.args.get("days", DEFAULT_DAYS)))
    unit = TemperatureUnit(ctx.args.get("unit", TemperatureUnit.CELSIUS.value))
    params: dict[str, str | int] = {"key": api_key, "q": location, "days": days}
    lang = ctx.args.get("lang")
    if lang:
        params["lang"] = str(lang)

    def _parse(
        response: HttpResponse,
    ) -> IOResult[ForecastPayload, PipelineError]:
        return parse_payload(
            ForecastPayload, response, step_name="get_forecast",
        )

    def _render(payload: ForecastPayload) -> list[str]:
        return render_forecast(payload, unit)

    def _classify(error: PipelineError) -> PipelineError:
        return classify_upstream_failure(
            error,
            label=ERROR_LABEL,
            not_found=NotFoundRule(
                message=f"Location not found: {location}",
                status_code=400,
                error_code=NO_LOCATION_ERROR_CODE,
            ),
        )

    return (
        io_ops.http_get(
            f"{ctx.settings.weather_api_base_url}/v1/forecast.json",
            params=params,
            timeout=ctx.settings.http_timeout_seconds,
        )
        .bind(_parse)
        .map(_render)
        .alt(_classify)
    )


GET_FORECAST = CommandSpec(
    name="get_forecast",
    description="Get the weather forecast for a location",
    handler=get_forecast,
    input_shape={
        "location": FieldSpec(
            kind=FieldKind.STRING,
            description="City name, postcode or 'lat,lon' coordinates",
        ),
        "days": FieldSpec(
            kind=FieldKind.NUMBER,
            required=False,
            default=DEFAULT_DAYS,
            minimum=MIN_DAYS,
            maximum=MAX_DAYS,
            integral=True,
            description="Number of forecast days",
        ),
        "lang": FieldSpec(
            kind=FieldKind.STRING,
            required=False,
            description="Language tag for condition texts, e.g. 'zh'",
        ),
        "unit": FieldSpec(
            kind=FieldKind.ENUM,
            required=False,
            default=TemperatureUnit.CELSIUS.value,
            values=tuple(u.value for u in TemperatureUnit),
            description="Temperature unit: c (Celsius) or f (Fahrenheit)",
        ),
    },
)
