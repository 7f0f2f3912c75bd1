"""Service configuration loading from the environment."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError
from returns.result import Failure, Result, Success

from mcps.mcp_modules.errors import PipelineError
from mcps.mcp_modules.types import ServiceSettings

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_VARS: dict[str, str] = {
    "OPENWEATHER_API_KEY": "openweather_api_key",
    "OPENWEATHER_BASE_URL": "openweather_base_url",
    "WEATHER_API_KEY": "weather_api_key",
    "WEATHER_API_BASE_URL": "weather_api_base_url",
    "DAILY_HOT_BASE_URL": "daily_hot_base_url",
    "MCPS_HTTP_TIMEOUT": "http_timeout_seconds",
}


def load_settings(
    environ: Mapping[str, str],
) -> Result[ServiceSettings, PipelineError]:
    """Build ServiceSettings from environment variables (pure function).

    Empty values count as unset. Base URLs lose any trailing
    slash. Returns Failure(ConfigurationError) when a value
    does not validate, e.g. a non-numeric timeout.
    """
    values: dict[str, object] = {}
    for env_name, setting in ENV_VARS.items():
        raw = environ.get(env_name, "").strip()
        if not raw:
            continue
        if setting.endswith("_base_url"):
            raw = raw.rstrip("/")
        values[setting] = raw
    try:
        return Success(ServiceSettings.model_validate(values))
    except ValidationError as exc:
        first = exc.errors()[0]
        setting = str(first["loc"][0]) if first["loc"] else ""
        env_name = next(
            (k for k, v in ENV_VARS.items() if v == setting),
            setting,
        )
        return Failure(
            PipelineError(
                step_name="load_settings",
                error_type="ConfigurationError",
                message=f"Invalid value for {env_name}: {first['msg']}",
                context={"setting": setting},
            ),
        )
