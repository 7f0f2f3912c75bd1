"""Service catalog and discovery.

Each service is data: the commands and resources it exposes.
build_registry() turns a definition into the frozen registry
handed to the transport.
"""
from __future__ import annotations

from dataclasses import dataclass

from mcps.mcp_modules.commands.registry import CommandRegistry
from mcps.mcp_modules.commands.types import CommandSpec, ResourceSpec
from mcps.mcp_modules.tools import (
    CALCULATE,
    ECHO,
    GET_DAILY_HOT,
    GET_FORECAST,
    GET_WEATHER,
    GREETING,
    SYSTEM_INFO,
    USER_INFO,
)


class ServiceName:
    """Registry of valid service names."""

    GREETING = "greeting"
    WEATHER = "weather"
    FORECAST = "forecast"
    DAILY_HOT = "daily-hot"


@dataclass(frozen=True)
class ServiceDefinition:
    """Declarative service definition."""

    name: str
    description: str
    version: str = "1.0.0"
    commands: tuple[CommandSpec, ...] = ()
    resources: tuple[ResourceSpec, ...] = ()


def build_registry(service: ServiceDefinition) -> CommandRegistry:
    """Register every command and resource, then freeze.

    Raises DuplicateCommandError when the definition repeats
    a name.
    """
    registry = CommandRegistry()
    for command in service.commands:
        registry.register(command)
    for resource in service.resources:
        registry.register_resource(resource)
    return registry.freeze()


# --- Registered services ---

_GREETING = ServiceDefinition(
    name=ServiceName.GREETING,
    description="Greeting, echo and calculator tools with info resources",
    commands=(GREETING, ECHO, CALCULATE),
    resources=(SYSTEM_INFO, USER_INFO),
)

_WEATHER = ServiceDefinition(
    name=ServiceName.WEATHER,
    description="Current weather from OpenWeatherMap",
    commands=(GET_WEATHER,),
)

_FORECAST = ServiceDefinition(
    name=ServiceName.FORECAST,
    description="Multi-day forecast from WeatherAPI.com",
    commands=(GET_FORECAST,),
)

_DAILY_HOT = ServiceDefinition(
    name=ServiceName.DAILY_HOT,
    description="Ranked hot lists from a DailyHot aggregator",
    commands=(GET_DAILY_HOT,),
)

_REGISTRY: dict[str, ServiceDefinition] = {
    _GREETING.name: _GREETING,
    _WEATHER.name: _WEATHER,
    _FORECAST.name: _FORECAST,
    _DAILY_HOT.name: _DAILY_HOT,
}


def load_service(name: str) -> ServiceDefinition | None:
    """Pure lookup -- find a service definition by name."""
    return _REGISTRY.get(name)


def list_services() -> list[ServiceDefinition]:
    """Return every registered service."""
    return list(_REGISTRY.values())


def list_service_names() -> list[str]:
    """Return sorted service names, for CLI choices and errors."""
    return sorted(_REGISTRY)
