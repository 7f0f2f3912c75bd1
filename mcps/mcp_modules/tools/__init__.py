"""Tool and resource handlers exposed by the services."""
from mcps.mcp_modules.tools.calculator import CALCULATE, ArithmeticOperation
from mcps.mcp_modules.tools.daily_hot import GET_DAILY_HOT, HotListSource
from mcps.mcp_modules.tools.forecast import GET_FORECAST, TemperatureUnit
from mcps.mcp_modules.tools.greeting import ECHO, GREETING
from mcps.mcp_modules.tools.info import SYSTEM_INFO, USER_INFO
from mcps.mcp_modules.tools.weather import GET_WEATHER

__all__ = [
    "CALCULATE",
    "ECHO",
    "GET_DAILY_HOT",
    "GET_FORECAST",
    "GET_WEATHER",
    "GREETING",
    "SYSTEM_INFO",
    "USER_INFO",
    "ArithmeticOperation",
    "HotListSource",
    "TemperatureUnit",
]
