"""quickbench utilities - shared helper functions."""

from quickbench.utils.env import (
    SettingError,
    SettingTypeError,
    env_name,
    get_setting,
)
from quickbench.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    # Env
    "SettingError",
    "SettingTypeError",
    "env_name",
    "get_setting",
]
