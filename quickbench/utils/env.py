"""Environment-backed settings with type coercion.

All quickbench settings live under the ``QUICKBENCH_`` prefix.

Usage:
    from quickbench.utils.env import get_setting

    repeat = get_setting("REPEAT", default=1, as_type=int)  # QUICKBENCH_REPEAT
    no_gc = get_setting("NO_GC", default=False, as_type=bool)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast

T = TypeVar("T")

PREFIX = "QUICKBENCH_"

_FALSE_STRINGS = ("false", "0", "", "no", "off")


class SettingError(Exception):
    """Base exception for environment setting errors."""

    pass


class SettingTypeError(SettingError):
    """Raised when a setting cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def env_name(name: str) -> str:
    """Return the full environment variable name for a setting.

    >>> env_name("REPEAT")
    'QUICKBENCH_REPEAT'
    >>> env_name("QUICKBENCH_REPEAT")
    'QUICKBENCH_REPEAT'
    """
    name = name.upper()
    if name.startswith(PREFIX):
        return name
    return PREFIX + name


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a string value to the specified type.

    Raises:
        SettingTypeError: If conversion fails.
    """
    try:
        # bool is special: "false", "0", "" and friends are False
        if as_type is bool:
            return value.strip().lower() not in _FALSE_STRINGS
        if as_type is str:
            return value
        return as_type(value)
    except (ValueError, TypeError) as e:
        raise SettingTypeError(name, value, as_type) from e


def _log_access(name: str, value: str | None) -> None:
    """Log setting lookups when the logger is configured."""
    from quickbench.utils.logger import Logger

    Logger.debug_if_configured("env", f"ENV GET {name}={value}")


def get_setting(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Read a ``QUICKBENCH_*`` setting with optional type coercion.

    Args:
        name: Setting name, with or without the ``QUICKBENCH_`` prefix.
        default: Returned when the variable is unset or empty.
        as_type: bool, or any type constructible from a string (int, str).

    Raises:
        SettingTypeError: If as_type is given and conversion fails.
    """
    full_name = env_name(name)
    value = os.environ.get(full_name)
    _log_access(full_name, value)

    if value is None or value == "":
        return default

    if as_type is not None:
        return cast(T, _coerce_type(full_name, value, as_type))

    return value
