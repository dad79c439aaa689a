"""Environment variable resolution utilities."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import TypeVar

_LOGGER = logging.getLogger(__name__)

TEnum = TypeVar("TEnum", bound=Enum)

# -----------------------------------------------------------------------------
# String Helpers
# -----------------------------------------------------------------------------


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_text(name: str, *, default: str | None = None) -> str | None:
    """Return an environment variable string, or ``default`` when unset or blank.

    Returns
    -------
    str | None
        Stripped value, or default when missing.
    """
    value = env_value(name)
    return default if value is None else value


# -----------------------------------------------------------------------------
# Typed Parsing
# -----------------------------------------------------------------------------


def env_int(name: str, *, default: int | None = None) -> int | None:
    """Parse environment variable as int.

    Invalid values are logged and replaced by ``default``.

    Returns
    -------
    int | None
        Parsed integer or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _LOGGER.warning("Invalid integer for %s: %r", name, raw)
        return default


def env_enum(
    name: str,
    enum_type: type[TEnum],
    *,
    default: TEnum | None = None,
) -> TEnum | None:
    """Parse environment variable into an enum member by value.

    Parameters
    ----------
    name
        Environment variable name.
    enum_type
        Enum class whose values are matched case-insensitively.
    default
        Value returned when the variable is unset or invalid.

    Returns
    -------
    TEnum | None
        Parsed enum member or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    normalized = raw.lower()
    for member in enum_type:
        if str(member.value).lower() == normalized:
            return member
    _LOGGER.warning("Invalid %s for %s: %r", enum_type.__name__, name, raw)
    return default


__all__ = ["env_enum", "env_int", "env_text", "env_value"]
