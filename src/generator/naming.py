"""Identifier normalization for names taken from the block graph."""

from __future__ import annotations

import builtins
import keyword
import re

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_ILLEGAL_RE = re.compile(r"[^0-9A-Za-z_]+")
_UNDERSCORES_RE = re.compile(r"_{2,}")

RESERVED_WORDS: frozenset[str] = frozenset(
    {*keyword.kwlist, *keyword.softkwlist, *dir(builtins), "self", "robot", "events"}
)


def mangle_name(name: str) -> str:
    """Convert a display name into a Python identifier.

    ``onStart`` and ``on start`` both become ``on_start``. Names that collide
    with keywords, builtins or generated attributes get a trailing underscore.

    Returns:
    -------
    str
        Legal, snake_case identifier.
    """
    snake = _CAMEL_BOUNDARY_RE.sub("_", name.strip())
    snake = _ILLEGAL_RE.sub("_", snake).lower()
    snake = _UNDERSCORES_RE.sub("_", snake).strip("_")
    if not snake:
        return "unnamed"
    if snake[0].isdigit():
        snake = f"_{snake}"
    if snake in RESERVED_WORDS:
        snake = f"{snake}_"
    return snake


__all__ = ["RESERVED_WORDS", "mangle_name"]
