"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import TypeAlias

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | Mapping[str, "JsonValue"] | Sequence["JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]


class ModuleKind(StrEnum):
    """Kind of module a generated file belongs to."""

    ROBOT = "robot"
    MECHANISM = "mechanism"
    OPMODE = "opmode"


__all__ = [
    "JsonDict",
    "JsonPrimitive",
    "JsonValue",
    "ModuleKind",
]
