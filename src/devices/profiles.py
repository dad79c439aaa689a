"""Device-profile records and profile definitions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TypeAlias

from serde_msgspec import StructBaseStrict


class SlotKind(StrEnum):
    """Kinds of logical controls a device profile can map."""

    BUTTON = "button"
    AXIS = "axis"
    RUMBLE = "rumble"
    LED = "led"


class ControlAccessor(StructBaseStrict, frozen=True):
    """Concrete accessor for one logical control.

    ``label_key`` is resolved through ``devices.labels``; ``method`` is the
    emitted accessor name and ``argument`` an optional literal argument.
    """

    label_key: str
    method: str
    argument: str | None = None
    comment: str = ""

    def call_text(self, suffix: str = "") -> str:
        """Return the accessor call text, e.g. ``getRawButtonPressed(3)``.

        Returns:
        -------
        str
            Method name with suffix and call parentheses.
        """
        return f"{self.method}{suffix}({self.argument or ''})"


ControlTable: TypeAlias = Mapping[str, ControlAccessor]


def freeze_table(entries: Mapping[str, ControlAccessor]) -> ControlTable:
    """Return a read-only copy of a control table.

    Returns:
    -------
    ControlTable
        Immutable mapping preserving insertion order.
    """
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class DeviceProfile:
    """Effective control tables for one controller type.

    A ``None`` table means the profile offers no controls of that kind.
    """

    profile_id: str
    buttons: ControlTable | None = None
    axes: ControlTable | None = None
    rumble: ControlTable | None = None
    leds: ControlTable | None = None

    def table(self, slot: SlotKind) -> ControlTable | None:
        """Return the table for a slot kind.

        Returns:
        -------
        ControlTable | None
            Control table, or ``None`` when the profile has no such table.
        """
        match slot:
            case SlotKind.BUTTON:
                return self.buttons
            case SlotKind.AXIS:
                return self.axes
            case SlotKind.RUMBLE:
                return self.rumble
            case SlotKind.LED:
                return self.leds
        msg = f"Unknown slot kind {slot!r}."
        raise ValueError(msg)


@dataclass(frozen=True)
class ProfileSpec:
    """Registration-time definition of a device profile.

    Without ``base`` the tables are used as-is. With ``base`` the effective
    tables start from the base profile, then ``tables`` entries override or
    add keys, ``deletions`` drop keys and ``cleared`` slots have no table.
    """

    profile_id: str
    base: str | None = None
    tables: Mapping[SlotKind, Mapping[str, ControlAccessor]] = field(default_factory=dict)
    deletions: Mapping[SlotKind, frozenset[str]] = field(default_factory=dict)
    cleared: frozenset[SlotKind] = frozenset()


def base_profile(
    profile_id: str,
    *,
    buttons: Mapping[str, ControlAccessor] | None = None,
    axes: Mapping[str, ControlAccessor] | None = None,
    rumble: Mapping[str, ControlAccessor] | None = None,
    leds: Mapping[str, ControlAccessor] | None = None,
) -> ProfileSpec:
    """Define a profile with its own tables.

    Returns:
    -------
    ProfileSpec
        Non-delegating profile definition.
    """
    tables = {
        slot: table
        for slot, table in (
            (SlotKind.BUTTON, buttons),
            (SlotKind.AXIS, axes),
            (SlotKind.RUMBLE, rumble),
            (SlotKind.LED, leds),
        )
        if table is not None
    }
    return ProfileSpec(profile_id=profile_id, tables=tables)


def same_as(profile_id: str, base: str) -> ProfileSpec:
    """Define a profile identical to ``base``.

    Returns:
    -------
    ProfileSpec
        Fully delegating profile definition.
    """
    return ProfileSpec(profile_id=profile_id, base=base)


def derived_from(
    profile_id: str,
    base: str,
    *,
    overrides: Mapping[SlotKind, Mapping[str, ControlAccessor]] | None = None,
    deletions: Mapping[SlotKind, frozenset[str]] | None = None,
    cleared: frozenset[SlotKind] = frozenset(),
) -> ProfileSpec:
    """Define a profile derived from ``base`` with overrides and deletions.

    Returns:
    -------
    ProfileSpec
        Partially delegating profile definition.
    """
    return ProfileSpec(
        profile_id=profile_id,
        base=base,
        tables=dict(overrides or {}),
        deletions=dict(deletions or {}),
        cleared=cleared,
    )


__all__ = [
    "ControlAccessor",
    "ControlTable",
    "DeviceProfile",
    "ProfileSpec",
    "SlotKind",
    "base_profile",
    "derived_from",
    "freeze_table",
    "same_as",
]
