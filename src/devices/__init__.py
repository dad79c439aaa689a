"""Device profiles for driver-station controllers."""

from __future__ import annotations

from devices.labels import label_for
from devices.ports import GamepadPortConfig
from devices.profiles import ControlAccessor, DeviceProfile, ProfileSpec, SlotKind
from devices.registry import (
    DeviceProfileError,
    DeviceProfileRegistry,
    accessor_for,
    build_registry,
    default_registry,
)
from devices.tables import GamepadType

__all__ = [
    "ControlAccessor",
    "DeviceProfile",
    "DeviceProfileError",
    "DeviceProfileRegistry",
    "GamepadPortConfig",
    "GamepadType",
    "ProfileSpec",
    "SlotKind",
    "accessor_for",
    "build_registry",
    "default_registry",
    "label_for",
]
