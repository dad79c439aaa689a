"""Gamepad port configuration."""

from __future__ import annotations

import msgspec

from devices.tables import GamepadType
from serde_msgspec import StructBaseStrict

MIN_GAMEPAD_PORT = 0
MAX_GAMEPAD_PORT = 5
GAMEPAD_COUNT = MAX_GAMEPAD_PORT - MIN_GAMEPAD_PORT + 1

_KNOWN_PROFILE_IDS = frozenset(member.value for member in GamepadType)


class GamepadPortConfig(StructBaseStrict, frozen=True):
    """Mapping from gamepad port to device-profile id.

    The value is threaded explicitly through field population and emission;
    nothing reads it from module state.
    """

    ports: dict[int, str] = msgspec.field(default_factory=dict)

    @classmethod
    def default(cls) -> GamepadPortConfig:
        """Return the default configuration (Logitech F310 on ports 0 and 1).

        Returns:
        -------
        GamepadPortConfig
            Default port configuration.
        """
        return cls(
            ports={
                0: GamepadType.GAMEPAD_LOGITECH_F310.value,
                1: GamepadType.GAMEPAD_LOGITECH_F310.value,
            }
        )

    def profile_id_for_port(self, port: int) -> str:
        """Return the profile id configured for ``port``.

        Unconfigured ports resolve to ``None``; unrecognized ids fall back to
        the generic gamepad.

        Returns:
        -------
        str
            Device-profile id.
        """
        value = self.ports.get(port)
        if not value:
            return GamepadType.NONE.value
        if value in _KNOWN_PROFILE_IDS:
            return value
        return GamepadType.GAMEPAD_GENERIC.value

    def ports_with_controllers(self) -> tuple[int, ...]:
        """Return ports that have a controller attached, ascending.

        Returns:
        -------
        tuple[int, ...]
            Port numbers.
        """
        return tuple(
            sorted(port for port, value in self.ports.items() if value != GamepadType.NONE)
        )

    def without_none_entries(self) -> GamepadPortConfig:
        """Return a copy without ports explicitly set to ``None``.

        Returns:
        -------
        GamepadPortConfig
            Cleaned configuration.
        """
        return GamepadPortConfig(
            ports={port: value for port, value in self.ports.items() if value != GamepadType.NONE}
        )

    def with_port(self, port: int, profile_id: str) -> GamepadPortConfig:
        """Return a copy with ``port`` set to ``profile_id``.

        Raises:
            ValueError: If ``port`` is outside the supported range.
        """
        if not MIN_GAMEPAD_PORT <= port <= MAX_GAMEPAD_PORT:
            msg = f"Gamepad port {port} outside {MIN_GAMEPAD_PORT}..{MAX_GAMEPAD_PORT}."
            raise ValueError(msg)
        ports = dict(self.ports)
        ports[port] = profile_id
        return GamepadPortConfig(ports=ports)


__all__ = [
    "GAMEPAD_COUNT",
    "MAX_GAMEPAD_PORT",
    "MIN_GAMEPAD_PORT",
    "GamepadPortConfig",
]
