"""Compiler configuration.

Configuration is read from ``blockwright.toml`` or the ``[tool.blockwright]``
table of ``pyproject.toml`` (nearest file in the current directory or its
parents), then overridden by ``BLOCKWRIGHT_*`` environment variables.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Literal, TypeAlias

import msgspec

from core_types import ModuleKind
from devices.ports import MAX_GAMEPAD_PORT, MIN_GAMEPAD_PORT, GamepadPortConfig
from serde_msgspec import StructBaseStrict, convert, to_builtins, validation_error_payload
from utils.env_utils import env_enum, env_int, env_text
from utils.file_io import PYPROJECT_FILENAME, read_pyproject_tool_table, read_toml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "blockwright.toml"
TOOL_TABLE = "blockwright"
ENV_PREFIX = "BLOCKWRIGHT_"

LogLevel: TypeAlias = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")

IndentWidth = Annotated[int, msgspec.Meta(ge=1, le=8)]


class ConfigError(ValueError):
    """Raised when a configuration file or override is invalid."""


class CompilerConfig(StructBaseStrict, frozen=True):
    """Settings for one compilation.

    ``module_kind`` overrides the kind stored in workspace documents when
    set. ``gamepads`` maps port numbers (as TOML keys) to device-profile ids;
    ``None`` selects the default port configuration.
    """

    module_kind: ModuleKind | None = None
    indent_width: IndentWidth = 4
    gamepads: dict[str, str] | None = None
    log_level: LogLevel = "WARNING"

    @property
    def indent(self) -> str:
        """Indentation unit for generated code."""
        return " " * self.indent_width

    def with_overrides(self, **changes: object) -> CompilerConfig:
        """Return a copy with command-line overrides applied.

        Returns:
        -------
        CompilerConfig
            Updated configuration.
        """
        return msgspec.structs.replace(self, **changes)

    def port_config(self) -> GamepadPortConfig:
        """Return the gamepad port configuration.

        Returns:
        -------
        GamepadPortConfig
            Configured ports, or the default configuration.

        Raises:
            ConfigError: If a port key is not a supported port number.
        """
        if self.gamepads is None:
            return GamepadPortConfig.default()
        ports: dict[int, str] = {}
        for key, profile_id in self.gamepads.items():
            try:
                port = int(key)
            except ValueError:
                msg = f"Gamepad port {key!r} is not a number."
                raise ConfigError(msg) from None
            if not MIN_GAMEPAD_PORT <= port <= MAX_GAMEPAD_PORT:
                msg = f"Gamepad port {port} outside {MIN_GAMEPAD_PORT}..{MAX_GAMEPAD_PORT}."
                raise ConfigError(msg)
            ports[port] = profile_id
        return GamepadPortConfig(ports=ports)


def _find_in_parents(filename: str, start: Path) -> Path | None:
    path = start.resolve()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def decode_config(raw: Mapping[str, object], *, location: str) -> CompilerConfig:
    """Validate a raw configuration table.

    Returns:
    -------
    CompilerConfig
        Decoded configuration.

    Raises:
        ConfigError: If the table does not match the configuration schema.
    """
    try:
        return convert(dict(raw), target_type=CompilerConfig)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ConfigError(msg) from exc


def _read_config_file(path: Path) -> CompilerConfig:
    try:
        if path.name == PYPROJECT_FILENAME:
            table = read_pyproject_tool_table(path, TOOL_TABLE) or {}
            return decode_config(table, location=f"{path}:tool.{TOOL_TABLE}")
        return decode_config(read_toml(path), location=str(path))
    except (msgspec.DecodeError, TypeError) as exc:
        msg = f"Config file {path} is not valid TOML: {exc}"
        raise ConfigError(msg) from exc


def find_config_file(start: Path | None = None) -> Path | None:
    """Return the nearest configuration file.

    ``blockwright.toml`` wins over a ``pyproject.toml`` that carries a
    ``[tool.blockwright]`` table.

    Returns:
    -------
    Path | None
        Configuration file, or ``None`` when there is none.
    """
    origin = start or Path.cwd()
    dedicated = _find_in_parents(CONFIG_FILENAME, origin)
    if dedicated is not None:
        return dedicated
    pyproject = _find_in_parents(PYPROJECT_FILENAME, origin)
    if pyproject is not None and read_pyproject_tool_table(pyproject, TOOL_TABLE) is not None:
        return pyproject
    return None


def apply_env_overrides(config: CompilerConfig) -> CompilerConfig:
    """Apply ``BLOCKWRIGHT_*`` environment overrides.

    Returns:
    -------
    CompilerConfig
        Configuration with overrides applied.
    """
    changes: dict[str, object] = {}
    module_kind = env_enum(f"{ENV_PREFIX}MODULE_KIND", ModuleKind)
    if module_kind is not None:
        changes["module_kind"] = module_kind.value
    indent_width = env_int(f"{ENV_PREFIX}INDENT_WIDTH")
    if indent_width is not None:
        changes["indent_width"] = indent_width
    log_level = env_text(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level is not None:
        if log_level.upper() in LOG_LEVELS:
            changes["log_level"] = log_level.upper()
        else:
            logger.warning("Invalid log level for %sLOG_LEVEL: %r", ENV_PREFIX, log_level)
    if not changes:
        return config
    current = to_builtins(config)
    merged = (current if isinstance(current, dict) else {}) | changes
    return decode_config(merged, location="environment")


def load_config(path: Path | None = None, *, start: Path | None = None) -> CompilerConfig:
    """Load the effective configuration.

    Parameters
    ----------
    path
        Explicit configuration file; skips the parent-directory search.
    start
        Directory the search starts from (default: current directory).

    Returns:
    -------
    CompilerConfig
        File configuration with environment overrides applied.

    Raises:
        ConfigError: If the explicit file is missing or any source is invalid.
    """
    if path is not None:
        if not path.is_file():
            msg = f"Config file not found: {path}."
            raise ConfigError(msg)
        config = _read_config_file(path)
    else:
        found = find_config_file(start)
        config = CompilerConfig() if found is None else _read_config_file(found)
        if found is not None:
            logger.debug("Loaded configuration from %s", found)
    return apply_env_overrides(config)


__all__ = [
    "CONFIG_FILENAME",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "TOOL_TABLE",
    "CompilerConfig",
    "ConfigError",
    "apply_env_overrides",
    "decode_config",
    "find_config_file",
    "load_config",
]
