"""Tests for configuration discovery, decoding and environment overrides."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config import (
    CONFIG_FILENAME,
    CompilerConfig,
    ConfigError,
    find_config_file,
    load_config,
)
from core_types import ModuleKind
from devices.ports import GamepadPortConfig


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    """Without any source the defaults apply."""
    config = CompilerConfig()
    assert config.module_kind is None
    assert config.indent == "    "
    assert config.log_level == "WARNING"
    assert config.port_config() == GamepadPortConfig.default()


def test_load_dedicated_file(tmp_path: Path) -> None:
    """``blockwright.toml`` values are decoded into typed settings."""
    path = _write(
        tmp_path / CONFIG_FILENAME,
        'module_kind = "opmode"\nindent_width = 2\n\n[gamepads]\n0 = "XBOX Gamepad"\n',
    )
    config = load_config(path)
    assert config.module_kind is ModuleKind.OPMODE
    assert config.indent == "  "
    assert config.port_config().ports == {0: "XBOX Gamepad"}


def test_find_config_searches_parents(tmp_path: Path) -> None:
    """The nearest configuration file above the start directory is used."""
    expected = _write(tmp_path / CONFIG_FILENAME, "indent_width = 3\n")
    nested = tmp_path / "robot" / "src"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == expected
    assert load_config(start=nested).indent_width == 3


def test_pyproject_tool_table(tmp_path: Path) -> None:
    """A ``[tool.blockwright]`` table in pyproject.toml is honored."""
    pyproject = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "robot"\n\n[tool.blockwright]\nmodule_kind = "mechanism"\n',
    )
    assert find_config_file(tmp_path) == pyproject
    assert load_config(start=tmp_path).module_kind is ModuleKind.MECHANISM


def test_pyproject_without_table_is_ignored(tmp_path: Path) -> None:
    """A pyproject.toml that does not configure the compiler is skipped."""
    _write(tmp_path / "pyproject.toml", '[project]\nname = "robot"\n')
    assert find_config_file(tmp_path) is None
    assert load_config(start=tmp_path) == CompilerConfig()


def test_dedicated_file_wins_over_pyproject(tmp_path: Path) -> None:
    """``blockwright.toml`` takes precedence in the same directory."""
    _write(tmp_path / "pyproject.toml", "[tool.blockwright]\nindent_width = 8\n")
    dedicated = _write(tmp_path / CONFIG_FILENAME, "indent_width = 2\n")
    assert find_config_file(tmp_path) == dedicated


@pytest.mark.parametrize(
    ("text", "match"),
    [
        ("colour = true\n", "Config validation failed"),
        ("indent_width = 9\n", "Config validation failed"),
        ('module_kind = "teleop"\n', "Config validation failed"),
        ("indent_width = \n", "not valid TOML"),
    ],
)
def test_invalid_files(tmp_path: Path, text: str, match: str) -> None:
    """Bad settings are reported as configuration errors."""
    path = _write(tmp_path / CONFIG_FILENAME, text)
    with pytest.raises(ConfigError, match=match):
        load_config(path)


def test_explicit_missing_file(tmp_path: Path) -> None:
    """An explicitly named file must exist."""
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    ("ports", "match"),
    [({"six": "XBOX Gamepad"}, "not a number"), ({"7": "XBOX Gamepad"}, "outside")],
)
def test_invalid_gamepad_ports(ports: dict[str, str], match: str) -> None:
    """Gamepad keys must be port numbers 0 through 5."""
    with pytest.raises(ConfigError, match=match):
        CompilerConfig(gamepads=ports).port_config()


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override file values."""
    path = _write(tmp_path / CONFIG_FILENAME, 'module_kind = "robot"\nindent_width = 4\n')
    monkeypatch.setenv("BLOCKWRIGHT_MODULE_KIND", "Mechanism")
    monkeypatch.setenv("BLOCKWRIGHT_INDENT_WIDTH", "2")
    monkeypatch.setenv("BLOCKWRIGHT_LOG_LEVEL", "debug")
    config = load_config(path)
    assert config.module_kind is ModuleKind.MECHANISM
    assert config.indent_width == 2
    assert config.log_level == "DEBUG"


def test_invalid_env_values_are_ignored(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Unparseable overrides are logged and skipped."""
    monkeypatch.setenv("BLOCKWRIGHT_INDENT_WIDTH", "wide")
    monkeypatch.setenv("BLOCKWRIGHT_LOG_LEVEL", "loud")
    with caplog.at_level(logging.WARNING):
        config = load_config(start=tmp_path)
    assert config == CompilerConfig()
    messages = [record.getMessage() for record in caplog.records]
    assert any("BLOCKWRIGHT_INDENT_WIDTH" in message for message in messages)
    assert any("BLOCKWRIGHT_LOG_LEVEL" in message for message in messages)


def test_out_of_range_env_value(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Overrides are validated like file values."""
    monkeypatch.setenv("BLOCKWRIGHT_INDENT_WIDTH", "0")
    with pytest.raises(ConfigError, match="environment"):
        load_config(start=tmp_path)


def test_with_overrides() -> None:
    """Command-line overrides produce a new configuration."""
    config = CompilerConfig().with_overrides(module_kind=ModuleKind.OPMODE)
    assert config.module_kind is ModuleKind.OPMODE
    assert CompilerConfig().module_kind is None
