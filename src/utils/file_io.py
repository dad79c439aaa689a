"""File I/O helpers for workspace documents and configuration files."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

import msgspec

PYPROJECT_FILENAME = "pyproject.toml"


def read_text(path: Path, *, encoding: str = "utf-8") -> str:
    """Read text file with consistent encoding.

    Parameters
    ----------
    path
        Path to the file.
    encoding
        Text encoding.

    Returns
    -------
    str
        File contents.
    """
    return path.read_text(encoding=encoding)


def write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text by replacing ``path`` with a fully written sibling file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(text)
        Path(tmp_name).replace(path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_toml(path: Path) -> Mapping[str, object]:
    """Read and parse a TOML file.

    Returns
    -------
    Mapping[str, object]
        Parsed TOML content.

    Raises
    ------
    TypeError
        Raised when the TOML content is not a mapping.
    """
    payload = msgspec.toml.decode(read_text(path), type=object, strict=True)
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


def read_pyproject_tool_table(path: Path, tool: str) -> Mapping[str, object] | None:
    """Return the ``[tool.<tool>]`` table of a pyproject.toml file.

    Parameters
    ----------
    path
        Path to the pyproject.toml file, or the directory holding it.
    tool
        Tool table name.

    Returns
    -------
    Mapping[str, object] | None
        The table, or ``None`` when the file or table is absent.
    """
    if path.is_dir():
        path /= PYPROJECT_FILENAME
    if not path.is_file():
        return None
    tools = read_toml(path).get("tool")
    if not isinstance(tools, dict):
        return None
    table = tools.get(tool)
    return table if isinstance(table, dict) else None


__all__ = [
    "PYPROJECT_FILENAME",
    "read_pyproject_tool_table",
    "read_text",
    "read_toml",
    "write_text",
]
