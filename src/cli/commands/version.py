"""Report the installed blockwright build and what it can compile."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from blocks.registration import setup
from devices.registry import default_registry
from serde_msgspec import StructBaseStrict, dumps_json

_DEPENDENCIES = ("cyclopts", "msgspec", "rich")


class VersionInfo(StructBaseStrict, frozen=True, rename="camel"):
    """Installed versions plus the registered block types and device profiles."""

    blockwright: str
    python: str
    dependencies: dict[str, str | None]
    block_types: tuple[str, ...]
    device_profiles: tuple[str, ...]


def get_version() -> str:
    """Get the blockwright package version string.

    Returns:
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    return _package_version("blockwright") or "0.0.0-dev"


def get_version_info() -> VersionInfo:
    """Collect the version payload.

    Returns:
    -------
    VersionInfo
        Versions, block types in registration order and device profile ids.
    """
    return VersionInfo(
        blockwright=get_version(),
        python=sys.version.split()[0],
        dependencies={name: _package_version(name) for name in _DEPENDENCIES},
        block_types=tuple(setup()),
        device_profiles=default_registry().profile_ids(),
    )


def version_command() -> int:
    """Show versions, block types and device profiles as JSON.

    Returns:
    -------
    int
        Exit status code.
    """
    sys.stdout.write(dumps_json(get_version_info(), pretty=True).decode("utf-8") + "\n")
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["VersionInfo", "get_version", "get_version_info", "version_command"]
