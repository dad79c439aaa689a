"""Configuration management commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import msgspec
from cyclopts import Parameter

from cli.context import RunContext
from cli.runtime_services import effective_config
from config import CONFIG_FILENAME
from serde_msgspec import dumps_json
from utils.file_io import write_text

_TEMPLATE = """# blockwright.toml

# Module kind used when a workspace document does not say: robot, mechanism or opmode.
# module_kind = "robot"

# Spaces per indentation level in generated code.
indent_width = 4

# Logging verbosity: DEBUG, INFO, WARNING or ERROR.
log_level = "WARNING"

# Device profile attached to each gamepad port (0-5).
[gamepads]
0 = "Logitech F310"
1 = "Logitech F310"
"""


def show_config(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration payload.

    Returns:
    -------
    int
        Exit status code.
    """
    config = effective_config(run_context)
    source = None if run_context is None else run_context.config_path
    payload = {
        "source": None if source is None else str(source),
        "config": msgspec.structs.asdict(config),
        "indent": config.indent,
        "ports": {str(port): value for port, value in config.port_config().ports.items()},
    }
    sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Args:
        path: Optional output path for the template file.
        force: Whether to overwrite an existing file.

    Returns:
        int: Result.

    Raises:
        FileExistsError: If the target path exists and `force` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    write_text(target_path, _TEMPLATE)
    return 0


__all__ = ["init_config", "show_config"]
