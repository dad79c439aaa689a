"""Main application setup for the blockwright CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import session_group
from cli.invoke import invoke
from cli.result import CliResult
from cli.result_action import cli_result_action
from config import LOG_LEVELS, ConfigError, find_config_file, load_config

logger = logging.getLogger(__name__)

_HELP_EPILOGUE = """
Examples:
  blockwright compile robot.json                 Print the generated Python module
  blockwright compile robot.json -o robot.py     Write the generated module to a file
  blockwright sync robot.json --write            Repair call blocks in place
  blockwright profiles "Logitech F310"           Show one device profile
  blockwright profiles --ports --format table    Show the profile on each gamepad port

Environment Variables:
  BLOCKWRIGHT_LOG_LEVEL      Default log level (DEBUG, INFO, WARNING, ERROR)
  BLOCKWRIGHT_MODULE_KIND    Module kind override (robot, mechanism, opmode)
  BLOCKWRIGHT_INDENT_WIDTH   Spaces per indentation level in generated code
"""

app = App(
    name="blockwright",
    help="Block-workspace to Python compiler for robot projects.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=[cli_result_action, "sys_exit"],
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None,
        Parameter(
            name="--log-level",
            help="Logging verbosity level (default: configured level).",
            env_var="BLOCKWRIGHT_LOG_LEVEL",
            group=session_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    if session.log_level is not None and session.log_level not in LOG_LEVELS:
        logging.basicConfig(level=logging.WARNING)
        logger.error("Unsupported log level %r.", session.log_level)
        return ExitCode.VALIDATION_ERROR

    try:
        config_path = (
            Path(session.config_file) if session.config_file is not None else find_config_file()
        )
        config = load_config(config_path)
    except ConfigError as exc:
        logging.basicConfig(level=session.log_level or logging.WARNING)
        return cli_result_action(CliResult.from_exception(exc))

    log_level = session.log_level or config.log_level
    logging.basicConfig(level=log_level)
    run_context = RunContext(
        log_level=log_level,
        config=config,
        config_path=config_path,
    )

    exit_code, _event = invoke(
        app,
        list(tokens),
        run_context=run_context,
    )
    return exit_code


# Lazy-loaded commands with aliases
app.command("cli.commands.compile:compile_command", name="compile", alias="c")
app.command("cli.commands.sync:sync_command", name="sync", alias="s")
app.command("cli.commands.profiles:profiles_command", name="profiles")

# Config subapp with alias
_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the blockwright CLI."""
    app.meta()


__all__ = ["SessionOptions", "app", "main", "meta_launcher"]
