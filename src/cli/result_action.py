"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import CliResult


def cli_result_action(result: Any) -> int:
    """Handle command results and convert to exit codes.

    This function is registered as the ``result_action`` for the CLI app.
    Summaries go to stderr; stdout is reserved for generated code and
    command payloads.

    Parameters
    ----------
    result
        The return value from the command function.

    Returns
    -------
    int
        Exit code for the process.
    """
    console = Console(stderr=True, soft_wrap=True)

    if result is None:
        return ExitCode.SUCCESS

    if isinstance(result, int):
        return result

    if isinstance(result, CliResult):
        style = "green" if result.ok else "red"
        if result.summary:
            console.print(result.summary, style=style, highlight=False)
        for line in result.details:
            console.print(f"  {line}", highlight=False)
        if result.artifacts:
            console.print("Artifacts:")
            for name, path in sorted(result.artifacts.items()):
                console.print(f"  {name}: {path}")
        if result.counts:
            rendered = ", ".join(f"{name}={value}" for name, value in sorted(result.counts.items()))
            console.print(rendered, style="dim", highlight=False)
        return int(result.exit_code)

    console.print(f"Unexpected command return type: {type(result).__name__} (value: {result!r})")
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
