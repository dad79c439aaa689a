"""Synchronize call blocks with the definitions and components they reference."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from blocks.sync import synchronize_workspace
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import output_group
from cli.result import CliResult
from cli.runtime_services import effective_config, open_workspace, skipped_lines, warning_lines
from workspace.document import dump_workspace, write_workspace


def sync_command(
    workspace_file: Annotated[
        Path,
        Parameter(help="Workspace document (JSON) to synchronize."),
    ],
    *,
    write: Annotated[
        bool,
        Parameter(
            name="--write",
            help="Rewrite the document with the repaired call blocks.",
            group=output_group,
        ),
    ] = False,
    output: Annotated[
        Path | None,
        Parameter(
            name=["--output", "-o"],
            help="Write the repaired document here instead of in place (implies --write).",
            group=output_group,
        ),
    ] = None,
    check: Annotated[
        bool,
        Parameter(
            name="--check",
            help="Exit non-zero when any call block was repaired or warned.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Run one synchronization pass over a workspace document.

    Renamed methods and components are followed silently; changed signatures
    and missing references leave warnings on the affected blocks.

    Returns:
    -------
    CliResult
        Repaired and warned call blocks.
    """
    loaded = open_workspace(workspace_file, effective_config(run_context))
    report = synchronize_workspace(loaded.workspace)
    counts = {"repaired": len(report.repaired), "warnings": len(report.warned)}
    details = warning_lines(loaded.workspace, report.warned)

    artifacts: dict[str, Path] = {}
    target = output or (workspace_file if write else None)
    skipped = loaded.workspace.skipped_blocks
    if target is not None and skipped:
        return CliResult.error(
            ExitCode.DOCUMENT_ERROR,
            summary=f"Not writing {target}: {len(skipped)} block(s) could not be loaded.",
            counts=counts,
            details=skipped_lines(loaded.workspace),
        )
    if target is not None:
        write_workspace(target, dump_workspace(loaded.workspace))
        artifacts["workspace"] = target

    if check and (report.repaired or report.warned):
        return CliResult.error(
            ExitCode.SYNC_WARNINGS,
            summary=f"{workspace_file} is out of date with its definitions.",
            counts=counts,
            details=details,
        )
    summary = (
        f"Synchronized {workspace_file}: {len(report.repaired)} repaired, "
        f"{len(report.warned)} warned."
    )
    return CliResult.success(
        summary=summary,
        artifacts=artifacts,
        counts=counts,
        details=details,
    )


__all__ = ["sync_command"]
