"""Compile a workspace document into Python source."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from blocks.sync import synchronize_workspace
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import generation_group, output_group
from cli.result import CliResult
from cli.runtime_services import (
    build_generator,
    effective_config,
    open_workspace,
    skipped_lines,
    warning_lines,
)
from core_types import ModuleKind
from generator.workspace_code import workspace_to_code
from utils.file_io import write_text


def compile_command(
    workspace_file: Annotated[
        Path,
        Parameter(help="Workspace document (JSON) to compile."),
    ],
    *,
    output: Annotated[
        Path | None,
        Parameter(
            name=["--output", "-o"],
            help="Write generated code to this file instead of stdout.",
            group=output_group,
        ),
    ] = None,
    module_kind: Annotated[
        ModuleKind | None,
        Parameter(
            name="--module-kind",
            help="Override the module kind stored in the document.",
            group=generation_group,
        ),
    ] = None,
    strict: Annotated[
        bool,
        Parameter(
            name="--strict",
            help="Fail when any call block carries a synchronization warning.",
            group=generation_group,
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Generate Python source from every top-level block of a workspace.

    Call blocks are synchronized with the document's components and method
    definitions before code is generated.

    Returns:
    -------
    CliResult
        Outcome with block and failure counts.
    """
    config = effective_config(run_context)
    if module_kind is not None:
        config = config.with_overrides(module_kind=module_kind)
    loaded = open_workspace(workspace_file, config)
    report = synchronize_workspace(loaded.workspace)
    generator = build_generator(loaded, config)
    result = workspace_to_code(loaded.workspace, generator)

    skipped = loaded.workspace.skipped_blocks
    failure_count = len(result.failures) + len(skipped)
    counts = {
        "blocks": len(loaded.workspace.get_top_blocks()),
        "failures": failure_count,
        "warnings": len(report.warned),
    }
    details = tuple(
        f"{failure.block_id} ({failure.block_type}): {failure.error}"
        for failure in result.failures
    ) + skipped_lines(loaded.workspace)
    if failure_count:
        return CliResult.error(
            ExitCode.GENERATION_ERROR,
            summary=f"Could not generate {failure_count} block(s) of {workspace_file}.",
            counts=counts,
            details=details,
        )
    if strict and report.warned:
        return CliResult.error(
            ExitCode.SYNC_WARNINGS,
            summary=f"{len(report.warned)} call block(s) reference stale definitions.",
            counts=counts,
            details=warning_lines(loaded.workspace, report.warned),
        )

    if output is None:
        sys.stdout.write(result.code)
        return CliResult.success(counts=counts)
    write_text(output, result.code)
    return CliResult.success(
        summary=f"Wrote {output}.",
        artifacts={"code": output},
        counts=counts,
    )


__all__ = ["compile_command"]
