"""Workspace and generator composition helpers for CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from blocks.gamepad import populate_workspace_fields
from blocks.registration import setup
from config import CompilerConfig
from devices.registry import default_registry
from generator.python_generator import PythonGenerator
from workspace.document import WorkspaceDocument, load_workspace, read_workspace
from workspace.registry import BlockTypeRegistry
from workspace.workspace import Workspace

if TYPE_CHECKING:
    from cli.context import RunContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedWorkspace:
    """A workspace document and the live workspace built from it."""

    path: Path
    document: WorkspaceDocument
    workspace: Workspace
    block_types: BlockTypeRegistry
    unsupported_controls: tuple[str, ...] = ()


def effective_config(run_context: RunContext | None) -> CompilerConfig:
    """Return the configuration carried by the run context, or the defaults.

    Returns:
    -------
    CompilerConfig
        Compiler configuration.
    """
    if run_context is None:
        return CompilerConfig()
    return run_context.config


def open_workspace(path: Path, config: CompilerConfig | None = None) -> LoadedWorkspace:
    """Read a workspace document and build its live workspace.

    With ``config``, gamepad blocks offer only the controls of the profile
    configured on their port.

    Returns:
    -------
    LoadedWorkspace
        Document and workspace, with every block type registered.
    """
    document = read_workspace(path)
    block_types = setup()
    workspace = load_workspace(document, block_types)
    logger.info("Loaded %s (%s module)", path, workspace.module_kind)
    unsupported: list[str] = []
    if config is not None:
        unsupported = populate_workspace_fields(workspace, config.port_config(), default_registry())
        for block_id in unsupported:
            logger.warning("Gamepad block %s selects a control its port does not offer", block_id)
    return LoadedWorkspace(
        path=path,
        document=document,
        workspace=workspace,
        block_types=block_types,
        unsupported_controls=tuple(unsupported),
    )


def warning_lines(workspace: Workspace, block_ids: Iterable[str]) -> tuple[str, ...]:
    """Return one display line per warned block.

    Returns:
    -------
    tuple[str, ...]
        ``"<block id>: <warning>"`` lines.
    """
    lines: list[str] = []
    for block_id in block_ids:
        block = workspace.get_block(block_id)
        text = "" if block is None else block.warning_text or ""
        lines.append(f"{block_id}: {' '.join(text.split())}")
    return tuple(lines)


def skipped_lines(workspace: Workspace) -> tuple[str, ...]:
    """Return one display line per block left out when the document was loaded.

    Returns:
    -------
    tuple[str, ...]
        ``"<block id> (<block type>): <error>"`` lines.
    """
    return tuple(
        f"{block.block_id} ({block.block_type}): {block.error}"
        for block in workspace.skipped_blocks
    )


def build_generator(
loaded: LoadedWorkspace, config: CompilerConfig) -> PythonGenerator:
    """Create the generator for a loaded workspace.

    The configured module kind, when set, overrides the document's.

    Returns:
    -------
    PythonGenerator
        Generator for one file.
    """
    return PythonGenerator(
        block_types=loaded.block_types,
        module_kind=config.module_kind or loaded.workspace.module_kind,
        port_config=config.port_config(),
        indent=config.indent,
    )


__all__ = [
    "LoadedWorkspace",
    "build_generator",
    "effective_config",
    "open_workspace",
    "skipped_lines",
    "warning_lines",
]
