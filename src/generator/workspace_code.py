"""Whole-workspace compilation into one Python source file."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from generator.errors import CodeGenerationError
from generator.python_generator import PythonGenerator
from workspace.registry import UnknownBlockTypeError
from workspace.workspace import Workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockFailure:
    """A top-level block that could not be generated."""

    block_id: str
    block_type: str
    error: str


@dataclass(frozen=True)
class CompileResult:
    """Generated source plus the blocks that were skipped."""

    code: str
    failures: tuple[BlockFailure, ...] = ()

    @property
    def ok(self) -> bool:
        """Whether every top-level block was generated."""
        return not self.failures


def workspace_to_code(workspace: Workspace, generator: PythonGenerator) -> CompileResult:
    """Generate a Python source file from every top-level block.

    Statements are emitted as-is; bare expressions become expression
    statements. Imports requested while generating are placed first, once
    each. A block that fails with a code-generation error is logged and
    reported; the remaining blocks are still generated.

    Returns:
    -------
    CompileResult
        Generated source and per-block failures.
    """
    generator.reset()
    lines: list[str] = []
    failures: list[BlockFailure] = []
    for block in workspace.get_top_blocks():
        try:
            result = generator.block_to_code(block)
        except (CodeGenerationError, UnknownBlockTypeError) as exc:
            logger.exception("Cannot generate code for block %s (%s)", block.id, block.block_type)
            failures.append(
                BlockFailure(block_id=block.id, block_type=block.block_type, error=str(exc))
            )
            continue
        text = result[0] + "\n" if isinstance(result, tuple) else result
        if text:
            lines.append(text)
    body = "".join(lines)
    imports = generator.import_lines()
    if imports:
        header = "\n".join(imports) + "\n"
        body = f"{header}\n{body}" if body else header
    if failures:
        logger.warning("Generated %s with %d failed block(s)", workspace.module_kind, len(failures))
    return CompileResult(code=body, failures=tuple(failures))


__all__ = ["BlockFailure", "CompileResult", "workspace_to_code"]
