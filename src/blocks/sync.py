"""Keeping call blocks consistent with the definitions and components they reference.

Every repair of a call block is bracketed by extra-state snapshots. When the
snapshots differ exactly one mutation event is fired, with undo recording
disabled, since the repair follows from an edit the user already made.
Stale references never raise: they leave a warning on the call block.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TypeAlias

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import (
    BLOCK_NAME,
    KIND_CONTRACTS,
    WARNING_ID_FUNCTION_CHANGED,
    CallKind,
)
from workspace.events import ELEMENT_MUTATION, BlockChangeEvent
from workspace.model import MethodDefinition, MethodSignature
from workspace.workspace import Workspace

logger = logging.getLogger(__name__)

MESSAGE_COMPONENT_MISSING = "This block calls a method on a component that no longer exists."
MESSAGE_METHOD_MISSING = "This block calls a method that no longer exists."
MESSAGE_RETURN_TYPE_CHANGED = "This block calls a method whose return type has changed."
MESSAGE_ARGS_CHANGED = "This block calls a method whose arguments have changed."

Repair: TypeAlias = Callable[[CallPythonFunctionBlock], list[str]]


@dataclass
class SyncReport:
    """Outcome of one synchronization pass."""

    repaired: list[str] = field(default_factory=list)
    warned: list[str] = field(default_factory=list)
    events: list[BlockChangeEvent] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Whether any call block's state changed."""
        return bool(self.repaired)


@contextmanager
def undo_recording_disabled(workspace: Workspace) -> Iterator[None]:
    """Disable undo recording for the duration of the block.

    Yields:
    ------
    None
        Control while recording is disabled; the previous mode is restored
        on exit.
    """
    previous = workspace.record_undo
    workspace.set_record_undo(False)
    try:
        yield
    finally:
        workspace.set_record_undo(previous)


def get_call_blocks(workspace: Workspace) -> list[CallPythonFunctionBlock]:
    """Return every call block in the workspace.

    Returns:
    -------
    list[CallPythonFunctionBlock]
        Call blocks in creation order.
    """
    return [
        block
        for block in workspace.get_blocks_by_type(BLOCK_NAME)
        if isinstance(block, CallPythonFunctionBlock)
    ]


def get_method_callers(
    workspace: Workspace,
    definition_id: str,
    name: str | None = None,
) -> list[CallPythonFunctionBlock]:
    """Return the call blocks that call the definition ``definition_id``.

    Blocks without a definition id are matched by their displayed name
    when ``name`` is given.

    Returns:
    -------
    list[CallPythonFunctionBlock]
        Dependent call blocks.
    """
    callers: list[CallPythonFunctionBlock] = []
    for block in get_call_blocks(workspace):
        if not KIND_CONTRACTS[block.kind].repairable:
            continue
        if block.callee_definition_id:
            if block.callee_definition_id == definition_id:
                callers.append(block)
        elif name is not None and block.function_name() == name:
            callers.append(block)
    return callers


def signature_warnings(block: CallPythonFunctionBlock, signature: MethodSignature) -> list[str]:
    """Compare a call block against the signature it should match.

    Any difference in arity, argument name or argument type yields a single
    argument warning.

    Returns:
    -------
    list[str]
        Warning messages, empty when the block matches.
    """
    warnings: list[str] = []
    if block.return_type != signature.return_type:
        warnings.append(MESSAGE_RETURN_TYPE_CHANGED)
    if tuple(block.args) != signature.caller_args:
        warnings.append(MESSAGE_ARGS_CHANGED)
    return warnings


def apply_warnings(block: CallPythonFunctionBlock, warnings: list[str]) -> None:
    """Show ``warnings`` on the block, or clear its warning when there are none."""
    if warnings:
        block.set_warning_text("\n\n".join(warnings), WARNING_ID_FUNCTION_CHANGED)
    else:
        block.set_warning_text(None, WARNING_ID_FUNCTION_CHANGED)


def repair_block(
    workspace: Workspace,
    block: CallPythonFunctionBlock,
    repair: Repair,
    report: SyncReport,
) -> None:
    """Run one repair on one block and fire a mutation event if its state changed."""
    before = block.save_extra_state()
    warnings = repair(block)
    after = block.save_extra_state()
    if before != after:
        with undo_recording_disabled(workspace):
            event = workspace.fire(
                BlockChangeEvent(
                    block_id=block.id,
                    element=ELEMENT_MUTATION,
                    old_value=before,
                    new_value=after,
                )
            )
        report.repaired.append(block.id)
        report.events.append(event)
        logger.debug("Repaired call block %s", block.id)
    apply_warnings(block, warnings)
    if warnings:
        report.warned.append(block.id)
        logger.warning("Call block %s: %s", block.id, " ".join(warnings))


def _follow_definition(signature: MethodSignature) -> Repair:
    def repair(block: CallPythonFunctionBlock) -> list[str]:
        warnings = signature_warnings(block, signature)
        if block.function_name() != signature.visible_name or (
            block.actual_callee_name and block.actual_callee_name != signature.python_name
        ):
            block.rename_method(signature.visible_name, signature.python_name)
        if warnings:
            block.mutate_method(signature)
        return warnings

    return repair


def _report_missing_definition(block: CallPythonFunctionBlock) -> list[str]:
    return [MESSAGE_METHOD_MISSING]


def _follow_component(block: CallPythonFunctionBlock) -> list[str]:
    block.refresh_components()
    for component in block.components:
        if component.block_id == block.component_id:
            if block.displayed_component_name() != component.name:
                block.replace_component_name(component.name)
            return []
    return [MESSAGE_COMPONENT_MISSING]


def on_definition_changed(
    workspace: Workspace,
    definition_id: str,
    signature: MethodSignature,
    *,
    previous_name: str | None = None,
) -> SyncReport:
    """Propagate an edited method signature to every call block that uses it.

    The workspace's definition record is replaced first. Renames are applied
    silently; return-type or argument changes are applied and flagged.

    Returns:
    -------
    SyncReport
        Repaired and warned call blocks.
    """
    workspace.put_definition(definition_id, signature)
    report = SyncReport()
    repair = _follow_definition(signature)
    for block in get_method_callers(workspace, definition_id, previous_name):
        repair_block(workspace, block, repair, report)
    logger.debug(
        "Definition %s changed: %d repaired, %d warned",
        definition_id,
        len(report.repaired),
        len(report.warned),
    )
    return report


def on_definition_deleted(
    workspace: Workspace,
    definition_id: str,
    *,
    previous_name: str | None = None,
) -> SyncReport:
    """Flag every call block of a deleted definition; the blocks are kept.

    Returns:
    -------
    SyncReport
        Warned call blocks.
    """
    callers = get_method_callers(workspace, definition_id, previous_name)
    workspace.remove_definition(definition_id)
    report = SyncReport()
    for block in callers:
        repair_block(workspace, block, _report_missing_definition, report)
    return report


def on_component_changed(workspace: Workspace) -> SyncReport:
    """Re-check every component call after components were renamed or deleted.

    Returns:
    -------
    SyncReport
        Repaired and warned call blocks.
    """
    report = SyncReport()
    for block in get_call_blocks(workspace):
        if block.kind is CallKind.INSTANCE_COMPONENT:
            repair_block(workspace, block, _follow_component, report)
    return report


def resolve_definition(
    workspace: Workspace,
    block: CallPythonFunctionBlock,
) -> MethodDefinition | None:
    """Return the live definition a call block refers to.

    Returns:
    -------
    MethodDefinition | None
        Definition by id, or by displayed name for blocks saved without an
        id; ``None`` when it no longer exists.
    """
    if block.callee_definition_id:
        return workspace.get_definition(block.callee_definition_id)
    name = block.function_name()
    for definition in workspace.get_definitions():
        if definition.visible_name == name:
            return definition
    return None


def synchronize_workspace(workspace: Workspace) -> SyncReport:
    """Check every call block's references, as after loading a workspace.

    Returns:
    -------
    SyncReport
        Repaired and warned call blocks.
    """
    report = SyncReport()
    for block in get_call_blocks(workspace):
        match block.kind:
            case CallKind.INSTANCE_COMPONENT:
                repair_block(workspace, block, _follow_component, report)
            case CallKind.INSTANCE_WITHIN | CallKind.INSTANCE_ROBOT:
                definition = resolve_definition(workspace, block)
                if definition is None:
                    repair_block(workspace, block, _report_missing_definition, report)
                else:
                    repair_block(
                        workspace, block, _follow_definition(definition.signature()), report
                    )
            case _:
                continue
    logger.debug(
        "Synchronized %d call block(s): %d repaired, %d warned",
        len(get_call_blocks(workspace)),
        len(report.repaired),
        len(report.warned),
    )
    return report


__all__ = [
    "MESSAGE_ARGS_CHANGED",
    "MESSAGE_COMPONENT_MISSING",
    "MESSAGE_METHOD_MISSING",
    "MESSAGE_RETURN_TYPE_CHANGED",
    "SyncReport",
    "apply_warnings",
    "get_call_blocks",
    "get_method_callers",
    "on_component_changed",
    "on_definition_changed",
    "on_definition_deleted",
    "repair_block",
    "resolve_definition",
    "signature_warnings",
    "synchronize_workspace",
    "undo_recording_disabled",
]
