"""JSON workspace documents.

A document holds the owner-level collections (components and method
definitions) plus the top-level blocks, each with its field values, its
extra state and the blocks plugged into its inputs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import msgspec

from core_types import JsonDict, ModuleKind
from serde_msgspec import StructBaseCompat, dumps_json, loads_json, validation_error_payload
from utils.file_io import read_text, write_text
from workspace.block import Block, BlockStateError, InputKind
from workspace.model import Component, MethodDefinition
from workspace.registry import BlockTypeRegistry
from workspace.workspace import SkippedBlock, Workspace

logger = logging.getLogger(__name__)


class WorkspaceDocumentError(ValueError):
    """Raised when a workspace document cannot be decoded or applied."""


class BlockDocument(StructBaseCompat, frozen=True, rename="camel"):
    """Persisted form of one block and the blocks plugged into it."""

    type: str
    id: str
    fields: dict[str, str] = msgspec.field(default_factory=dict)
    extra_state: dict[str, Any] | None = None
    inputs: dict[str, BlockDocument] = msgspec.field(default_factory=dict)


class WorkspaceDocument(StructBaseCompat, frozen=True, rename="camel"):
    """Persisted form of one module's workspace."""

    module_kind: ModuleKind = ModuleKind.ROBOT
    components: tuple[Component, ...] = ()
    definitions: tuple[MethodDefinition, ...] = ()
    blocks: tuple[BlockDocument, ...] = ()


def loads_workspace(buf: bytes | str) -> WorkspaceDocument:
    """Decode a workspace document from JSON.

    Returns:
    -------
    WorkspaceDocument
        Decoded document.

    Raises:
        WorkspaceDocumentError: If the payload is not a valid document.
    """
    try:
        return loads_json(buf, target_type=WorkspaceDocument)
    except msgspec.ValidationError as exc:
        payload = validation_error_payload(exc)
        msg = f"Invalid workspace document: {payload.get('summary', str(exc))}"
        if "path" in payload:
            msg = f"{msg} (at {payload['path']})"
        raise WorkspaceDocumentError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"Workspace document is not valid JSON: {exc}"
        raise WorkspaceDocumentError(msg) from exc


def dumps_workspace(document: WorkspaceDocument, *, pretty: bool = True) -> bytes:
    """Encode a workspace document to JSON.

    Returns:
    -------
    bytes
        JSON payload.
    """
    return dumps_json(document, pretty=pretty)


def _load_block(workspace: Workspace, document: BlockDocument) -> Block | None:
    block = workspace.new_block(document.type, document.id)
    if document.extra_state is not None:
        extra_state: JsonDict = dict(document.extra_state)
        try:
            block.load_extra_state(extra_state)
        except BlockStateError as exc:
            workspace.dispose_block(block.id)
            workspace.skipped_blocks.append(
                SkippedBlock(block_id=document.id, block_type=document.type, error=str(exc))
            )
            logger.warning("Skipped block %r (%s): %s", document.id, document.type, exc)
            return None
    for name, value in document.fields.items():
        try:
            block.set_field_value(name, value)
        except KeyError as exc:
            msg = f"Block {document.id!r} ({document.type}) has no field {name!r}."
            raise WorkspaceDocumentError(msg) from exc
    for input_name, child_document in document.inputs.items():
        child = _load_block(workspace, child_document)
        if child is None:
            continue
        try:
            block.connect(input_name, child)
        except KeyError as exc:
            msg = f"Block {document.id!r} ({document.type}) has no input {input_name!r}."
            raise WorkspaceDocumentError(msg) from exc
    return block


def load_workspace(document: WorkspaceDocument, block_types: BlockTypeRegistry) -> Workspace:
    """Build a live workspace from a document.

    Returns:
    -------
    Workspace
        Workspace holding every block of the document. A block whose
        extra state cannot be applied is left out together with the blocks
        plugged into it, and listed in ``Workspace.skipped_blocks``.

    Raises:
        WorkspaceDocumentError: If a block names an unknown field or input,
            or two blocks share an id.
    """
    workspace = Workspace(
        block_types=block_types,
        module_kind=document.module_kind,
        components=document.components,
        definitions=document.definitions,
    )
    for block_document in document.blocks:
        try:
            _load_block(workspace, block_document)
        except WorkspaceDocumentError:
            raise
        except ValueError as exc:
            raise WorkspaceDocumentError(str(exc)) from exc
    logger.debug(
        "Loaded workspace with %d block(s), %d skipped, %d component(s), %d definition(s)",
        len(workspace.get_all_blocks()),
        len(workspace.skipped_blocks),
        len(document.components),
        len(document.definitions),
    )
    return workspace


def _dump_block(block: Block) -> BlockDocument:
    inputs = {
        row.name: _dump_block(row.target)
        for row in block.inputs
        if row.kind is InputKind.VALUE and row.target is not None
    }
    return BlockDocument(
        type=block.block_type,
        id=block.id,
        fields=block.field_values(),
        extra_state=block.save_extra_state(),
        inputs=inputs,
    )


def dump_workspace(workspace: Workspace) -> WorkspaceDocument:
    """Capture a live workspace as a document.

    Returns:
    -------
    WorkspaceDocument
        Document with the top-level blocks and the owner collections.
    """
    return WorkspaceDocument(
        module_kind=workspace.module_kind,
        components=tuple(workspace.get_components()),
        definitions=tuple(workspace.get_definitions()),
        blocks=tuple(_dump_block(block) for block in workspace.get_top_blocks()),
    )


def read_workspace(path: Path) -> WorkspaceDocument:
    """Read a workspace document file.

    Returns:
    -------
    WorkspaceDocument
        Decoded document.
    """
    return loads_workspace(read_text(path))


def write_workspace(path: Path, document: WorkspaceDocument) -> None:
    """Write a workspace document file."""
    write_text(path, dumps_workspace(document).decode("utf-8") + "\n")


__all__ = [
    "BlockDocument",
    "WorkspaceDocument",
    "WorkspaceDocumentError",
    "dump_workspace",
    "dumps_workspace",
    "load_workspace",
    "loads_workspace",
    "read_workspace",
    "write_workspace",
]
