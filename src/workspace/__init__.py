"""In-memory host editor: blocks, events, owner collections and documents."""

from __future__ import annotations

from workspace.block import Block, BlockStateError, ExpressionBlock, Field, Input, InputKind
from workspace.document import (
    BlockDocument,
    WorkspaceDocument,
    WorkspaceDocumentError,
    dump_workspace,
    load_workspace,
    loads_workspace,
)
from workspace.events import BlockChangeEvent
from workspace.model import (
    RETURN_TYPE_NONE,
    Component,
    FunctionArg,
    MethodDefinition,
    MethodSignature,
)
from workspace.registry import BlockType, BlockTypeRegistry, UnknownBlockTypeError
from workspace.workspace import SkippedBlock, Workspace

__all__ = [
    "RETURN_TYPE_NONE",
    "Block",
    "BlockChangeEvent",
    "BlockDocument",
    "BlockStateError",
    "BlockType",
    "BlockTypeRegistry",
    "Component",
    "ExpressionBlock",
    "Field",
    "FunctionArg",
    "Input",
    "InputKind",
    "MethodDefinition",
    "MethodSignature",
    "SkippedBlock",
    "UnknownBlockTypeError",
    "Workspace",
    "WorkspaceDocument",
    "WorkspaceDocumentError",
    "dump_workspace",
    "load_workspace",
    "loads_workspace",
]
