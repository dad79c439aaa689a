"""Call blocks, gamepad blocks and their registration."""

from __future__ import annotations

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import BLOCK_NAME, KIND_CONTRACTS, CallKind, parse_call_kind
from blocks.emitter import python_from_block
from blocks.errors import BlockError, ExtraStateError, UnknownCallKindError
from blocks.extra_state import (
    CallExtraState,
    decode_extra_state,
    encode_extra_state,
    load_extra_state,
    save_extra_state,
)
from blocks.registration import setup
from blocks.sync import (
    SyncReport,
    get_method_callers,
    on_component_changed,
    on_definition_changed,
    on_definition_deleted,
    synchronize_workspace,
    undo_recording_disabled,
)

__all__ = [
    "BLOCK_NAME",
    "KIND_CONTRACTS",
    "BlockError",
    "CallExtraState",
    "CallKind",
    "CallPythonFunctionBlock",
    "ExtraStateError",
    "SyncReport",
    "UnknownCallKindError",
    "decode_extra_state",
    "encode_extra_state",
    "get_method_callers",
    "load_extra_state",
    "on_component_changed",
    "on_definition_changed",
    "on_definition_deleted",
    "parse_call_kind",
    "python_from_block",
    "save_extra_state",
    "setup",
    "synchronize_workspace",
    "undo_recording_disabled",
]
