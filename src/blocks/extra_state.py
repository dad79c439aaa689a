"""Persisted extra state of call blocks.

The wire record is camelCase and minimal: optional strings are omitted when
empty, and records written before newer optional fields existed decode with
those fields defaulted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import msgspec

from blocks.call_kinds import CallKind, contract_for, parse_call_kind
from blocks.errors import ExtraStateError
from core_types import JsonDict
from serde_msgspec import (
    StructBaseCompat,
    convert,
    dumps_json,
    loads_json,
    to_builtins,
    validation_error_payload,
)
from workspace.model import FunctionArg

if TYPE_CHECKING:
    from blocks.call_block import CallPythonFunctionBlock

logger = logging.getLogger(__name__)


class CallExtraState(StructBaseCompat, frozen=True, rename="camel"):
    """Extra state of one call block.

    ``kind`` stays a plain string on the wire; ``call_kind`` parses it.
    ``return_type`` is ``"None"`` for statements and ``""`` for an untyped
    return value.
    """

    kind: str
    return_type: str
    args: tuple[FunctionArg, ...]
    tooltip: str = ""
    import_module: str = ""
    actual_callee_name: str = ""
    callee_definition_id: str = ""
    component_id: str = ""
    component_type_name: str = ""
    component_name: str = ""

    @property
    def call_kind(self) -> CallKind:
        """Parsed call kind.

        Raises:
            UnknownCallKindError: If ``kind`` is not a known call kind.
        """
        return parse_call_kind(self.kind)


def missing_fields(state: CallExtraState) -> tuple[str, ...]:
    """Return the required attributes ``state`` leaves empty for its kind.

    Returns:
    -------
    tuple[str, ...]
        Sorted attribute names; empty when the record is complete.
    """
    contract = contract_for(state.call_kind)
    return tuple(sorted(name for name in contract.required if not getattr(state, name)))


def encode_extra_state(state: CallExtraState) -> JsonDict:
    """Return the plain persisted record for ``state``.

    Returns:
    -------
    JsonDict
        camelCase record with empty optionals omitted.
    """
    record = to_builtins(state)
    if not isinstance(record, dict):
        msg = "Extra state did not encode to a record."
        raise ExtraStateError(msg)
    # to_builtins keeps tuples; the persisted record carries JSON arrays.
    record["args"] = list(record.get("args", ()))
    return record


def decode_extra_state(record: Mapping[str, object] | bytes | str) -> CallExtraState:
    """Decode a persisted record (plain mapping or JSON text).

    Returns:
    -------
    CallExtraState
        Decoded extra state.

    Raises:
        ExtraStateError: If the record is malformed.
        UnknownCallKindError: If the record names an unknown call kind.
    """
    try:
        if isinstance(record, (bytes, str)):
            state = loads_json(record, target_type=CallExtraState)
        else:
            state = convert(dict(record), target_type=CallExtraState)
    except msgspec.ValidationError as exc:
        payload = validation_error_payload(exc)
        msg = f"Invalid call extra state: {payload.get('summary', str(exc))}"
        if "path" in payload:
            msg = f"{msg} (at {payload['path']})"
        raise ExtraStateError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"Call extra state is not valid JSON: {exc}"
        raise ExtraStateError(msg) from exc
    parse_call_kind(state.kind)
    return state


def dumps_extra_state(state: CallExtraState) -> bytes:
    """Serialize extra state to JSON bytes.

    Returns:
    -------
    bytes
        JSON payload.
    """
    return dumps_json(state)


def save_extra_state(block: CallPythonFunctionBlock) -> CallExtraState:
    """Capture the extra state of a call block.

    Returns:
    -------
    CallExtraState
        Snapshot of the block's state.
    """
    return block.extra_state()


def load_extra_state(
    block: CallPythonFunctionBlock,
    state: CallExtraState | Mapping[str, object] | bytes | str,
) -> None:
    """Apply persisted extra state to a call block and rebuild its shape."""
    decoded = state if isinstance(state, CallExtraState) else decode_extra_state(state)
    missing = missing_fields(decoded)
    if missing:
        logger.warning(
            "Call block %s (%s) is missing %s",
            block.id,
            decoded.kind,
            ", ".join(missing),
        )
    block.apply_extra_state(decoded)


__all__ = [
    "CallExtraState",
    "decode_extra_state",
    "dumps_extra_state",
    "encode_extra_state",
    "load_extra_state",
    "missing_fields",
    "save_extra_state",
]
