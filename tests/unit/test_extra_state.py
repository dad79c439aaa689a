"""Tests for the call-block extra-state codec."""

from __future__ import annotations

import logging

import pytest

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import BLOCK_NAME, CallKind
from blocks.errors import ExtraStateError, UnknownCallKindError
from blocks.extra_state import (
    CallExtraState,
    decode_extra_state,
    dumps_extra_state,
    encode_extra_state,
    load_extra_state,
    missing_fields,
    save_extra_state,
)
from tests.test_helpers.workspace_builders import add_call, args, make_workspace


def test_encode_omits_empty_optionals() -> None:
    """Only the required keys and non-empty optionals are written."""
    state = CallExtraState(kind="built-in", return_type="int", args=args(("x", "")))
    assert encode_extra_state(state) == {
        "kind": "built-in",
        "returnType": "int",
        "args": [{"name": "x"}],
    }


def test_encode_uses_camel_case_keys() -> None:
    """Optional attributes are persisted under camelCase keys."""
    state = CallExtraState(
        kind="instance_component",
        return_type="None",
        args=(),
        tooltip="Stops.",
        component_id="c1",
        component_type_name="drivetrain.DriveTrain",
        component_name="drive",
        actual_callee_name="stop",
    )
    record = encode_extra_state(state)
    assert record["componentId"] == "c1"
    assert record["componentTypeName"] == "drivetrain.DriveTrain"
    assert record["componentName"] == "drive"
    assert record["actualCalleeName"] == "stop"
    assert record["tooltip"] == "Stops."
    assert "importModule" not in record


def test_decode_defaults_missing_optionals() -> None:
    """Records saved before newer optional fields existed still decode."""
    state = decode_extra_state(
        {"kind": "module", "returnType": "float", "args": [{"name": "x", "type": "float"}]}
    )
    assert state.call_kind is CallKind.MODULE
    assert state.import_module == ""
    assert state.callee_definition_id == ""
    assert state.args[0].type == "float"


def test_decode_accepts_json_text() -> None:
    """JSON text decodes the same way as a plain mapping."""
    state = CallExtraState(
        kind="instance_within",
        return_type="None",
        args=args(("speed", "float")),
        actual_callee_name="drive_forward",
        callee_definition_id="def-1",
    )
    assert decode_extra_state(dumps_extra_state(state)) == state
    assert decode_extra_state(dumps_extra_state(state).decode("utf-8")) == state


def test_decode_rejects_unknown_kind() -> None:
    """An unknown kind string is a programming error, not a malformed record."""
    with pytest.raises(UnknownCallKindError):
        decode_extra_state({"kind": "teleport", "returnType": "None", "args": []})


@pytest.mark.parametrize(
    "record",
    [
        {"returnType": "None", "args": []},
        {"kind": "module", "returnType": 3, "args": []},
        {"kind": "module", "returnType": "None", "args": [{"type": "int"}]},
        {"kind": "module", "returnType": "None"},
    ],
)
def test_decode_rejects_malformed_records(record: dict[str, object]) -> None:
    """Missing or mistyped required keys raise ``ExtraStateError``."""
    with pytest.raises(ExtraStateError, match="Invalid call extra state"):
        decode_extra_state(record)


def test_decode_rejects_invalid_json() -> None:
    """Text that is not JSON raises ``ExtraStateError``."""
    with pytest.raises(ExtraStateError, match="not valid JSON"):
        decode_extra_state("{kind: module")


def test_extra_state_error_is_value_error() -> None:
    """Malformed records can be handled as ``ValueError``."""
    with pytest.raises(ValueError, match="Invalid call extra state"):
        decode_extra_state({"kind": "module"})


def test_missing_fields_follow_kind_contract() -> None:
    """Required attributes left empty are reported in sorted order."""
    component_call = CallExtraState(kind="instance_component", return_type="None", args=())
    assert missing_fields(component_call) == ("component_id", "component_type_name")
    builtin_call = CallExtraState(kind="built-in", return_type="None", args=())
    assert missing_fields(builtin_call) == ()


def test_save_and_load_through_a_block() -> None:
    """A block saves what it loaded, and loading rebuilds its shape."""
    workspace = make_workspace()
    state = CallExtraState(
        kind="static",
        return_type="float",
        args=args(("a", "float"), ("b", "float")),
        import_module="math",
    )
    block = add_call(workspace, state)
    assert save_extra_state(block) == state
    assert block.output
    assert block.get_input("ARG1") is not None

    fresh = add_call(workspace, CallExtraState(kind="built-in", return_type="None", args=()))
    load_extra_state(fresh, encode_extra_state(state))
    assert save_extra_state(fresh) == state


_STATES_BY_KIND = {
    CallKind.BUILT_IN: CallExtraState(
        kind="built-in", return_type="int", args=args(("x", "")), tooltip="Absolute value."
    ),
    CallKind.MODULE: CallExtraState(
        kind="module",
        return_type="float",
        args=args(("x", "float")),
        import_module="math",
        actual_callee_name="sqrt",
    ),
    CallKind.STATIC: CallExtraState(
        kind="static",
        return_type="float",
        args=args(("a", "float"), ("b", "float")),
        import_module="wpimath.MathUtil",
    ),
    CallKind.CONSTRUCTOR: CallExtraState(
        kind="constructor",
        return_type="wpilib.Timer",
        args=(),
        import_module="wpilib",
        tooltip="Creates a timer.",
    ),
    CallKind.INSTANCE: CallExtraState(
        kind="instance",
        return_type="None",
        args=args(("timer", "wpilib.Timer")),
        actual_callee_name="reset",
    ),
    CallKind.INSTANCE_WITHIN: CallExtraState(
        kind="instance_within",
        return_type="None",
        args=args(("power", "float")),
        actual_callee_name="shoot_ball",
        callee_definition_id="def-shoot",
    ),
    CallKind.INSTANCE_COMPONENT: CallExtraState(
        kind="instance_component",
        return_type="bool",
        args=(),
        tooltip="Whether the drive is moving.",
        actual_callee_name="is_moving",
        component_id="comp-drive",
        component_type_name="drivetrain.DriveTrain",
        component_name="drive",
    ),
    CallKind.INSTANCE_ROBOT: CallExtraState(
        kind="instance_robot",
        return_type="None",
        args=args(("power", "float")),
        actual_callee_name="shoot_ball",
        callee_definition_id="def-shoot",
    ),
    CallKind.EVENT: CallExtraState(
        kind="event",
        return_type="None",
        args=args(("speed", "int")),
        actual_callee_name="on_start",
        callee_definition_id="def-start",
    ),
}


@pytest.mark.parametrize("kind", list(CallKind))
def test_every_kind_survives_save_and_load(kind: CallKind) -> None:
    """Each call kind keeps its persisted attributes through a save and a load."""
    state = _STATES_BY_KIND[kind]
    workspace = make_workspace()
    record = add_call(workspace, state).save_extra_state()
    assert record is not None
    fresh = workspace.new_block(BLOCK_NAME)
    fresh.load_extra_state(dict(record))
    reloaded = fresh.save_extra_state()
    assert reloaded == record
    for key in ("kind", "returnType", "args", "tooltip", "importModule", "actualCalleeName"):
        assert reloaded.get(key) == record.get(key)
    assert isinstance(fresh, CallPythonFunctionBlock)
    assert fresh.kind is kind
    assert save_extra_state(fresh) == state


def test_load_logs_missing_required_fields(caplog: pytest.LogCaptureFixture) -> None:
    """Loading an incomplete record still applies it and logs a warning."""
    workspace = make_workspace()
    block = add_call(workspace, CallExtraState(kind="built-in", return_type="None", args=()))
    with caplog.at_level(logging.WARNING, logger="blocks.extra_state"):
        load_extra_state(block, {"kind": "static", "returnType": "None", "args": []})
    assert block.kind is CallKind.STATIC
    assert "import_module" in caplog.text
