"""Tests for call-block shape, titles and tooltips."""

from __future__ import annotations

import pytest

from blocks.call_block import CallPythonFunctionBlock, output_check, socket_check
from blocks.call_kinds import (
    FIELD_COMPONENT_NAME,
    FIELD_FUNCTION_NAME,
    FIELD_MODULE_OR_CLASS_NAME,
    INPUT_TITLE,
    CallKind,
)
from blocks.extra_state import CallExtraState
from tests.test_helpers.workspace_builders import add_call, args, make_workspace
from workspace.model import Component, MethodSignature
from workspace.workspace import Workspace


def _title_labels(block: CallPythonFunctionBlock) -> list[str]:
    title = block.get_input(INPUT_TITLE)
    assert title is not None
    return [item.value if item.name is None else f"<{item.name}>" for item in title.fields]


@pytest.mark.parametrize(
    ("kind", "labels"),
    [
        (CallKind.BUILT_IN, ["call", "<FUNC>"]),
        (CallKind.MODULE, ["call", "<MODULE_OR_CLASS>", ".", "<FUNC>"]),
        (CallKind.STATIC, ["call", "<MODULE_OR_CLASS>", ".", "<FUNC>"]),
        (CallKind.CONSTRUCTOR, ["create", "<MODULE_OR_CLASS>"]),
        (CallKind.INSTANCE, ["call", "<MODULE_OR_CLASS>", ".", "<FUNC>"]),
        (CallKind.INSTANCE_WITHIN, ["call", "<FUNC>"]),
        (CallKind.EVENT, ["fire", "<FUNC>"]),
        (CallKind.INSTANCE_COMPONENT, ["call", "<COMPONENT_NAME>", ".", "<FUNC>"]),
        (CallKind.INSTANCE_ROBOT, ["call", "robot", ".", "<FUNC>"]),
    ],
)
def test_title_layout_per_kind(kind: CallKind, labels: list[str]) -> None:
    """Every kind builds its own title row."""
    workspace = make_workspace()
    block = add_call(workspace, CallExtraState(kind=kind.value, return_type="None", args=()))
    assert _title_labels(block) == labels


def test_statement_and_expression_shapes() -> None:
    """``None`` return type makes a statement; anything else an expression."""
    workspace = make_workspace()
    statement = add_call(workspace, CallExtraState(kind="built-in", return_type="None", args=()))
    expression = add_call(workspace, CallExtraState(kind="built-in", return_type="int", args=()))
    untyped = add_call(workspace, CallExtraState(kind="built-in", return_type="", args=()))
    assert statement.previous_statement
    assert statement.next_statement
    assert not statement.output
    assert expression.output
    assert expression.output_check == ("int",)
    assert untyped.output
    assert untyped.output_check is None


def test_socket_checks() -> None:
    """Numeric sockets widen and untyped sockets accept anything."""
    assert socket_check("float") == ("float", "int")
    assert socket_check("str") == ("str",)
    assert socket_check("") is None
    assert socket_check("typing.Any") is None
    assert output_check("object") is None


def test_argument_sockets_follow_args() -> None:
    """One labelled, type-checked socket per argument."""
    workspace = make_workspace()
    block = add_call(
        workspace,
        CallExtraState(
            kind="module",
            return_type="None",
            args=args(("x", "float"), ("label", "str")),
        ),
    )
    first = block.get_input("ARG0")
    second = block.get_input("ARG1")
    assert first is not None
    assert second is not None
    assert first.check == ("float", "int")
    assert block.get_field_value("ARGNAME1") == "label"


def test_mutate_method_rebuilds_sockets_and_keeps_title() -> None:
    """Adopting a new signature adds and removes sockets in place."""
    workspace = make_workspace()
    block = add_call(
        workspace,
        CallExtraState(
            kind="instance_within",
            return_type="None",
            args=args(("a", "int"), ("b", "int")),
            callee_definition_id="d1",
        ),
        {FIELD_FUNCTION_NAME: "move"},
    )
    block.mutate_method(
        MethodSignature(
            visible_name="move",
            python_name="move",
            return_type="bool",
            args=args(("self", ""), ("distance", "float")),
        )
    )
    assert block.output
    assert block.get_input("ARG1") is None
    assert block.get_field_value("ARGNAME0") == "distance"
    assert block.function_name() == "move"
    assert _title_labels(block) == ["call", "<FUNC>"]


def test_rename_only_retargets_existing_callee_name() -> None:
    """The emitted name changes only for blocks that carry one."""
    workspace = make_workspace()
    with_actual = add_call(
        workspace,
        CallExtraState(
            kind="instance_within",
            return_type="None",
            args=(),
            actual_callee_name="old_name",
        ),
        {FIELD_FUNCTION_NAME: "oldName"},
    )
    without_actual = add_call(
        workspace,
        CallExtraState(kind="instance_within", return_type="None", args=()),
        {FIELD_FUNCTION_NAME: "oldName"},
    )
    with_actual.rename_method("newName", "new_name")
    without_actual.rename_method("newName", "new_name")
    assert with_actual.callee_name() == "new_name"
    assert without_actual.actual_callee_name == ""
    assert without_actual.callee_name() == "newName"


def test_component_dropdown_offers_matching_components(
    robot_workspace: Workspace,
    drive_component: Component,
) -> None:
    """Only components of the block's class are offered."""
    robot_workspace.set_components(
        [
            drive_component,
            Component(block_id="comp-arm", name="arm", class_name="arm.Arm"),
            Component(block_id="comp-drive2", name="drive2", class_name="drivetrain.DriveTrain"),
        ]
    )
    block = add_call(
        robot_workspace,
        CallExtraState(
            kind="instance_component",
            return_type="None",
            args=(),
            component_id="comp-drive",
            component_type_name="drivetrain.DriveTrain",
            component_name="drive",
        ),
    )
    field = block.get_field(FIELD_COMPONENT_NAME)
    assert field is not None
    assert field.value == "drive"
    assert field.choices == ("drive", "drive2")


def test_component_id_follows_selected_name(robot_workspace: Workspace) -> None:
    """Picking another component in the dropdown changes the saved id."""
    robot_workspace.set_components(
        [
            *robot_workspace.get_components(),
            Component(block_id="comp-drive2", name="drive2", class_name="drivetrain.DriveTrain"),
        ]
    )
    block = add_call(
        robot_workspace,
        CallExtraState(
            kind="instance_component",
            return_type="None",
            args=(),
            component_id="comp-drive",
            component_type_name="drivetrain.DriveTrain",
            component_name="drive",
        ),
    )
    block.select_component("drive2")
    state = block.extra_state()
    assert state.component_id == "comp-drive2"
    assert state.component_name == "drive2"
    assert block.component_id == "comp-drive2"
    with pytest.raises(KeyError, match="arm"):
        block.select_component("arm")


@pytest.mark.parametrize(
    ("kind", "fields", "expected"),
    [
        (CallKind.BUILT_IN, {FIELD_FUNCTION_NAME: "print"}, "Calls the builtin function print."),
        (
            CallKind.MODULE,
            {FIELD_MODULE_OR_CLASS_NAME: "math", FIELD_FUNCTION_NAME: "sqrt"},
            "Calls the module function math.sqrt.",
        ),
        (
            CallKind.STATIC,
            {FIELD_MODULE_OR_CLASS_NAME: "Foo", FIELD_FUNCTION_NAME: "make"},
            "Calls the static method Foo.make.",
        ),
        (
            CallKind.CONSTRUCTOR,
            {FIELD_MODULE_OR_CLASS_NAME: "Foo"},
            "Constructs an instance of the class Foo.",
        ),
        (
            CallKind.INSTANCE,
            {FIELD_MODULE_OR_CLASS_NAME: "Foo", FIELD_FUNCTION_NAME: "bar"},
            "Calls the instance method Foo.bar.",
        ),
        (CallKind.INSTANCE_WITHIN, {FIELD_FUNCTION_NAME: "go"}, "Calls the instance method go."),
        (CallKind.EVENT, {FIELD_FUNCTION_NAME: "onStart"}, "Fires the event onStart."),
        (CallKind.INSTANCE_ROBOT, {FIELD_FUNCTION_NAME: "go"}, "Calls the robot method go."),
    ],
)
def test_tooltips(kind: CallKind, fields: dict[str, str], expected: str) -> None:
    """Each kind describes its call."""
    workspace = make_workspace()
    block = add_call(
        workspace,
        CallExtraState(kind=kind.value, return_type="None", args=()),
        fields,
    )
    assert block.tooltip() == expected


def test_component_tooltip_and_custom_text(robot_workspace: Workspace) -> None:
    """The custom tooltip follows the generated text after a blank line."""
    block = add_call(
        robot_workspace,
        CallExtraState(
            kind="instance_component",
            return_type="None",
            args=(),
            tooltip="Stops all motors.",
            component_id="comp-drive",
            component_type_name="drivetrain.DriveTrain",
            component_name="drive",
        ),
        {FIELD_FUNCTION_NAME: "stop"},
    )
    assert block.tooltip() == (
        "Calls the instance method drivetrain.DriveTrain.stop on the component named drive."
        "\n\nStops all motors."
    )
