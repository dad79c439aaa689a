"""Tests for reading and writing workspace documents."""

from __future__ import annotations

from pathlib import Path

import msgspec
import pytest

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import FIELD_FUNCTION_NAME
from blocks.extra_state import CallExtraState
from blocks.registration import setup
from core_types import ModuleKind
from generator.python_generator import PythonGenerator
from generator.workspace_code import workspace_to_code
from tests.test_helpers.workspace_builders import add_call, args, plug_literal
from workspace.document import (
    WorkspaceDocumentError,
    dump_workspace,
    dumps_workspace,
    load_workspace,
    loads_workspace,
    read_workspace,
    write_workspace,
)
from workspace.registry import UnknownBlockTypeError
from workspace.workspace import Workspace

ROBOT_DOCUMENT = b"""
{
  "moduleKind": "opmode",
  "components": [
    {"blockId": "comp-drive", "name": "drive", "className": "drivetrain.DriveTrain"}
  ],
  "definitions": [
    {
      "blockId": "def-shoot",
      "visibleName": "shootBall",
      "pythonName": "shoot_ball",
      "args": [{"name": "self"}, {"name": "power", "type": "float"}]
    }
  ],
  "blocks": [
    {
      "type": "mrc_call_python_function",
      "id": "call-1",
      "fields": {"FUNC": "shootBall"},
      "extraState": {
        "kind": "instance_robot",
        "returnType": "None",
        "args": [{"name": "power", "type": "float"}],
        "actualCalleeName": "shoot_ball",
        "calleeDefinitionId": "def-shoot"
      },
      "inputs": {
        "ARG0": {"type": "expression", "id": "lit-1", "fields": {"CODE": "0.5"}}
      }
    }
  ]
}
"""


def _compile(workspace: Workspace) -> str:
    generator = PythonGenerator(block_types=workspace.block_types, module_kind=workspace.module_kind)
    return workspace_to_code(workspace, generator).code


def test_load_document_and_generate() -> None:
    """A decoded document reproduces its blocks, owners and connections."""
    document = loads_workspace(ROBOT_DOCUMENT)
    workspace = load_workspace(document, setup())
    assert workspace.module_kind is ModuleKind.OPMODE
    assert [component.name for component in workspace.get_components()] == ["drive"]
    block = workspace.get_block("call-1")
    assert isinstance(block, CallPythonFunctionBlock)
    assert block.callee_definition_id == "def-shoot"
    assert _compile(workspace) == "self.robot.shoot_ball(0.5)\n"


def test_round_trip_preserves_generated_code(robot_workspace: Workspace, tmp_path: Path) -> None:
    """Writing and re-reading a workspace yields the same code."""
    block = add_call(
        robot_workspace,
        CallExtraState(
            kind="instance_within",
            return_type="None",
            args=args(("power", "float")),
            actual_callee_name="shoot_ball",
            callee_definition_id="def-shoot",
        ),
        {FIELD_FUNCTION_NAME: "shootBall"},
    )
    plug_literal(robot_workspace, block, "ARG0", "1.0")
    path = tmp_path / "robot.blocks.json"
    write_workspace(path, dump_workspace(robot_workspace))
    reloaded = load_workspace(read_workspace(path), setup())
    assert _compile(reloaded) == _compile(robot_workspace) == "self.shoot_ball(1.0)\n"
    assert reloaded.get_definition("def-shoot") == robot_workspace.get_definition("def-shoot")


def test_dump_omits_empty_members(robot_workspace: Workspace) -> None:
    """Empty optionals are left out of the persisted record."""
    add_call(
        robot_workspace,
        CallExtraState(kind="built-in", return_type="None", args=()),
        {FIELD_FUNCTION_NAME: "stop"},
        block_id="b1",
    )
    payload = msgspec.json.decode(dumps_workspace(dump_workspace(robot_workspace)))
    (record,) = payload["blocks"]
    assert record == {
        "type": "mrc_call_python_function",
        "id": "b1",
        "fields": {"FUNC": "stop"},
        "extraState": {"args": [], "kind": "built-in", "returnType": "None"},
    }


def test_invalid_json() -> None:
    """Malformed JSON is a document error."""
    with pytest.raises(WorkspaceDocumentError, match="not valid JSON"):
        loads_workspace(b"{")


def test_invalid_structure_reports_path() -> None:
    """Schema violations name the offending location."""
    with pytest.raises(WorkspaceDocumentError, match=r"\$\.blocks\[0\]"):
        loads_workspace(b'{"blocks": [{"id": "x"}]}')


def test_unknown_field_in_block() -> None:
    """Field values must name fields the block has."""
    document = loads_workspace(
        b'{"blocks": [{"type": "expression", "id": "e1", "fields": {"NOPE": "1"}}]}'
    )
    with pytest.raises(WorkspaceDocumentError, match="has no field 'NOPE'"):
        load_workspace(document, setup())


def test_unknown_input_in_block() -> None:
    """Plugged blocks must target an existing socket."""
    document = loads_workspace(
        b'{"blocks": [{"type": "expression", "id": "e1",'
        b' "inputs": {"ARG0": {"type": "expression", "id": "e2"}}}]}'
    )
    with pytest.raises(WorkspaceDocumentError, match="has no input 'ARG0'"):
        load_workspace(document, setup())


def test_duplicate_block_ids() -> None:
    """Block ids are unique within a workspace."""
    document = loads_workspace(
        b'{"blocks": [{"type": "expression", "id": "e1"}, {"type": "expression", "id": "e1"}]}'
    )
    with pytest.raises(WorkspaceDocumentError, match="Duplicate block id"):
        load_workspace(document, setup())


def test_malformed_extra_state_skips_block() -> None:
    """A call block record without arguments is left out and reported."""
    document = loads_workspace(
        b'{"blocks": [{"type": "mrc_call_python_function", "id": "c1",'
        b' "extraState": {"kind": "built-in", "returnType": "None"}}]}'
    )
    workspace = load_workspace(document, setup())
    assert workspace.get_block("c1") is None
    [skipped] = workspace.skipped_blocks
    assert skipped.block_id == "c1"
    assert skipped.block_type == "mrc_call_python_function"
    assert "extra state" in skipped.error


MIXED_KIND_DOCUMENT = b"""
{
  "blocks": [
    {
      "type": "mrc_call_python_function",
      "id": "call-print",
      "fields": {"FUNC": "print"},
      "extraState": {"kind": "built-in", "returnType": "None", "args": [{"name": "x"}]},
      "inputs": {"ARG0": {"type": "expression", "id": "lit-hi", "fields": {"CODE": "'hi'"}}}
    },
    {
      "type": "mrc_call_python_function",
      "id": "call-lambda",
      "fields": {"FUNC": "f"},
      "extraState": {"kind": "lambda", "returnType": "None", "args": [{"name": "x"}]},
      "inputs": {"ARG0": {"type": "expression", "id": "lit-1", "fields": {"CODE": "1"}}}
    }
  ]
}
"""


def test_unknown_call_kind_skips_only_that_block() -> None:
    """A block with an unknown call kind does not stop its neighbours from loading."""
    workspace = load_workspace(loads_workspace(MIXED_KIND_DOCUMENT), setup())
    assert [block.id for block in workspace.get_all_blocks()] == ["call-print", "lit-hi"]
    [skipped] = workspace.skipped_blocks
    assert skipped.block_id == "call-lambda"
    assert "lambda" in skipped.error
    assert _compile(workspace) == "print('hi')\n"


def test_unknown_block_type() -> None:
    """Unregistered block types are reported by name."""
    document = loads_workspace(b'{"blocks": [{"type": "mystery", "id": "m1"}]}')
    with pytest.raises(UnknownBlockTypeError, match="mystery"):
        load_workspace(document, setup())
