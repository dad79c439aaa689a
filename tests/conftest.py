"""Shared pytest fixtures for blockwright tests."""

from __future__ import annotations

import os

import pytest

from blocks.registration import setup
from config import ENV_PREFIX
from core_types import ModuleKind
from tests.test_helpers.workspace_builders import args, make_workspace
from workspace.model import Component, MethodDefinition
from workspace.registry import BlockTypeRegistry
from workspace.workspace import Workspace


def _env_subset(prefixes: tuple[str, ...]) -> dict[str, str]:
    return {key: value for key, value in os.environ.items() if key.startswith(prefixes)}


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host ``BLOCKWRIGHT_*`` variables out of every test."""
    for key in _env_subset((ENV_PREFIX,)):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def block_types() -> BlockTypeRegistry:
    """Registry with every block type registered.

    Returns
    -------
    BlockTypeRegistry
        Populated registry.
    """
    return setup()


@pytest.fixture
def drive_component() -> Component:
    """A drive-train component owned by the robot.

    Returns
    -------
    Component
        Component record.
    """
    return Component(block_id="comp-drive", name="drive", class_name="drivetrain.DriveTrain")


@pytest.fixture
def shoot_definition() -> MethodDefinition:
    """A robot method ``shootBall(power: float)``.

    Returns
    -------
    MethodDefinition
        Definition record, receiver included.
    """
    return MethodDefinition(
        block_id="def-shoot",
        visible_name="shootBall",
        python_name="shoot_ball",
        return_type="None",
        args=args(("self", ""), ("power", "float")),
    )


@pytest.fixture
def robot_workspace(
    drive_component: Component,
    shoot_definition: MethodDefinition,
) -> Workspace:
    """Robot workspace with one component and one method definition.

    Returns
    -------
    Workspace
        Workspace without blocks.
    """
    return make_workspace(
        module_kind=ModuleKind.ROBOT,
        components=[drive_component],
        definitions=[shoot_definition],
    )
