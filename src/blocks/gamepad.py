"""Driver-station gamepad blocks.

Which buttons and axes a block offers, and which accessor it emits, depend on
the device profile configured for the block's port. The port configuration
comes from the generator (or is passed in for field population); there is no
module-level "current configuration".
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from devices.labels import label_for
from devices.ports import MAX_GAMEPAD_PORT, MIN_GAMEPAD_PORT, GamepadPortConfig
from devices.profiles import DeviceProfile, SlotKind
from devices.registry import DeviceProfileRegistry, accessor_for
from generator.order import Order
from generator.python_generator import PythonGenerator
from workspace.block import Block, Field, Input
from workspace.registry import CodeResult

if TYPE_CHECKING:
    from workspace.workspace import Workspace

logger = logging.getLogger(__name__)

BOOLEAN_BLOCK_NAME = "mrc_gamepad_boolean"
ANALOG_BLOCK_NAME = "mrc_gamepad_analog"
BOOLEAN_EVENT_BLOCK_NAME = "mrc_gamepad_boolean_event"
GAMEPAD_BLOCK_NAMES = (BOOLEAN_BLOCK_NAME, ANALOG_BLOCK_NAME, BOOLEAN_EVENT_BLOCK_NAME)

PORT_FIELD_NAME = "GAMEPAD_PORT"
BUTTON_FIELD_NAME = "GAMEPAD_BUTTON"
ACTION_FIELD_NAME = "GAMEPAD_ACTION"
AXIS_FIELD_NAME = "GAMEPAD_AXIS"
EVENT_FIELD_NAME = "GAMEPAD_EVENT"

TITLE_LABEL_KEY = "GAMEPAD"
DEFAULT_BUTTON = "SOUTH_FACE"
DEFAULT_AXIS = "LEFT_STICK_X"

# Action key -> (label key, accessor suffix).
ACTION_CONFIG: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "IS_DOWN": ("GAMEPAD_IS_DOWN", ""),
        "WAS_PRESSED": ("GAMEPAD_PRESSED", "Pressed"),
        "WAS_RELEASED": ("GAMEPAD_RELEASED", "Released"),
    }
)

EVENT_CONFIG: Mapping[str, str] = MappingProxyType(
    {
        "GAMEPAD_EVENT_PRESSED": "GAMEPAD_EVENT_PRESSED",
        "GAMEPAD_EVENT_RELEASED": "GAMEPAD_EVENT_RELEASED",
        "GAMEPAD_EVENT_CHANGED": "GAMEPAD_EVENT_CHANGED",
    }
)

PORT_CHOICES = tuple(str(port) for port in range(MIN_GAMEPAD_PORT, MAX_GAMEPAD_PORT + 1))


def _title_row(block: Block) -> Input:
    row = block.append_dummy_input("GAMEPAD_ROW")
    row.append_field(label_for(TITLE_LABEL_KEY))
    row.append_field(Field(name=PORT_FIELD_NAME, value=PORT_CHOICES[0], choices=PORT_CHOICES))
    return row


def create_boolean_block(block_id: str) -> Block:
    """Create a ``button is down / was pressed / was released`` expression block.

    Returns:
    -------
    Block
        New block.
    """
    block = Block(block_type=BOOLEAN_BLOCK_NAME, id=block_id)
    _title_row(block).append_field(Field(name=BUTTON_FIELD_NAME, value=DEFAULT_BUTTON))
    block.append_dummy_input("ACTION_ROW").append_field(
        Field(name=ACTION_FIELD_NAME, value="IS_DOWN", choices=tuple(ACTION_CONFIG))
    )
    block.set_output(True, ("bool",))
    return block


def create_analog_block(block_id: str) -> Block:
    """Create an axis-value expression block.

    Returns:
    -------
    Block
        New block.
    """
    block = Block(block_type=ANALOG_BLOCK_NAME, id=block_id)
    _title_row(block).append_field(Field(name=AXIS_FIELD_NAME, value=DEFAULT_AXIS))
    block.set_output(True, ("float",))
    return block


def create_boolean_event_block(block_id: str) -> Block:
    """Create a button event handler block.

    Returns:
    -------
    Block
        New block.
    """
    block = Block(block_type=BOOLEAN_EVENT_BLOCK_NAME, id=block_id)
    block.append_dummy_input("EVENT_ROW").append_field(
        Field(name=EVENT_FIELD_NAME, value="GAMEPAD_EVENT_PRESSED", choices=tuple(EVENT_CONFIG))
    )
    _title_row(block).append_field(Field(name=BUTTON_FIELD_NAME, value=DEFAULT_BUTTON))
    return block


def parse_port(value: str | None) -> int | None:
    """Parse a port field value.

    Returns:
    -------
    int | None
        Port number, or ``None`` when the value is not a supported port.
    """
    try:
        port = int(value or "")
    except ValueError:
        return None
    if MIN_GAMEPAD_PORT <= port <= MAX_GAMEPAD_PORT:
        return port
    return None


def profile_for_port(
    port: int | None,
    port_config: GamepadPortConfig,
    profiles: DeviceProfileRegistry,
) -> DeviceProfile | None:
    """Return the device profile configured for ``port``.

    Returns:
    -------
    DeviceProfile | None
        Profile, or ``None`` for an invalid port.
    """
    if port is None:
        return None
    return profiles.get(port_config.profile_id_for_port(port))


def control_options(
    profile: DeviceProfile | None,
    slot: SlotKind,
    messages: Mapping[str, str] | None = None,
) -> list[tuple[str, str]]:
    """Return ``(label, key)`` pairs for the controls ``profile`` offers.

    Returns:
    -------
    list[tuple[str, str]]
        Dropdown options in table order; empty when the profile has none.
    """
    table = None if profile is None else profile.table(slot)
    if not table:
        return []
    return [(label_for(accessor.label_key, messages), key) for key, accessor in table.items()]


def populate_fields(
    block: Block,
    port_config: GamepadPortConfig,
    profiles: DeviceProfileRegistry,
) -> None:
    """Offer only the buttons or axes the profile on the block's port defines."""
    port = parse_port(block.get_field_value(PORT_FIELD_NAME))
    profile = profile_for_port(port, port_config, profiles)
    slots = ((BUTTON_FIELD_NAME, SlotKind.BUTTON), (AXIS_FIELD_NAME, SlotKind.AXIS))
    for field_name, slot in slots:
        found = block.get_field(field_name)
        if found is None:
            continue
        found.choices = tuple(key for _, key in control_options(profile, slot))


def populate_workspace_fields(
    workspace: Workspace,
    port_config: GamepadPortConfig,
    profiles: DeviceProfileRegistry,
) -> list[str]:
    """Populate the control choices of every gamepad block in ``workspace``.

    Returns:
    -------
    list[str]
        Ids of blocks whose selected button or axis is not offered on their port.
    """
    unsupported: list[str] = []
    for block in workspace.get_all_blocks():
        if block.block_type not in GAMEPAD_BLOCK_NAMES:
            continue
        populate_fields(block, port_config, profiles)
        for field_name in (BUTTON_FIELD_NAME, AXIS_FIELD_NAME):
            found = block.get_field(field_name)
            if found is not None and found.choices is not None and found.value not in found.choices:
                unsupported.append(block.id)
    return unsupported


def action_options(messages: Mapping[str, str] | None = None) -> list[tuple[str, str]]:
    """Return ``(label, key)`` pairs for the button actions.

    Returns:
    -------
    list[tuple[str, str]]
        Dropdown options.
    """
    return [(label_for(label_key, messages), key) for key, (label_key, _) in ACTION_CONFIG.items()]


def event_options(messages: Mapping[str, str] | None = None) -> list[tuple[str, str]]:
    """Return ``(label, key)`` pairs for the button events.

    Returns:
    -------
    list[tuple[str, str]]
        Dropdown options.
    """
    return [(label_for(label_key, messages), key) for key, label_key in EVENT_CONFIG.items()]


def gamepad_expression(port: int) -> str:
    """Return the expression addressing the gamepad on ``port``.

    Returns:
    -------
    str
        Driver-station gamepad expression.
    """
    return f"DriverStation.gamepads[{port}]"


def method_for_button(
    generator: PythonGenerator,
    port: int | None,
    button: str,
    action: str,
) -> str:
    """Return the call reading ``button`` on ``port``.

    Returns:
    -------
    str
        Call text, or ``""`` when the port's profile has no such button.
    """
    action_config = ACTION_CONFIG.get(action)
    profile = profile_for_port(port, generator.port_config, generator.profiles)
    accessor = accessor_for(profile, SlotKind.BUTTON, button)
    if port is None or action_config is None or accessor is None:
        return ""
    return f"{gamepad_expression(port)}.{accessor.call_text(action_config[1])}"


def method_for_axis(generator: PythonGenerator, port: int | None, axis: str) -> str:
    """Return the call reading ``axis`` on ``port``.

    Returns:
    -------
    str
        Call text, or ``""`` when the port's profile has no such axis.
    """
    profile = profile_for_port(port, generator.port_config, generator.profiles)
    accessor = accessor_for(profile, SlotKind.AXIS, axis)
    if port is None or accessor is None:
        return ""
    return f"{gamepad_expression(port)}.{accessor.call_text()}"


def python_from_boolean(block: Block, generator: PythonGenerator) -> CodeResult:
    code = method_for_button(
        generator,
        parse_port(block.get_field_value(PORT_FIELD_NAME)),
        block.get_field_value(BUTTON_FIELD_NAME) or "",
        block.get_field_value(ACTION_FIELD_NAME) or "",
    )
    if not code:
        logger.debug("Gamepad block %s has no accessor on its port", block.id)
        return "", Order.ATOMIC
    return code, Order.FUNCTION_CALL


def python_from_analog(block: Block, generator: PythonGenerator) -> CodeResult:
    code = method_for_axis(
        generator,
        parse_port(block.get_field_value(PORT_FIELD_NAME)),
        block.get_field_value(AXIS_FIELD_NAME) or "",
    )
    if not code:
        logger.debug("Gamepad block %s has no accessor on its port", block.id)
        return "", Order.ATOMIC
    return code, Order.FUNCTION_CALL


def python_from_boolean_event(block: Block, generator: PythonGenerator) -> CodeResult:
    return (
        f"# {block.get_field_value(EVENT_FIELD_NAME)} for button "
        f"{block.get_field_value(BUTTON_FIELD_NAME)} on gamepad "
        f"{block.get_field_value(PORT_FIELD_NAME)}\n"
    )


__all__ = [
    "ACTION_CONFIG",
    "ACTION_FIELD_NAME",
    "ANALOG_BLOCK_NAME",
    "AXIS_FIELD_NAME",
    "BOOLEAN_BLOCK_NAME",
    "BOOLEAN_EVENT_BLOCK_NAME",
    "BUTTON_FIELD_NAME",
    "EVENT_CONFIG",
    "EVENT_FIELD_NAME",
    "GAMEPAD_BLOCK_NAMES",
    "PORT_CHOICES",
    "PORT_FIELD_NAME",
    "action_options",
    "control_options",
    "create_analog_block",
    "create_boolean_block",
    "create_boolean_event_block",
    "event_options",
    "gamepad_expression",
    "method_for_axis",
    "method_for_button",
    "parse_port",
    "populate_fields",
    "populate_workspace_fields",
    "profile_for_port",
    "python_from_analog",
    "python_from_boolean",
    "python_from_boolean_event",
]
