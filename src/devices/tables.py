"""Static control tables for the supported controller types."""

from __future__ import annotations

from enum import StrEnum

from devices.profiles import (
    ControlAccessor,
    ProfileSpec,
    SlotKind,
    base_profile,
    derived_from,
    same_as,
)


class GamepadType(StrEnum):
    """Registered device-profile identifiers."""

    NONE = "None"
    GAMEPAD_GENERIC = "Generic Gamepad"
    GAMEPAD_LOGITECH_F310 = "Logitech F310"
    GAMEPAD_XBOX = "XBOX Gamepad"
    GAMEPAD_PS4 = "PlayStation 4 Gamepad"
    GAMEPAD_PS5 = "PlayStation 5 Gamepad"
    GENERIC_HID = "Generic HID"


def _accessor(label_key: str, method: str, comment: str = "") -> ControlAccessor:
    return ControlAccessor(label_key=label_key, method=method, comment=comment)


GENERIC_BUTTONS: dict[str, ControlAccessor] = {
    "SOUTH_FACE": _accessor("GAMEPAD_BUTTON_SOUTH_FACE", "getSouthFace"),
    "EAST_FACE": _accessor("GAMEPAD_BUTTON_EAST_FACE", "getEastFace"),
    "WEST_FACE": _accessor("GAMEPAD_BUTTON_WEST_FACE", "getWestFace"),
    "NORTH_FACE": _accessor("GAMEPAD_BUTTON_NORTH_FACE", "getNorthFace"),
    "BACK": _accessor("GAMEPAD_BUTTON_BACK", "getBack"),
    "GUIDE": _accessor("GAMEPAD_BUTTON_GUIDE", "getGuide"),
    "START": _accessor("GAMEPAD_BUTTON_START", "getStart"),
    "LEFT_STICK": _accessor("GAMEPAD_BUTTON_LEFT_STICK", "getLeftStick"),
    "RIGHT_STICK": _accessor("GAMEPAD_BUTTON_RIGHT_STICK", "getRightStick"),
    "LEFT_BUMPER": _accessor("GAMEPAD_BUTTON_LEFT_BUMPER", "getLeftBumper"),
    "RIGHT_BUMPER": _accessor("GAMEPAD_BUTTON_RIGHT_BUMPER", "getRightBumper"),
    "DPAD_UP": _accessor("GAMEPAD_BUTTON_DPAD_UP", "getDpadUp"),
    "DPAD_DOWN": _accessor("GAMEPAD_BUTTON_DPAD_DOWN", "getDpadDown"),
    "DPAD_LEFT": _accessor("GAMEPAD_BUTTON_DPAD_LEFT", "getDpadLeft"),
    "DPAD_RIGHT": _accessor("GAMEPAD_BUTTON_DPAD_RIGHT", "getDpadRight"),
    "MISC1": _accessor("GAMEPAD_BUTTON_MISC1", "getMisc1"),
    "RIGHT_PADDLE_1": _accessor("GAMEPAD_BUTTON_RIGHT_PADDLE_1", "getRightPaddle1"),
    "LEFT_PADDLE_1": _accessor("GAMEPAD_BUTTON_LEFT_PADDLE_1", "getLeftPaddle1"),
    "RIGHT_PADDLE_2": _accessor("GAMEPAD_BUTTON_RIGHT_PADDLE_2", "getRightPaddle2"),
    "LEFT_PADDLE_2": _accessor("GAMEPAD_BUTTON_LEFT_PADDLE_2", "getLeftPaddle2"),
    "TOUCHPAD": _accessor("GAMEPAD_BUTTON_TOUCHPAD", "getTouchpad"),
    "MISC2": _accessor("GAMEPAD_BUTTON_MISC2", "getMisc2"),
    "MISC3": _accessor("GAMEPAD_BUTTON_MISC3", "getMisc3"),
    "MISC4": _accessor("GAMEPAD_BUTTON_MISC4", "getMisc4"),
    "MISC5": _accessor("GAMEPAD_BUTTON_MISC5", "getMisc5"),
    "MISC6": _accessor("GAMEPAD_BUTTON_MISC6", "getMisc6"),
}

GENERIC_AXES: dict[str, ControlAccessor] = {
    "LEFT_STICK_X": _accessor("GAMEPAD_AXIS_LEFT_STICK_X", "getLeftStickX"),
    "LEFT_STICK_Y": _accessor("GAMEPAD_AXIS_LEFT_STICK_Y", "getLeftStickY"),
    "RIGHT_STICK_X": _accessor("GAMEPAD_AXIS_RIGHT_STICK_X", "getRightStickX"),
    "RIGHT_STICK_Y": _accessor("GAMEPAD_AXIS_RIGHT_STICK_Y", "getRightStickY"),
    "LEFT_TRIGGER": _accessor("GAMEPAD_AXIS_LEFT_TRIGGER", "getLeftTrigger"),
    "RIGHT_TRIGGER": _accessor("GAMEPAD_AXIS_RIGHT_TRIGGER", "getRightTrigger"),
}

# Rumble entries carry the rumble-type constant as their argument.
GENERIC_RUMBLE: dict[str, ControlAccessor] = {
    "LEFT_RUMBLE": ControlAccessor(
        label_key="GAMEPAD_RUMBLE_LEFT", method="setRumble", argument="kLeftRumble"
    ),
    "RIGHT_RUMBLE": ControlAccessor(
        label_key="GAMEPAD_RUMBLE_RIGHT", method="setRumble", argument="kRightRumble"
    ),
    "TRIGGER_LEFT_RUMBLE": ControlAccessor(
        label_key="GAMEPAD_RUMBLE_LEFT_TRIGGER",
        method="setRumble",
        argument="kLeftTriggerRumble",
    ),
    "TRIGGER_RIGHT_RUMBLE": ControlAccessor(
        label_key="GAMEPAD_RUMBLE_RIGHT_TRIGGER",
        method="setRumble",
        argument="kRightTriggerRumble",
    ),
}

GENERIC_LEDS: dict[str, ControlAccessor] = {
    "LEDS": _accessor("GAMEPAD_LEDS", "setLeds"),
}

_RAW_CHANNELS = range(1, 17)

GENERIC_HID_BUTTONS: dict[str, ControlAccessor] = {
    str(index): ControlAccessor(label_key=str(index), method="getRawButton", argument=str(index))
    for index in _RAW_CHANNELS
}

GENERIC_HID_AXES: dict[str, ControlAccessor] = {
    str(index): ControlAccessor(label_key=str(index), method="getRawAxis", argument=str(index))
    for index in _RAW_CHANNELS
}

_MISC_AND_PADDLES = frozenset(
    {
        "MISC1",
        "MISC2",
        "MISC3",
        "MISC4",
        "MISC5",
        "MISC6",
        "RIGHT_PADDLE_1",
        "LEFT_PADDLE_1",
        "RIGHT_PADDLE_2",
        "LEFT_PADDLE_2",
    }
)

XBOX_BUTTON_OVERRIDES: dict[str, ControlAccessor] = {
    "SOUTH_FACE": _accessor("GAMEPAD_BUTTON_A", "getSouthFace", "A"),
    "EAST_FACE": _accessor("GAMEPAD_BUTTON_B", "getEastFace", "B"),
    "WEST_FACE": _accessor("GAMEPAD_BUTTON_X", "getWestFace", "X"),
    "NORTH_FACE": _accessor("GAMEPAD_BUTTON_Y", "getNorthFace", "Y"),
}

PS4_BUTTON_OVERRIDES: dict[str, ControlAccessor] = {
    "SOUTH_FACE": _accessor("GAMEPAD_BUTTON_CROSS", "getSouthFace", "X"),
    "EAST_FACE": _accessor("GAMEPAD_BUTTON_CIRCLE", "getEastFace", "O"),
    "WEST_FACE": _accessor("GAMEPAD_BUTTON_SQUARE", "getWestFace", "□"),
    "NORTH_FACE": _accessor("GAMEPAD_BUTTON_TRIANGLE", "getNorthFace", "Δ"),
}

# Registration order matters: a derived profile's base must come first.
PROFILE_SPECS: tuple[ProfileSpec, ...] = (
    base_profile(GamepadType.NONE),
    base_profile(
        GamepadType.GAMEPAD_GENERIC,
        buttons=GENERIC_BUTTONS,
        axes=GENERIC_AXES,
        rumble=GENERIC_RUMBLE,
        leds=GENERIC_LEDS,
    ),
    derived_from(
        GamepadType.GAMEPAD_XBOX,
        GamepadType.GAMEPAD_GENERIC,
        overrides={SlotKind.BUTTON: XBOX_BUTTON_OVERRIDES},
        deletions={SlotKind.BUTTON: _MISC_AND_PADDLES | {"TOUCHPAD"}},
    ),
    derived_from(
        GamepadType.GAMEPAD_LOGITECH_F310,
        GamepadType.GAMEPAD_XBOX,
        cleared=frozenset({SlotKind.RUMBLE, SlotKind.LED}),
    ),
    derived_from(
        GamepadType.GAMEPAD_PS4,
        GamepadType.GAMEPAD_GENERIC,
        overrides={SlotKind.BUTTON: PS4_BUTTON_OVERRIDES},
        deletions={SlotKind.BUTTON: _MISC_AND_PADDLES},
    ),
    same_as(GamepadType.GAMEPAD_PS5, GamepadType.GAMEPAD_PS4),
    base_profile(
        GamepadType.GENERIC_HID,
        buttons=GENERIC_HID_BUTTONS,
        axes=GENERIC_HID_AXES,
        rumble=GENERIC_RUMBLE,
        leds=GENERIC_LEDS,
    ),
)


__all__ = [
    "GENERIC_AXES",
    "GENERIC_BUTTONS",
    "GENERIC_HID_AXES",
    "GENERIC_HID_BUTTONS",
    "GENERIC_LEDS",
    "GENERIC_RUMBLE",
    "PROFILE_SPECS",
    "GamepadType",
]
