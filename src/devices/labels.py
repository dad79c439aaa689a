"""Display labels for logical controls.

Control tables only carry label keys. Presentation text lives here so a host
can swap in its own localized message table.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "GAMEPAD": "Gamepad",
        "GAMEPAD_BUTTON_SOUTH_FACE": "South face",
        "GAMEPAD_BUTTON_EAST_FACE": "East face",
        "GAMEPAD_BUTTON_WEST_FACE": "West face",
        "GAMEPAD_BUTTON_NORTH_FACE": "North face",
        "GAMEPAD_BUTTON_A": "A",
        "GAMEPAD_BUTTON_B": "B",
        "GAMEPAD_BUTTON_X": "X",
        "GAMEPAD_BUTTON_Y": "Y",
        "GAMEPAD_BUTTON_CROSS": "Cross",
        "GAMEPAD_BUTTON_CIRCLE": "Circle",
        "GAMEPAD_BUTTON_SQUARE": "Square",
        "GAMEPAD_BUTTON_TRIANGLE": "Triangle",
        "GAMEPAD_BUTTON_BACK": "Back",
        "GAMEPAD_BUTTON_GUIDE": "Guide",
        "GAMEPAD_BUTTON_START": "Start",
        "GAMEPAD_BUTTON_LEFT_STICK": "Left stick",
        "GAMEPAD_BUTTON_RIGHT_STICK": "Right stick",
        "GAMEPAD_BUTTON_LEFT_BUMPER": "Left bumper",
        "GAMEPAD_BUTTON_RIGHT_BUMPER": "Right bumper",
        "GAMEPAD_BUTTON_DPAD_UP": "D-pad up",
        "GAMEPAD_BUTTON_DPAD_DOWN": "D-pad down",
        "GAMEPAD_BUTTON_DPAD_LEFT": "D-pad left",
        "GAMEPAD_BUTTON_DPAD_RIGHT": "D-pad right",
        "GAMEPAD_BUTTON_MISC1": "Misc 1",
        "GAMEPAD_BUTTON_MISC2": "Misc 2",
        "GAMEPAD_BUTTON_MISC3": "Misc 3",
        "GAMEPAD_BUTTON_MISC4": "Misc 4",
        "GAMEPAD_BUTTON_MISC5": "Misc 5",
        "GAMEPAD_BUTTON_MISC6": "Misc 6",
        "GAMEPAD_BUTTON_RIGHT_PADDLE_1": "Right paddle 1",
        "GAMEPAD_BUTTON_LEFT_PADDLE_1": "Left paddle 1",
        "GAMEPAD_BUTTON_RIGHT_PADDLE_2": "Right paddle 2",
        "GAMEPAD_BUTTON_LEFT_PADDLE_2": "Left paddle 2",
        "GAMEPAD_BUTTON_TOUCHPAD": "Touchpad",
        "GAMEPAD_AXIS_LEFT_STICK_X": "Left stick X",
        "GAMEPAD_AXIS_LEFT_STICK_Y": "Left stick Y",
        "GAMEPAD_AXIS_RIGHT_STICK_X": "Right stick X",
        "GAMEPAD_AXIS_RIGHT_STICK_Y": "Right stick Y",
        "GAMEPAD_AXIS_LEFT_TRIGGER": "Left trigger",
        "GAMEPAD_AXIS_RIGHT_TRIGGER": "Right trigger",
        "GAMEPAD_RUMBLE_LEFT": "Left rumble",
        "GAMEPAD_RUMBLE_RIGHT": "Right rumble",
        "GAMEPAD_RUMBLE_LEFT_TRIGGER": "Left trigger rumble",
        "GAMEPAD_RUMBLE_RIGHT_TRIGGER": "Right trigger rumble",
        "GAMEPAD_LEDS": "LEDs",
        "GAMEPAD_IS_DOWN": "is down",
        "GAMEPAD_PRESSED": "was pressed",
        "GAMEPAD_RELEASED": "was released",
        "GAMEPAD_EVENT_PRESSED": "On Pressed",
        "GAMEPAD_EVENT_RELEASED": "On Released",
        "GAMEPAD_EVENT_CHANGED": "On Changed",
    }
)


def label_for(label_key: str, messages: Mapping[str, str] | None = None) -> str:
    """Return the display label for a label key.

    Unknown keys render as the key itself (raw HID channels use their number
    as both key and label).

    Returns:
    -------
    str
        Display label.
    """
    table = DEFAULT_MESSAGES if messages is None else messages
    return table.get(label_key, label_key)


__all__ = ["DEFAULT_MESSAGES", "label_for"]
