"""Tests for device profiles, delegation and port configuration."""

from __future__ import annotations

import pytest

from devices.labels import label_for
from devices.ports import GamepadPortConfig
from devices.profiles import (
    ControlAccessor,
    ProfileSpec,
    SlotKind,
    base_profile,
    derived_from,
    freeze_table,
    same_as,
)
from devices.registry import (
    DeviceProfileError,
    DeviceProfileRegistry,
    accessor_for,
    build_registry,
    default_registry,
)
from devices.tables import GENERIC_AXES, GENERIC_BUTTONS, GamepadType


def _accessor(method: str) -> ControlAccessor:
    return ControlAccessor(label_key=method.upper(), method=method)


def test_default_registry_registers_every_profile_in_order() -> None:
    """Built-in profiles are registered bases first."""
    ids = default_registry().profile_ids()
    assert set(ids) == {member.value for member in GamepadType}
    assert ids.index(GamepadType.GAMEPAD_XBOX) < ids.index(GamepadType.GAMEPAD_LOGITECH_F310)
    assert ids.index(GamepadType.GAMEPAD_PS4) < ids.index(GamepadType.GAMEPAD_PS5)
    assert default_registry().sealed is True


def test_none_profile_has_no_tables() -> None:
    """The placeholder profile offers no controls."""
    profile = default_registry().resolve(GamepadType.NONE)
    for slot in SlotKind:
        assert profile.table(slot) is None


def test_xbox_relabels_face_buttons_and_drops_extras() -> None:
    """Xbox overrides face labels and removes misc buttons, paddles and touchpad."""
    profile = default_registry().resolve(GamepadType.GAMEPAD_XBOX)
    assert profile.buttons is not None
    assert profile.buttons["SOUTH_FACE"].label_key == "GAMEPAD_BUTTON_A"
    assert profile.buttons["SOUTH_FACE"].method == "getSouthFace"
    for removed in ("MISC1", "LEFT_PADDLE_2", "TOUCHPAD"):
        assert removed not in profile.buttons
    assert dict(profile.axes or {}) == GENERIC_AXES


def test_f310_inherits_xbox_without_rumble_or_leds() -> None:
    """The F310 shares Xbox buttons and axes but has no outputs."""
    registry = default_registry()
    f310 = registry.resolve(GamepadType.GAMEPAD_LOGITECH_F310)
    xbox = registry.resolve(GamepadType.GAMEPAD_XBOX)
    assert dict(f310.buttons or {}) == dict(xbox.buttons or {})
    assert dict(f310.axes or {}) == dict(xbox.axes or {})
    assert f310.rumble is None
    assert f310.leds is None


def test_playstation_profiles() -> None:
    """PS4 keeps the touchpad; PS5 is identical to PS4."""
    registry = default_registry()
    ps4 = registry.resolve(GamepadType.GAMEPAD_PS4)
    ps5 = registry.resolve(GamepadType.GAMEPAD_PS5)
    assert ps4.buttons is not None
    assert "TOUCHPAD" in ps4.buttons
    assert "MISC1" not in ps4.buttons
    assert ps4.buttons["EAST_FACE"].label_key == "GAMEPAD_BUTTON_CIRCLE"
    assert dict(ps5.buttons or {}) == dict(ps4.buttons)
    assert dict(ps5.rumble or {}) == dict(ps4.rumble or {})


def test_generic_hid_uses_raw_channels() -> None:
    """Raw HID buttons carry their channel as the call argument."""
    profile = default_registry().resolve(GamepadType.GENERIC_HID)
    accessor = accessor_for(profile, SlotKind.BUTTON, "3")
    assert accessor is not None
    assert accessor.call_text("Pressed") == "getRawButtonPressed(3)"
    assert len(profile.buttons or {}) == 16
    assert label_for(accessor.label_key) == "3"


@pytest.mark.parametrize(
    ("profile_id", "slot", "name"),
    [
        (GamepadType.GAMEPAD_LOGITECH_F310, SlotKind.RUMBLE, "LEFT_RUMBLE"),
        (GamepadType.GAMEPAD_XBOX, SlotKind.BUTTON, "TOUCHPAD"),
        (GamepadType.GAMEPAD_GENERIC, SlotKind.AXIS, "NOT_AN_AXIS"),
    ],
)
def test_accessor_for_missing_control(profile_id: str, slot: SlotKind, name: str) -> None:
    """Unmapped controls resolve to ``None`` rather than raising."""
    assert accessor_for(default_registry().resolve(profile_id), slot, name) is None


def test_accessor_for_without_profile() -> None:
    """No profile means no accessor."""
    assert accessor_for(None, SlotKind.BUTTON, "SOUTH_FACE") is None


def test_delegation_applies_overrides_then_deletions() -> None:
    """A derived profile starts from its base, then overrides and deletes keys."""
    registry = DeviceProfileRegistry()
    registry.register(base_profile("base", buttons={"A": _accessor("a"), "B": _accessor("b")}))
    derived = registry.register(
        derived_from(
            "derived",
            "base",
            overrides={SlotKind.BUTTON: {"A": _accessor("alpha"), "C": _accessor("c")}},
            deletions={SlotKind.BUTTON: frozenset({"B"})},
        )
    )
    assert derived.buttons is not None
    assert list(derived.buttons) == ["A", "C"]
    assert derived.buttons["A"].method == "alpha"
    assert derived.axes is None


def test_same_as_copies_base_tables() -> None:
    """A fully delegating profile has the base's tables."""
    registry = build_registry(
        [base_profile("base", axes={"X": _accessor("x")}), same_as("copy", "base")]
    )
    assert dict(registry.resolve("copy").axes or {}) == {"X": _accessor("x")}


def test_register_rejects_duplicates() -> None:
    """Profile ids are unique."""
    registry = DeviceProfileRegistry()
    registry.register(base_profile("pad"))
    with pytest.raises(DeviceProfileError, match="already registered"):
        registry.register(base_profile("pad"))


def test_register_rejects_unknown_base() -> None:
    """A base must be registered before the profile delegating to it."""
    with pytest.raises(DeviceProfileError, match="unknown profile"):
        DeviceProfileRegistry().register(same_as("copy", "missing"))


def test_deletions_require_a_base() -> None:
    """Deleting entries only makes sense when delegating."""
    orphan = ProfileSpec(profile_id="orphan", deletions={SlotKind.BUTTON: frozenset({"A"})})
    with pytest.raises(DeviceProfileError, match="has no base"):
        DeviceProfileRegistry().register(orphan)


def test_sealed_registry_rejects_registration() -> None:
    """The built-in registry is read-only."""
    with pytest.raises(DeviceProfileError, match="sealed"):
        default_registry().register(base_profile("late"))


def test_resolve_unknown_profile() -> None:
    """Resolving an unknown id raises; ``get`` returns ``None``."""
    registry = default_registry()
    assert registry.get("Joystick") is None
    assert "Joystick" not in registry
    with pytest.raises(DeviceProfileError, match="Unknown device profile"):
        registry.resolve("Joystick")


def test_frozen_tables_are_read_only() -> None:
    """Resolved tables cannot be mutated."""
    table = freeze_table(GENERIC_BUTTONS)
    with pytest.raises(TypeError):
        table["SOUTH_FACE"] = _accessor("x")  # type: ignore[index]


def test_default_port_config() -> None:
    """The F310 is configured on ports 0 and 1 only."""
    config = GamepadPortConfig.default()
    assert config.profile_id_for_port(0) == GamepadType.GAMEPAD_LOGITECH_F310
    assert config.profile_id_for_port(1) == GamepadType.GAMEPAD_LOGITECH_F310
    assert config.profile_id_for_port(2) == GamepadType.NONE
    assert config.ports_with_controllers() == (0, 1)


def test_unknown_profile_id_falls_back_to_generic() -> None:
    """Unrecognized controller names map to the generic gamepad."""
    config = GamepadPortConfig(ports={3: "Joystick"})
    assert config.profile_id_for_port(3) == GamepadType.GAMEPAD_GENERIC


def test_with_port_and_none_entries() -> None:
    """Ports can be set individually and ``None`` entries dropped."""
    config = GamepadPortConfig().with_port(2, GamepadType.GAMEPAD_PS4).with_port(4, "None")
    assert config.ports == {2: "PlayStation 4 Gamepad", 4: "None"}
    assert config.ports_with_controllers() == (2,)
    assert config.without_none_entries().ports == {2: "PlayStation 4 Gamepad"}


def test_with_port_out_of_range() -> None:
    """Only ports 0 through 5 exist."""
    with pytest.raises(ValueError, match="outside"):
        GamepadPortConfig().with_port(6, GamepadType.GAMEPAD_XBOX)


def test_label_for_uses_custom_messages() -> None:
    """A host can supply its own message table."""
    assert label_for("GAMEPAD_BUTTON_A") == "A"
    assert label_for("GAMEPAD_BUTTON_A", {"GAMEPAD_BUTTON_A": "Bouton A"}) == "Bouton A"
    assert label_for("UNKNOWN_KEY") == "UNKNOWN_KEY"
