"""Inspect the built-in device profiles and the configured gamepad ports."""

from __future__ import annotations

import sys
from typing import Annotated, Literal, TypeAlias

from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from cli.context import RunContext
from cli.runtime_services import effective_config
from devices.labels import label_for
from devices.ports import MAX_GAMEPAD_PORT, MIN_GAMEPAD_PORT, GamepadPortConfig
from devices.profiles import DeviceProfile, SlotKind
from devices.registry import DeviceProfileRegistry, default_registry
from serde_msgspec import dumps_json

OutputFormat: TypeAlias = Literal["json", "table"]


def profile_payload(profile: DeviceProfile) -> dict[str, object]:
    """Describe every control a profile maps.

    Returns:
    -------
    dict[str, object]
        Profile id and, per slot kind, the controls in table order
        (``None`` for a slot the profile does not offer).
    """
    slots: dict[str, object] = {}
    for slot in SlotKind:
        table = profile.table(slot)
        if table is None:
            slots[slot.value] = None
            continue
        slots[slot.value] = [
            {
                "key": key,
                "label": label_for(accessor.label_key),
                "accessor": accessor.call_text(),
            }
            for key, accessor in table.items()
        ]
    return {"profile": profile.profile_id, "slots": slots}


def ports_payload(
    port_config: GamepadPortConfig,
    registry: DeviceProfileRegistry,
) -> list[dict[str, object]]:
    """Describe the profile resolved for every gamepad port.

    Returns:
    -------
    list[dict[str, object]]
        One entry per port, ascending.
    """
    entries: list[dict[str, object]] = []
    for port in range(MIN_GAMEPAD_PORT, MAX_GAMEPAD_PORT + 1):
        profile_id = port_config.profile_id_for_port(port)
        entries.append(
            {
                "port": port,
                "profile": profile_id,
                "registered": profile_id in registry,
            }
        )
    return entries


def _profile_table(profile: DeviceProfile) -> Table:
    table = Table(title=profile.profile_id)
    table.add_column("Slot")
    table.add_column("Key")
    table.add_column("Label")
    table.add_column("Accessor")
    for slot in SlotKind:
        controls = profile.table(slot)
        if controls is None:
            table.add_row(slot.value, "-", "-", "-")
            continue
        for key, accessor in controls.items():
            table.add_row(slot.value, key, label_for(accessor.label_key), accessor.call_text())
    return table


def _ports_table(entries: list[dict[str, object]]) -> Table:
    table = Table(title="Gamepad ports")
    table.add_column("Port", justify="right")
    table.add_column("Profile")
    for entry in entries:
        table.add_row(str(entry["port"]), str(entry["profile"]))
    return table


def profiles_command(
    profile_id: Annotated[
        str | None,
        Parameter(help="Profile to show; lists every profile when omitted."),
    ] = None,
    *,
    ports: Annotated[
        bool,
        Parameter(
            name="--ports",
            help="Show the profile configured for each gamepad port instead.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        Parameter(name="--format", help="Output format."),
    ] = "json",
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show device profiles.

    Returns:
    -------
    int
        Exit status code.
    """
    registry = default_registry()
    console = Console()
    if ports:
        entries = ports_payload(effective_config(run_context).port_config(), registry)
        if output_format == "table":
            console.print(_ports_table(entries))
        else:
            sys.stdout.write(dumps_json(entries, pretty=True).decode("utf-8") + "\n")
        return 0

    if profile_id is None:
        if output_format == "table":
            for name in registry.profile_ids():
                console.print(name)
        else:
            payload = list(registry.profile_ids())
            sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")
        return 0

    profile = registry.resolve(profile_id)
    if output_format == "table":
        console.print(_profile_table(profile))
    else:
        sys.stdout.write(dumps_json(profile_payload(profile), pretty=True).decode("utf-8") + "\n")
    return 0


__all__ = ["ports_payload", "profile_payload", "profiles_command"]
