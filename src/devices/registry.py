"""Device-profile registry with eager delegation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cache

from devices.profiles import (
    ControlAccessor,
    ControlTable,
    DeviceProfile,
    ProfileSpec,
    SlotKind,
    freeze_table,
)
from devices.tables import PROFILE_SPECS
from utils.registry_protocol import MutableRegistry

logger = logging.getLogger(__name__)


class DeviceProfileError(ValueError):
    """Raised when a profile cannot be registered or resolved."""


def _resolve_table(
    spec: ProfileSpec,
    slot: SlotKind,
    base: DeviceProfile | None,
) -> ControlTable | None:
    own = spec.tables.get(slot)
    if base is None:
        if slot in spec.deletions:
            msg = f"Profile {spec.profile_id!r} deletes {slot} entries but has no base."
            raise DeviceProfileError(msg)
        return None if own is None else freeze_table(own)
    if slot in spec.cleared:
        return None
    inherited = base.table(slot)
    if inherited is None and own is None:
        return None
    entries = dict(inherited or {})
    entries.update(own or {})
    for key in spec.deletions.get(slot, frozenset()):
        entries.pop(key, None)
    return freeze_table(entries)


@dataclass
class DeviceProfileRegistry:
    """Registry of resolved device profiles keyed by profile id.

    Delegation is resolved once, on registration, so lookups never recurse.
    A sealed registry rejects further registrations.
    """

    _profiles: MutableRegistry[str, DeviceProfile] = field(default_factory=MutableRegistry)
    sealed: bool = False

    def register(self, spec: ProfileSpec) -> DeviceProfile:
        """Resolve and register a profile definition.

        Returns:
        -------
        DeviceProfile
            Effective profile with delegation applied.

        Raises:
            DeviceProfileError: If the registry is sealed, the id is taken or
                the base profile is not registered yet.
        """
        if self.sealed:
            msg = f"Registry is sealed; cannot register {spec.profile_id!r}."
            raise DeviceProfileError(msg)
        if spec.profile_id in self._profiles:
            msg = f"Profile {spec.profile_id!r} already registered."
            raise DeviceProfileError(msg)
        base: DeviceProfile | None = None
        if spec.base is not None:
            base = self._profiles.get(spec.base)
            if base is None:
                msg = f"Profile {spec.profile_id!r} delegates to unknown profile {spec.base!r}."
                raise DeviceProfileError(msg)
        profile = DeviceProfile(
            profile_id=spec.profile_id,
            buttons=_resolve_table(spec, SlotKind.BUTTON, base),
            axes=_resolve_table(spec, SlotKind.AXIS, base),
            rumble=_resolve_table(spec, SlotKind.RUMBLE, base),
            leds=_resolve_table(spec, SlotKind.LED, base),
        )
        self._profiles.register(spec.profile_id, profile)
        logger.debug("Registered device profile %r (base=%r)", spec.profile_id, spec.base)
        return profile

    def seal(self) -> DeviceProfileRegistry:
        """Mark the registry read-only.

        Returns:
        -------
        DeviceProfileRegistry
            This registry.
        """
        self.sealed = True
        return self

    def resolve(self, profile_id: str) -> DeviceProfile:
        """Return the registered profile.

        Raises:
            DeviceProfileError: If no profile is registered under ``profile_id``.
        """
        profile = self._profiles.get(profile_id)
        if profile is None:
            msg = f"Unknown device profile {profile_id!r}."
            raise DeviceProfileError(msg)
        return profile

    def get(self, profile_id: str) -> DeviceProfile | None:
        """Return the registered profile, or ``None`` when missing.

        Returns:
        -------
        DeviceProfile | None
            Registered profile.
        """
        return self._profiles.get(profile_id)

    def profile_ids(self) -> tuple[str, ...]:
        """Return registered profile ids in registration order.

        Returns:
        -------
        tuple[str, ...]
            Profile identifiers.
        """
        return tuple(self._profiles)

    def __contains__(self, profile_id: str) -> bool:
        return profile_id in self._profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)


def accessor_for(
    profile: DeviceProfile | None,
    slot: SlotKind,
    logical_name: str,
) -> ControlAccessor | None:
    """Return the accessor a profile maps a logical control to.

    ``None`` is an expected outcome: the profile has no table for ``slot``
    or the table lacks ``logical_name``. Callers render nothing for it.

    Returns:
    -------
    ControlAccessor | None
        Accessor descriptor when mapped.
    """
    if profile is None:
        return None
    table = profile.table(slot)
    if table is None:
        return None
    return table.get(logical_name)


def build_registry(specs: Iterable[ProfileSpec]) -> DeviceProfileRegistry:
    """Register profile definitions in order and seal the registry.

    Returns:
    -------
    DeviceProfileRegistry
        Sealed registry.
    """
    registry = DeviceProfileRegistry()
    for spec in specs:
        registry.register(spec)
    return registry.seal()


@cache
def default_registry() -> DeviceProfileRegistry:
    """Return the process-wide registry of built-in profiles.

    Returns:
    -------
    DeviceProfileRegistry
        Sealed registry of the built-in controller profiles.
    """
    return build_registry(PROFILE_SPECS)


__all__ = [
    "DeviceProfileError",
    "DeviceProfileRegistry",
    "accessor_for",
    "build_registry",
    "default_registry",
]
