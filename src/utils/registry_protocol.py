"""Keyed registry storage shared by the block-type and device-profile registries.

Registries that resolve or validate entries on registration compose a
``MutableRegistry`` rather than inherit from it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class MutableRegistry(Generic[K, V]):
    """Insertion-ordered key/value storage that refuses silent replacement."""

    _entries: dict[K, V] = field(default_factory=dict)

    def register(self, key: K, value: V, *, overwrite: bool = False) -> None:
        """Register ``value`` under ``key``.

        Raises:
            ValueError: If the key is already registered and ``overwrite`` is False.
        """
        if key in self._entries and not overwrite:
            msg = f"Key {key!r} already registered. Use overwrite=True."
            raise ValueError(msg)
        self._entries[key] = value

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["MutableRegistry"]
