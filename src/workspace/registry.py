"""Block-type registry: how to create each block type and generate code for it."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from utils.registry_protocol import MutableRegistry
from workspace.block import Block

if TYPE_CHECKING:
    from generator.python_generator import PythonGenerator

BlockFactory: TypeAlias = Callable[[str], Block]
CodeResult: TypeAlias = str | tuple[str, float]
PythonFromBlock: TypeAlias = Callable[[Block, "PythonGenerator"], CodeResult]


class UnknownBlockTypeError(KeyError):
    """Raised when a block type has not been registered."""


@dataclass(frozen=True)
class BlockType:
    """Registration record for one block type."""

    name: str
    factory: BlockFactory
    python_from_block: PythonFromBlock


@dataclass
class BlockTypeRegistry:
    """Registered block types keyed by type name."""

    _types: MutableRegistry[str, BlockType] = field(default_factory=MutableRegistry)

    def register(self, block_type: BlockType, *, overwrite: bool = False) -> None:
        """Register a block type."""
        self._types.register(block_type.name, block_type, overwrite=overwrite)

    def get(self, name: str) -> BlockType | None:
        """Return the registered block type, or ``None``.

        Returns:
        -------
        BlockType | None
            Registration record.
        """
        return self._types.get(name)

    def require(self, name: str) -> BlockType:
        """Return the registered block type.

        Raises:
            UnknownBlockTypeError: If ``name`` is not registered.
        """
        found = self._types.get(name)
        if found is None:
            msg = f"Unknown block type {name!r}."
            raise UnknownBlockTypeError(msg)
        return found

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


__all__ = [
    "BlockFactory",
    "BlockType",
    "BlockTypeRegistry",
    "CodeResult",
    "PythonFromBlock",
    "UnknownBlockTypeError",
]
