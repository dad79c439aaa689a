"""In-memory host editor for one module's block graph."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable, Iterable
from typing import TypeAlias

from core_types import ModuleKind
from workspace.block import Block
from workspace.events import BlockChangeEvent
from workspace.model import Component, MethodDefinition, MethodSignature
from workspace.registry import BlockTypeRegistry

logger = logging.getLogger(__name__)

ChangeListener: TypeAlias = Callable[[BlockChangeEvent], None]


@dataclasses.dataclass(frozen=True)
class SkippedBlock:
    """A persisted block left out of the workspace because its state was unusable."""

    block_id: str
    block_type: str
    error: str


class Workspace:
    """Single active block graph plus the owner-level collections it reads.

    The workspace is the host collaborator of the call-node core: it looks up
    blocks by type, fires structural-change events, keeps the undo stack and
    exposes the components and method definitions of the owning module.
    """

    def __init__(
        self,
        *,
        block_types: BlockTypeRegistry | None = None,
        module_kind: ModuleKind = ModuleKind.ROBOT,
        components: Iterable[Component] = (),
        definitions: Iterable[MethodDefinition] = (),
    ) -> None:
        self.block_types = block_types or BlockTypeRegistry()
        self.module_kind = module_kind
        self._blocks: dict[str, Block] = {}
        self._components: list[Component] = list(components)
        self._definitions: dict[str, MethodDefinition] = {
            definition.block_id: definition for definition in definitions
        }
        self._record_undo = True
        self._listeners: list[ChangeListener] = []
        self.fired_events: list[BlockChangeEvent] = []
        self.undo_stack: list[BlockChangeEvent] = []
        self.skipped_blocks: list[SkippedBlock] = []

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def new_block(self, block_type: str, block_id: str | None = None) -> Block:
        """Create a block of a registered type and add it to the workspace.

        Returns:
        -------
        Block
            The new block.
        """
        registration = self.block_types.require(block_type)
        block = registration.factory(block_id or uuid.uuid4().hex)
        self.add_block(block)
        return block

    def add_block(self, block: Block) -> None:
        """Attach an existing block to this workspace.

        Raises:
            ValueError: If a block with the same id already exists.
        """
        if block.id in self._blocks:
            msg = f"Duplicate block id {block.id!r}."
            raise ValueError(msg)
        block.workspace = self
        self._blocks[block.id] = block

    def dispose_block(self, block_id: str) -> None:
        """Remove a block (and detach it from its parent)."""
        block = self._blocks.pop(block_id, None)
        if block is None:
            return
        parent = block.parent
        if parent is not None:
            for row in parent.inputs:
                if row.target is block:
                    row.target = None
        block.workspace = None

    def get_block(self, block_id: str) -> Block | None:
        """Return the block with ``block_id``.

        Returns:
        -------
        Block | None
            Block when present.
        """
        return self._blocks.get(block_id)

    def get_all_blocks(self) -> list[Block]:
        """Return every block in creation order.

        Returns:
        -------
        list[Block]
            Blocks.
        """
        return list(self._blocks.values())

    def get_blocks_by_type(self, block_type: str) -> list[Block]:
        """Return blocks of one type in creation order.

        Returns:
        -------
        list[Block]
            Matching blocks.
        """
        return [block for block in self._blocks.values() if block.block_type == block_type]

    def get_top_blocks(self) -> list[Block]:
        """Return blocks not plugged into another block.

        Returns:
        -------
        list[Block]
            Top-level blocks in creation order.
        """
        return [block for block in self._blocks.values() if block.parent is None]

    @staticmethod
    def get_field_value(block: Block, name: str) -> str | None:
        """Return a field value of ``block``.

        Returns:
        -------
        str | None
            Field value when the field exists.
        """
        return block.get_field_value(name)

    @staticmethod
    def set_field_value(block: Block, name: str, value: str) -> None:
        """Set a field value of ``block``."""
        block.set_field_value(name, value)

    # ------------------------------------------------------------------
    # Events and undo
    # ------------------------------------------------------------------

    @property
    def record_undo(self) -> bool:
        """Whether fired events are recorded on the undo stack."""
        return self._record_undo

    def set_record_undo(self, enabled: bool) -> None:
        """Enable or disable undo recording."""
        self._record_undo = enabled

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked for every fired event."""
        self._listeners.append(listener)

    def fire(self, event: BlockChangeEvent) -> BlockChangeEvent:
        """Fire a structural-change event.

        The event is stamped with the current undo-recording mode and pushed
        on the undo stack only when recording is enabled.

        Returns:
        -------
        BlockChangeEvent
            The event as delivered.
        """
        stamped = dataclasses.replace(event, record_undo=self._record_undo)
        self.fired_events.append(stamped)
        if stamped.record_undo:
            self.undo_stack.append(stamped)
        for listener in self._listeners:
            listener(stamped)
        return stamped

    # ------------------------------------------------------------------
    # Owner collections
    # ------------------------------------------------------------------

    def get_components(self) -> list[Component]:
        """Return the components of the owning robot or mechanism.

        Returns:
        -------
        list[Component]
            Live components.
        """
        return list(self._components)

    def set_components(self, components: Iterable[Component]) -> None:
        """Replace the live component collection."""
        self._components = list(components)

    def get_definitions(self) -> list[MethodDefinition]:
        """Return the method definitions visible to this workspace.

        Returns:
        -------
        list[MethodDefinition]
            Live definitions.
        """
        return list(self._definitions.values())

    def get_definition(self, block_id: str) -> MethodDefinition | None:
        """Return the definition whose defining block is ``block_id``.

        Returns:
        -------
        MethodDefinition | None
            Definition when still present.
        """
        return self._definitions.get(block_id)

    def put_definition(self, block_id: str, signature: MethodSignature) -> MethodDefinition:
        """Insert or replace the definition for ``block_id``.

        Returns:
        -------
        MethodDefinition
            Stored definition.
        """
        definition = MethodDefinition.from_signature(block_id, signature)
        self._definitions[block_id] = definition
        return definition

    def remove_definition(self, block_id: str) -> None:
        """Delete a definition."""
        if self._definitions.pop(block_id, None) is not None:
            logger.debug("Removed method definition %s", block_id)


__all__ = ["ChangeListener", "SkippedBlock", "Workspace"]
