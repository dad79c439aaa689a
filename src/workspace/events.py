"""Structural-change events fired by the workspace."""

from __future__ import annotations

from dataclasses import dataclass

BLOCK_CHANGE = "change"
ELEMENT_MUTATION = "mutation"


@dataclass(frozen=True)
class BlockChangeEvent:
    """A change to one block, carrying before/after snapshots.

    ``record_undo`` reflects the workspace's undo-recording mode at the time
    the event was fired.
    """

    block_id: str
    element: str
    name: str | None = None
    old_value: object = None
    new_value: object = None
    record_undo: bool = True
    event_type: str = BLOCK_CHANGE


__all__ = ["BLOCK_CHANGE", "ELEMENT_MUTATION", "BlockChangeEvent"]
