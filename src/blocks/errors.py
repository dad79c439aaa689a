"""Block error types."""

from __future__ import annotations

from generator.errors import CodeGenerationError
from workspace.block import BlockStateError


class BlockError(BlockStateError):
    """Base class for block errors."""


class UnknownCallKindError(BlockError, CodeGenerationError):
    """Raised when a call kind has no handling branch.

    This signals a missing variant case in the code, not a user mistake.
    """

    def __init__(self, kind: object) -> None:
        super().__init__(f"Call kind has unexpected value: {kind!r}")
        self.kind = kind


class ExtraStateError(BlockError, ValueError):
    """Raised when a persisted extra-state record cannot be decoded."""


__all__ = ["BlockError", "ExtraStateError", "UnknownCallKindError"]
