"""Code generation error types."""

from __future__ import annotations


class CodeGenerationError(RuntimeError):
    """Raised when one block cannot be turned into code.

    Only the offending block is abandoned; the rest of the file is still
    generated.
    """


__all__ = ["CodeGenerationError"]
