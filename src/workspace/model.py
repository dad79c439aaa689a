"""Owner-level records the host editor exposes: components and method definitions."""

from __future__ import annotations

from serde_msgspec import StructBaseCompat

RETURN_TYPE_NONE = "None"


class FunctionArg(StructBaseCompat, frozen=True):
    """One positional argument: display name and declared type."""

    name: str
    type: str = ""


class Component(StructBaseCompat, frozen=True, rename="camel"):
    """A named, typed attachment point owned by the robot or mechanism."""

    block_id: str
    name: str
    class_name: str


class MethodSignature(StructBaseCompat, frozen=True, rename="camel"):
    """Signature of a user-authored method.

    ``args`` includes the receiver as its first entry when ``has_receiver``
    is set; callers never see that entry.
    """

    visible_name: str
    python_name: str
    return_type: str = RETURN_TYPE_NONE
    args: tuple[FunctionArg, ...] = ()
    has_receiver: bool = True

    @property
    def caller_args(self) -> tuple[FunctionArg, ...]:
        """Return the caller-visible arguments (receiver excluded).

        Returns:
        -------
        tuple[FunctionArg, ...]
            Arguments a call site supplies.
        """
        if self.has_receiver:
            return self.args[1:]
        return self.args


class MethodDefinition(MethodSignature, frozen=True, kw_only=True, rename="camel"):
    """A method signature bound to the id of the block that defines it."""

    block_id: str

    @classmethod
    def from_signature(cls, block_id: str, signature: MethodSignature) -> MethodDefinition:
        """Bind a signature to a defining block id.

        Returns:
        -------
        MethodDefinition
            Definition carrying the signature's fields.
        """
        return cls(
            block_id=block_id,
            visible_name=signature.visible_name,
            python_name=signature.python_name,
            return_type=signature.return_type,
            args=signature.args,
            has_receiver=signature.has_receiver,
        )

    def signature(self) -> MethodSignature:
        """Return the signature without the block id.

        Returns:
        -------
        MethodSignature
            Plain signature.
        """
        return MethodSignature(
            visible_name=self.visible_name,
            python_name=self.python_name,
            return_type=self.return_type,
            args=self.args,
            has_receiver=self.has_receiver,
        )


__all__ = [
    "RETURN_TYPE_NONE",
    "Component",
    "FunctionArg",
    "MethodDefinition",
    "MethodSignature",
]
