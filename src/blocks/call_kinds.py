"""The nine ways a call block can invoke a callable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from blocks.errors import UnknownCallKindError
from workspace.model import RETURN_TYPE_NONE

BLOCK_NAME = "mrc_call_python_function"

FIELD_MODULE_OR_CLASS_NAME = "MODULE_OR_CLASS"
FIELD_FUNCTION_NAME = "FUNC"
FIELD_COMPONENT_NAME = "COMPONENT_NAME"
INPUT_TITLE = "TITLE"

WARNING_ID_FUNCTION_CHANGED = "function changed"


def arg_input_name(index: int) -> str:
    """Return the socket name of argument ``index``.

    Returns:
    -------
    str
        Input name such as ``ARG0``.
    """
    return f"ARG{index}"


def arg_label_field(index: int) -> str:
    """Return the label field name of argument ``index``.

    Returns:
    -------
    str
        Field name such as ``ARGNAME0``.
    """
    return f"ARGNAME{index}"


class CallKind(StrEnum):
    """Kind of callable a call block invokes; values are the persisted strings."""

    BUILT_IN = "built-in"
    MODULE = "module"
    STATIC = "static"
    CONSTRUCTOR = "constructor"
    INSTANCE = "instance"
    INSTANCE_WITHIN = "instance_within"
    INSTANCE_COMPONENT = "instance_component"
    INSTANCE_ROBOT = "instance_robot"
    EVENT = "event"


class Receiver(StrEnum):
    """What the emitted call is invoked on."""

    NONE = "none"
    FIRST_ARGUMENT = "first_argument"
    SELF = "self"
    COMPONENT = "component"
    ROBOT = "robot"


@dataclass(frozen=True)
class KindContract:
    """Structural contract of one call kind.

    ``required`` names the extra-state attributes a block of this kind must
    carry; ``owner_field`` is set when the title shows a module or class
    name; ``repairable`` kinds are updated in place when their definition
    changes.
    """

    receiver: Receiver
    title_verb: str
    owner_field: bool = False
    required: frozenset[str] = frozenset()
    repairable: bool = False


KIND_CONTRACTS: Mapping[CallKind, KindContract] = MappingProxyType(
    {
        CallKind.BUILT_IN: KindContract(receiver=Receiver.NONE, title_verb="call"),
        CallKind.MODULE: KindContract(
            receiver=Receiver.NONE,
            title_verb="call",
            owner_field=True,
        ),
        CallKind.STATIC: KindContract(
            receiver=Receiver.NONE,
            title_verb="call",
            owner_field=True,
            required=frozenset({"import_module"}),
        ),
        CallKind.CONSTRUCTOR: KindContract(
            receiver=Receiver.NONE,
            title_verb="create",
            owner_field=True,
            required=frozenset({"import_module"}),
        ),
        CallKind.INSTANCE: KindContract(
            receiver=Receiver.FIRST_ARGUMENT,
            title_verb="call",
            owner_field=True,
        ),
        CallKind.INSTANCE_WITHIN: KindContract(
            receiver=Receiver.SELF,
            title_verb="call",
            required=frozenset({"callee_definition_id"}),
            repairable=True,
        ),
        CallKind.EVENT: KindContract(
            receiver=Receiver.SELF,
            title_verb="fire",
            required=frozenset({"callee_definition_id"}),
        ),
        CallKind.INSTANCE_COMPONENT: KindContract(
            receiver=Receiver.COMPONENT,
            title_verb="call",
            required=frozenset({"component_id", "component_type_name"}),
        ),
        CallKind.INSTANCE_ROBOT: KindContract(
            receiver=Receiver.ROBOT,
            title_verb="call",
            required=frozenset({"callee_definition_id"}),
            repairable=True,
        ),
    }
)


def parse_call_kind(value: CallKind | str) -> CallKind:
    """Parse a persisted call-kind string.

    Raises:
        UnknownCallKindError: If ``value`` names no known kind.
    """
    if isinstance(value, CallKind):
        return value
    try:
        return CallKind(value)
    except ValueError:
        raise UnknownCallKindError(value) from None


def contract_for(kind: CallKind | str) -> KindContract:
    """Return the structural contract of ``kind``.

    Raises:
        UnknownCallKindError: If ``kind`` has no contract.
    """
    contract = KIND_CONTRACTS.get(parse_call_kind(kind))
    if contract is None:
        raise UnknownCallKindError(kind)
    return contract


def has_output(return_type: str) -> bool:
    """Return whether a call with ``return_type`` is an expression.

    Returns:
    -------
    bool
        ``False`` only for the no-return-value sentinel.
    """
    return return_type != RETURN_TYPE_NONE


__all__ = [
    "BLOCK_NAME",
    "FIELD_COMPONENT_NAME",
    "FIELD_FUNCTION_NAME",
    "FIELD_MODULE_OR_CLASS_NAME",
    "INPUT_TITLE",
    "KIND_CONTRACTS",
    "RETURN_TYPE_NONE",
    "WARNING_ID_FUNCTION_CHANGED",
    "CallKind",
    "KindContract",
    "Receiver",
    "arg_input_name",
    "arg_label_field",
    "contract_for",
    "has_output",
    "parse_call_kind",
]
