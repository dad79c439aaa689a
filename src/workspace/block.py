"""Graph nodes hosted by a workspace: blocks, their inputs and fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from core_types import JsonDict

if TYPE_CHECKING:
    from workspace.workspace import Workspace

EXPRESSION_BLOCK_TYPE = "expression"
FIELD_CODE = "CODE"


class BlockStateError(Exception):
    """Raised when a block cannot take on its persisted state."""


class InputKind(StrEnum):
    """Input row kinds."""

    DUMMY = "dummy"
    VALUE = "value"


@dataclass(eq=False)
class Field:
    """A named (or anonymous) field on an input row.

    ``choices`` is set for dropdown fields.
    """

    name: str | None
    value: str = ""
    choices: tuple[str, ...] | None = None


@dataclass(eq=False)
class Input:
    """An input row: a field row plus, for value inputs, one socket."""

    name: str
    kind: InputKind = InputKind.VALUE
    fields: list[Field] = field(default_factory=list)
    check: tuple[str, ...] | None = None
    target: Block | None = None

    def append_field(self, value: str | Field, name: str | None = None) -> Input:
        """Append a label or field to this row.

        Returns:
        -------
        Input
            This input, for chaining.
        """
        self.fields.append(value if isinstance(value, Field) else Field(name=name, value=value))
        return self

    def get_field(self, name: str) -> Field | None:
        """Return the named field on this row.

        Returns:
        -------
        Field | None
            Field when present.
        """
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def field_index(self, name: str) -> int:
        """Return the position of the named field, or -1.

        Returns:
        -------
        int
            Index within the row.
        """
        for index, item in enumerate(self.fields):
            if item.name == name:
                return index
        return -1

    def remove_field(self, name: str) -> None:
        """Remove the named field from this row."""
        self.fields = [item for item in self.fields if item.name != name]

    def insert_field_at(self, index: int, item: Field) -> None:
        """Insert a field at ``index``."""
        self.fields.insert(index, item)

    def set_check(self, check: tuple[str, ...] | None) -> Input:
        """Restrict the types the socket accepts.

        Returns:
        -------
        Input
            This input, for chaining.
        """
        self.check = check
        return self


@dataclass(eq=False)
class Block:
    """One node of the block graph.

    A block is either an expression (``output`` set) or a statement
    (``previous_statement``/``next_statement`` set). Warnings are keyed by
    warning id and shown joined by a blank line.
    """

    block_type: str
    id: str
    workspace: Workspace | None = None
    inputs: list[Input] = field(default_factory=list)
    output: bool = False
    output_check: tuple[str, ...] | None = None
    previous_statement: bool = False
    next_statement: bool = False
    parent: Block | None = None
    warnings: dict[str, str] = field(default_factory=dict)

    def append_dummy_input(self, name: str = "") -> Input:
        """Append a field-only row.

        Returns:
        -------
        Input
            The new row.
        """
        row = Input(name=name, kind=InputKind.DUMMY)
        self.inputs.append(row)
        return row

    def append_value_input(self, name: str) -> Input:
        """Append a row with a value socket.

        Returns:
        -------
        Input
            The new row.
        """
        row = Input(name=name, kind=InputKind.VALUE)
        self.inputs.append(row)
        return row

    def get_input(self, name: str) -> Input | None:
        """Return the named input row.

        Returns:
        -------
        Input | None
            Input when present.
        """
        for row in self.inputs:
            if row.name == name:
                return row
        return None

    def remove_input(self, name: str) -> None:
        """Remove the named input row, disconnecting any attached block."""
        row = self.get_input(name)
        if row is None:
            return
        if row.target is not None:
            row.target.parent = None
        self.inputs.remove(row)

    def connect(self, input_name: str, child: Block) -> None:
        """Plug ``child`` into the named value socket.

        Raises:
            KeyError: If the block has no such value input.
        """
        row = self.get_input(input_name)
        if row is None or row.kind is not InputKind.VALUE:
            msg = f"Block {self.id!r} has no value input {input_name!r}."
            raise KeyError(msg)
        row.target = child
        child.parent = self

    def get_field(self, name: str) -> Field | None:
        """Return the named field from any row.

        Returns:
        -------
        Field | None
            Field when present.
        """
        for row in self.inputs:
            found = row.get_field(name)
            if found is not None:
                return found
        return None

    def get_field_value(self, name: str) -> str | None:
        """Return the value of the named field.

        Returns:
        -------
        str | None
            Field value, or ``None`` when the block has no such field.
        """
        found = self.get_field(name)
        return None if found is None else found.value

    def set_field_value(self, name: str, value: str) -> None:
        """Set the value of the named field.

        Raises:
            KeyError: If the block has no such field.
        """
        found = self.get_field(name)
        if found is None:
            msg = f"Block {self.id!r} has no field {name!r}."
            raise KeyError(msg)
        found.value = value

    def field_values(self) -> dict[str, str]:
        """Return all named field values.

        Returns:
        -------
        dict[str, str]
            Field name to value.
        """
        return {
            item.name: item.value for row in self.inputs for item in row.fields if item.name
        }

    def unplug(self) -> None:
        """Disconnect this block from the value socket it is plugged into."""
        parent = self.parent
        if parent is None:
            return
        for row in parent.inputs:
            if row.target is self:
                row.target = None
        self.parent = None

    def set_output(self, enabled: bool, check: tuple[str, ...] | None = None) -> None:
        """Switch the block to expression shape (or off).

        A block losing its output is unplugged from its parent.
        """
        if not enabled:
            self.unplug()
        self.output = enabled
        self.output_check = check if enabled else None
        if enabled:
            self.previous_statement = False
            self.next_statement = False

    def set_statement(self, enabled: bool) -> None:
        """Switch the block to statement shape (or off)."""
        self.previous_statement = enabled
        self.next_statement = enabled
        if enabled:
            self.unplug()
            self.output = False
            self.output_check = None

    def set_warning_text(self, text: str | None, warning_id: str = "") -> None:
        """Attach or clear a warning under ``warning_id``."""
        if text:
            self.warnings[warning_id] = text
        else:
            self.warnings.pop(warning_id, None)

    @property
    def warning_text(self) -> str | None:
        """All warnings joined by a blank line, or ``None``."""
        if not self.warnings:
            return None
        return "\n\n".join(self.warnings.values())

    def save_extra_state(self) -> JsonDict | None:
        """Return block-type-specific state, or ``None`` when there is none.

        Returns:
        -------
        JsonDict | None
            Plain record of extra state.
        """
        return None

    def load_extra_state(self, state: JsonDict) -> None:
        """Apply block-type-specific state."""


@dataclass(eq=False)
class ExpressionBlock(Block):
    """A literal or variable expression with its own binding precedence."""

    order: float = 0.0

    def __post_init__(self) -> None:
        if self.get_field(FIELD_CODE) is None:
            self.append_dummy_input("CODE_ROW").append_field(Field(name=FIELD_CODE))
        self.set_output(True)

    @property
    def code(self) -> str:
        """Expression text."""
        return self.get_field_value(FIELD_CODE) or ""

    def save_extra_state(self) -> JsonDict | None:
        if not self.order:
            return None
        return {"order": self.order}

    def load_extra_state(self, state: JsonDict) -> None:
        order = state.get("order", 0.0)
        self.order = float(order) if isinstance(order, (int, float)) else 0.0


__all__ = [
    "EXPRESSION_BLOCK_TYPE",
    "FIELD_CODE",
    "Block",
    "BlockStateError",
    "ExpressionBlock",
    "Field",
    "Input",
    "InputKind",
]
