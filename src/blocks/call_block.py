"""The call block: one call site of a Python callable."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from blocks.call_kinds import (
    BLOCK_NAME,
    FIELD_COMPONENT_NAME,
    FIELD_FUNCTION_NAME,
    FIELD_MODULE_OR_CLASS_NAME,
    INPUT_TITLE,
    CallKind,
    arg_input_name,
    arg_label_field,
    contract_for,
    has_output,
)
from blocks.errors import UnknownCallKindError
from blocks.extra_state import CallExtraState, decode_extra_state, encode_extra_state
from core_types import JsonDict
from workspace.block import Block, Field
from workspace.model import RETURN_TYPE_NONE, Component, FunctionArg, MethodSignature

logger = logging.getLogger(__name__)

ROBOT_LABEL = "robot"

# Types that accept any value, so the socket is left unchecked.
_UNCHECKED_TYPES = frozenset({"", "Any", "object", "typing.Any"})
_WIDENED_TYPES: dict[str, tuple[str, ...]] = {
    "float": ("float", "int"),
    "complex": ("complex", "float", "int"),
}


def output_check(return_type: str) -> tuple[str, ...] | None:
    """Return the output type check for a return type.

    Returns:
    -------
    tuple[str, ...] | None
        Accepted output types, or ``None`` for an untyped output.
    """
    if return_type in _UNCHECKED_TYPES:
        return None
    return (return_type,)


def socket_check(arg_type: str) -> tuple[str, ...] | None:
    """Return the types an argument socket of ``arg_type`` accepts.

    Returns:
    -------
    tuple[str, ...] | None
        Accepted types, or ``None`` when anything may be plugged in.
    """
    if arg_type in _UNCHECKED_TYPES:
        return None
    return _WIDENED_TYPES.get(arg_type, (arg_type,))


@dataclass(eq=False)
class CallPythonFunctionBlock(Block):
    """A call block holding decoded extra state.

    The title row is built once per block from its kind; argument sockets
    are rebuilt from ``args`` on every ``update_shape`` call. ``components``
    caches the live components whose class matches ``component_type_name``
    and is refreshed on every state load.
    """

    kind: CallKind = CallKind.BUILT_IN
    return_type: str = RETURN_TYPE_NONE
    args: list[FunctionArg] = field(default_factory=list)
    custom_tooltip: str = ""
    import_module: str = ""
    actual_callee_name: str = ""
    callee_definition_id: str = ""
    component_id: str = ""
    component_type_name: str = ""
    component_name: str = ""
    components: list[Component] = field(default_factory=list)

    @classmethod
    def create(cls, block_id: str) -> CallPythonFunctionBlock:
        """Create an empty call block.

        Returns:
        -------
        CallPythonFunctionBlock
            New block without a shape; load extra state to build one.
        """
        return cls(block_type=BLOCK_NAME, id=block_id)

    # ------------------------------------------------------------------
    # Extra state
    # ------------------------------------------------------------------

    def extra_state(self) -> CallExtraState:
        """Return the block's state as a persisted record.

        Returns:
        -------
        CallExtraState
            Extra-state snapshot.
        """
        component_name = ""
        if self.get_field(FIELD_COMPONENT_NAME) is not None:
            component_name = self.displayed_component_name()
        return CallExtraState(
            kind=self.kind.value,
            return_type=self.return_type,
            args=tuple(self.args),
            tooltip=self.custom_tooltip,
            import_module=self.import_module,
            actual_callee_name=self.actual_callee_name,
            callee_definition_id=self.callee_definition_id,
            component_id=self.component_id,
            component_type_name=self.component_type_name,
            component_name=component_name,
        )

    def apply_extra_state(self, state: CallExtraState) -> None:
        """Apply decoded state, re-resolve components and rebuild the shape."""
        self.kind = state.call_kind
        self.return_type = state.return_type
        self.args = list(state.args)
        self.custom_tooltip = state.tooltip
        self.import_module = state.import_module
        self.actual_callee_name = state.actual_callee_name
        self.callee_definition_id = state.callee_definition_id
        self.component_id = state.component_id
        self.component_type_name = state.component_type_name
        self.component_name = state.component_name
        self.refresh_components()
        self.update_shape()

    def save_extra_state(self) -> JsonDict | None:
        return encode_extra_state(self.extra_state())

    def load_extra_state(self, state: JsonDict) -> None:
        self.apply_extra_state(decode_extra_state(state))

    def refresh_components(self) -> None:
        """Re-read the live components matching ``component_type_name``."""
        if self.workspace is None:
            self.components = []
            return
        self.components = [
            component
            for component in self.workspace.get_components()
            if component.class_name == self.component_type_name
        ]

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    def update_shape(self) -> None:
        """Rebuild output/statement shape, title row and argument sockets.

        Raises:
            UnknownCallKindError: If the block's kind has no title layout.
        """
        if has_output(self.return_type):
            self.set_output(True, output_check(self.return_type))
        else:
            self.set_statement(True)

        if self.get_input(INPUT_TITLE) is None:
            self._append_title()

        for index, arg in enumerate(self.args):
            row = self.get_input(arg_input_name(index))
            label = self.get_field(arg_label_field(index))
            if row is not None and label is not None:
                label.value = arg.name
            else:
                row = self.append_value_input(arg_input_name(index))
                row.append_field(arg.name, arg_label_field(index))
            row.set_check(socket_check(arg.type))

        index = len(self.args)
        while self.get_input(arg_input_name(index)) is not None:
            self.remove_input(arg_input_name(index))
            index += 1

    def _append_title(self) -> None:
        contract = contract_for(self.kind)
        title = self.append_dummy_input(INPUT_TITLE).append_field(contract.title_verb)
        match self.kind:
            case CallKind.BUILT_IN | CallKind.INSTANCE_WITHIN | CallKind.EVENT:
                title.append_field(Field(name=FIELD_FUNCTION_NAME))
            case CallKind.MODULE | CallKind.STATIC | CallKind.INSTANCE:
                title.append_field(Field(name=FIELD_MODULE_OR_CLASS_NAME))
                title.append_field(".")
                title.append_field(Field(name=FIELD_FUNCTION_NAME))
            case CallKind.CONSTRUCTOR:
                title.append_field(Field(name=FIELD_MODULE_OR_CLASS_NAME))
            case CallKind.INSTANCE_COMPONENT:
                title.append_field(self._component_field(self.component_name))
                title.append_field(".")
                title.append_field(Field(name=FIELD_FUNCTION_NAME))
            case CallKind.INSTANCE_ROBOT:
                title.append_field(ROBOT_LABEL)
                title.append_field(".")
                title.append_field(Field(name=FIELD_FUNCTION_NAME))
            case _:
                raise UnknownCallKindError(self.kind)

    def component_choices(self, current: str = "") -> tuple[str, ...]:
        """Return the component dropdown choices.

        Returns:
        -------
        tuple[str, ...]
            Live component names, plus ``current`` when it is not among them.
        """
        names = [component.name for component in self.components]
        if current and current not in names:
            names.append(current)
        return tuple(names)

    def _component_field(self, value: str) -> Field:
        return Field(
            name=FIELD_COMPONENT_NAME,
            value=value,
            choices=self.component_choices(value),
        )

    def select_component(self, name: str) -> None:
        """Call the live component named ``name``, as picked from the dropdown.

        Raises:
            KeyError: If no live component of the block's class has that name.
        """
        for component in self.components:
            if component.name == name:
                self.component_id = component.block_id
                self.replace_component_name(name)
                return
        msg = f"Block {self.id!r} has no component named {name!r}."
        raise KeyError(msg)

    def replace_component_name(self, name: str) -> None:
        """Show ``name`` in the component dropdown, rebuilding its choices."""
        self.component_name = name
        title = self.get_input(INPUT_TITLE)
        if title is None:
            return
        index = title.field_index(FIELD_COMPONENT_NAME)
        if index == -1:
            return
        title.remove_field(FIELD_COMPONENT_NAME)
        title.insert_field_at(index, self._component_field(name))

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def function_name(self) -> str:
        """Displayed function name."""
        return self.get_field_value(FIELD_FUNCTION_NAME) or ""

    def owner_name(self) -> str:
        """Displayed module or class name."""
        return self.get_field_value(FIELD_MODULE_OR_CLASS_NAME) or ""

    def displayed_component_name(self) -> str:
        """Displayed component name."""
        return self.get_field_value(FIELD_COMPONENT_NAME) or ""

    def callee_name(self) -> str:
        """Emitted callee identifier: the actual name when set, else the label."""
        return self.actual_callee_name or self.function_name()

    def tooltip(self) -> str:
        """Return the tooltip, with the custom tooltip after a blank line.

        Raises:
            UnknownCallKindError: If the block's kind has no tooltip.
        """
        function_name = self.function_name()
        match self.kind:
            case CallKind.BUILT_IN:
                text = f"Calls the builtin function {function_name}."
            case CallKind.MODULE:
                text = f"Calls the module function {self.owner_name()}.{function_name}."
            case CallKind.STATIC:
                text = f"Calls the static method {self.owner_name()}.{function_name}."
            case CallKind.CONSTRUCTOR:
                text = f"Constructs an instance of the class {self.owner_name()}."
            case CallKind.INSTANCE:
                text = f"Calls the instance method {self.owner_name()}.{function_name}."
            case CallKind.INSTANCE_WITHIN:
                text = f"Calls the instance method {function_name}."
            case CallKind.EVENT:
                text = f"Fires the event {function_name}."
            case CallKind.INSTANCE_COMPONENT:
                text = (
                    f"Calls the instance method {self.component_type_name}.{function_name}"
                    f" on the component named {self.displayed_component_name()}."
                )
            case CallKind.INSTANCE_ROBOT:
                text = f"Calls the robot method {function_name}."
            case _:
                raise UnknownCallKindError(self.kind)
        if self.custom_tooltip:
            text = f"{text}\n\n{self.custom_tooltip}"
        return text

    # ------------------------------------------------------------------
    # Repairs
    # ------------------------------------------------------------------

    def rename_method(self, visible_name: str, python_name: str | None = None) -> None:
        """Show a new method name; also retarget the emitted name when given."""
        self.set_field_value(FIELD_FUNCTION_NAME, visible_name)
        if python_name is not None and self.actual_callee_name:
            self.actual_callee_name = python_name

    def mutate_method(self, signature: MethodSignature) -> None:
        """Adopt a new return type and argument list and rebuild the shape."""
        self.return_type = signature.return_type
        self.args = list(signature.caller_args)
        logger.debug(
            "Call block %s now takes %d argument(s), returns %r",
            self.id,
            len(self.args),
            self.return_type,
        )
        self.update_shape()


__all__ = [
    "ROBOT_LABEL",
    "CallPythonFunctionBlock",
    "output_check",
    "socket_check",
]
