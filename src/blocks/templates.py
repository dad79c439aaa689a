"""Ready-made call blocks for the callables a module can reach.

A template is the data needed to drop a configured call block into a
workspace: its extra state, its field values and literal default values for
its argument sockets.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import (
    BLOCK_NAME,
    FIELD_COMPONENT_NAME,
    FIELD_FUNCTION_NAME,
    FIELD_MODULE_OR_CLASS_NAME,
    CallKind,
    arg_input_name,
)
from blocks.extra_state import CallExtraState
from serde_msgspec import StructBaseCompat
from workspace.block import EXPRESSION_BLOCK_TYPE, FIELD_CODE
from workspace.model import Component, FunctionArg, MethodDefinition
from workspace.workspace import Workspace

SELF_ARG = "self"


class ArgData(StructBaseCompat, frozen=True, rename="camel"):
    """One argument of a library callable."""

    name: str
    type: str = ""
    default_value: str = ""


class FunctionData(StructBaseCompat, frozen=True, rename="camel"):
    """A library callable as described by its API listing."""

    function_name: str
    return_type: str = "None"
    args: tuple[ArgData, ...] = ()
    tooltip: str = ""
    declaring_class_name: str = ""


@dataclass(frozen=True)
class BlockTemplate:
    """Everything needed to create one configured call block."""

    extra_state: CallExtraState
    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    inputs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    block_type: str = BLOCK_NAME

    @property
    def kind(self) -> CallKind:
        """Call kind of the template."""
        return self.extra_state.call_kind


def get_self_arg_name(class_name: str) -> str:
    """Return the label shown for a ``self`` argument of ``class_name``.

    Returns:
    -------
    str
        Variable-style name such as ``myFoo`` for ``pkg.Foo``.
    """
    short = class_name.rsplit(".", 1)[-1]
    if not short:
        return SELF_ARG
    return f"my{short[0].upper()}{short[1:]}"


def _process_args(
    args: Sequence[ArgData],
    declaring_class_name: str = "",
) -> tuple[tuple[FunctionArg, ...], dict[str, str]]:
    processed: list[FunctionArg] = []
    inputs: dict[str, str] = {}
    for index, arg in enumerate(args):
        name = arg.name
        if index == 0 and name == SELF_ARG and declaring_class_name:
            name = get_self_arg_name(declaring_class_name)
        processed.append(FunctionArg(name=name, type=arg.type))
        if arg.default_value:
            inputs[arg_input_name(index)] = arg.default_value
    return tuple(processed), inputs


def _template(
    kind: CallKind,
    function: FunctionData,
    fields: dict[str, str],
    *,
    args: Sequence[ArgData] | None = None,
    declaring_class_name: str = "",
    **optional: str,
) -> BlockTemplate:
    processed, inputs = _process_args(
        function.args if args is None else args,
        declaring_class_name,
    )
    state = CallExtraState(
        kind=kind.value,
        return_type=function.return_type,
        args=processed,
        tooltip=function.tooltip,
        **optional,
    )
    return BlockTemplate(
        extra_state=state,
        fields=MappingProxyType(fields),
        inputs=MappingProxyType(inputs),
    )


def builtin_templates(functions: Iterable[FunctionData]) -> list[BlockTemplate]:
    """Return templates for builtin functions.

    Returns:
    -------
    list[BlockTemplate]
        One template per function.
    """
    return [
        _template(
            CallKind.BUILT_IN,
            function,
            {FIELD_FUNCTION_NAME: function.function_name},
            declaring_class_name=function.declaring_class_name,
        )
        for function in functions
    ]


def module_function_templates(
    module_name: str,
    functions: Iterable[FunctionData],
) -> list[BlockTemplate]:
    """Return templates for the functions of ``module_name``.

    Returns:
    -------
    list[BlockTemplate]
        One template per function; each imports the module.
    """
    return [
        _template(
            CallKind.MODULE,
            function,
            {
                FIELD_MODULE_OR_CLASS_NAME: module_name,
                FIELD_FUNCTION_NAME: function.function_name,
            },
            declaring_class_name=function.declaring_class_name,
            import_module=module_name,
        )
        for function in functions
    ]


def static_method_templates(
    import_module: str,
    functions: Iterable[FunctionData],
) -> list[BlockTemplate]:
    """Return templates for static methods; functions without a class are skipped.

    Returns:
    -------
    list[BlockTemplate]
        One template per static method.
    """
    return [
        _template(
            CallKind.STATIC,
            function,
            {
                FIELD_MODULE_OR_CLASS_NAME: function.declaring_class_name,
                FIELD_FUNCTION_NAME: function.function_name,
            },
            declaring_class_name=function.declaring_class_name,
            import_module=import_module,
        )
        for function in functions
        if function.declaring_class_name
    ]


def constructor_templates(
    import_module: str,
    functions: Iterable[FunctionData],
) -> list[BlockTemplate]:
    """Return templates for class constructors.

    Returns:
    -------
    list[BlockTemplate]
        One template per constructor.
    """
    return [
        _template(
            CallKind.CONSTRUCTOR,
            function,
            {FIELD_MODULE_OR_CLASS_NAME: function.declaring_class_name},
            declaring_class_name=function.declaring_class_name,
            import_module=import_module,
        )
        for function in functions
    ]


def instance_method_templates(functions: Iterable[FunctionData]) -> list[BlockTemplate]:
    """Return templates for instance methods called on an explicit receiver.

    Returns:
    -------
    list[BlockTemplate]
        One template per method; the receiver is argument 0.
    """
    return [
        _template(
            CallKind.INSTANCE,
            function,
            {
                FIELD_MODULE_OR_CLASS_NAME: function.declaring_class_name,
                FIELD_FUNCTION_NAME: function.function_name,
            },
            declaring_class_name=function.declaring_class_name,
        )
        for function in functions
    ]


def _definition_args(definition: MethodDefinition) -> list[ArgData]:
    return [ArgData(name=arg.name, type=arg.type) for arg in definition.caller_args]


def _definition_template(kind: CallKind, definition: MethodDefinition) -> BlockTemplate:
    function = FunctionData(
        function_name=definition.visible_name,
        return_type=definition.return_type,
    )
    return _template(
        kind,
        function,
        {FIELD_FUNCTION_NAME: definition.visible_name},
        args=_definition_args(definition),
        actual_callee_name=definition.python_name,
        callee_definition_id=definition.block_id,
    )


def instance_within_templates(definitions: Iterable[MethodDefinition]) -> list[BlockTemplate]:
    """Return templates calling methods of the module being edited.

    Returns:
    -------
    list[BlockTemplate]
        One template per method, receiver argument dropped.
    """
    return [_definition_template(CallKind.INSTANCE_WITHIN, item) for item in definitions]


def event_templates(definitions: Iterable[MethodDefinition]) -> list[BlockTemplate]:
    """Return templates firing the events declared by the module.

    Returns:
    -------
    list[BlockTemplate]
        One template per event.
    """
    return [_definition_template(CallKind.EVENT, item) for item in definitions]


def robot_method_templates(definitions: Iterable[MethodDefinition]) -> list[BlockTemplate]:
    """Return templates calling methods of the robot from another module.

    Returns:
    -------
    list[BlockTemplate]
        One template per robot method.
    """
    return [_definition_template(CallKind.INSTANCE_ROBOT, item) for item in definitions]


def _overrides(function: FunctionData, base_methods: Sequence[FunctionData]) -> bool:
    arg_types = tuple(arg.type for arg in function.args[1:])
    return any(
        base.function_name == function.function_name
        and tuple(arg.type for arg in base.args[1:]) == arg_types
        for base in base_methods
    )


def component_templates(
    component: Component,
    methods: Iterable[FunctionData],
    base_methods: Sequence[FunctionData] = (),
) -> list[BlockTemplate]:
    """Return templates calling methods on one component.

    Methods also declared by the component base class are skipped; the
    component stands in for the receiver argument.

    Returns:
    -------
    list[BlockTemplate]
        One template per component method.
    """
    return [
        _template(
            CallKind.INSTANCE_COMPONENT,
            function,
            {
                FIELD_COMPONENT_NAME: component.name,
                FIELD_FUNCTION_NAME: function.function_name,
            },
            args=function.args[1:],
            component_id=component.block_id,
            component_type_name=component.class_name,
            component_name=component.name,
        )
        for function in methods
        if not _overrides(function, base_methods)
    ]


def instantiate(workspace: Workspace, template: BlockTemplate) -> CallPythonFunctionBlock:
    """Create a live call block from ``template``.

    Returns:
    -------
    CallPythonFunctionBlock
        The new block, shaped and populated.

    Raises:
        TypeError: If the registered block type does not create call blocks.
    """
    block = workspace.new_block(template.block_type)
    if not isinstance(block, CallPythonFunctionBlock):
        msg = f"Block type {template.block_type!r} does not create call blocks."
        raise TypeError(msg)
    block.apply_extra_state(template.extra_state)
    for name, value in template.fields.items():
        block.set_field_value(name, value)
    for input_name, code in template.inputs.items():
        literal = workspace.new_block(EXPRESSION_BLOCK_TYPE)
        literal.set_field_value(FIELD_CODE, code)
        block.connect(input_name, literal)
    return block


__all__ = [
    "ArgData",
    "BlockTemplate",
    "FunctionData",
    "builtin_templates",
    "component_templates",
    "constructor_templates",
    "event_templates",
    "get_self_arg_name",
    "instance_method_templates",
    "instance_within_templates",
    "instantiate",
    "module_function_templates",
    "robot_method_templates",
    "static_method_templates",
]
