"""Python emission for call blocks."""

from __future__ import annotations

from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import CallKind, arg_input_name
from blocks.errors import UnknownCallKindError
from core_types import ModuleKind
from generator.order import Order
from generator.python_generator import PythonGenerator
from workspace.block import Block
from workspace.registry import CodeResult

PLACEHOLDER = "None"


def python_from_block(block: Block, generator: PythonGenerator) -> CodeResult:
    """Generate the call for one call block.

    Returns:
    -------
    CodeResult
        ``(code, Order.FUNCTION_CALL)`` for expression blocks, otherwise a
        newline-terminated statement.

    Raises:
        TypeError: If ``block`` is not a call block.
        UnknownCallKindError: If the block's kind has no emission branch.
    """
    if not isinstance(block, CallPythonFunctionBlock):
        msg = f"Block {block.id!r} of type {block.block_type!r} is not a call block."
        raise TypeError(msg)
    if block.import_module:
        generator.add_import(block.import_module)
    callee, arg_start = callee_path(block, generator)
    code = f"{callee}({generate_arguments(block, generator, arg_start)})"
    if block.output:
        return code, Order.FUNCTION_CALL
    return code + "\n"


def callee_path(block: CallPythonFunctionBlock, generator: PythonGenerator) -> tuple[str, int]:
    """Return the callee expression and the index of the first emitted argument.

    Returns:
    -------
    tuple[str, int]
        Callee text and argument start index.

    Raises:
        UnknownCallKindError: If the block's kind has no emission branch.
    """
    match block.kind:
        case CallKind.BUILT_IN:
            return block.callee_name(), 0
        case CallKind.MODULE | CallKind.STATIC:
            return f"{block.owner_name()}.{block.callee_name()}", 0
        case CallKind.CONSTRUCTOR:
            return block.owner_name(), 0
        case CallKind.INSTANCE:
            receiver = generator.value_to_code(block, arg_input_name(0), Order.MEMBER)
            return f"{receiver}.{block.callee_name()}", 1
        case CallKind.INSTANCE_WITHIN:
            return f"self.{generator.get_procedure_name(block.function_name())}", 0
        case CallKind.EVENT:
            name = generator.get_procedure_name(block.function_name())
            guard = f'if self.events.get("{name}", None):\n'
            return f'{guard}{generator.indent}self.events["{name}"]', 0
        case CallKind.INSTANCE_COMPONENT:
            prefix = component_receiver(generator.get_module_type())
            return f"{prefix}{block.displayed_component_name()}.{block.callee_name()}", 0
        case CallKind.INSTANCE_ROBOT:
            return f"self.robot.{block.callee_name()}", 0
        case _:
            raise UnknownCallKindError(block.kind)


def component_receiver(module_kind: ModuleKind) -> str:
    """Return how generated code addresses components in ``module_kind``.

    Returns:
    -------
    str
        ``self.`` inside a robot or mechanism, ``self.robot.`` elsewhere.
    """
    match module_kind:
        case ModuleKind.ROBOT | ModuleKind.MECHANISM:
            return "self."
        case _:
            return "self.robot."


def generate_arguments(
    block: CallPythonFunctionBlock,
    generator: PythonGenerator,
    start: int,
) -> str:
    """Serialize the arguments from ``start`` on.

    A single argument is inlined; otherwise each argument goes on its own
    double-indented line. Empty sockets emit ``None``.

    Returns:
    -------
    str
        Text between the call parentheses.
    """
    remaining = range(start, len(block.args))
    if len(remaining) == 1:
        return generator.value_to_code(block, arg_input_name(start), Order.NONE) or PLACEHOLDER
    separator = generator.indent * 2
    code = ""
    delimiter = "\n" + separator
    for index in remaining:
        code += delimiter
        code += generator.value_to_code(block, arg_input_name(index), Order.NONE) or PLACEHOLDER
        delimiter = ",\n" + separator
    return code


__all__ = [
    "PLACEHOLDER",
    "callee_path",
    "component_receiver",
    "generate_arguments",
    "python_from_block",
]
