"""Code-generation context handed to every block's generator function."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from core_types import ModuleKind
from devices.ports import GamepadPortConfig
from devices.registry import DeviceProfileRegistry, default_registry
from generator.errors import CodeGenerationError
from generator.naming import mangle_name
from generator.order import Order, needs_parentheses
from workspace.block import Block
from workspace.registry import BlockTypeRegistry, CodeResult

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "


@dataclass
class PythonGenerator:
    """Per-file generation context.

    Holds the module kind (which decides how component receivers are
    addressed), the gamepad port configuration, the device-profile registry,
    the indentation unit and the name-mangling function. Imports requested
    by blocks are collected once per generated file.
    """

    block_types: BlockTypeRegistry
    module_kind: ModuleKind = ModuleKind.ROBOT
    port_config: GamepadPortConfig = field(default_factory=GamepadPortConfig.default)
    profiles: DeviceProfileRegistry = field(default_factory=default_registry)
    indent: str = DEFAULT_INDENT
    name_mangler: Callable[[str], str] = mangle_name
    imports: set[str] = field(default_factory=set)

    def reset(self) -> None:
        """Forget collected imports before generating a new file."""
        self.imports.clear()

    def get_module_type(self) -> ModuleKind:
        """Return the kind of module being generated.

        Returns:
        -------
        ModuleKind
            Module kind.
        """
        return self.module_kind

    def add_import(self, module: str) -> None:
        """Request ``import <module>`` at the top of the generated file."""
        if module and module not in self.imports:
            logger.debug("Adding import %s", module)
            self.imports.add(module)

    def get_procedure_name(self, name: str) -> str:
        """Return the Python identifier for a display name.

        Returns:
        -------
        str
            Mangled identifier.
        """
        return self.name_mangler(name)

    def block_to_code(self, block: Block) -> CodeResult:
        """Generate code for one block through its registered generator.

        Returns:
        -------
        CodeResult
            ``(code, order)`` for expressions or a statement string.
        """
        registration = self.block_types.require(block.block_type)
        return registration.python_from_block(block, self)

    def value_to_code(self, block: Block, input_name: str, outer_order: float) -> str:
        """Generate the expression plugged into ``block``'s named input.

        Returns:
        -------
        str
            Expression text, parenthesized when it binds weaker than
            ``outer_order``; empty when nothing is plugged in.

        Raises:
            CodeGenerationError: If the plugged-in block produced a statement.
        """
        row = block.get_input(input_name)
        if row is None or row.target is None:
            return ""
        result = self.block_to_code(row.target)
        if not isinstance(result, tuple):
            msg = f"Block {row.target.id!r} in input {input_name!r} is not an expression."
            raise CodeGenerationError(msg)
        code, inner_order = result
        if not code:
            return ""
        if needs_parentheses(outer_order, inner_order):
            return f"({code})"
        return code

    def import_lines(self) -> list[str]:
        """Return the collected import statements, sorted.

        Returns:
        -------
        list[str]
            ``import`` lines.
        """
        return [f"import {module}" for module in sorted(self.imports)]


__all__ = ["DEFAULT_INDENT", "Order", "PythonGenerator"]
