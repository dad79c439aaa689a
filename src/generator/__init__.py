"""Python code generation for block graphs."""

from __future__ import annotations

from generator.errors import CodeGenerationError
from generator.naming import mangle_name
from generator.order import Order
from generator.python_generator import PythonGenerator
from generator.workspace_code import BlockFailure, CompileResult, workspace_to_code

__all__ = [
    "BlockFailure",
    "CodeGenerationError",
    "CompileResult",
    "Order",
    "PythonGenerator",
    "mangle_name",
    "workspace_to_code",
]
