"""Registration of every block type this package provides."""

from __future__ import annotations

import logging

from blocks import gamepad
from blocks.call_block import CallPythonFunctionBlock
from blocks.call_kinds import BLOCK_NAME
from blocks.emitter import python_from_block
from generator.python_generator import PythonGenerator
from workspace.block import EXPRESSION_BLOCK_TYPE, Block, ExpressionBlock
from workspace.registry import BlockType, BlockTypeRegistry, CodeResult

logger = logging.getLogger(__name__)


def create_expression_block(block_id: str) -> ExpressionBlock:
    """Create an empty literal/variable expression block.

    Returns:
    -------
    ExpressionBlock
        New block.
    """
    return ExpressionBlock(block_type=EXPRESSION_BLOCK_TYPE, id=block_id)


def python_from_expression(block: Block, generator: PythonGenerator) -> CodeResult:
    if not isinstance(block, ExpressionBlock):
        msg = f"Block {block.id!r} is not an expression block."
        raise TypeError(msg)
    return block.code, block.order


BLOCK_TYPES: tuple[BlockType, ...] = (
    BlockType(
        name=BLOCK_NAME,
        factory=CallPythonFunctionBlock.create,
        python_from_block=python_from_block,
    ),
    BlockType(
        name=gamepad.BOOLEAN_BLOCK_NAME,
        factory=gamepad.create_boolean_block,
        python_from_block=gamepad.python_from_boolean,
    ),
    BlockType(
        name=gamepad.ANALOG_BLOCK_NAME,
        factory=gamepad.create_analog_block,
        python_from_block=gamepad.python_from_analog,
    ),
    BlockType(
        name=gamepad.BOOLEAN_EVENT_BLOCK_NAME,
        factory=gamepad.create_boolean_event_block,
        python_from_block=gamepad.python_from_boolean_event,
    ),
    BlockType(
        name=EXPRESSION_BLOCK_TYPE,
        factory=create_expression_block,
        python_from_block=python_from_expression,
    ),
)


def setup(registry: BlockTypeRegistry | None = None) -> BlockTypeRegistry:
    """Register the call block, the gamepad blocks and the expression block.

    Registering twice into the same registry is harmless.

    Returns:
    -------
    BlockTypeRegistry
        The registry the types were added to.
    """
    target = registry if registry is not None else BlockTypeRegistry()
    for block_type in BLOCK_TYPES:
        target.register(block_type, overwrite=True)
    logger.debug("Registered %d block type(s)", len(BLOCK_TYPES))
    return target


__all__ = ["BLOCK_TYPES", "create_expression_block", "python_from_expression", "setup"]
