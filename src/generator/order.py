"""Python operator precedence tags used when composing expressions.

Lower values bind tighter. Values follow the Python operator table; the
fractional parts separate operators that share an integer class.
"""

from __future__ import annotations

import math
from enum import Enum


class Order(float, Enum):
    """Binding precedence of a generated expression."""

    ATOMIC = 0
    COLLECTION = 1
    STRING_CONVERSION = 1.0
    MEMBER = 2.1
    FUNCTION_CALL = 2.2
    EXPONENTIATION = 3
    UNARY_SIGN = 4
    BITWISE_NOT = 4.0
    MULTIPLICATIVE = 5
    ADDITIVE = 6
    BITWISE_SHIFT = 7
    BITWISE_AND = 8
    BITWISE_XOR = 9
    BITWISE_OR = 10
    RELATIONAL = 11
    LOGICAL_NOT = 12
    LOGICAL_AND = 13
    LOGICAL_OR = 14
    CONDITIONAL = 15
    LAMBDA = 16
    NONE = 99


# (outer, inner) pairs that never need parentheses even within one class.
ORDER_OVERRIDES: frozenset[tuple[float, float]] = frozenset(
    (float(outer), float(inner))
    for outer, inner in (
        (Order.FUNCTION_CALL, Order.MEMBER),
        (Order.FUNCTION_CALL, Order.FUNCTION_CALL),
        (Order.MEMBER, Order.MEMBER),
        (Order.MEMBER, Order.FUNCTION_CALL),
        (Order.LOGICAL_NOT, Order.LOGICAL_NOT),
        (Order.LOGICAL_AND, Order.LOGICAL_AND),
        (Order.LOGICAL_OR, Order.LOGICAL_OR),
    )
)


def needs_parentheses(outer: float, inner: float) -> bool:
    """Return whether an ``inner`` expression needs parentheses inside ``outer``.

    Returns:
    -------
    bool
        ``True`` when the inner expression binds no tighter than its context.
    """
    outer_class = math.floor(outer)
    inner_class = math.floor(inner)
    if outer_class > inner_class:
        return False
    if outer_class == inner_class and outer_class in {0, 99}:
        return False
    return (float(outer), float(inner)) not in ORDER_OVERRIDES


__all__ = ["ORDER_OVERRIDES", "Order", "needs_parentheses"]
