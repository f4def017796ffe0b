"""
Operator classification for the per-kind typing rules.

Each operator symbol maps to an ``OperatorKind`` that decides both the result
type of the expression and the hints pushed onto its operands.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class OperatorKind(Enum):
    """Classification of operator symbols."""

    PLUS = auto()          # + : numeric addition or string concatenation
    ARITHMETIC = auto()    # numeric only, int unless a double is involved
    BITWISE = auto()       # always int
    RELATIONAL = auto()    # ordering comparisons, bool
    EQUALITY = auto()      # equality and type tests, bool


BINARY_OPERATORS: dict[str, OperatorKind] = {
    "+": OperatorKind.PLUS,
    "-": OperatorKind.ARITHMETIC,
    "*": OperatorKind.ARITHMETIC,
    "/": OperatorKind.ARITHMETIC,
    "%": OperatorKind.ARITHMETIC,
    "|": OperatorKind.BITWISE,
    "&": OperatorKind.BITWISE,
    "^": OperatorKind.BITWISE,
    "<<": OperatorKind.BITWISE,
    ">>": OperatorKind.BITWISE,
    ">>>": OperatorKind.BITWISE,
    "<": OperatorKind.RELATIONAL,
    ">": OperatorKind.RELATIONAL,
    "<=": OperatorKind.RELATIONAL,
    ">=": OperatorKind.RELATIONAL,
    "==": OperatorKind.EQUALITY,
    "!=": OperatorKind.EQUALITY,
    "===": OperatorKind.EQUALITY,
    "!==": OperatorKind.EQUALITY,
    "instanceof": OperatorKind.EQUALITY,
    "in": OperatorKind.EQUALITY,
}

# Compound assignments map onto the binary operator they apply.
ASSIGNMENT_OPERATORS: dict[str, Optional[str]] = {
    "=": None,
    "+=": "+",
    "-=": "-",
    "*=": "*",
    "/=": "/",
    "%=": "%",
    "<<=": "<<",
    ">>=": ">>",
    ">>>=": ">>>",
    "|=": "|",
    "&=": "&",
    "^=": "^",
}

UPDATE_OPERATORS = frozenset({"++", "--"})

LOGICAL_OPERATORS = frozenset({"&&", "||"})

UNARY_OPERATORS = frozenset({"typeof", "!", "-", "+", "~", "void", "delete"})


def classify_binary_operator(operator: str) -> Optional[OperatorKind]:
    """Get the kind of a binary operator, or None if it is not supported."""
    return BINARY_OPERATORS.get(operator)


def is_numeric_only(kind: Optional[OperatorKind]) -> bool:
    """Operators whose operands can only be numbers."""
    return kind in (OperatorKind.ARITHMETIC, OperatorKind.BITWISE)
