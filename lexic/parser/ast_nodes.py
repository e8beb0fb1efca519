"""
Abstract Syntax Tree node definitions for lexic expressions.

The tree is a closed set of four immutable variants. Consumers such as the
AST printer dispatch over EXPRESSION_TYPES with isinstance checks rather
than a visitor interface, and treat anything outside the set as a bug.
"""

from dataclasses import dataclass
from typing import Any, List, Union

from ..lexer.tokens import Token, TokenType


UNARY_OPERATORS = frozenset({
    TokenType.BANG,
    TokenType.MINUS,
})

BINARY_OPERATORS = frozenset({
    TokenType.EQUAL_EQUAL,
    TokenType.BANG_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.STAR,
    TokenType.SLASH,
})

# Payload types a Literal may carry (None is nil)
LiteralValue = Union[float, str, bool, None]


class Expression:
    """Base class for all expression nodes."""

    def children(self) -> List['Expression']:
        """Get all child nodes, left to right."""
        raise NotImplementedError


def _check_child(node: str, field: str, value: Any):
    if not isinstance(value, Expression):
        raise TypeError(f"{node}.{field} must be an Expression, got {type(value).__name__}")


def _check_operator(node: str, operator: Any, allowed: frozenset):
    if not isinstance(operator, Token) or operator.type not in allowed:
        raise ValueError(f"{node} cannot use operator {operator!r}")


# ============================================================================
# Leaf nodes
# ============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    """Number, string, boolean or nil literal."""
    value: LiteralValue

    def __post_init__(self):
        if self.value is not None and not isinstance(self.value, (float, int, str, bool)):
            raise TypeError(f"Literal cannot hold {type(self.value).__name__}")

    def children(self) -> List[Expression]:
        return []


# ============================================================================
# Composite nodes
# ============================================================================

@dataclass(frozen=True)
class Grouping(Expression):
    """Parenthesized sub-expression."""
    inner: Expression

    def __post_init__(self):
        _check_child("Grouping", "inner", self.inner)

    def children(self) -> List[Expression]:
        return [self.inner]


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix '!' or '-' applied to one operand."""
    operator: Token
    operand: Expression

    def __post_init__(self):
        _check_operator("Unary", self.operator, UNARY_OPERATORS)
        _check_child("Unary", "operand", self.operand)

    def children(self) -> List[Expression]:
        return [self.operand]


@dataclass(frozen=True)
class Binary(Expression):
    """Infix arithmetic, comparison or equality operation."""
    left: Expression
    operator: Token
    right: Expression

    def __post_init__(self):
        _check_child("Binary", "left", self.left)
        _check_operator("Binary", self.operator, BINARY_OPERATORS)
        _check_child("Binary", "right", self.right)

    def children(self) -> List[Expression]:
        return [self.left, self.right]


# The closed set of node variants: literal, unary, binary, grouping
EXPRESSION_TYPES = (Literal, Unary, Binary, Grouping)
