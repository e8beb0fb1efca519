"""
Error handling for the lexic parser.

Provides the ParseError taxonomy, the panic-mode synchronization helper
and factory functions for the errors the parser raises.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Raised inside the parser when the token stream breaks the grammar.

    The parser catches it at the fragment boundary, records it and
    resynchronizes; callers only ever see it inside a ParseResult.
    """

    code = "P000"

    def __init__(
        self,
        message: str,
        token: Token,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            line=token.line,
            severity="error",
            code=self.code,
            where=describe_position(token),
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, {self.token!r})"


class UnexpectedTokenError(ParseError):
    """The current token cannot start or continue an expression."""
    code = "P001"


class MissingTerminatorError(ParseError):
    """A required closing token was not found."""
    code = "P002"


class RecursionLimitError(ParseError):
    """Expression nesting went past the configured maximum depth."""
    code = "P003"


def describe_position(token: Token) -> str:
    """Render where an error happened relative to its token."""
    if token.type == TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


class SyntaxErrorRecovery:
    """
    Panic-mode recovery for the parser.

    Only expressions exist so far, so the recovery points are a statement
    terminator or EOF. Keywords are not resync points: with no statement
    grammar the next fragment would fail on them again.
    """

    @staticmethod
    def is_boundary(previous: Optional[Token], current: Token) -> bool:
        """Check whether parsing may safely resume at ``current``."""
        if previous is not None and previous.type == TokenType.SEMICOLON:
            return True
        return current.type == TokenType.EOF

    @staticmethod
    def synchronize(tokens: List[Token], current_pos: int) -> int:
        """
        Discard tokens up to the next recovery point.

        Always skips the token at ``current_pos`` unless it is EOF, so
        recovery makes progress. Returns the position to resume from.
        """
        if tokens[current_pos].type == TokenType.EOF:
            return current_pos

        current_pos += 1
        while not SyntaxErrorRecovery.is_boundary(tokens[current_pos - 1], tokens[current_pos]):
            current_pos += 1

        return current_pos


# Helper functions for creating common parser errors

def create_expect_expression_error(found: Token) -> UnexpectedTokenError:
    """Create an error for a token that cannot start an expression."""
    return UnexpectedTokenError(
        "Expect expression.",
        found,
        help_text="Expected a number, string, true, false, nil, a unary operator or '('.",
    )


def create_trailing_token_error(found: Token) -> UnexpectedTokenError:
    """Create an error for tokens left over after a complete expression."""
    return UnexpectedTokenError(
        "Expect end of expression.",
        found,
        help_text="Only one expression can be parsed at a time.",
        suggestions=["Remove the extra tokens", "Join the expressions with an operator"]
    )


def create_missing_token_error(expected: str, context: str, found: Token) -> MissingTerminatorError:
    """Create an error for a required token that is absent."""
    return MissingTerminatorError(
        f"Expect '{expected}' after {context}.",
        found,
        suggestions=[f"Add a closing '{expected}'"]
    )


def create_recursion_limit_error(max_depth: int, found: Token) -> RecursionLimitError:
    """Create an error for input nested deeper than the parser allows."""
    return RecursionLimitError(
        f"Expression nesting exceeds maximum depth of {max_depth}.",
        found,
        help_text="Reduce the number of nested parentheses or unary operators.",
    )
