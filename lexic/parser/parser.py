"""
lexic Recursive Descent Parser

Turns a token list into an expression tree. Each grammar rule is one
method, ordered from lowest to highest precedence:

    expression -> equality
    equality   -> comparison ( ("!=" | "==") comparison )*
    comparison -> term ( (">" | ">=" | "<" | "<=") term )*
    term       -> factor ( ("+" | "-") factor )*
    factor     -> unary ( ("*" | "/") unary )*
    unary      -> ("!" | "-") unary | primary
    primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Binary rules fold left as they loop, so operators of equal precedence
associate to the left. Unary recurses into itself, so prefix operators
nest to the right.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..lexer.tokens import Token, TokenType
from .ast_nodes import Expression, Literal, Grouping, Unary, Binary
from .errors import (
    ParseError, SyntaxErrorRecovery, create_expect_expression_error,
    create_trailing_token_error, create_missing_token_error,
    create_recursion_limit_error
)

logger = logging.getLogger(__name__)

# Each nesting level costs about twelve interpreter frames
DEFAULT_MAX_DEPTH = 64


@dataclass
class ParserConfig:
    """Configuration parameters for the parser"""

    # Combined limit on parenthesis depth and unary chain length
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


@dataclass
class ParseResult:
    """Outcome of one parse: a root expression or the errors found."""
    expression: Optional[Expression]
    errors: List[ParseError] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if parsing found any errors."""
        return len(self.errors) > 0


class Parser:
    """
    lexic recursive descent parser.

    One instance owns its cursor and error list; call parse() to get a
    ParseResult. Syntax errors never escape parse().
    """

    EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
    COMPARISON_OPERATORS = (
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
    )
    TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
    FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
    UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

    def __init__(self, tokens: Sequence[Token], config: Optional[ParserConfig] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the scanner, terminated by an EOF token
            config: Parser limits; defaults to ParserConfig()

        Raises:
            ValueError: If the token list has no EOF token
        """
        self.tokens = tuple(tokens)
        if not any(token.type == TokenType.EOF for token in self.tokens):
            raise ValueError("token sequence must be terminated by an EOF token")

        self.config = config or ParserConfig()
        self.current = 0
        self.depth = 0
        self.errors: List[ParseError] = []

    def parse(self) -> ParseResult:
        """
        Parse the token stream into an expression tree.

        Returns:
            ParseResult holding the root expression, or every error found
            with expression set to None
        """
        self.current = 0
        self.depth = 0
        self.errors = []
        expression = None

        while True:
            try:
                fragment = self._parse_fragment()
                if not self.errors and expression is None:
                    expression = fragment
            except ParseError as e:
                self._record(e)
                self._synchronize()
            except RecursionError:
                # max_depth allowed more nesting than the interpreter stack holds
                self.depth = 0
                self._record(create_recursion_limit_error(self.config.max_depth, self._peek()))
                self._synchronize()

            if self._is_at_end():
                break

        if self.errors:
            logger.debug("parse failed with %d error(s)", len(self.errors))
            return ParseResult(None, self.errors)

        logger.debug("parsed %d tokens into %s", self.current + 1, type(expression).__name__)
        return ParseResult(expression, [])

    def _parse_fragment(self) -> Expression:
        """Parse one expression plus an optional ';' and require EOF after it."""
        expr = self._expression()
        self._match(TokenType.SEMICOLON)

        if not self._is_at_end():
            raise create_trailing_token_error(self._peek())

        return expr

    # Grammar rules, lowest precedence first

    def _expression(self) -> Expression:
        return self._nested(self._equality)

    def _equality(self) -> Expression:
        return self._binary(self._comparison, self.EQUALITY_OPERATORS)

    def _comparison(self) -> Expression:
        return self._binary(self._term, self.COMPARISON_OPERATORS)

    def _term(self) -> Expression:
        return self._binary(self._factor, self.TERM_OPERATORS)

    def _factor(self) -> Expression:
        return self._binary(self._unary, self.FACTOR_OPERATORS)

    def _unary(self) -> Expression:
        if self._match(*self.UNARY_OPERATORS):
            operator = self._previous()
            operand = self._nested(self._unary)
            return Unary(operator, operand)

        return self._primary()

    def _primary(self) -> Expression:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, ")", "expression")
            return Grouping(expr)

        raise create_expect_expression_error(self._peek())

    def _binary(self, operand: Callable[[], Expression],
                operators: Sequence[TokenType]) -> Expression:
        """Parse a left-associative chain of one precedence level."""
        expr = operand()

        while self._match(*operators):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def _nested(self, rule: Callable[[], Expression]) -> Expression:
        """Run a rule one nesting level deeper, enforcing max_depth."""
        self.depth += 1
        try:
            if self.depth > self.config.max_depth:
                raise create_recursion_limit_error(self.config.max_depth, self._peek())
            return rule()
        finally:
            self.depth -= 1

    # Error recovery

    def _record(self, error: ParseError):
        self.errors.append(error)
        logger.debug("line %d: %s (%s)", error.line, error.message, error.code)

    def _synchronize(self):
        """Skip to the next point where parsing can resume."""
        start = self.current
        self.current = SyntaxErrorRecovery.synchronize(self.tokens, self.current)
        logger.debug("synchronized: skipped %d token(s)", self.current - start)

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, expected: str, context: str) -> Token:
        """Consume token of expected type or raise a missing-token error."""
        if self._check(token_type):
            return self._advance()

        raise create_missing_token_error(expected, context, self._peek())


def parse(tokens: Sequence[Token], config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Parse a token list with a fresh parser.

    Args:
        tokens: Tokens terminated by EOF
        config: Optional parser limits

    Returns:
        ParseResult
    """
    return Parser(tokens, config).parse()


def parse_string(source: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to scan and parse a source string.

    Raises:
        LexerError: If scanning fails
    """
    from ..lexer import tokenize_string

    return parse(tokenize_string(source), config)


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Convenience function to scan and parse a source file.

    Raises:
        LexerError: If scanning fails
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file

    return parse(tokenize_file(filepath), config)
