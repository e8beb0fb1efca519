"""
lexic Parser Package

Recursive descent parser and printer for lexic expressions.

Key Features:
- One method per grammar rule, precedence encoded in call structure
- Immutable expression nodes (Literal, Grouping, Unary, Binary)
- Panic-mode error recovery with every error reported in order
- Configurable nesting limit instead of running out of stack
- Prefix-notation AST printer for inspecting tree shape

"""

from .ast_nodes import (
    Expression, Literal, Grouping, Unary, Binary, EXPRESSION_TYPES
)
from .parser import Parser, ParserConfig, ParseResult, parse, parse_string, parse_file
from .ast_printer import AstPrinter, print_ast
from .errors import (
    ParseError, UnexpectedTokenError, MissingTerminatorError, RecursionLimitError
)

__all__ = [
    # Core parser
    "Parser", "ParserConfig", "ParseResult",
    "parse", "parse_string", "parse_file",

    # AST nodes
    "Expression", "Literal", "Grouping", "Unary", "Binary", "EXPRESSION_TYPES",

    # Printing
    "AstPrinter", "print_ast",

    # Error handling
    "ParseError", "UnexpectedTokenError", "MissingTerminatorError",
    "RecursionLimitError",
]
