"""
lexic - expression front end

Scans, parses and prints a small expression language: arithmetic,
comparison, equality, logical/numeric negation and parenthesized grouping.

Architecture:
    lexic/
    ├── lexer/           # Tokens and the reference scanner
    ├── parser/          # AST nodes, recursive descent parser, AST printer
    └── cli.py           # Command line front end

License: MIT
"""

from .version import __version__
from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParserConfig, ParseResult, AstPrinter, print_ast

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParserConfig",
    "ParseResult",
    "AstPrinter",
    "print_ast",

    # Version info
    "__version__",
]
