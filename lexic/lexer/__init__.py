"""
lexic Lexer Package

Reference scanner producing the token list consumed by the parser.

Key Features:
- Typed tokens carrying lexeme, literal payload and source line
- Numbers, strings, identifiers and reserved keywords
- Error collection so one pass reports every bad character

"""

from .tokens import Token, TokenType, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
