"""
lexic Lexer - turns source text into the token list the parser consumes.

Deliberately small: numbers, strings, identifiers/keywords and the
operator set in tokens.OPERATORS. Bad input is recorded and scanning
carries on so one run reports every lexical problem.
"""

from typing import List, Optional

from .tokens import Token, TokenType, KEYWORDS, OPERATORS
from .errors import (
    LexerError, create_unexpected_character_error,
    create_unterminated_string_error
)


class Lexer:
    """
    lexic lexical analyzer.

    Converts source code text into a list of tokens terminated by EOF,
    collecting errors instead of stopping at the first one.
    """

    def __init__(self, source: str, filename: Optional[str] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Source file name shown in error locations, if any
        """
        self.source = source
        self.filename = filename
        self.start = 0
        self.pos = 0
        self.line = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including EOF token
        """
        self.start = 0
        self.pos = 0
        self.line = 1
        self.tokens = []
        self.errors = []

        while not self._is_at_end():
            try:
                self._skip_whitespace_and_comments()

                if self._is_at_end():
                    break

                self.start = self.pos
                token = self._next_token()
                if token:
                    self.tokens.append(token)

            except LexerError as e:
                self.errors.append(e)

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))

        return self.tokens

    def _next_token(self) -> Token:
        """Scan one token starting at the current position."""
        start_line = self.line
        current_char = self._advance()

        if self._is_digit(current_char):
            return self._tokenize_number(start_line)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier_or_keyword(start_line)

        if current_char == '"':
            return self._tokenize_string(start_line)

        # Two-character operators win over their one-character prefixes
        two_char = current_char + self._peek()
        if two_char in OPERATORS:
            self._advance()
            return Token(OPERATORS[two_char], two_char, None, start_line)

        if current_char in OPERATORS:
            return Token(OPERATORS[current_char], current_char, None, start_line)

        raise create_unexpected_character_error(current_char, start_line, self.filename)

    def _tokenize_number(self, line: int) -> Token:
        """Scan an integer or decimal number; the payload is always a float."""
        while self._is_digit(self._peek()):
            self._advance()

        # A fractional part needs at least one digit after the dot
        if self._peek() == '.' and self._is_digit(self._peek(1)):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        lexeme = self.source[self.start:self.pos]
        return Token(TokenType.NUMBER, lexeme, float(lexeme), line)

    def _tokenize_identifier_or_keyword(self, line: int) -> Token:
        """Scan an identifier, promoting reserved words to keyword tokens."""
        while self._is_identifier_continue(self._peek()):
            self._advance()

        lexeme = self.source[self.start:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        return Token(token_type, lexeme, None, line)

    def _tokenize_string(self, line: int) -> Token:
        """Scan a double-quoted string; strings may span lines."""
        while self._peek() != '"' and not self._is_at_end():
            self._advance()

        if self._is_at_end():
            raise create_unterminated_string_error(line, self.filename)

        self._advance()  # Closing quote

        lexeme = self.source[self.start:self.pos]
        return Token(TokenType.STRING, lexeme, lexeme[1:-1], line)

    def _is_digit(self, char: str) -> bool:
        return "0" <= char <= "9"

    def _is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        return char.isalnum() or char == '_'

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and // line comments."""
        while not self._is_at_end():
            char = self.source[self.pos]

            if char.isspace():
                self._advance()
                continue

            if char == '/' and self._peek(1) == '/':
                while not self._is_at_end() and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _advance(self) -> str:
        """Consume one character, updating the line counter."""
        char = self.source[self.pos]
        if char == '\n':
            self.line += 1
        self.pos += 1
        return char

    def _peek(self, offset: int = 0) -> str:
        """Peek at a character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: Optional[str] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
