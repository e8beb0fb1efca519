"""
Error handling for the lexic scanner.

Provides the shared Diagnostic record used by both the scanner and the
parser, plus the scanner's own error type and helpers.
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """A single reportable problem (error, warning, info)."""
    message: str
    line: int
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    where: str = ""
    filename: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.filename:
            result += f"  --> {self.filename}:{self.line}{self.where}\n"
        else:
            result += f"  --> line {self.line}{self.where}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the scanner meets input it cannot tokenize.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        line: int,
        code: Optional[str] = None,
        filename: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            severity="error",
            code=code,
            filename=filename,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


def create_unexpected_character_error(char: str, line: int,
                                      filename: Optional[str] = None) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message="Unexpected character.",
        line=line,
        code="L001",
        filename=filename,
        help_text=help_text,
    )


def create_unterminated_string_error(line: int, filename: Optional[str] = None) -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    return LexerError(
        message="Unterminated string.",
        line=line,
        code="L002",
        filename=filename,
        help_text="String literals must be closed with a matching '\"'.",
        suggestions=["Add a closing '\"'"]
    )
