"""
Test suite for the lexic parser.

Tests cover:
- Literals and the precedence ladder
- Left associativity of binary operators, right nesting of unary ones
- Grouping
- Panic-mode recovery and error reporting
- The nesting depth guard
- Token sequence validation
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lexic.lexer import Token, TokenType
from lexic.parser import (
    Parser, ParserConfig, parse, parse_string, print_ast,
    Literal, Grouping, Unary, Binary,
    ParseError, UnexpectedTokenError, MissingTerminatorError, RecursionLimitError
)


EOF = Token(TokenType.EOF, "", None, 1)


class TestParser(unittest.TestCase):
    """Test cases for well-formed input."""

    def _parse(self, source: str, **config):
        result = parse_string(source, ParserConfig(**config))
        self.assertFalse(result.has_errors(), f"Unexpected errors: {result.errors}")
        return result.expression

    def _printed(self, source: str) -> str:
        return print_ast(self._parse(source))

    def test_literals(self):
        """Operator-free input gives one Literal holding the payload."""
        cases = {
            "123": 123.0,
            "4.5": 4.5,
            '"abc"': "abc",
            "true": True,
            "false": False,
            "nil": None,
        }
        for source, value in cases.items():
            with self.subTest(source=source):
                expr = self._parse(source)
                self.assertIsInstance(expr, Literal)
                self.assertEqual(expr.value, value)
                self.assertIs(type(expr.value), type(value))

    def test_subtraction_is_left_associative(self):
        expr = self._parse("1 - 2 - 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.MINUS)
        self.assertEqual(expr.right, Literal(3.0))
        self.assertIsInstance(expr.left, Binary)
        self.assertEqual(expr.left.left, Literal(1.0))
        self.assertEqual(expr.left.right, Literal(2.0))
        self.assertEqual(print_ast(expr), "(- (- 1 2) 3)")

    def test_every_binary_level_folds_left(self):
        self.assertEqual(self._printed("8 / 4 / 2"), "(/ (/ 8 4) 2)")
        self.assertEqual(self._printed("1 + 2 - 3"), "(- (+ 1 2) 3)")
        self.assertEqual(self._printed("1 < 2 < 3"), "(< (< 1 2) 3)")
        self.assertEqual(self._printed("1 != 2 == 3"), "(== (!= 1 2) 3)")

    def test_unary_nests_to_the_right(self):
        expr = self._parse("!!true")

        self.assertIsInstance(expr, Unary)
        self.assertEqual(expr.operator.lexeme, "!")
        self.assertIsInstance(expr.operand, Unary)
        self.assertEqual(expr.operand.operator.lexeme, "!")
        self.assertEqual(expr.operand.operand, Literal(True))
        self.assertEqual(print_ast(expr), "(! (! true))")

    def test_precedence(self):
        self.assertEqual(self._printed("1 + 2 * 3"), "(+ 1 (* 2 3))")
        self.assertEqual(self._printed("-1 * 2"), "(* (- 1) 2)")
        self.assertEqual(
            self._printed("1 == 2 < 3 + 4 * -5"),
            "(== 1 (< 2 (+ 3 (* 4 (- 5)))))"
        )
        self.assertEqual(self._printed("!true == false"), "(== (! true) false)")

    def test_grouping_overrides_precedence(self):
        expr = self._parse("(1 + 2) * 3")

        self.assertIsInstance(expr.left, Grouping)
        self.assertEqual(print_ast(expr), "(* (group (+ 1 2)) 3)")
        self.assertEqual(self._printed("((1))"), "(group (group 1))")

    def test_optional_trailing_semicolon(self):
        self.assertEqual(self._printed("1 + 2;"), "(+ 1 2)")

    def test_hand_built_tokens(self):
        """The parser only needs Token values, not the scanner."""
        tokens = [
            Token(TokenType.MINUS, "-", None, 1),
            Token(TokenType.NUMBER, "5", 5.0, 1),
            EOF,
        ]
        result = parse(tokens)

        self.assertEqual(print_ast(result.expression), "(- 5)")

    def test_tokens_after_eof_are_ignored(self):
        tokens = [
            Token(TokenType.NUMBER, "1", 1.0, 1),
            EOF,
            Token(TokenType.RIGHT_PAREN, ")", None, 1),
        ]
        result = parse(tokens)

        self.assertFalse(result.has_errors())
        self.assertEqual(result.expression, Literal(1.0))

    def test_same_input_gives_equal_trees(self):
        self.assertEqual(self._parse("(1 + 2) * -3"), self._parse("(1 + 2) * -3"))


class TestParseErrors(unittest.TestCase):
    """Test cases for malformed input and recovery."""

    def _errors(self, source: str, **config):
        result = parse_string(source, ParserConfig(**config))
        self.assertTrue(result.has_errors())
        self.assertIsNone(result.expression)
        return result.errors

    def test_missing_closing_paren(self):
        errors = self._errors("(1 + 2")

        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], MissingTerminatorError)
        self.assertEqual(errors[0].message, "Expect ')' after expression.")
        self.assertEqual(errors[0].token.type, TokenType.EOF)
        self.assertIn("at end", str(errors[0]))

    def test_empty_input(self):
        errors = self._errors("")

        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], UnexpectedTokenError)
        self.assertEqual(errors[0].message, "Expect expression.")

    def test_dangling_operator(self):
        errors = self._errors("1 +")

        self.assertEqual([e.message for e in errors], ["Expect expression."])

    def test_unexpected_token(self):
        errors = self._errors(")")

        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].token.lexeme, ")")
        self.assertEqual(errors[0].diagnostic.code, "P001")
        self.assertIn("at ')'", str(errors[0]))

    def test_trailing_tokens(self):
        errors = self._errors("1 2")

        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].message, "Expect end of expression.")
        self.assertEqual(errors[0].token.lexeme, "2")

    def test_no_cascade_within_a_fragment(self):
        """Tokens after the first error are skipped, not re-reported."""
        errors = self._errors("(1 + 2 3 4")

        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], MissingTerminatorError)
        self.assertEqual(errors[0].token.lexeme, "3")

    def test_recovers_after_semicolon(self):
        """Each ';'-separated fragment reports its own error, in order."""
        errors = self._errors("1 + ; 2 * ;")

        self.assertEqual(len(errors), 2)
        self.assertTrue(all(e.message == "Expect expression." for e in errors))
        self.assertEqual([e.token.lexeme for e in errors], [";", ";"])

    def test_keyword_after_error_is_skipped(self):
        """A stray keyword after a bad token does not add a second error."""
        for source in ("1 + ) print", "1 + ) var"):
            with self.subTest(source=source):
                errors = self._errors(source)

                self.assertEqual(len(errors), 1)
                self.assertEqual(errors[0].token.lexeme, ")")
                self.assertEqual(errors[0].message, "Expect expression.")

    def test_keyword_resumes_only_after_semicolon(self):
        errors = self._errors("1 + ) print ; var")

        self.assertEqual([e.token.lexeme for e in errors], [")", "var"])

    def test_valid_fragment_after_error_is_discarded(self):
        errors = self._errors("* ; 1 + 2")

        self.assertEqual(len(errors), 1)

    def test_error_line_numbers(self):
        errors = self._errors("1 +\n\n)")

        self.assertEqual(errors[0].line, 3)
        self.assertIn("line 3", str(errors[0]))

    def test_all_errors_are_parse_errors(self):
        for error in self._errors("( ; ) ; 1 2"):
            self.assertIsInstance(error, ParseError)

    def test_parse_twice_gives_fresh_errors(self):
        parser = Parser([
            Token(TokenType.LEFT_PAREN, "(", None, 1),
            Token(TokenType.NUMBER, "1", 1.0, 1),
            EOF,
        ])
        first = parser.parse()
        second = parser.parse()

        self.assertEqual(len(first.errors), 1)
        self.assertEqual(len(second.errors), 1)
        self.assertIsNot(first.errors, second.errors)


class TestDepthGuard(unittest.TestCase):
    """Test cases for the nesting limit."""

    def test_within_limit(self):
        result = parse_string("((1))", ParserConfig(max_depth=3))

        self.assertFalse(result.has_errors())

    def test_parentheses_over_limit(self):
        result = parse_string("(((1)))", ParserConfig(max_depth=3))

        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], RecursionLimitError)
        self.assertEqual(
            result.errors[0].message,
            "Expression nesting exceeds maximum depth of 3."
        )

    def test_unary_chain_over_limit(self):
        self.assertFalse(parse_string("!!1", ParserConfig(max_depth=3)).has_errors())

        result = parse_string("!!!1", ParserConfig(max_depth=3))
        self.assertIsInstance(result.errors[0], RecursionLimitError)

    def test_pathological_input_fails_cleanly(self):
        """Deep nesting yields one error instead of exhausting the stack."""
        source = "(" * 5000 + "1" + ")" * 5000
        result = parse_string(source)

        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], RecursionLimitError)

    def test_large_max_depth_fails_cleanly(self):
        """A limit deeper than the interpreter stack still ends in a ParseError."""
        source = "(" * 2999 + "1" + ")" * 2999
        result = parse_string(source, ParserConfig(max_depth=5000))

        self.assertIsNone(result.expression)
        self.assertEqual(len(result.errors), 1)
        self.assertIsInstance(result.errors[0], RecursionLimitError)
        self.assertEqual(
            result.errors[0].message,
            "Expression nesting exceeds maximum depth of 5000."
        )

    def test_configured_depths_never_escape(self):
        for max_depth in (100, 150, 200, 300):
            source = "(" * (max_depth - 1) + "1" + ")" * (max_depth - 1)
            with self.subTest(max_depth=max_depth):
                result = parse_string(source, ParserConfig(max_depth=max_depth))

                self.assertLessEqual(len(result.errors), 1)
                for error in result.errors:
                    self.assertIsInstance(error, RecursionLimitError)

    def test_parse_continues_after_stack_exhaustion(self):
        deep = "(" * 3000 + "1" + ")" * 3000
        result = parse_string(deep + " ; (1", ParserConfig(max_depth=10000))

        self.assertEqual(len(result.errors), 2)
        self.assertIsInstance(result.errors[0], RecursionLimitError)
        self.assertIsInstance(result.errors[1], MissingTerminatorError)

    def test_depth_resets_between_fragments(self):
        result = parse_string("((((1)))) ; (1", ParserConfig(max_depth=3))

        self.assertEqual(len(result.errors), 2)
        self.assertIsInstance(result.errors[0], RecursionLimitError)
        self.assertIsInstance(result.errors[1], MissingTerminatorError)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            ParserConfig(max_depth=0)


class TestTokenValidation(unittest.TestCase):

    def test_empty_token_list(self):
        with self.assertRaises(ValueError):
            Parser([])

    def test_missing_eof(self):
        with self.assertRaises(ValueError):
            Parser([Token(TokenType.NUMBER, "1", 1.0, 1)])


if __name__ == '__main__':
    unittest.main()
