"""
Prefix-notation printer for expression trees.

Renders every node as a parenthesized list with the operator (or "group")
first, e.g. ``(* (group (+ 1 2)) 3)``. Meant for checking tree shape, not
for reproducing source text.
"""

from .ast_nodes import Expression, Literal, Grouping, Unary, Binary


class AstPrinter:
    """Walks an expression tree depth-first and renders it as text."""

    def print(self, expr: Expression) -> str:
        """Render ``expr`` and all of its children."""
        if isinstance(expr, Literal):
            return self.format_literal(expr.value)
        if isinstance(expr, Unary):
            return self._parenthesize(expr.operator.lexeme, expr.operand)
        if isinstance(expr, Binary):
            return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)
        if isinstance(expr, Grouping):
            return self._parenthesize("group", expr.inner)

        raise TypeError(f"Cannot print {type(expr).__name__}: not an expression node")

    @staticmethod
    def format_literal(value) -> str:
        """Canonical text of a literal payload."""
        if value is None:
            return "nil"
        # bool before numbers: True is an int in Python
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))
            return str(value)
        return str(value)

    def _parenthesize(self, name: str, *exprs: Expression) -> str:
        parts = [name]
        parts.extend(self.print(expr) for expr in exprs)
        return "(" + " ".join(parts) + ")"


def print_ast(expr: Expression) -> str:
    """Convenience wrapper around AstPrinter().print()."""
    return AstPrinter().print(expr)
