"""
Command line front end: scan, parse and print an expression.

Examples:
    lexic "1 + 2 * 3"            # prints (+ 1 (* 2 3))
    lexic -f expr.lx --tokens    # dump tokens, then the tree
    lexic                        # interactive prompt
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .version import __version__
from .lexer import Lexer
from .parser import Parser, ParserConfig, print_ast

# Exit codes follow the BSD sysexits convention
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

logger = logging.getLogger(__name__)


def run(source: str, config: ParserConfig, show_tokens: bool = False,
        out: Optional[TextIO] = None, err: Optional[TextIO] = None,
        filename: Optional[str] = None) -> int:
    """Scan, parse and print one source text. Returns an exit code."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if show_tokens:
        for token in tokens:
            print(token, file=out)

    if lexer.has_errors():
        for error in lexer.errors:
            print(error, file=err, end="")
        return EX_DATAERR

    result = Parser(tokens, config).parse()
    if result.has_errors():
        for error in result.errors:
            print(error, file=err, end="")
        return EX_DATAERR

    print(print_ast(result.expression), file=out)
    return EX_OK


def run_prompt(config: ParserConfig, show_tokens: bool = False,
               stdin: Optional[TextIO] = None, out: Optional[TextIO] = None,
               err: Optional[TextIO] = None) -> int:
    """Read expressions line by line until end of input."""
    stdin = sys.stdin if stdin is None else stdin
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    while True:
        print("> ", end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            print(file=out)
            return EX_OK
        if line.strip():
            # Errors on one line never end the session
            run(line, config, show_tokens, out, err)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexic",
        description="Parse an expression and print its syntax tree in prefix form",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    lexic "1 + 2 * 3"            # (+ 1 (* 2 3))
    lexic "(1 + 2) * 3"          # (* (group (+ 1 2)) 3)
    lexic -f expr.lx --tokens    # Show tokens before the tree
    lexic                        # Interactive prompt
        """
    )

    parser.add_argument('expression', nargs='?',
                        help='Expression source text')
    parser.add_argument('-f', '--file',
                        help='Read the expression from a file')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the scanned tokens')
    parser.add_argument('--max-depth', type=int, default=ParserConfig.max_depth,
                        help='Maximum nesting depth (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the lexic command"""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.expression is not None and args.file:
        print("lexic: give an expression or --file, not both", file=sys.stderr)
        return EX_USAGE

    try:
        config = ParserConfig(max_depth=args.max_depth)
    except ValueError as e:
        print(f"lexic: {e}", file=sys.stderr)
        return EX_USAGE

    if args.file:
        try:
            with open(args.file, 'r', encoding='utf-8') as f:
                source = f.read()
        except OSError as e:
            print(f"lexic: cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return EX_NOINPUT
        logger.debug("read %d characters from %s", len(source), args.file)
        return run(source, config, args.tokens, filename=args.file)

    if args.expression is not None:
        return run(args.expression, config, args.tokens)

    return run_prompt(config, args.tokens)


if __name__ == "__main__":
    sys.exit(main())
