import argparse
import logging
import sys

from .expression import format_digits
from .integer_expression import parse
from .parser import ParseError


def main(argv=None):
    arg_parser = argparse.ArgumentParser(
        prog="intexpr", description="Parse and evaluate a sum of non-negative integers.")
    arg_parser.add_argument("expression", nargs="?",
                            help="expression to evaluate, e.g. '54+(2+ 89)'; prompts if omitted")
    arg_parser.add_argument("-v", "--verbose", action="store_true",
                            help="log the parse tree and AST")
    args = arg_parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    expr = args.expression
    if expr is None:
        expr = input("Enter an arithmetic expression: ")
    print(expr)
    try:
        expression = parse(expr)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"value {format_digits(expression.value())}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
