"""CLI: python -m rpnexpr [-v] <expression>"""

import logging
import sys
from typing import Optional

from .calculator import calculate
from .types import ExpressionError

USAGE = "Usage: python -m rpnexpr [-v] <expression>"


def format_value(value) -> str:
    """Shortest text for value, without a trailing ".0" on whole numbers."""
    text = str(value)
    return text[:-2] if text.endswith(".0") else text


def main(argv: Optional[list[str]] = None):
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = bool(args) and args[0] in ("-v", "--verbose")
    if verbose:
        args = args[1:]

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    src = " ".join(args)
    try:
        result = calculate(src)
    except ExpressionError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    print(f"Input: {src}")
    print(f"RPN: {result['rpn']}")
    print(f"Output: {format_value(result['value'])}")


if __name__ == "__main__":
    main()
