"""Top-level calculate API: text in, value and RPN out."""

from typing import Any

from .evaluator import evaluate
from .formatter import format_rpn
from .parser import to_rpn
from .types import DEFAULT_DTYPE, MAX_DEPTH, Options


def calculate(src: str, options: Any = None) -> dict[str, Any]:
    """Tokenize, parse and evaluate an arithmetic expression.

    Args:
        src: Expression text, e.g. "2(3+4)^2"
        options: Either an Options dataclass or a dict with keys:
                 dtype, max_depth, allow_unary_plus

    Returns:
        {"value": numpy scalar, "rpn": str}

    Raises whatever the failing stage raises (InvalidToken, UnexpectedToken,
    DepthExceeded, MalformedNumber).
    """
    opts = _coerce_options(options)
    rpn = to_rpn(src, opts)
    return {"value": evaluate(rpn, opts.dtype), "rpn": format_rpn(rpn)}


def _coerce_options(options: Any) -> Options:
    if options is None:
        return Options()
    if isinstance(options, dict):
        return Options(
            dtype=options.get("dtype", DEFAULT_DTYPE),
            max_depth=options.get("max_depth", MAX_DEPTH),
            allow_unary_plus=options.get("allow_unary_plus", True),
        )
    return options
