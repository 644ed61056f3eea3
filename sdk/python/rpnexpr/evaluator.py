"""Stack-machine evaluator for RPN token sequences."""

import logging
from typing import Any, Sequence

import numpy as np

from .types import DEFAULT_DTYPE, ExpressionError, RpnOp, RpnToken, Span

logger = logging.getLogger(__name__)

_BINARY = {
    RpnOp.ADD: np.add,
    RpnOp.SUB: np.subtract,
    RpnOp.MUL: np.multiply,
    RpnOp.DIV: np.divide,
    RpnOp.POW: np.power,
}


class MalformedNumber(ExpressionError, ValueError):
    def __init__(self, span: Span):
        super().__init__(f"malformed number {span.text!r} at position {span.start}")
        self.text = span.text
        self.position = span.start


class MalformedRpn(ExpressionError):
    pass


def evaluate(rpn: Sequence[RpnToken], dtype: Any = DEFAULT_DTYPE) -> np.floating:
    """Evaluate an RPN sequence to a single scalar of the given float dtype.

    Number leaves are converted here, so a literal like "1.2.3" parses fine
    and only fails once evaluated. Floating-point exceptions follow IEEE 754:
    1/0 is inf, (-8)^(1/3) is nan, and neither raises.
    """
    scalar = _scalar_type(dtype)
    stack: list[np.floating] = []
    with np.errstate(all="ignore"):
        for tok in rpn:
            if tok.op is RpnOp.NUM:
                stack.append(_literal(tok.span, scalar))
            elif tok.op is RpnOp.NEG:
                if not stack:
                    raise MalformedRpn("stack underflow at 'neg'")
                stack.append(np.negative(stack.pop()))
            else:
                if len(stack) < 2:
                    raise MalformedRpn(f"stack underflow at {tok.op.value!r}")
                rhs = stack.pop()
                lhs = stack.pop()
                stack.append(_BINARY[tok.op](lhs, rhs))

    if len(stack) != 1:
        raise MalformedRpn(f"expected 1 value after evaluation, found {len(stack)}")
    logger.debug(f"evaluated {len(rpn)} RPN tokens as {scalar.__name__}: {stack[0]}")
    return stack[0]


def _scalar_type(dtype: Any) -> type:
    scalar = np.dtype(dtype).type
    if not issubclass(scalar, np.floating):
        raise TypeError(f"dtype must be a floating type, got {np.dtype(dtype).name}")
    return scalar


def _literal(span: Span, scalar: type) -> np.floating:
    try:
        return scalar(span.text)
    except (TypeError, ValueError):
        raise MalformedNumber(span) from None
