"""Text rendering and structural checks for RPN sequences.

Rendering is deterministic: operators print as + - * / ^, negation as
"neg", and number leaves as their original source text.
"""

import hashlib
import io
from typing import Sequence, TextIO

from .types import BINARY_OPS, RpnOp, RpnToken


def write_rpn(stream: TextIO, rpn: Sequence[RpnToken]) -> None:
    """Write the space-separated rendering of rpn to stream."""
    for i, tok in enumerate(rpn):
        if i:
            stream.write(" ")
        stream.write(tok.text)


def format_rpn(rpn: Sequence[RpnToken]) -> str:
    buf = io.StringIO()
    write_rpn(buf, rpn)
    return buf.getvalue()


def rpn_digest(rpn: Sequence[RpnToken]) -> str:
    """SHA-256 of the formatted RPN as hex string."""
    return hashlib.sha256(format_rpn(rpn).encode("utf-8")).hexdigest()


def stack_depths(rpn: Sequence[RpnToken]) -> list[int]:
    """Stack size after each token, without computing any values.

    A value below 1 means the token before it underflowed the stack.
    """
    depths: list[int] = []
    depth = 0
    for tok in rpn:
        if tok.op is RpnOp.NUM:
            depth += 1
        elif tok.op in BINARY_OPS:
            depth -= 1
        depths.append(depth)
    return depths


def is_well_formed(rpn: Sequence[RpnToken]) -> bool:
    depths = stack_depths(rpn)
    return bool(depths) and min(depths) >= 1 and depths[-1] == 1
