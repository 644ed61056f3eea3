from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import numpy as np

# Deliberate cap on nested groups and ^ links; each level costs ~6 frames.
MAX_DEPTH = 64
DEFAULT_DTYPE = np.float64


class TokenKind(Enum):
    EOF = "eof"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"
    NUMBER = "number"


class RpnOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    NEG = "neg"
    NUM = "num"


BINARY_OPS = frozenset({RpnOp.ADD, RpnOp.SUB, RpnOp.MUL, RpnOp.DIV, RpnOp.POW})


@dataclass(frozen=True)
class Span:
    """A slice of the original source string, resolved lazily."""
    source: str = field(repr=False)
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    span: Span

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return repr(self.span.text)
        if self.kind is TokenKind.EOF:
            return "end of input"
        return repr(self.kind.value)


@dataclass(frozen=True)
class RpnToken:
    op: RpnOp
    span: Optional[Span] = None

    def __post_init__(self):
        if self.op is RpnOp.NUM and self.span is None:
            raise ValueError("number RPN token requires a span")

    @property
    def text(self) -> str:
        if self.op is RpnOp.NUM:
            return self.span.text
        return self.op.value


@dataclass
class Options:
    dtype: Any = DEFAULT_DTYPE
    max_depth: int = MAX_DEPTH
    allow_unary_plus: bool = True


class ExpressionError(RuntimeError):
    pass
