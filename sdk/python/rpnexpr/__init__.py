from .parser import tokenize, parse, to_rpn, InvalidToken, UnexpectedToken, DepthExceeded
from .evaluator import evaluate, MalformedNumber, MalformedRpn
from .formatter import format_rpn, write_rpn, rpn_digest, is_well_formed
from .calculator import calculate
from .types import ExpressionError, Options, RpnOp, RpnToken, Token, TokenKind

__all__ = [
    "tokenize", "parse", "to_rpn", "evaluate", "format_rpn", "write_rpn", "rpn_digest",
    "is_well_formed", "calculate", "Options", "Token", "TokenKind", "RpnToken", "RpnOp",
    "ExpressionError", "InvalidToken", "UnexpectedToken", "DepthExceeded",
    "MalformedNumber", "MalformedRpn",
]
