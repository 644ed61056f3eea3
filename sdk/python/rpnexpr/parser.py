"""Tokenizer and recursive-descent parser producing RPN token sequences.

Grammar (one function per rule, each returns a flat postfix fragment):

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor | factor)*
    factor     := negation ('^' factor)?
    negation   := ('-' | '+')* number
    number     := '(' expression ')' | NUMBER
"""

import logging
from typing import Callable, Optional, Sequence

from .types import ExpressionError, Options, RpnOp, RpnToken, Span, Token, TokenKind

logger = logging.getLogger(__name__)

SENTINEL = "\0"

_WHITESPACE = frozenset(" \t\r\n")
_NUMBER_CHARS = frozenset("0123456789.")
_SINGLE_CHAR = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_ADDITIVE = {TokenKind.PLUS: RpnOp.ADD, TokenKind.MINUS: RpnOp.SUB}
_MULTIPLICATIVE = {TokenKind.STAR: RpnOp.MUL, TokenKind.SLASH: RpnOp.DIV}
_IMPLIED_MUL = (TokenKind.NUMBER, TokenKind.LPAREN)


class InvalidToken(ExpressionError, ValueError):
    def __init__(self, char: str, position: int):
        super().__init__(f"invalid character {char!r} at position {position}")
        self.char = char
        self.position = position


class UnexpectedToken(SyntaxError, ExpressionError):
    def __init__(self, token: Token, expected: str):
        super().__init__(f"unexpected {token} at position {token.span.start}: {expected}")
        self.token = token
        self.position = token.span.start


class DepthExceeded(ExpressionError):
    pass


def tokenize(src: str) -> tuple[Token, ...]:
    """Split src into tokens, ending with a single EOF token.

    Input stops at the end of the string or at the first NUL sentinel.
    Numeric literals are any run of digits and dots; they are not
    validated here.
    """
    tokens: list[Token] = []
    pos = 0
    end = len(src)
    while pos < end:
        ch = src[pos]
        if ch == SENTINEL:
            break
        if ch in _WHITESPACE:
            pos += 1
            continue
        kind = _SINGLE_CHAR.get(ch)
        if kind is not None:
            tokens.append(Token(kind, Span(src, pos, pos + 1)))
            pos += 1
            continue
        if ch in _NUMBER_CHARS:
            start = pos
            while pos < end and src[pos] in _NUMBER_CHARS:
                pos += 1
            tokens.append(Token(TokenKind.NUMBER, Span(src, start, pos)))
            continue
        raise InvalidToken(ch, pos)
    tokens.append(Token(TokenKind.EOF, Span(src, pos, pos)))
    return tuple(tokens)


class _ParseState:
    __slots__ = ("tokens", "pos", "depth", "max_depth", "allow_unary_plus")

    def __init__(self, tokens: Sequence[Token], options: Options):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = options.max_depth
        self.allow_unary_plus = options.allow_unary_plus

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok


def parse(tokens: Sequence[Token], options: Optional[Options] = None) -> tuple[RpnToken, ...]:
    """Parse a token sequence (as returned by tokenize) into RPN order.

    Each parenthesis group and each ^ link is one level of nesting. More
    than options.max_depth levels (MAX_DEPTH by default) raises
    DepthExceeded, as does nesting deeper than the interpreter stack holds.
    """
    if not tokens or tokens[-1].kind is not TokenKind.EOF:
        raise ValueError("token sequence must end with an EOF token")
    st = _ParseState(tokens, options or Options())
    try:
        rpn = _expression(st)
    except RecursionError:
        # max_depth set above what the interpreter stack can hold
        raise DepthExceeded("nesting exceeds the interpreter recursion limit") from None
    tok = st.peek()
    if tok.kind is not TokenKind.EOF:
        raise UnexpectedToken(tok, "expected end of input")
    logger.debug(f"parsed {len(tokens)} tokens into {len(rpn)} RPN tokens")
    return tuple(rpn)


def to_rpn(src: str, options: Optional[Options] = None) -> tuple[RpnToken, ...]:
    return parse(tokenize(src), options)


def _descend(st: _ParseState, rule: Callable[[_ParseState], list[RpnToken]]) -> list[RpnToken]:
    st.depth += 1
    if st.depth > st.max_depth:
        st.depth -= 1
        raise DepthExceeded(f"max nesting depth of {st.max_depth} exceeded")
    try:
        return rule(st)
    finally:
        st.depth -= 1


def _expression(st: _ParseState) -> list[RpnToken]:
    out = _term(st)
    while st.peek().kind in _ADDITIVE:
        op = _ADDITIVE[st.advance().kind]
        out.extend(_term(st))
        out.append(RpnToken(op))
    return out


def _term(st: _ParseState) -> list[RpnToken]:
    out = _factor(st)
    while True:
        kind = st.peek().kind
        if kind in _MULTIPLICATIVE:
            st.advance()
            out.extend(_factor(st))
            out.append(RpnToken(_MULTIPLICATIVE[kind]))
        elif kind in _IMPLIED_MUL:
            # 2(3), (1)(2), 3(4)5
            out.extend(_factor(st))
            out.append(RpnToken(RpnOp.MUL))
        else:
            return out


def _factor(st: _ParseState) -> list[RpnToken]:
    out = _negation(st)
    if st.peek().kind is TokenKind.CARET:
        st.advance()
        # Right operand is a whole factor, so 2^3^2 is 2^(3^2)
        out.extend(_descend(st, _factor))
        out.append(RpnToken(RpnOp.POW))
    return out


def _negation(st: _ParseState) -> list[RpnToken]:
    negations = 0
    while True:
        kind = st.peek().kind
        if kind is TokenKind.MINUS:
            negations += 1
        elif kind is not TokenKind.PLUS or not st.allow_unary_plus:
            break
        st.advance()
    out = _number(st)
    if negations % 2:
        out.append(RpnToken(RpnOp.NEG))
    return out


def _number(st: _ParseState) -> list[RpnToken]:
    tok = st.peek()
    if tok.kind is TokenKind.NUMBER:
        st.advance()
        return [RpnToken(RpnOp.NUM, tok.span)]
    if tok.kind is TokenKind.LPAREN:
        st.advance()
        out = _descend(st, _expression)
        closing = st.peek()
        if closing.kind is not TokenKind.RPAREN:
            raise UnexpectedToken(closing, "expected ')'")
        st.advance()
        return out
    raise UnexpectedToken(tok, "expected a number or '('")
