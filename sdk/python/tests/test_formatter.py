import io
import json
from pathlib import Path

import pytest
from rpnexpr.evaluator import evaluate
from rpnexpr.formatter import format_rpn, write_rpn, rpn_digest, stack_depths, is_well_formed
from rpnexpr.parser import to_rpn
from rpnexpr.types import RpnOp, RpnToken, Span

VECTORS_DIR = Path(__file__).resolve().parent.parent.parent.parent / "examples" / "rpn"


def load_vectors(name: str) -> dict:
    path = VECTORS_DIR / name
    if not path.exists():
        pytest.skip(f"vector file not found: {path}")
    return json.loads(path.read_text())


class TestFormatVectors:
    def test_cases(self):
        v = load_vectors("format_vectors.json")
        for tc in v["cases"]:
            rpn = to_rpn(tc["input"])
            assert format_rpn(rpn) == tc["rpn"], f"{tc['name']}: rpn mismatch"
            assert evaluate(rpn) == pytest.approx(tc["value"]), f"{tc['name']}: value mismatch"
            assert is_well_formed(rpn), f"{tc['name']}: not well formed"

    def test_digests(self):
        v = load_vectors("format_vectors.json")
        for tc in v["digests"]:
            assert rpn_digest(to_rpn(tc["input"])) == tc["sha256"], tc["input"]


class TestFormat:
    def test_deterministic(self):
        src = "5+-+1.7^+12-+4*++--(+-+-+3)-+++-3/+-14.2"
        outputs = {format_rpn(to_rpn(src)) for _ in range(5)}
        assert len(outputs) == 1

    def test_all_operators(self):
        assert format_rpn(to_rpn("-1+2-3*4/5^6")) == "1 neg 2 + 3 4 * 5 6 ^ / -"

    def test_leaf_text_verbatim(self):
        assert format_rpn(to_rpn("007.50")) == "007.50"

    def test_write_rpn_to_stream(self):
        buf = io.StringIO()
        write_rpn(buf, to_rpn("2^3^2"))
        assert buf.getvalue() == "2 3 2 ^ ^"

    def test_empty(self):
        assert format_rpn(()) == ""


class TestWellFormed:
    def test_stack_depths(self):
        assert stack_depths(to_rpn("1+-2*3")) == [1, 2, 2, 3, 2, 1]

    def test_sample_leaves_one_value(self):
        rpn = to_rpn("5+-+1.7^+12-+4*++--(+-+-+3)-+++-3/+-14.2")
        assert stack_depths(rpn)[-1] == 1
        assert is_well_formed(rpn)

    def test_underflow(self):
        one = RpnToken(RpnOp.NUM, Span("1", 0, 1))
        assert not is_well_formed((one, RpnToken(RpnOp.ADD)))
        assert not is_well_formed((RpnToken(RpnOp.NEG), one))

    def test_residual(self):
        one = RpnToken(RpnOp.NUM, Span("1", 0, 1))
        assert not is_well_formed((one, one))
        assert not is_well_formed(())
