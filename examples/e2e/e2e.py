"""
rpnexpr End-to-End Example

Demonstrates the full pipeline:
1. Tokenize an expression
2. Parse it to RPN
3. Evaluate the RPN (float64 and float32)
4. Show each error kind

Run: pip install -e . && python examples/e2e/e2e.py
"""

import numpy as np

from rpnexpr import (
    tokenize, parse, evaluate, format_rpn, rpn_digest, calculate,
    InvalidToken, UnexpectedToken, MalformedNumber,
)

print("=== rpnexpr E2E Demo ===\n")

# 1. Tokenize
source = "5+-+1.7^+12-+4*++--(+-+-+3)-+++-3/+-14.2"
tokens = tokenize(source)
print(f"1. Input: {source}")
print(f"   Tokens: {len(tokens)} (last is {tokens[-1].kind.name})\n")

# 2. Parse
rpn = parse(tokens)
print(f"2. RPN: {format_rpn(rpn)}")
print(f"   Digest: {rpn_digest(rpn)[:16]}...\n")

# 3. Evaluate
print(f"3. Output: {evaluate(rpn)}")
print(f"   Output (float32): {evaluate(rpn, np.float32)}\n")

# 4. Grammar showcase
print("4. Grammar")
for src in ["2+3*4", "2^3^2", "2(3)", "---5", "1/0"]:
    result = calculate(src)
    print(f"   {src:<8} -> {result['rpn']:<12} = {result['value']}")
print()

# 5. Errors
print("5. Errors")
for src, kind in [("1+$2", InvalidToken), ("(1+2", UnexpectedToken), ("1.2.3", MalformedNumber)]:
    try:
        calculate(src)
    except kind as e:
        print(f"   {src:<8} -> {type(e).__name__}: {e}")

print("\n=== Done ===")
