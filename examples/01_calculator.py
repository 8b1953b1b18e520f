"""
Calculator Records Example
==========================

An expression tree stored as dynamic values, demonstrating:
- Record, positional and unit declarations
- Enums with bare-tag and single-entry variants
- Decoding, evaluating and re-encoding through JSON
"""

from structval import (
    Choice,
    DecodeError,
    Record,
    from_json,
    from_value,
    to_json,
    to_value,
    value_of,
)


# ============================================================================
# Declare Records
# ============================================================================

class Expr(Choice):
    """An arithmetic expression."""


class Zero(Expr, layout="unit"):
    """The constant 0."""


class Const(Expr, layout="positional"):
    """A constant integer."""
    value: int


class Var(Expr):
    """A variable reference."""
    name: str


class Add(Expr, layout="positional"):
    """Sum of two subexpressions."""
    left: Expr
    right: Expr


class Mul(Expr, layout="positional"):
    """Product of two subexpressions."""
    left: Expr
    right: Expr


# ============================================================================
# Evaluate
# ============================================================================

def evaluate(expr: Expr, env: dict[str, int]) -> int:
    """Evaluate an expression using pattern matching."""
    match expr:
        case Zero():
            return 0
        case Const(value=v):
            return v
        case Var(name=n):
            if n not in env:
                raise ValueError(f"Undefined variable: {n}")
            return env[n]
        case Add(left=l, right=r):
            return evaluate(l, env) + evaluate(r, env)
        case Mul(left=l, right=r):
            return evaluate(l, env) * evaluate(r, env)
    raise TypeError(f"Unknown expression: {expr!r}")


# ============================================================================
# Example Usage
# ============================================================================

if __name__ == "__main__":
    # (x + 2) * 3, written the way another system would hand it over
    raw = value_of({"Mul": [{"Add": [{"Var": {"name": "x"}}, {"Const": 2}]}, {"Const": 3}]})

    expr = from_value(raw, Expr)
    print(f"Decoded: {expr}")
    print(f"Result with x=5: {evaluate(expr, {'x': 5})}")

    text = to_json(to_value(expr))
    print(f"As JSON:\n{text}")
    assert from_value(from_json(text), Expr) == expr

    try:
        from_value(value_of({"Add": [{"Const": 1}]}), Expr)
    except DecodeError as e:
        print(f"Rejected: {type(e).__name__}: {e}")
