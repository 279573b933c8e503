# core/numeric.py
from __future__ import annotations
from contextlib import contextmanager
from decimal import Context, Decimal, ROUND_HALF_EVEN, localcontext
from functools import wraps
from typing import Iterator, Union

# 40 significant digits is ~133 bits of significand.
PRECISION = 40
CONTEXT = Context(prec=PRECISION, rounding=ROUND_HALF_EVEN)

# Absolute tolerance when comparing against recorded best-known distances.
EPSILON = Decimal("0.001")

Number = Union[int, str, Decimal]


def fl(value: Number) -> Decimal:
    return CONTEXT.create_decimal(value)


def dist(ax: int, ay: int, bx: int, by: int) -> Decimal:
    dx = ax - bx
    dy = ay - by
    return CONTEXT.sqrt(Decimal(dx * dx + dy * dy))


@contextmanager
def working_precision() -> Iterator[Context]:
    """Run arithmetic on Decimals under the shared working context.

    decimal contexts are thread-local, so concurrent verifications never
    see each other's context.
    """
    with localcontext(CONTEXT) as ctx:
        yield ctx


def precise(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        with working_precision():
            return fn(*args, **kwargs)

    return wrapper


def to_str(value: Number) -> str:
    """Fixed notation with PRECISION significant digits (68 -> 68.000...0)."""
    d = fl(value)
    if d.is_zero():
        return "0." + "0" * (PRECISION - 1)
    places = max(PRECISION - d.adjusted() - 1, 0)
    return f"{d:.{places}f}"
