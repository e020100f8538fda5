"""
Number helpers shared by the derivation, classification and report layers.

Rounding is half away from zero on the decimal representation of the value
(``0.125 → 0.13``, ``-0.125 → -0.13``), which is what clinicians expect when
they check a result by hand. Python's built-in ``round`` rounds half to even
and is not used for presentation.
"""
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any


def is_finite_number(value: Any) -> bool:
    """True for real, finite, non-boolean numbers."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def round_half_away(value: Real, places: int) -> Decimal:
    """Round ``value`` to ``places`` decimals, ties away from zero."""
    if isinstance(value, int):
        dec = Decimal(value)
    else:
        dec = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-places)
    result = dec.quantize(quantum, rounding=ROUND_HALF_UP)
    if result == 0:
        result = abs(result)    # no "-0.0"
    return result


def format_fixed(value: Real, places: int) -> str:
    """Fixed-point text with exactly ``places`` decimals."""
    return format(round_half_away(value, places), "f")
