"""
Classification Engine: Base Types

Label vocabularies and the percentile value type.

The percentile family ("Média …") and the Z-score family ("Médio …") are
separate clinical conventions with their own wording. They are kept as two
enums so one can never be printed where the other belongs.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Optional, Union

from neuroscore.utils import is_finite_number
from neuroscore.utils.exceptions import InvalidPercentileError


class PercentileLabel(str, Enum):
    INFERIOR       = "Inferior"
    MEDIA_INFERIOR = "Média Inferior"
    MEDIA          = "Média"
    MEDIA_SUPERIOR = "Média Superior"
    SUPERIOR       = "Superior"


class ZScoreLabel(str, Enum):
    INFERIOR       = "Inferior"
    MEDIO_INFERIOR = "Médio Inferior"
    MEDIO          = "Médio"
    MEDIO_SUPERIOR = "Médio Superior"
    SUPERIOR       = "Superior"


class PercentileRange(str, Enum):
    """Pre-bucketed percentile ranges as printed in the test manuals."""
    BELOW_5  = "<5"
    P5_25    = "5-25"
    P25_50   = "25-50"
    P50_75   = "50-75"
    P75_95   = "75-95"
    ABOVE_95 = ">95"


@dataclass(frozen=True)
class ExactPercentile:
    """A percentile rank read as a number (5, 25, 50, 75, 95 in the manuals)."""
    value: Real

    def display(self) -> str:
        return f"{self.value:g}"


@dataclass(frozen=True)
class RangePercentile:
    """A percentile known only as one of the six manual ranges."""
    token: PercentileRange

    def display(self) -> str:
        return self.token.value


Percentile = Union[ExactPercentile, RangePercentile]


def _normalise_token(text: str) -> str:
    return text.replace(" ", "").replace("–", "-")


_TOKENS = {token.value: token for token in PercentileRange}


def parse_percentile(value: Any) -> Optional[Percentile]:
    """
    Read a caller-supplied percentile.

    Accepts Percentile values, PercentileRange members, finite numbers,
    numeric strings (``"75"``, ``"P75"``, ``"12,5"``) and the six range
    tokens (``"<5"``, ``"5-25"``, …). Returns None for anything else.
    """
    if isinstance(value, (ExactPercentile, RangePercentile)):
        return value
    if isinstance(value, PercentileRange):
        return RangePercentile(value)
    if isinstance(value, str):
        text = _normalise_token(value.strip())
        if text in _TOKENS:
            return RangePercentile(_TOKENS[text])
        if text[:1] in ("P", "p"):
            text = text[1:]
        try:
            number = float(text.replace(",", "."))
        except ValueError:
            return None
        value = int(number) if number.is_integer() else number
    if is_finite_number(value):
        return ExactPercentile(value)
    return None


def parse_percentile_strict(value: Any) -> Percentile:
    """parse_percentile, raising InvalidPercentileError instead of returning None."""
    parsed = parse_percentile(value)
    if parsed is None:
        raise InvalidPercentileError(f"Percentil inválido: {value!r}", value=value)
    return parsed
