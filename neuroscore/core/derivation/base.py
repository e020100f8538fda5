"""
Derivation Engine: Base Types

Input coercion and the data contracts shared by every protocol deriver.

Raw inputs come straight from data entry, so they are read permissively:
a missing, empty or non-finite field is treated as 0. Division is the one
place where that is not enough, since a zero denominator has no clinical
meaning; ratios with a zero denominator are reported as undefined (None)
without affecting the sibling metrics.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from neuroscore.core.norms import StandardScoreLookup
from neuroscore.utils import get_logger, is_finite_number

logger = get_logger(__name__)

Number = Union[int, float]

# field name → number, as produced by data entry
RawScoreSet = Mapping[str, Any]

# subtest id → derived value (None = undefined for this metric)
CalculatedScoreSet = Mapping[str, Optional[Number]]


@dataclass(frozen=True)
class DerivationContext:
    """Collaborator inputs some derivations need besides the raw scores."""
    patient_age: Optional[int] = None
    standard_score_lookup: Optional[StandardScoreLookup] = None


Deriver = Callable[[RawScoreSet, DerivationContext], Dict[str, Optional[Number]]]


def coerce_number(value: Any) -> Number:
    """
    Coerce a single raw value to a number, 0 when it cannot be read.

    Integral values come back as ``int`` so counts stay counts.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            logger.debug(f"Derivation: non-numeric input {value!r} read as 0")
            return 0
    if not is_finite_number(value):
        logger.debug(f"Derivation: non-finite {type(value).__name__} input read as 0")
        return 0
    if isinstance(value, int):
        return value
    value = float(value)
    return int(value) if value.is_integer() else value


def read_number(raw: RawScoreSet, name: str) -> Number:
    """Read ``raw[name]`` as a number; missing fields are 0."""
    return coerce_number(raw.get(name))


def safe_ratio(numerator: Number, denominator: Number) -> Optional[float]:
    """``numerator / denominator``, or None when the denominator is 0."""
    if denominator == 0:
        return None
    result = numerator / denominator
    return result if math.isfinite(result) else None


def freeze_scores(scores: Dict[str, Optional[Number]]) -> CalculatedScoreSet:
    """Read-only view handed back to callers; derived scores never change."""
    return MappingProxyType(dict(scores))
