"""
Normative Collaborators

The engine owns no normative tables. Callers that hold them pass lookups in:

    StandardScoreLookup   (raw_count, age)          → standard score or None
    PercentileLookup      (subtest, score, age)     → percentile or None

Lookups must be synchronous and side-effect free; anything I/O-bound is
resolved by the caller before scoring.

``lookup_benchmark_percentile`` is the row search the test manuals use for
benchmark tables (a handful of percentile/score pairs per age group). It is
provided so callers only need to supply the rows.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from neuroscore.utils.exceptions import NormativeLookupError

Number = Union[int, float]

StandardScoreLookup = Callable[[Number, int], Optional[Number]]
PercentileLookup = Callable[[str, Number, Optional[int]], Any]

# Returned when a score is beyond the first/last benchmark
BELOW_TABLE_PERCENTILE = 1
ABOVE_TABLE_PERCENTILE = 99


@dataclass(frozen=True)
class NormReference:
    """Reference mean and standard deviation for one subtest."""
    mean: float
    sd: float


@dataclass(frozen=True)
class PercentileBenchmark:
    """Minimum (or, for timed measures, maximum) score reaching a percentile."""
    percentile: int
    score: Number


def lookup_benchmark_percentile(
    benchmarks: Sequence[PercentileBenchmark],
    score: Number,
    lower_is_better: bool = False,
) -> int:
    """
    Find the percentile a score reaches in a benchmark table.

    Higher-is-better measures (word counts): below the lowest benchmark → 1,
    at or above the highest → 99, otherwise the highest percentile whose
    benchmark was reached.

    Lower-is-better measures (elapsed times): at or below the best benchmark
    → 99, above the worst → 1, otherwise the highest percentile whose
    benchmark time was not exceeded.

    Raises:
        NormativeLookupError: if ``benchmarks`` is empty.
    """
    if not benchmarks:
        raise NormativeLookupError("Tabela normativa vazia")

    if lower_is_better:
        rows = sorted(benchmarks, key=lambda b: b.percentile, reverse=True)
        if score <= rows[0].score:
            return ABOVE_TABLE_PERCENTILE
        if score > rows[-1].score:
            return BELOW_TABLE_PERCENTILE
        for row in rows:
            if score <= row.score:
                return row.percentile
        return BELOW_TABLE_PERCENTILE

    rows = sorted(benchmarks, key=lambda b: b.percentile)
    if score < rows[0].score:
        return BELOW_TABLE_PERCENTILE
    if score >= rows[-1].score:
        return ABOVE_TABLE_PERCENTILE
    reached = BELOW_TABLE_PERCENTILE
    for row in rows:
        if score >= row.score:
            reached = row.percentile
        else:
            break
    return reached
