"""
Scoring Pipeline

Raw measurements → calculated scores → one label per subtest → ScoreReport.

Usage:
    from neuroscore.core.scoring import ScoringEngine
    from neuroscore.core.reports import PatientContext

    engine = ScoringEngine()
    report = engine.score(
        "RAVLT",
        {"a1": 5, "a2": 7, "a3": 8, "a4": 9, "a5": 10, "b1": 6, "a6": 9, "a7": 8, "rec": 40},
        PatientContext("Maria", 34),
        percentiles={"escoreTotal": 25, "reconhecimento": "<5"},
    )

Which classifier is used depends on the protocol:
    PERCENTILE      caller percentiles (or a PercentileLookup) → classify_percentile
    ZSCORE          z_norms per subtest → compute_z → z_to_percentile → classify_normal_percentile
    STANDARD_SCORE  TIN standard score → classify_tin_standard_score

Each subtest is classified independently; a failure on one is logged and
leaves that subtest as "-" without affecting the others.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from neuroscore.core.classification import (
    ExactPercentile,
    Percentile,
    classify_normal_percentile,
    classify_percentile,
    compute_z,
    parse_percentile,
    z_to_percentile,
)
from neuroscore.core.derivation import (
    DerivationContext,
    DerivationEngine,
    RawScoreSet,
    classify_tin_standard_score,
)
from neuroscore.core.norms import NormReference, PercentileLookup, StandardScoreLookup
from neuroscore.core.protocols import ClassificationSystem, ProtocolCode, TestProtocol, get_protocol
from neuroscore.core.reports.base import Label, PatientContext, ScoreReport
from neuroscore.utils import get_logger
from neuroscore.utils.exceptions import UndefinedScoreError

logger = get_logger(__name__)

# Caller placeholders meaning "no percentile"
_EMPTY_PERCENTILES = ("", "-")


class ScoringEngine:
    """
    Runs the full scoring pipeline for one administered test.

    Holds no per-call state; one instance can be shared across threads.
    """

    def __init__(self, derivation_engine: Optional[DerivationEngine] = None):
        self.derivation_engine = derivation_engine or DerivationEngine()

    def score(
        self,
        code: Union[str, ProtocolCode],
        raw: Optional[RawScoreSet],
        patient: PatientContext,
        *,
        percentiles: Optional[Mapping[str, Any]] = None,
        percentile_lookup: Optional[PercentileLookup] = None,
        z_norms: Optional[Mapping[str, NormReference]] = None,
        standard_score_lookup: Optional[StandardScoreLookup] = None,
        notes: str = "",
        administered_at: Optional[date] = None,
        administered_by: Optional[str] = None,
    ) -> Optional[ScoreReport]:
        """
        Score one test administration.

        Args:
            code: Protocol code.
            raw: Raw inputs as entered.
            patient: Patient name and age.
            percentiles: Percentile per subtest already read from the manual
                         (number, numeric string or range token).
            percentile_lookup: Used for subtests ``percentiles`` leaves out.
            z_norms: Reference mean/SD per subtest for Z-score protocols.
            standard_score_lookup: Age-normative table for TIN.
            notes: Free-text clinical notes.
            administered_at / administered_by: Administration metadata.

        Returns:
            ScoreReport, or None when the protocol is not recognised.
        """
        protocol = get_protocol(code)
        if protocol is None:
            return None

        context = DerivationContext(
            patient_age=patient.age,
            standard_score_lookup=standard_score_lookup,
        )
        calculated = self.derivation_engine.derive(protocol.code, raw, context)

        system = protocol.classification_system
        if system is ClassificationSystem.PERCENTILE:
            pcts, labels = self._classify_by_percentile(
                protocol, calculated, patient, percentiles or {}, percentile_lookup
            )
            z_scores: Dict[str, float] = {}
        elif system is ClassificationSystem.ZSCORE:
            pcts, labels, z_scores = self._classify_by_z_score(
                protocol, calculated, percentiles or {}, z_norms or {}
            )
        else:
            pcts, labels = self._classify_by_standard_score(protocol, calculated)
            z_scores = {}

        classified = sum(1 for label in labels.values() if label is not None)
        logger.debug(
            f"ScoringEngine [{protocol.code.value}]: "
            f"{classified}/{len(protocol.subtests)} subtest(s) classified"
        )

        return ScoreReport(
            protocol_code=protocol.code,
            test_name=protocol.name,
            patient=patient,
            calculated_scores=calculated,
            percentiles=pcts,
            classifications=labels,
            raw_scores=dict(raw) if raw is not None else None,
            z_scores=z_scores,
            z_norms={k: v for k, v in (z_norms or {}).items() if k in protocol.subtests},
            notes=notes or "",
            administered_at=administered_at,
            administered_by=administered_by,
        )

    # ── Percentile path ──────────────────────────────────────────────────────

    def _classify_by_percentile(
        self,
        protocol: TestProtocol,
        calculated: Mapping[str, Any],
        patient: PatientContext,
        supplied: Mapping[str, Any],
        lookup: Optional[PercentileLookup],
    ) -> Tuple[Dict[str, Optional[Percentile]], Dict[str, Optional[Label]]]:
        pcts: Dict[str, Optional[Percentile]] = {}
        labels: Dict[str, Optional[Label]] = {}

        for subtest in protocol.subtests:
            given = supplied.get(subtest)
            if given is not None and given not in _EMPTY_PERCENTILES:
                percentile = parse_percentile(given)
                pcts[subtest] = percentile
                # Unreadable tokens still get the classifier's fallback label
                labels[subtest] = classify_percentile(percentile if percentile is not None else given)
                continue

            percentile = self._lookup_percentile(protocol, subtest, calculated.get(subtest), patient, lookup)
            pcts[subtest] = percentile
            labels[subtest] = classify_percentile(percentile) if percentile is not None else None

        return pcts, labels

    @staticmethod
    def _lookup_percentile(
        protocol: TestProtocol,
        subtest: str,
        value: Any,
        patient: PatientContext,
        lookup: Optional[PercentileLookup],
    ) -> Optional[Percentile]:
        if lookup is None or value is None:
            return None
        try:
            answer = lookup(subtest, value, patient.age)
        except Exception as exc:
            # the other subtests are still scored
            logger.error(
                f"ScoringEngine [{protocol.code.value}]: percentile lookup for {subtest} raised {exc}",
                exc_info=True,
                extra={"protocol": protocol.code.value, "subtest": subtest},
            )
            return None
        if answer is None:
            return None
        percentile = parse_percentile(answer)
        if percentile is None:
            logger.warning(
                f"ScoringEngine [{protocol.code.value}]: percentile lookup for {subtest} "
                f"returned unreadable value {answer!r}"
            )
        return percentile

    # ── Z-score path ─────────────────────────────────────────────────────────

    def _classify_by_z_score(
        self,
        protocol: TestProtocol,
        calculated: Mapping[str, Any],
        supplied: Mapping[str, Any],
        z_norms: Mapping[str, NormReference],
    ) -> Tuple[Dict[str, Optional[Percentile]], Dict[str, Optional[Label]], Dict[str, float]]:
        pcts: Dict[str, Optional[Percentile]] = {}
        labels: Dict[str, Optional[Label]] = {}
        z_scores: Dict[str, float] = {}

        for subtest in protocol.subtests:
            pcts[subtest] = None
            labels[subtest] = None
            norms = z_norms.get(subtest)
            value = calculated.get(subtest)
            if norms is None or value is None:
                logger.debug(f"ScoringEngine [{protocol.code.value}]: no norms for {subtest}, skipping")
                continue
            try:
                z = compute_z(value, norms.mean, norms.sd)
            except UndefinedScoreError as exc:
                logger.warning(
                    f"ScoringEngine [{protocol.code.value}]: {subtest}: {exc.message}",
                    extra={"protocol": protocol.code.value, "subtest": subtest, "metric": exc.metric},
                )
                continue

            z_scores[subtest] = z
            given = supplied.get(subtest)
            percentile = None
            if given is not None and given not in _EMPTY_PERCENTILES:
                percentile = parse_percentile(given)
            if percentile is not None:
                # a percentile read from the manual wins over the normal-curve estimate
                pcts[subtest] = percentile
                labels[subtest] = classify_percentile(percentile)
            else:
                estimate = z_to_percentile(z)
                pcts[subtest] = ExactPercentile(estimate)
                labels[subtest] = classify_normal_percentile(estimate)

        return pcts, labels, z_scores

    # ── Standard-score path (TIN) ────────────────────────────────────────────

    @staticmethod
    def _classify_by_standard_score(
        protocol: TestProtocol,
        calculated: Mapping[str, Any],
    ) -> Tuple[Dict[str, Optional[Percentile]], Dict[str, Optional[Label]]]:
        pcts: Dict[str, Optional[Percentile]] = {s: None for s in protocol.subtests}
        labels: Dict[str, Optional[Label]] = {s: None for s in protocol.subtests}
        labels[protocol.primary_subtest] = classify_tin_standard_score(
            calculated.get(protocol.primary_subtest)
        )
        return pcts, labels


_default_engine = ScoringEngine()


def score_test(
    code: Union[str, ProtocolCode],
    raw: Optional[RawScoreSet],
    patient: PatientContext,
    **kwargs,
) -> Optional[ScoreReport]:
    """Module-level shortcut for ScoringEngine().score()."""
    return _default_engine.score(code, raw, patient, **kwargs)
