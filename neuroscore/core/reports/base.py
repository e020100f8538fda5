"""
Report Model

The ScoreReport is the structured output of one scoring operation. It is
built once from caller-supplied raw data, read-only afterwards, and never
persisted by the engine; storage belongs to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from neuroscore.core.classification import Percentile, PercentileLabel, ZScoreLabel
from neuroscore.core.derivation import TINClassification, coerce_number
from neuroscore.core.norms import NormReference
from neuroscore.core.protocols import ProtocolCode, TestProtocol

Number = Union[int, float]
Label = Union[PercentileLabel, ZScoreLabel, TINClassification]

DASH = "-"


@dataclass(frozen=True)
class PatientContext:
    """Patient identity as supplied by the caller."""
    name: str
    age: Optional[int] = None


def _readonly(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ScoreReport:
    """
    Full result bundle for one administered test.

    ``percentiles`` and ``classifications`` hold None for subtests that have
    no value; those print as "-". ``z_scores`` keeps Z unrounded.
    """
    protocol_code: ProtocolCode
    test_name: str
    patient: PatientContext
    calculated_scores: Mapping[str, Optional[Number]]
    percentiles: Mapping[str, Optional[Percentile]] = field(default_factory=dict)
    classifications: Mapping[str, Optional[Label]] = field(default_factory=dict)
    raw_scores: Optional[Mapping[str, Any]] = None
    z_scores: Mapping[str, float] = field(default_factory=dict)
    z_norms: Mapping[str, NormReference] = field(default_factory=dict)
    notes: str = ""
    administered_at: Optional[date] = None
    administered_by: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "calculated_scores", _readonly(self.calculated_scores))
        object.__setattr__(self, "percentiles", _readonly(self.percentiles))
        object.__setattr__(self, "classifications", _readonly(self.classifications))
        object.__setattr__(self, "z_scores", _readonly(self.z_scores))
        object.__setattr__(self, "z_norms", _readonly(self.z_norms))
        if self.raw_scores is not None:
            object.__setattr__(self, "raw_scores", _readonly(self.raw_scores))

    def score_for(self, protocol: TestProtocol, subtest: str) -> Optional[Number]:
        """
        Value shown in the results table: raw for raw-display subtests.

        A raw-display field the caller left out reads as 0, as it does in the
        inputs section and in derivation.
        """
        if protocol.is_raw_display(subtest) and self.raw_scores is not None:
            return coerce_number(self.raw_scores.get(subtest))
        return self.calculated_scores.get(subtest)

    def percentile_text(self, subtest: str) -> str:
        percentile = self.percentiles.get(subtest)
        return percentile.display() if percentile is not None else DASH

    def classification_text(self, subtest: str) -> str:
        label = self.classifications.get(subtest)
        return label.value if label is not None else DASH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocol_code": self.protocol_code.value,
            "test_name": self.test_name,
            "patient": {"name": self.patient.name, "age": self.patient.age},
            "raw_scores": _plain_mapping(self.raw_scores) if self.raw_scores is not None else None,
            "calculated_scores": dict(self.calculated_scores),
            "percentiles": {k: (v.display() if v is not None else None) for k, v in self.percentiles.items()},
            "classifications": {k: (v.value if v is not None else None) for k, v in self.classifications.items()},
            "z_scores": dict(self.z_scores),
            "notes": self.notes,
            "administered_at": self.administered_at.isoformat() if self.administered_at else None,
            "administered_by": self.administered_by,
        }


def _plain_mapping(mapping: Mapping) -> Dict[str, Any]:
    return {
        key: _plain_mapping(value) if isinstance(value, Mapping) else value
        for key, value in mapping.items()
    }
