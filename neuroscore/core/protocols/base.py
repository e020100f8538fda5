"""
Protocol Registry: Base Types

Static description of each neuropsychological test: which subtests it
produces, in which order they are reported, which one is the headline
result and which ones are reported with their raw value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from neuroscore.utils.exceptions import ProtocolDefinitionError


class ProtocolCode(str, Enum):
    """Closed set of supported test protocols."""
    RAVLT = "RAVLT"
    FDT   = "FDT"
    BPA2  = "BPA2"
    TIN   = "TIN"
    FVA   = "FVA"
    BNTBR = "BNTBR"


class ValueFormat(str, Enum):
    """
    How a value is rendered in reports.

    COUNT          – integer count of items/words
    RATIO          – quotient, one decimal
    SECONDS        – elapsed time, one decimal
    STANDARD_SCORE – normative score (mean 100 / SD 15), integer
    """
    COUNT          = "count"
    RATIO          = "ratio"
    SECONDS        = "seconds"
    STANDARD_SCORE = "standard_score"


class ClassificationSystem(str, Enum):
    """Which classifier assigns the clinical label for a protocol."""
    PERCENTILE     = "percentile"
    ZSCORE         = "zscore"            # Z → normal-curve percentile → percentile labels
    STANDARD_SCORE = "standard_score"


@dataclass(frozen=True, eq=False)
class TestProtocol:
    """
    One test protocol. Configuration, not per-patient state.

    ``formats`` covers subtests and raw input fields; keys it does not
    mention are rendered as COUNT.
    """
    __test__ = False  # not a pytest test class

    code: ProtocolCode
    name: str
    full_name: str
    description: str
    min_age: int
    max_age: int
    subtests: Tuple[str, ...]
    names: Mapping[str, str]
    primary_subtest: str
    raw_fields: Tuple[str, ...]
    raw_display_subtests: FrozenSet[str] = frozenset()
    formats: Mapping[str, ValueFormat] = field(default_factory=dict)
    classification_system: ClassificationSystem = ClassificationSystem.PERCENTILE

    def __post_init__(self):
        object.__setattr__(self, "subtests", tuple(self.subtests))
        object.__setattr__(self, "raw_fields", tuple(self.raw_fields))
        object.__setattr__(self, "raw_display_subtests", frozenset(self.raw_display_subtests))
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))
        object.__setattr__(self, "formats", MappingProxyType(dict(self.formats)))
        self._validate()

    def _validate(self) -> None:
        code = self.code.value
        if not self.subtests:
            raise ProtocolDefinitionError(f"{code}: no subtests defined", protocol=code)
        if len(set(self.subtests)) != len(self.subtests):
            raise ProtocolDefinitionError(f"{code}: duplicate subtest ids", protocol=code)
        if self.primary_subtest not in self.subtests:
            raise ProtocolDefinitionError(
                f"{code}: primary subtest {self.primary_subtest!r} is not a subtest",
                protocol=code,
            )
        stray = self.raw_display_subtests - set(self.subtests)
        if stray:
            raise ProtocolDefinitionError(
                f"{code}: raw-display ids outside subtests: {sorted(stray)}",
                protocol=code,
            )
        unnamed = [s for s in self.subtests if s not in self.names]
        if unnamed:
            raise ProtocolDefinitionError(f"{code}: subtests without a name: {unnamed}", protocol=code)
        if self.min_age > self.max_age:
            raise ProtocolDefinitionError(f"{code}: min_age > max_age", protocol=code)

    # Equality/hash by code: the registry holds exactly one entry per code
    def __hash__(self) -> int:
        return hash(self.code)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TestProtocol):
            return NotImplemented
        return self.code == other.code

    def display_name(self, subtest: str) -> str:
        return self.names.get(subtest, subtest)

    def is_raw_display(self, subtest: str) -> bool:
        return subtest in self.raw_display_subtests

    def value_format(self, key: str) -> ValueFormat:
        return self.formats.get(key, ValueFormat.COUNT)

    def accepts_age(self, age: Optional[int]) -> bool:
        if age is None:
            return False
        return self.min_age <= age <= self.max_age
