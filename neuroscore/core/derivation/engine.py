"""
Derivation Engine

Central dispatcher. Takes a protocol code and a RawScoreSet and returns the
protocol's CalculatedScoreSet.

Usage:
    from neuroscore.core.derivation import DerivationEngine

    engine = DerivationEngine()
    scores = engine.derive(ProtocolCode.RAVLT, {"a1": 5, "a2": 7, ...})
    scores["escoreTotal"]

Adding a protocol:
    1. Create  neuroscore/core/derivation/rules_<protocol>.py
    2. Implement derive_<protocol>(RawScoreSet, DerivationContext) -> dict
    3. Register it in _PROTOCOL_DERIVERS below.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Union

from neuroscore.core.protocols import ProtocolCode, get_protocol
from neuroscore.core.protocols.registry import BNTBR, FVA
from neuroscore.utils import get_logger
from .base import CalculatedScoreSet, DerivationContext, Deriver, RawScoreSet, freeze_scores
from .rules_bpa2 import derive_bpa2
from .rules_fdt import derive_fdt
from .rules_passthrough import passthrough
from .rules_ravlt import derive_ravlt
from .rules_tin import derive_tin

logger = get_logger(__name__)

# ── Registry: protocol → deriver ─────────────────────────────────────────────
_PROTOCOL_DERIVERS: Dict[ProtocolCode, Deriver] = {
    ProtocolCode.RAVLT: derive_ravlt,
    ProtocolCode.FDT:   derive_fdt,
    ProtocolCode.BPA2:  derive_bpa2,
    ProtocolCode.TIN:   derive_tin,
    ProtocolCode.FVA:   passthrough(FVA.raw_fields),
    ProtocolCode.BNTBR: passthrough(BNTBR.raw_fields),
}

_missing = set(ProtocolCode) - set(_PROTOCOL_DERIVERS)
if _missing:
    raise RuntimeError(f"No deriver registered for: {sorted(c.value for c in _missing)}")


class DerivationEngine:
    """
    Turns raw administration numbers into calculated scores.

    Holds no per-call state; one instance can be shared across threads.
    """

    def derive(
        self,
        code: Union[str, ProtocolCode],
        raw: Optional[RawScoreSet],
        context: Optional[DerivationContext] = None,
    ) -> Optional[CalculatedScoreSet]:
        """
        Run the deriver registered for ``code``.

        Args:
            code: Protocol code (enum or string).
            raw: Raw inputs; missing fields count as 0.
            context: Patient age and normative collaborators, when needed.

        Returns:
            Read-only mapping subtest → value (None where a metric is
            undefined), or None when the protocol is not recognised.
        """
        protocol = get_protocol(code)
        if protocol is None:
            return None

        scores = _PROTOCOL_DERIVERS[protocol.code](raw or {}, context or DerivationContext())
        undefined = [name for name, value in scores.items() if value is None]
        if undefined:
            logger.debug(
                f"DerivationEngine [{protocol.code.value}]: undefined metric(s) "
                + ", ".join(undefined)
            )
        return freeze_scores(scores)

    @staticmethod
    def registered_protocols() -> List[ProtocolCode]:
        """Return which protocols have a registered deriver."""
        return list(_PROTOCOL_DERIVERS.keys())


_default_engine = DerivationEngine()


def derive(
    code: Union[str, ProtocolCode],
    raw: Optional[RawScoreSet],
    context: Optional[DerivationContext] = None,
) -> Optional[CalculatedScoreSet]:
    """Module-level shortcut for DerivationEngine().derive()."""
    return _default_engine.derive(code, raw, context)
