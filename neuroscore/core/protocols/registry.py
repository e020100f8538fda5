"""
Protocol Registry

Compiled-in table of every supported test protocol. Nothing is added or
removed at runtime; lookups are a single dict access.

Adding a protocol:
    1. Add a member to ProtocolCode.
    2. Add its TestProtocol entry to _PROTOCOLS below.
    3. Register its deriver in neuroscore/core/derivation/engine.py and its
       report layout in neuroscore/core/reports/text_report.py.
    Both tables are checked against ProtocolCode at import time.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Union

from neuroscore.utils import get_logger
from neuroscore.utils.exceptions import UnknownProtocolError
from .base import ClassificationSystem, ProtocolCode, TestProtocol, ValueFormat

logger = get_logger(__name__)


_RAVLT_TRIALS = ("a1", "a2", "a3", "a4", "a5", "b1", "a6", "a7")

RAVLT = TestProtocol(
    code=ProtocolCode.RAVLT,
    name="RAVLT",
    full_name="Teste de Aprendizagem Auditivo-Verbal de Rey",
    description="Avalia memória verbal: aprendizagem, evocação imediata e tardia, e reconhecimento.",
    min_age=6,
    max_age=81,
    subtests=_RAVLT_TRIALS + ("escoreTotal", "reconhecimento"),
    names={
        "a1": "A1 (1ª tentativa)",
        "a2": "A2 (2ª tentativa)",
        "a3": "A3 (3ª tentativa)",
        "a4": "A4 (4ª tentativa)",
        "a5": "A5 (5ª tentativa)",
        "b1": "B1 (Lista B)",
        "a6": "A6 (Evocação imediata)",
        "a7": "A7 (Evocação tardia)",
        "escoreTotal": "Escore Total (A1-A5)",
        "reconhecimento": "Reconhecimento",
        # calculated-only metrics, shown in the calculations section
        "alt": "ALT",
        "velocidadeEsquecimento": "Vel. Esquecimento",
        "interferenciaProativa": "Int. Proativa",
        "interferenciaRetroativa": "Int. Retroativa",
        "rec": "REC (bruto)",
    },
    primary_subtest="escoreTotal",
    raw_fields=_RAVLT_TRIALS + ("rec",),
    raw_display_subtests=frozenset(_RAVLT_TRIALS),
    formats={
        "velocidadeEsquecimento": ValueFormat.RATIO,
        "interferenciaProativa": ValueFormat.RATIO,
        "interferenciaRetroativa": ValueFormat.RATIO,
    },
)

FDT = TestProtocol(
    code=ProtocolCode.FDT,
    name="FDT",
    full_name="Five Digit Test - Teste dos Cinco Dígitos",
    description=(
        "Avalia funções executivas: velocidade de processamento, atenção, "
        "controle inibitório e flexibilidade cognitiva."
    ),
    min_age=6,
    max_age=99,
    subtests=("inibicao", "flexibilidade"),
    names={
        "inibicao": "Inibição",
        "flexibilidade": "Flexibilidade",
        "leitura": "Leitura",
        "contagem": "Contagem",
        "escolha": "Escolha",
        "alternancia": "Alternância",
    },
    primary_subtest="inibicao",
    raw_fields=("leitura", "contagem", "escolha", "alternancia"),
    formats={
        key: ValueFormat.SECONDS
        for key in ("inibicao", "flexibilidade", "leitura", "contagem", "escolha", "alternancia")
    },
)

BPA2_SCALES = ("AC", "AD", "AA")
BPA2_FIELDS = ("acertos", "erros", "omissoes")

BPA2 = TestProtocol(
    code=ProtocolCode.BPA2,
    name="BPA-2",
    full_name="Bateria Psicológica para Avaliação da Atenção - 2ª Edição",
    description="Avalia diferentes tipos de atenção: concentrada, dividida, alternada e atenção geral.",
    min_age=6,
    max_age=81,
    subtests=BPA2_SCALES + ("AG",),
    names={
        "AC": "Atenção Concentrada",
        "AD": "Atenção Dividida",
        "AA": "Atenção Alternada",
        "AG": "Atenção Geral",
    },
    primary_subtest="AG",
    raw_fields=tuple(f"{scale}_{fld}" for scale in BPA2_SCALES for fld in BPA2_FIELDS),
)

TIN = TestProtocol(
    code=ProtocolCode.TIN,
    name="TIN",
    full_name="Teste Infantil de Nomeação",
    description="Avalia vocabulário expressivo e capacidade de nomeação em crianças de 3 a 14 anos.",
    min_age=3,
    max_age=14,
    subtests=("acertos", "escorePadrao"),
    names={
        "acertos": "Total de Acertos",
        "escorePadrao": "Escore Padrão",
    },
    primary_subtest="escorePadrao",
    raw_fields=("acertos",),
    raw_display_subtests=frozenset({"acertos"}),
    formats={"escorePadrao": ValueFormat.STANDARD_SCORE},
    classification_system=ClassificationSystem.STANDARD_SCORE,
)

FVA = TestProtocol(
    code=ProtocolCode.FVA,
    name="FVA",
    full_name="Fluência Verbal Alternada",
    description=(
        "Avalia fluência de palavras, acesso à memória semântica e "
        "flexibilidade cognitiva em pessoas de 7 a 70 anos."
    ),
    min_age=7,
    max_age=70,
    subtests=("animais", "frutas", "pares"),
    names={
        "animais": "Animais",
        "frutas": "Frutas",
        "pares": "Pares (Alternada)",
    },
    primary_subtest="pares",
    raw_fields=("animais", "frutas", "pares"),
    raw_display_subtests=frozenset({"animais", "frutas", "pares"}),
)

BNTBR = TestProtocol(
    code=ProtocolCode.BNTBR,
    name="BNT-BR",
    full_name="Teste de Nomeação de Boston - Versão Brasileira (30 itens)",
    description=(
        "Avalia o processo de nomeação envolvendo percepção visual, memória "
        "semântica e linguagem em pessoas de 6 a 99 anos."
    ),
    min_age=6,
    max_age=99,
    subtests=("acertos",),
    names={"acertos": "Total de Acertos"},
    primary_subtest="acertos",
    raw_fields=("acertos",),
    raw_display_subtests=frozenset({"acertos"}),
    classification_system=ClassificationSystem.ZSCORE,
)


# ── Registry: code → protocol ────────────────────────────────────────────────
_PROTOCOLS: Dict[ProtocolCode, TestProtocol] = {
    p.code: p for p in (RAVLT, FDT, BPA2, TIN, FVA, BNTBR)
}

_missing = set(ProtocolCode) - set(_PROTOCOLS)
if _missing:
    raise RuntimeError(f"Protocol registry incomplete: {sorted(c.value for c in _missing)}")


def parse_protocol_code(code: Union[str, ProtocolCode, None]) -> Optional[ProtocolCode]:
    """
    Normalise a caller-supplied test code.

    Case and surrounding whitespace are ignored and the hyphenated display
    spellings ("BPA-2", "BNT-BR") are accepted. Returns None when the code
    is not a known protocol.
    """
    if isinstance(code, ProtocolCode):
        return code
    if not isinstance(code, str):
        return None
    key = code.strip().upper().replace("-", "")
    try:
        return ProtocolCode(key)
    except ValueError:
        return None


def get_protocol(code: Union[str, ProtocolCode, None]) -> Optional[TestProtocol]:
    """
    Look up a protocol by code.

    Returns None for codes outside the registry so the caller can render
    its "not supported" fallback.
    """
    parsed = parse_protocol_code(code)
    if parsed is None:
        logger.warning(f"Protocol registry: unrecognized test code {code!r}")
        return None
    return _PROTOCOLS[parsed]


def require_protocol(code: Union[str, ProtocolCode, None]) -> TestProtocol:
    """Strict lookup; raises UnknownProtocolError for unknown codes."""
    protocol = get_protocol(code)
    if protocol is None:
        raise UnknownProtocolError(f"Tipo de teste não reconhecido: {code}", protocol=str(code))
    return protocol


def available_protocols() -> List[TestProtocol]:
    """All registered protocols, in registry order."""
    return list(_PROTOCOLS.values())


def protocols_for_age(age: int) -> List[TestProtocol]:
    """Protocols whose normative age range includes ``age``."""
    return [p for p in _PROTOCOLS.values() if p.accepts_age(age)]
