"""
Plain-Text Report Formatter

Builds the copy/paste block clinicians paste into their reports.

The report is first built as a StructuredReport (an ordered tuple of typed
sections) and only then rendered to text, so its content can be checked
independently of the layout. Rendering is a pure function of the sections:
fixed column widths, fixed decimals, "\\n" line endings, no trailing
newline. Identical inputs give byte-identical output.

Layout:

    ===========================================
    AVALIAÇÃO NEUROPSICOLÓGICA
    ===========================================
    TESTE: RAVLT - Teste de Aprendizagem Auditivo-Verbal de Rey
    Paciente: Maria Silva (34 anos)
    Data: 12/03/2025
    Aplicador: Ana Souza

    DADOS BRUTOS:
      A1 (1ª tentativa)       : 5
      ...

    CÁLCULOS:
      Escore Total = 5+7+8+9+10 = 39
      ...

    RESULTADOS:
    -------------------------------------------
    Variável                | Bruto | Percentil | Classificação
    -------------------------------------------
    A1 (1ª tentativa)       |     5 |        25 | Média Inferior
    ...
    -------------------------------------------

    OBSERVAÇÕES:
    ...
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from neuroscore import config
from neuroscore.core.classification import format_z
from neuroscore.core.derivation import coerce_number
from neuroscore.core.derivation.rules_bpa2 import scale_field
from neuroscore.core.derivation.rules_ravlt import RECOGNITION_OFFSET
from neuroscore.core.protocols import ProtocolCode, TestProtocol, ValueFormat, get_protocol
from neuroscore.core.protocols.registry import BPA2_FIELDS, BPA2_SCALES
from neuroscore.utils import format_fixed, get_logger
from neuroscore.utils.exceptions import ReportGenerationError
from .base import DASH, PatientContext, ScoreReport

logger = get_logger(__name__)

# ── Layout constants ─────────────────────────────────────────────────────────
RULE_WIDTH     = 43
NAME_WIDTH     = 23
RAW_WIDTH      = 5
PCT_WIDTH      = 9
INDENT         = "  "
DATE_FORMAT    = "%d/%m/%Y"
ONE_DECIMAL    = 1

HEAVY_RULE = "=" * RULE_WIDTH
LIGHT_RULE = "-" * RULE_WIDTH


class SectionKind(str, Enum):
    BANNER       = "banner"
    HEADER       = "header"
    INPUTS       = "inputs"
    CALCULATIONS = "calculations"
    RESULTS      = "results"
    NOTES        = "notes"


@dataclass(frozen=True)
class ResultRow:
    """One line of the results table, already formatted as text."""
    name: str
    raw: str
    percentile: str
    classification: str


@dataclass(frozen=True)
class ReportSection:
    kind: SectionKind
    title: Optional[str] = None
    lines: Tuple[str, ...] = ()
    rows: Tuple[ResultRow, ...] = ()


@dataclass(frozen=True)
class StructuredReport:
    sections: Tuple[ReportSection, ...]

    def section(self, kind: SectionKind) -> Optional[ReportSection]:
        for section in self.sections:
            if section.kind is kind:
                return section
        return None


# ── Value formatting ─────────────────────────────────────────────────────────

def format_value(value: Any, fmt: ValueFormat = ValueFormat.COUNT) -> str:
    """
    Render a score: integers for counts and standard scores, one decimal for
    ratios and seconds. None renders as "-".
    """
    if value is None:
        return DASH
    if fmt in (ValueFormat.RATIO, ValueFormat.SECONDS):
        return format_fixed(value, ONE_DECIMAL)
    if fmt is ValueFormat.STANDARD_SCORE:
        return format_fixed(value, 0)
    if float(value).is_integer():
        return str(int(value))
    return format_fixed(value, ONE_DECIMAL)


def _term(text: str) -> str:
    """Parenthesise negative operands inside a formula."""
    return f"({text})" if text.startswith("-") else text


def _plain(value: float) -> str:
    return f"{value:g}"


def _format_date(value: Union[date, datetime, str]) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    try:
        return date.fromisoformat(str(value)[:10]).strftime(DATE_FORMAT)
    except ValueError:
        return str(value)


# ── Per-protocol inputs/calculations ─────────────────────────────────────────

def _raw(report: ScoreReport, field: str):
    return coerce_number(report.raw_scores.get(field)) if report.raw_scores is not None else 0


def _rawf(protocol: TestProtocol, report: ScoreReport, field: str) -> str:
    return format_value(_raw(report, field), protocol.value_format(field))


def _input_line(label: str, value: str) -> str:
    return f"{label:<{NAME_WIDTH}}: {value}"


def _calc(protocol: TestProtocol, report: ScoreReport, key: str) -> str:
    return format_value(report.calculated_scores.get(key), protocol.value_format(key))


def _fields_inputs(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    lines = []
    for field in protocol.raw_fields:
        text = _rawf(protocol, report, field)
        if protocol.value_format(field) is ValueFormat.SECONDS:
            text += " s"
        lines.append(_input_line(protocol.display_name(field), text))
    return lines


def _ravlt_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    t = {f: _term(_rawf(protocol, report, f)) for f in protocol.raw_fields}
    total = _calc(protocol, report, "escoreTotal")
    name = protocol.display_name
    return [
        f"Escore Total = {t['a1']}+{t['a2']}+{t['a3']}+{t['a4']}+{t['a5']} = {total}",
        f"{name('reconhecimento')} = {t['rec']}-{RECOGNITION_OFFSET} = {_calc(protocol, report, 'reconhecimento')}",
        f"{name('alt')} = {_term(total)}-(5×{t['a1']}) = {_calc(protocol, report, 'alt')}",
        f"{name('velocidadeEsquecimento')} = A7/A6 = {t['a7']}/{t['a6']} = "
        f"{_calc(protocol, report, 'velocidadeEsquecimento')}",
        f"{name('interferenciaProativa')} = B1/A1 = {t['b1']}/{t['a1']} = "
        f"{_calc(protocol, report, 'interferenciaProativa')}",
        f"{name('interferenciaRetroativa')} = A6/A5 = {t['a6']}/{t['a5']} = "
        f"{_calc(protocol, report, 'interferenciaRetroativa')}",
    ]


def _fdt_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    t = {f: _term(_rawf(protocol, report, f)) for f in protocol.raw_fields}
    name = protocol.display_name
    return [
        f"{name('inibicao')} = {name('escolha')} - {name('leitura')} = "
        f"{t['escolha']}-{t['leitura']} = {_calc(protocol, report, 'inibicao')}",
        f"{name('flexibilidade')} = {name('alternancia')} - {name('leitura')} = "
        f"{t['alternancia']}-{t['leitura']} = {_calc(protocol, report, 'flexibilidade')}",
    ]


def _bpa2_values(report: ScoreReport, scale: str) -> List[str]:
    raw = report.raw_scores if report.raw_scores is not None else {}
    return [format_value(scale_field(raw, scale, f)) for f in BPA2_FIELDS]


def _bpa2_inputs(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    lines = []
    for scale in BPA2_SCALES:
        acertos, erros, omissoes = _bpa2_values(report, scale)
        lines.append(_input_line(
            protocol.display_name(scale),
            f"acertos {acertos}, erros {erros}, omissões {omissoes}",
        ))
    return lines


def _bpa2_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    lines = []
    for scale in BPA2_SCALES:
        acertos, erros, omissoes = (_term(v) for v in _bpa2_values(report, scale))
        lines.append(f"{scale} = {acertos}-{erros}-{omissoes} = {_calc(protocol, report, scale)}")
    parts = "+".join(_term(_calc(protocol, report, scale)) for scale in BPA2_SCALES)
    lines.append(f"AG = {parts} = {_calc(protocol, report, 'AG')}")
    return lines


def _tin_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    age = f"{report.patient.age} anos" if report.patient.age is not None else "idade não informada"
    return [
        f"{protocol.display_name('escorePadrao')} = tabela normativa "
        f"({_rawf(protocol, report, 'acertos')} acertos, {age}) = "
        f"{_calc(protocol, report, 'escorePadrao')}",
    ]


def _zscore_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    lines = []
    for subtest in protocol.subtests:
        norms = report.z_norms.get(subtest)
        if norms is None:
            continue
        value = _term(format_value(report.calculated_scores.get(subtest), protocol.value_format(subtest)))
        z = report.z_scores.get(subtest)
        z_text = format_z(z) if z is not None else DASH
        line = f"Z = ({value}-{_term(_plain(norms.mean))})/{_term(_plain(norms.sd))} = {z_text}"
        if z is not None:
            line += f" → Percentil {report.percentile_text(subtest)}"
        lines.append(f"{protocol.display_name(subtest)}: {line}")
    return lines


def _no_calculations(protocol: TestProtocol, report: ScoreReport) -> List[str]:
    return []


Layout = Tuple[
    Callable[[TestProtocol, ScoreReport], List[str]],
    Callable[[TestProtocol, ScoreReport], List[str]],
]

# ── Registry: protocol → (inputs, calculations) ──────────────────────────────
_PROTOCOL_LAYOUTS: Dict[ProtocolCode, Layout] = {
    ProtocolCode.RAVLT: (_fields_inputs, _ravlt_calculations),
    ProtocolCode.FDT:   (_fields_inputs, _fdt_calculations),
    ProtocolCode.BPA2:  (_bpa2_inputs,   _bpa2_calculations),
    ProtocolCode.TIN:   (_fields_inputs, _tin_calculations),
    ProtocolCode.FVA:   (_fields_inputs, _no_calculations),
    ProtocolCode.BNTBR: (_fields_inputs, _zscore_calculations),
}

_missing = set(ProtocolCode) - set(_PROTOCOL_LAYOUTS)
if _missing:
    raise RuntimeError(f"No report layout registered for: {sorted(c.value for c in _missing)}")


# ── Builder ──────────────────────────────────────────────────────────────────

def _header_lines(protocol: TestProtocol, patient: PatientContext, report: ScoreReport) -> List[str]:
    lines = [f"TESTE: {protocol.name} - {protocol.full_name}"]
    if patient.age is not None:
        lines.append(f"Paciente: {patient.name} ({patient.age} anos)")
    else:
        lines.append(f"Paciente: {patient.name}")
    if report.administered_at:
        lines.append(f"Data: {_format_date(report.administered_at)}")
    if report.administered_by:
        lines.append(f"Aplicador: {report.administered_by}")
    return lines


def _result_rows(protocol: TestProtocol, report: ScoreReport) -> Tuple[ResultRow, ...]:
    return tuple(
        ResultRow(
            name=protocol.display_name(subtest),
            raw=format_value(report.score_for(protocol, subtest), protocol.value_format(subtest)),
            percentile=report.percentile_text(subtest),
            classification=report.classification_text(subtest),
        )
        for subtest in protocol.subtests
    )


def build_report(protocol: TestProtocol, patient: PatientContext, report: ScoreReport) -> StructuredReport:
    """
    Assemble the ordered sections for ``report``.

    Raises:
        ReportGenerationError: if ``report`` belongs to another protocol.
    """
    if report.protocol_code is not protocol.code:
        raise ReportGenerationError(
            f"Relatório de {report.protocol_code.value} não corresponde ao teste {protocol.code.value}",
            report_type="text",
            details={"expected": protocol.code.value, "received": report.protocol_code.value},
        )

    sections = [
        ReportSection(SectionKind.BANNER, lines=(config.REPORT_BANNER,)),
        ReportSection(SectionKind.HEADER, lines=tuple(_header_lines(protocol, patient, report))),
    ]

    if report.raw_scores is not None:
        inputs, calculations = _PROTOCOL_LAYOUTS[protocol.code]
        sections.append(ReportSection(SectionKind.INPUTS, "DADOS BRUTOS:", tuple(inputs(protocol, report))))
        calc_lines = calculations(protocol, report)
        if calc_lines:
            sections.append(ReportSection(SectionKind.CALCULATIONS, "CÁLCULOS:", tuple(calc_lines)))

    sections.append(ReportSection(SectionKind.RESULTS, "RESULTADOS:", rows=_result_rows(protocol, report)))

    notes = report.notes.replace("\r\n", "\n").strip() if report.notes else ""
    if notes:
        sections.append(ReportSection(SectionKind.NOTES, "OBSERVAÇÕES:", tuple(notes.split("\n"))))

    logger.debug(f"Report [{protocol.code.value}]: {len(sections)} section(s) built")
    return StructuredReport(tuple(sections))


# ── Renderer ─────────────────────────────────────────────────────────────────

def _table_line(name: str, raw: str, percentile: str, classification: str) -> str:
    return f"{name:<{NAME_WIDTH}} | {raw:>{RAW_WIDTH}} | {percentile:>{PCT_WIDTH}} | {classification}"


def _render_section(section: ReportSection) -> List[str]:
    if section.kind is SectionKind.BANNER:
        return [HEAVY_RULE, *section.lines, HEAVY_RULE]
    if section.kind is SectionKind.HEADER:
        return list(section.lines)
    if section.kind is SectionKind.RESULTS:
        lines = [
            section.title,
            LIGHT_RULE,
            _table_line("Variável", "Bruto", "Percentil", "Classificação"),
            LIGHT_RULE,
        ]
        lines.extend(_table_line(r.name, r.raw, r.percentile, r.classification) for r in section.rows)
        lines.append(LIGHT_RULE)
        return lines
    if section.kind in (SectionKind.INPUTS, SectionKind.CALCULATIONS):
        body = [f"{INDENT}{line}" for line in section.lines]
        return [section.title, *body]
    return [section.title, *section.lines]


def render_report(structured: StructuredReport) -> str:
    blocks: List[str] = []
    for index, section in enumerate(structured.sections):
        # banner and header print as one block
        if index > 0 and section.kind is not SectionKind.HEADER:
            blocks.append("")
        blocks.extend(_render_section(section))
    return "\n".join(blocks)


def format_report(protocol: TestProtocol, patient: PatientContext, report: ScoreReport) -> str:
    """Build and render the plain-text report."""
    return render_report(build_report(protocol, patient, report))


def format_unrecognized(code: Any) -> str:
    return f"Tipo de teste não reconhecido: {code}"


def format_report_for_code(code: Any, patient: PatientContext, report: Optional[ScoreReport]) -> str:
    """
    Format by protocol code, falling back to the "not recognised" line for
    unknown codes or a missing report.
    """
    protocol = get_protocol(code)
    if protocol is None or report is None:
        return format_unrecognized(code)
    return format_report(protocol, patient, report)
