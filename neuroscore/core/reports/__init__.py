"""
Report Generation

ScoreReport (the structured result of one scoring run) and the plain-text
formatter that turns it into the block pasted into clinical reports.

Usage:
    from neuroscore.core.reports import format_report

    text = format_report(protocol, patient, report)
"""
from .base import DASH, Label, PatientContext, ScoreReport
from .text_report import (
    ReportSection,
    ResultRow,
    SectionKind,
    StructuredReport,
    build_report,
    format_report,
    format_report_for_code,
    format_unrecognized,
    format_value,
    render_report,
)

__all__ = [
    "DASH",
    "Label",
    "PatientContext",
    "ReportSection",
    "ResultRow",
    "ScoreReport",
    "SectionKind",
    "StructuredReport",
    "build_report",
    "format_report",
    "format_report_for_code",
    "format_unrecognized",
    "format_value",
    "render_report",
]
