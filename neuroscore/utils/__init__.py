"""
Utilities Package - Logging, Exception Handling and Number Formatting
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    NeuroScoreError,
    UnknownProtocolError,
    ProtocolDefinitionError,
    UndefinedScoreError,
    InvalidPercentileError,
    NormativeLookupError,
    ReportGenerationError,
)
from .numbers import round_half_away, format_fixed, is_finite_number

__all__ = [
    "get_logger",
    "setup_logging",
    "NeuroScoreError",
    "UnknownProtocolError",
    "ProtocolDefinitionError",
    "UndefinedScoreError",
    "InvalidPercentileError",
    "NormativeLookupError",
    "ReportGenerationError",
    "round_half_away",
    "format_fixed",
    "is_finite_number",
]
