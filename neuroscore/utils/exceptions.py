"""
Custom Exception Hierarchy

Provides specific exception types for the scoring engine's error categories
with structured error information.
"""
from typing import Optional, Dict, Any


class NeuroScoreError(Exception):
    """Base exception for all scoring engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured consumers."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class UnknownProtocolError(NeuroScoreError):
    """A test code that is not in the protocol registry."""

    def __init__(
        self,
        message: str,
        protocol: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="UNKNOWN_PROTOCOL",
            details={"protocol": protocol, **(details or {})}
        )
        self.protocol = protocol


class ProtocolDefinitionError(NeuroScoreError):
    """A registry entry that breaks its own invariants."""

    def __init__(
        self,
        message: str,
        protocol: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PROTOCOL_DEFINITION_ERROR",
            details={"protocol": protocol, **(details or {})}
        )
        self.protocol = protocol


class UndefinedScoreError(NeuroScoreError):
    """A derived score with no defined value (zero or non-finite inputs)."""

    def __init__(
        self,
        message: str,
        metric: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="UNDEFINED_SCORE",
            details={"metric": metric, **(details or {})}
        )
        self.metric = metric


class InvalidPercentileError(NeuroScoreError):
    """A percentile that is neither a number nor a known range token."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_PERCENTILE",
            details={"value": repr(value), **(details or {})}
        )
        self.value = value


class NormativeLookupError(NeuroScoreError):
    """Errors raised by normative-table collaborators."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="NORMATIVE_LOOKUP_ERROR",
            details=details
        )


class ReportGenerationError(NeuroScoreError):
    """Errors during report generation."""

    def __init__(
        self,
        message: str,
        report_type: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"report_type": report_type, **(details or {})}
        )
        self.report_type = report_type
