"""
Protocol Registry

Static catalogue of the supported neuropsychological tests.

Usage:
    from neuroscore.core.protocols import get_protocol

    protocol = get_protocol("RAVLT")
    if protocol is None:
        ...  # render "not supported"
"""
from .base import ClassificationSystem, ProtocolCode, TestProtocol, ValueFormat
from .registry import (
    available_protocols,
    get_protocol,
    parse_protocol_code,
    protocols_for_age,
    require_protocol,
)

__all__ = [
    "ClassificationSystem",
    "ProtocolCode",
    "TestProtocol",
    "ValueFormat",
    "available_protocols",
    "get_protocol",
    "parse_protocol_code",
    "protocols_for_age",
    "require_protocol",
]
