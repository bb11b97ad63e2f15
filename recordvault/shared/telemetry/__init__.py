"""Logging and tracing helpers."""

from recordvault.shared.telemetry.logging import setup_logging
from recordvault.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
]
