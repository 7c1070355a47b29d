"""Shared telemetry: logging setup and tracing helpers."""

from file_uploader.shared.telemetry.logging import setup_logging
from file_uploader.shared.telemetry.tracing import add_span_attributes, traced

__all__ = ["add_span_attributes", "setup_logging", "traced"]
