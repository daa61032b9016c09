"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    EmptySourceError,
    FormatError,
    InsufficientRowsError,
    SpreadsheetReadError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import setup_logging, resolve_level

__all__ = [
    "ReconciliationError",
    "EmptySourceError",
    "FormatError",
    "InsufficientRowsError",
    "SpreadsheetReadError",
    "ConfigurationError",
    "ReportGenerationError",
    "setup_logging",
    "resolve_level",
]
