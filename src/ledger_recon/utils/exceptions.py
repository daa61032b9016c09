"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class EmptySourceError(ReconciliationError):
    """No sheet or no rows found in a source."""

    pass


class FormatError(ReconciliationError):
    """Required column missing, or non-numeric where a number is expected."""

    pass


class InsufficientRowsError(ReconciliationError):
    """Source has fewer rows than a fixed offset requires."""

    pass


class SpreadsheetReadError(ReconciliationError):
    """Error reading a spreadsheet file."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error generating Excel report."""

    pass
