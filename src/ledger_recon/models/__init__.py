"""Data models for reconciliation."""

from .transaction import (
    SourceKind,
    EntryKind,
    LedgerEntry,
    MatchCandidate,
    MatchResult,
    BankReconciliationSummary,
    BankReconciliationResult,
)
from .tax import (
    TaxLine,
    TaxRecord,
    MatchingTaxRecord,
    ReconciliationSummary,
    AggregateStatistics,
    GstReconciliationResult,
)
from .table import ResultTable

__all__ = [
    "SourceKind",
    "EntryKind",
    "LedgerEntry",
    "MatchCandidate",
    "MatchResult",
    "BankReconciliationSummary",
    "BankReconciliationResult",
    "TaxLine",
    "TaxRecord",
    "MatchingTaxRecord",
    "ReconciliationSummary",
    "AggregateStatistics",
    "GstReconciliationResult",
    "ResultTable",
]
