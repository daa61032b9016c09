"""Data models for GST aggregation and comparison."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TaxLine:
    """One raw tax line before aggregation."""

    tax_id: str
    tax: Decimal
    name: Optional[str] = None


@dataclass(frozen=True)
class TaxRecord:
    """
    Total tax for one distinct tax ID from one source.

    total_tax is the sum of every line sharing the ID, rounded to 2 places
    once at aggregation time.
    """

    tax_id: str
    total_tax: Decimal

    # Ledger side only: counterparty name from the first line with this ID
    name: Optional[str] = None


@dataclass(frozen=True)
class MatchingTaxRecord:
    """A tax ID present in both the filing and the ledger."""

    tax_id: str
    name: str
    filing_tax: Decimal
    ledger_tax: Decimal
    difference: Decimal

    @property
    def is_exact(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class ReconciliationSummary:
    """Counts from a GST comparison."""

    total_filing: int
    total_ledger: int
    matching_count: int
    filing_only_count: int
    ledger_only_count: int


@dataclass(frozen=True)
class AggregateStatistics:
    """Distinct ID count and tax sum for one aggregated source."""

    unique_tax_ids: int
    total_tax: Decimal


@dataclass
class GstReconciliationResult:
    """Partitions of a GST comparison."""

    matching: list[MatchingTaxRecord] = field(default_factory=list)
    filing_only: list[TaxRecord] = field(default_factory=list)
    ledger_only: list[TaxRecord] = field(default_factory=list)
    summary: Optional[ReconciliationSummary] = None
    filing_statistics: Optional[AggregateStatistics] = None
