"""
GST reconciler.
Compares aggregated ledger and filing totals by exact tax ID.
"""

from typing import Optional
import logging

from ..models.tax import (
    GstReconciliationResult,
    MatchingTaxRecord,
    ReconciliationSummary,
    TaxRecord,
)
from .aggregator import round_money

logger = logging.getLogger(__name__)


class GstReconciler:
    """
    Partitions tax IDs into matching, filing-only and ledger-only.

    IDs are compared by exact equality after trimming. A matching ID is
    reported with both totals and their difference, whether or not the
    totals agree.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def reconcile(
        self,
        ledger_records: list[TaxRecord],
        filing_records: list[TaxRecord],
    ) -> GstReconciliationResult:
        """
        Compare ledger and filing aggregates.

        Args:
            ledger_records: Aggregated ledger records (with names)
            filing_records: Aggregated filing records

        Returns:
            Matching, filing-only and ledger-only partitions with a summary
        """
        filing_map = {r.tax_id.strip(): r.total_tax for r in filing_records}
        ledger_map = {r.tax_id.strip(): r for r in ledger_records}

        result = GstReconciliationResult()

        # Partitions are ordered by tax ID whatever order the records arrive in
        for tax_id in sorted(filing_map):
            filing_tax = filing_map[tax_id]
            ledger_record = ledger_map.get(tax_id)
            if ledger_record is None:
                result.filing_only.append(TaxRecord(tax_id=tax_id, total_tax=filing_tax))
                continue

            result.matching.append(
                MatchingTaxRecord(
                    tax_id=tax_id,
                    name=ledger_record.name or "",
                    filing_tax=filing_tax,
                    ledger_tax=ledger_record.total_tax,
                    difference=round_money(filing_tax - ledger_record.total_tax),
                )
            )

        for tax_id in sorted(ledger_map):
            ledger_record = ledger_map[tax_id]
            if tax_id not in filing_map:
                result.ledger_only.append(
                    TaxRecord(
                        tax_id=tax_id,
                        total_tax=ledger_record.total_tax,
                        name=ledger_record.name,
                    )
                )

        result.summary = ReconciliationSummary(
            total_filing=len(filing_map),
            total_ledger=len(ledger_map),
            matching_count=len(result.matching),
            filing_only_count=len(result.filing_only),
            ledger_only_count=len(result.ledger_only),
        )

        self.logger.info(
            f"GST comparison: {result.summary.matching_count} matching, "
            f"{result.summary.filing_only_count} only in filing, "
            f"{result.summary.ledger_only_count} only in ledger"
        )
        return result
