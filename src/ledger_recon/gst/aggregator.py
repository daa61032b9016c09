"""
GST aggregator.
Reduces raw tax lines to one rounded total per tax ID.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import logging

from ..models.tax import AggregateStatistics, TaxLine, TaxRecord

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class GstAggregator:
    """Totals tax lines per distinct, non-blank tax ID."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def aggregate(self, lines: list[TaxLine], with_names: bool = False) -> list[TaxRecord]:
        """
        Aggregate tax lines by tax ID.

        Totals are summed exactly and rounded once per ID.

        Args:
            lines: Raw tax lines from one source
            with_names: Carry the name of the first line seen for each ID

        Returns:
            One record per tax ID, ordered by tax ID
        """
        totals: dict[str, Decimal] = {}
        names: dict[str, str] = {}
        skipped = 0

        for line in lines:
            tax_id = (line.tax_id or "").strip()
            if not tax_id:
                skipped += 1
                continue

            totals[tax_id] = totals.get(tax_id, Decimal("0")) + line.tax
            if with_names and tax_id not in names:
                names[tax_id] = line.name or ""

        records = [
            TaxRecord(
                tax_id=tax_id,
                total_tax=round_money(totals[tax_id]),
                name=names.get(tax_id) if with_names else None,
            )
            for tax_id in sorted(totals)
        ]

        self.logger.debug(
            f"Aggregated {len(lines)} lines into {len(records)} tax IDs "
            f"({skipped} lines without a tax ID)"
        )
        return records

    @staticmethod
    def statistics(records: list[TaxRecord]) -> AggregateStatistics:
        """Distinct ID count and rounded tax sum of aggregated records."""
        total = sum((r.total_tax for r in records), Decimal("0"))
        return AggregateStatistics(unique_tax_ids=len(records), total_tax=round_money(total))
