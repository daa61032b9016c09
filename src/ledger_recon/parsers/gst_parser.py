"""
GST line parser.
Reads per-line tax records from the ledger GST report and the B2B filing extract.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, TYPE_CHECKING
import logging

from openpyxl.utils import column_index_from_string

from ..models.tax import TaxLine
from ..utils.exceptions import EmptySourceError, FormatError, InsufficientRowsError
from .extractor import parse_amount
from .layout import CellTable, is_blank

if TYPE_CHECKING:
    from ..config import GstConfig

logger = logging.getLogger(__name__)


def column_index(letter: str) -> int:
    """Zero-based position of a spreadsheet column letter."""
    return column_index_from_string(letter.upper()) - 1


def is_numeric_cell(value: Any) -> bool:
    """True for numbers and text that reads as a number."""
    if is_blank(value) or isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True

    text = str(value).replace(",", "").strip()
    try:
        return Decimal(text).is_finite()
    except (InvalidOperation, ValueError):
        return False


def _text(row: list[Any], index: int) -> str:
    value = row[index] if index < len(row) else None
    return "" if is_blank(value) else str(value).strip()


def _number(row: list[Any], index: int) -> Decimal:
    return parse_amount(row[index] if index < len(row) else None)


class GstParser:
    """Parses raw GST tables into unaggregated tax lines."""

    def __init__(self, config: Optional["GstConfig"] = None):
        """
        Initialize the parser.

        Args:
            config: GST column layout; template defaults when omitted
        """
        if config is None:
            from ..config import GstConfig

            config = GstConfig()
        self.config = config

    def parse_ledger(self, table: CellTable) -> list[TaxLine]:
        """
        Parse the ledger GST report.

        Each line's tax is the sum of the configured tax columns; each
        column is coerced to a number, or zero.

        Args:
            table: Raw cell table of the ledger report

        Returns:
            One tax line per data row, including rows with a blank tax ID

        Raises:
            InsufficientRowsError: If the table has no rows past its header
        """
        header_rows = self.config.ledger_header_rows
        if len(table) < header_rows + 1:
            raise InsufficientRowsError(
                f"Ledger GST report does not have enough rows: "
                f"expected at least {header_rows + 1}, found {len(table)}"
            )

        name_col = column_index(self.config.ledger_name_column)
        tax_id_col = column_index(self.config.ledger_tax_id_column)
        tax_cols = [column_index(c) for c in self.config.ledger_tax_columns]

        lines: list[TaxLine] = []
        for row in table[header_rows:]:
            tax = sum((_number(row, c) for c in tax_cols), Decimal("0"))
            lines.append(
                TaxLine(
                    tax_id=_text(row, tax_id_col),
                    tax=tax,
                    name=_text(row, name_col),
                )
            )

        logger.debug(f"Parsed {len(lines)} ledger GST lines")
        return lines

    def parse_filing(self, table: CellTable) -> list[TaxLine]:
        """
        Parse the B2B filing extract.

        Args:
            table: Raw cell table of the B2B sheet

        Returns:
            One tax line per data row, including rows with a blank tax ID

        Raises:
            EmptySourceError: If the table has no data rows
            FormatError: If the first row's tax cell is not numeric
        """
        rows = table[self.config.filing_header_rows:]
        if not rows:
            raise EmptySourceError("Filing extract is empty")

        tax_id_col = column_index(self.config.filing_tax_id_column)
        tax_col = column_index(self.config.filing_tax_column)

        first = rows[0]
        first_tax = first[tax_col] if tax_col < len(first) else None
        if not is_numeric_cell(first_tax):
            raise FormatError(
                f"Invalid GST file format: Column {self.config.filing_tax_column} "
                f"(Tax Amount) must contain numbers"
            )

        lines = [
            TaxLine(tax_id=_text(row, tax_id_col), tax=_number(row, tax_col))
            for row in rows
        ]

        logger.debug(f"Parsed {len(lines)} filing GST lines")
        return lines
