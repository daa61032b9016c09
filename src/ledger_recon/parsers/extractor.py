"""
Transaction extractor.
Turns normalized four-column tables into typed entries split by kind.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence
import logging

import pandas as pd

from ..models.transaction import EntryKind, LedgerEntry
from .layout import CellTable, is_blank

logger = logging.getLogger(__name__)

DATE_COLUMN = 0
NAME_COLUMN = 1
# Debit / withdrawal column and credit / deposit column of a normalized table
OUTFLOW_COLUMN = 2
INFLOW_COLUMN = 3

# Excel stores dates as days since this origin
EXCEL_EPOCH = "1899-12-30"
# Serial number of 9999-12-31, the last date Excel can represent
EXCEL_MAX_SERIAL = 2958465

ZERO = Decimal("0")


def parse_amount(value: Any) -> Decimal:
    """
    Parse an amount cell.

    Thousands separators are stripped; missing or unparseable values
    become zero.

    Args:
        value: Cell value (number, text or None)

    Returns:
        Decimal amount
    """
    if is_blank(value) or isinstance(value, bool):
        return ZERO

    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    else:
        text = str(value).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError):
        return ZERO

    if not amount.is_finite():
        return ZERO
    return amount


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


class TransactionExtractor:
    """
    Extracts dated, named, positive amounts from normalized tables.

    Entries whose amount is zero, negative or unparseable are dropped.
    Dates are only needed to day granularity.
    """

    def __init__(
        self,
        date_formats: Optional[list[str]] = None,
        dayfirst: bool = True,
    ):
        """
        Initialize the extractor.

        Args:
            date_formats: strptime formats tried before the pandas fallback
            dayfirst: Whether ambiguous dates put the day first
        """
        self.date_formats = date_formats or []
        self.dayfirst = dayfirst

    def extract_ledger_entries(
        self, table: CellTable
    ) -> tuple[list[LedgerEntry], list[LedgerEntry]]:
        """
        Extract ledger debits and credits from a normalized ledger table.

        Returns:
            Tuple of (debits, credits)
        """
        debits = self.extract(table, OUTFLOW_COLUMN, EntryKind.LEDGER_DEBIT)
        credits = self.extract(table, INFLOW_COLUMN, EntryKind.LEDGER_CREDIT)
        return debits, credits

    def extract_bank_entries(
        self, table: CellTable
    ) -> tuple[list[LedgerEntry], list[LedgerEntry]]:
        """
        Extract bank withdrawals and deposits from a normalized bank table.

        Returns:
            Tuple of (withdrawals, deposits)
        """
        withdrawals = self.extract(table, OUTFLOW_COLUMN, EntryKind.BANK_WITHDRAWAL)
        deposits = self.extract(table, INFLOW_COLUMN, EntryKind.BANK_DEPOSIT)
        return withdrawals, deposits

    def extract(
        self, table: CellTable, amount_column: int, kind: EntryKind
    ) -> list[LedgerEntry]:
        """
        Extract entries with a positive amount in one column.

        Args:
            table: Normalized table including its header row
            amount_column: Column holding the amount
            kind: Kind of entry being extracted, for logging

        Returns:
            Entries in table order
        """
        entries: list[LedgerEntry] = []

        for row_num, row in enumerate(table[1:], start=1):
            amount = parse_amount(_cell(row, amount_column))
            if amount <= 0:
                continue

            date_cell = _cell(row, DATE_COLUMN)
            entry_date = self.parse_date(date_cell)
            if entry_date is None:
                logger.debug(f"{kind.value} row {row_num}: unparseable date {date_cell!r}")

            name_cell = _cell(row, NAME_COLUMN)
            entries.append(
                LedgerEntry(
                    date=entry_date,
                    name="" if is_blank(name_cell) else str(name_cell).strip(),
                    amount=amount,
                    date_text="" if is_blank(date_cell) else str(date_cell).strip(),
                )
            )

        logger.debug(f"Extracted {len(entries)} {kind.value} entries")
        return entries

    def parse_date(self, value: Any) -> Optional[date]:
        """
        Parse a date cell to a calendar date.

        Args:
            value: Date value (datetime, Excel serial number or text)

        Returns:
            Python date object or None
        """
        if is_blank(value) or isinstance(value, bool):
            return None

        if isinstance(value, datetime):
            if pd.isna(value):
                return None
            return value.date()
        if isinstance(value, date):
            return value

        if isinstance(value, (int, float)):
            if not 0 < value <= EXCEL_MAX_SERIAL:
                return None
            return pd.to_datetime(int(value), unit="D", origin=EXCEL_EPOCH).date()

        text = str(value).strip()
        for fmt in self.date_formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        # Try pandas parser as fallback
        try:
            parsed = pd.to_datetime(text, dayfirst=self.dayfirst)
        except (ValueError, TypeError, OverflowError):
            return None
        if pd.isna(parsed):
            return None
        return parsed.date()
