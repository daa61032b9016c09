"""
Layout normalizer for raw ledger export and bank statement tables.
Strips template header/footer rows and unused columns, yielding a uniform
four-column table per source.
"""

from typing import Any, Optional, Sequence, TYPE_CHECKING
import logging

from ..models.transaction import SourceKind

if TYPE_CHECKING:
    from ..config import LayoutConfig

logger = logging.getLogger(__name__)

CellTable = list[list[Any]]

# Ledger export ("transaction report") template: an 8-row report banner
# precedes the column headings and data.
LEDGER_HEADER_ROWS = 8
# Columns removed from each ledger row: report metadata and running balance.
LEDGER_DROPPED_COLUMNS = (0, 5, 6)

# Bank statement template: account details occupy the first 17 rows and
# the closing balance plus legal boilerplate the last 38.
BANK_HEADER_ROWS = 17
BANK_FOOTER_ROWS = 38
# Columns removed from each bank row: statement metadata and running balance.
BANK_DROPPED_COLUMNS = (0, 1, 2, 4, 5, 9)

LEDGER_HEADER = ["Date", "Name", "Debit", "Credit"]
BANK_HEADER = ["Date", "Name", "Withdrawal", "Deposit"]


def is_blank(cell: Any) -> bool:
    """True for missing cells, NaN and whitespace-only text."""
    if cell is None:
        return True
    if isinstance(cell, float) and cell != cell:
        return True
    return isinstance(cell, str) and not cell.strip()


def _drop_columns(row: Sequence[Any], dropped: Sequence[int]) -> list[Any]:
    dropped_set = set(dropped)
    return [cell for i, cell in enumerate(row) if i not in dropped_set]


def normalize_ledger_export(
    table: CellTable,
    header_rows: int = LEDGER_HEADER_ROWS,
    dropped_columns: Sequence[int] = LEDGER_DROPPED_COLUMNS,
) -> CellTable:
    """
    Normalize a raw ledger export.

    Drops the report banner, then every row whose first cell is blank
    (subtotal and balance lines carry no transaction), then the unused columns.

    Args:
        table: Raw cell table
        header_rows: Number of leading rows to drop
        dropped_columns: Column positions removed from each row

    Returns:
        Table with a [Date, Name, Debit, Credit] header row
    """
    data_rows = table[header_rows:]
    dated_rows = [row for row in data_rows if row and not is_blank(row[0])]

    normalized = [_drop_columns(row, dropped_columns) for row in dated_rows]
    logger.debug(
        f"Ledger export: {len(table)} raw rows, {len(normalized)} dated rows kept"
    )
    return [list(LEDGER_HEADER)] + normalized


def normalize_bank_statement(
    table: CellTable,
    header_rows: int = BANK_HEADER_ROWS,
    footer_rows: int = BANK_FOOTER_ROWS,
    dropped_columns: Sequence[int] = BANK_DROPPED_COLUMNS,
) -> CellTable:
    """
    Normalize a raw bank statement.

    Drops the statement header and footer and the unused columns. A table
    shorter than header plus footer yields the header row only.

    Args:
        table: Raw cell table
        header_rows: Number of leading rows to drop
        footer_rows: Number of trailing rows to drop
        dropped_columns: Column positions removed from each row

    Returns:
        Table with a [Date, Name, Withdrawal, Deposit] header row
    """
    end = max(len(table) - footer_rows, 0)
    data_rows = table[header_rows:end]

    normalized = [_drop_columns(row, dropped_columns) for row in data_rows]
    logger.debug(
        f"Bank statement: {len(table)} raw rows, {len(normalized)} data rows kept"
    )
    return [list(BANK_HEADER)] + normalized


def normalize(
    table: CellTable,
    kind: SourceKind,
    layout: Optional["LayoutConfig"] = None,
) -> CellTable:
    """
    Normalize a raw table according to its source kind.

    Args:
        table: Raw cell table
        kind: Which template the table follows
        layout: Optional offsets overriding the template defaults

    Returns:
        Four-column normalized table including its header row
    """
    if kind == SourceKind.LEDGER_EXPORT:
        if layout is None:
            return normalize_ledger_export(table)
        return normalize_ledger_export(
            table,
            header_rows=layout.ledger_header_rows,
            dropped_columns=layout.ledger_dropped_columns,
        )

    if kind == SourceKind.BANK_STATEMENT:
        if layout is None:
            return normalize_bank_statement(table)
        return normalize_bank_statement(
            table,
            header_rows=layout.bank_header_rows,
            footer_rows=layout.bank_footer_rows,
            dropped_columns=layout.bank_dropped_columns,
        )

    raise ValueError(f"Unsupported source kind: {kind}")
