"""
Spreadsheet reader.
Loads the first (or a named) sheet of a workbook or CSV file into a cell table.
"""

from pathlib import Path
from typing import Optional
from zipfile import BadZipFile
import csv
import logging

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError
from xlrd.compdoc import CompDocError

from ..utils.exceptions import EmptySourceError, SpreadsheetReadError
from .layout import CellTable

logger = logging.getLogger(__name__)

# Reader engine per workbook extension
EXCEL_ENGINES = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xls": "xlrd",
}

READ_ERRORS = (
    OSError,
    ValueError,
    BadZipFile,
    InvalidFileException,
    XLRDError,
    CompDocError,
    csv.Error,
)


def _frame_to_cells(df: pd.DataFrame) -> CellTable:
    """Convert a header-less DataFrame to rows of cells, blanks as None."""
    df = df.astype(object).where(df.notna(), None)
    return [list(row) for row in df.itertuples(index=False, name=None)]


def _csv_width(file_path: Path) -> int:
    """Number of fields in the widest line of a CSV file."""
    with open(file_path, newline="", encoding="utf-8") as f:
        return max((len(row) for row in csv.reader(f)), default=0)


def _read_csv(file_path: Path) -> pd.DataFrame:
    # Banner and footer lines are narrower than transaction lines, so the
    # column count comes from the widest line rather than the first one.
    width = _csv_width(file_path)
    if width == 0:
        raise EmptySourceError(f"File is empty: {file_path.name}")
    return pd.read_csv(
        file_path,
        header=None,
        names=list(range(width)),
        dtype=str,
        skip_blank_lines=False,
        engine="python",
    )


def _read_workbook(file_path: Path, sheet_name: Optional[str]) -> pd.DataFrame:
    engine = EXCEL_ENGINES[file_path.suffix.lower()]
    with pd.ExcelFile(file_path, engine=engine) as workbook:
        if not workbook.sheet_names:
            raise EmptySourceError(f"No sheets found in the workbook: {file_path.name}")
        if sheet_name is None:
            sheet_name = workbook.sheet_names[0]
        elif sheet_name not in workbook.sheet_names:
            raise EmptySourceError(f"{sheet_name} sheet not found in the workbook")
        return workbook.parse(sheet_name, header=None, dtype=object)


def read_table(file_path: Path, sheet_name: Optional[str] = None) -> CellTable:
    """
    Read a spreadsheet into a cell table.

    No header row is inferred: every row of the sheet is returned. CSV rows
    shorter than the widest row are padded with None.

    Args:
        file_path: Path to a .xlsx/.xlsm/.xls workbook or a .csv file
        sheet_name: Sheet to read; the first sheet when omitted

    Returns:
        Rows of cell values

    Raises:
        EmptySourceError: If the workbook has no such sheet, or the sheet is empty
        SpreadsheetReadError: If the file cannot be read
    """
    logger.info(f"Reading spreadsheet: {file_path}")
    suffix = file_path.suffix.lower()

    try:
        if suffix == ".csv":
            df = _read_csv(file_path)
        elif suffix in EXCEL_ENGINES:
            df = _read_workbook(file_path, sheet_name)
        else:
            raise SpreadsheetReadError(f"Unsupported file type: {file_path.suffix}")
    except pd.errors.EmptyDataError as e:
        raise EmptySourceError(f"File is empty: {file_path.name}") from e
    except READ_ERRORS as e:
        logger.error(f"Failed to read spreadsheet: {e}")
        raise SpreadsheetReadError(f"Failed to read {file_path.name}: {e}") from e

    cells = _frame_to_cells(df)
    if not cells:
        raise EmptySourceError(f"No rows found in {file_path.name}")

    logger.info(f"Read {len(cells)} rows from {file_path.name}")
    return cells
