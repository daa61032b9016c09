"""
Excel report generator for reconciliation results.
Creates multi-sheet workbooks with formatted output.
"""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config import ReconConfig, SheetConfig
from ..models.table import ResultTable
from ..models.tax import GstReconciliationResult
from ..models.transaction import BankReconciliationResult
from ..utils.exceptions import ReportGenerationError
from .tables import bank_tables, bank_summary_rows, gst_tables, gst_summary_rows

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
AMOUNT_FORMAT = "#,##0.00"
DATE_FORMAT = "yyyy-mm-dd"


class ExcelReportGenerator:
    """Writes named result tables to a multi-sheet workbook."""

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config or ReconConfig()

    def generate_bank_report(
        self, result: BankReconciliationResult, output_path: Path
    ) -> Path:
        """Write the bank reconciliation workbook."""
        sheets = self.config.output.bank_sheets
        return self.generate_report(
            tables=bank_tables(result, sheets),
            output_path=output_path,
            title="Bank Reconciliation Summary",
            summary_rows=bank_summary_rows(result),
            summary_sheet=sheets.summary,
        )

    def generate_gst_report(
        self, result: GstReconciliationResult, output_path: Path
    ) -> Path:
        """Write the GST comparison workbook."""
        sheets = self.config.output.gst_sheets
        return self.generate_report(
            tables=gst_tables(result, sheets),
            output_path=output_path,
            title="GST B2B Reconciliation Summary",
            summary_rows=gst_summary_rows(result),
            summary_sheet=sheets.summary,
        )

    def generate_report(
        self,
        tables: list[ResultTable],
        output_path: Path,
        title: str = "Reconciliation Summary",
        summary_rows: Optional[list[tuple[str, Any]]] = None,
        summary_sheet: Optional[SheetConfig] = None,
    ) -> Path:
        """
        Generate a workbook from result tables.

        Args:
            tables: Tables to write, one sheet each, in order
            output_path: Path for output file
            title: Heading of the summary sheet
            summary_rows: Label/value pairs for the summary sheet
            summary_sheet: Summary sheet name and switch

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be saved
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()

        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        if summary_rows is not None and (summary_sheet is None or summary_sheet.enabled):
            name = summary_sheet.name if summary_sheet else "Summary"
            self._create_summary_sheet(wb, name, title, summary_rows)

        for table in tables:
            self._create_table_sheet(wb, table)

        # A workbook needs at least one sheet
        if not wb.sheetnames:
            wb.create_sheet("Summary")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            logger.error(f"Failed to save report: {e}")
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path

    def _create_summary_sheet(
        self,
        wb: Workbook,
        sheet_name: str,
        title: str,
        rows: list[tuple[str, Any]],
    ) -> None:
        """Create the summary sheet with key metrics."""
        ws = wb.create_sheet(sheet_name)

        ws["A1"] = title
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        ws["A2"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"

        for i, (label, value) in enumerate(rows, start=4):
            ws[f"A{i}"] = label
            self._write_value(ws.cell(row=i, column=2), value)

        ws.column_dimensions["A"].width = 32
        ws.column_dimensions["B"].width = 20

    def _create_table_sheet(self, wb: Workbook, table: ResultTable) -> None:
        """Create one sheet holding a header row and the table rows."""
        ws = wb.create_sheet(table.name)

        for col, header in enumerate(table.headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

        for row_num, row in enumerate(table.rows, start=2):
            for col, value in enumerate(row, start=1):
                cell = ws.cell(row=row_num, column=col)
                self._write_value(cell, value)
                cell.border = THIN_BORDER

        self._auto_fit_columns(ws)

    @staticmethod
    def _write_value(cell, value: Any) -> None:
        """Write a value, converting decimals and formatting amounts and dates."""
        if isinstance(value, Decimal):
            cell.value = float(value)
            cell.number_format = AMOUNT_FORMAT
        elif isinstance(value, (date, datetime)):
            cell.value = value
            cell.number_format = DATE_FORMAT
        else:
            cell.value = value

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            max_length = 0
            column = column_cells[0].column_letter

            for cell in column_cells:
                if cell.value is not None:
                    max_length = max(max_length, len(str(cell.value)))

            ws.column_dimensions[column].width = min(max_length + 2, 50)
