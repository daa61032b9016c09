"""Result tables and Excel report generation."""

from .excel_generator import ExcelReportGenerator
from .tables import bank_tables, gst_tables

__all__ = ["ExcelReportGenerator", "bank_tables", "gst_tables"]
