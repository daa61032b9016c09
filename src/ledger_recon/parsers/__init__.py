"""Readers and normalizers for ledger, bank statement and GST sources."""

from .layout import normalize, normalize_ledger_export, normalize_bank_statement
from .extractor import TransactionExtractor, parse_amount
from .gst_parser import GstParser
from .spreadsheet import read_table

__all__ = [
    "normalize",
    "normalize_ledger_export",
    "normalize_bank_statement",
    "TransactionExtractor",
    "parse_amount",
    "GstParser",
    "read_table",
]
