from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import Workbook

from ledger_recon.models.transaction import LedgerEntry
from ledger_recon.parsers.layout import (
    LEDGER_HEADER_ROWS,
    BANK_HEADER_ROWS,
    BANK_FOOTER_ROWS,
)


def make_entry(day, name, amount) -> LedgerEntry:
    """Entry dated in January 2024 (day may be None for an unparseable date)."""
    return LedgerEntry(
        date=date(2024, 1, day) if day is not None else None,
        name=name,
        amount=Decimal(str(amount)),
    )


def ledger_row(txn_date, name, debit=None, credit=None, kind="Txn"):
    # Raw layout: type, date, name, debit, credit, account, balance.
    # Subtotal and balance lines leave the type cell empty.
    return [kind, txn_date, name, debit, credit, "1000-Bank", 0]


def bank_row(txn_date, name, withdrawal=None, deposit=None):
    # Raw layout: serial, value date, cheque, date, branch, ref, name, withdrawal, deposit, balance
    return [1, txn_date, "", txn_date, "BR01", "REF", name, withdrawal, deposit, 0]


def raw_ledger_table(rows):
    banner = [[f"Ledger report line {i}"] for i in range(LEDGER_HEADER_ROWS)]
    return banner + rows


def raw_bank_table(rows):
    header = [[f"Statement header {i}"] for i in range(BANK_HEADER_ROWS)]
    footer = [[f"Statement footer {i}"] for i in range(BANK_FOOTER_ROWS)]
    return header + rows + footer


def write_workbook(path: Path, sheets: dict) -> Path:
    """Write {sheet name: rows} to an .xlsx file."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def ledger_table():
    return raw_ledger_table(
        [
            ledger_row("05/01/2024", "Acme Co", debit="5,000.00"),
            ledger_row("", "Opening balance", debit="999", kind=""),
            ledger_row("08/01/2024", "Office Rent", credit="12,000"),
            ledger_row("09/01/2024", "Petty cash", debit="0"),
        ]
    )


@pytest.fixture
def bank_table():
    return raw_bank_table(
        [
            bank_row("06/01/2024", "ACME COMPANY", deposit="5,000.00"),
            bank_row("08/01/2024", "RENT JAN", withdrawal="12,000.00"),
            bank_row("10/01/2024", "BANK CHARGES", withdrawal="118.00"),
        ]
    )


@pytest.fixture
def gst_ledger_table():
    header = [["GST Report"], ["Date", "Party", "GSTIN"]]

    def line(name, gstin, cgst, sgst, igst):
        # Columns A..M: tax components sit in G, J and M
        return [
            "01/01/2024", name, gstin, None, None, None, cgst,
            None, None, sgst, None, None, igst,
        ]

    return header + [
        line("Alpha Traders", "29AAAAA0000A1Z5", 90, 90, 0),
        line("Alpha Traders Pvt", "29AAAAA0000A1Z5", 10, 10, 0),
        line("Beta Supplies", "27BBBBB1111B1Z2", 0, 0, 360),
        line("No GSTIN", "", 50, 50, 0),
        line("Gamma Ltd", "33CCCCC2222C1Z9", 25.5, 25.5, 0),
    ]


@pytest.fixture
def gst_filing_table():
    def line(gstin, tax):
        # Columns A..K: GSTIN in A, tax amount in K
        return [gstin, "INV", "01/01/2024", 1000, "KA", "N", 18, "B2B", 1000, 0, tax]

    return [
        line("29AAAAA0000A1Z5", 150),
        line("29AAAAA0000A1Z5", 50),
        line("27BBBBB1111B1Z2", 360),
        line("07DDDDD3333D1Z1", 72),
    ]
