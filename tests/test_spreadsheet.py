from datetime import datetime

import pytest
from openpyxl import Workbook

from ledger_recon.parsers.spreadsheet import read_table
from ledger_recon.utils.exceptions import EmptySourceError, SpreadsheetReadError
from tests.conftest import write_workbook


def test_reads_first_sheet_with_blanks_as_none(tmp_path):
    path = write_workbook(
        tmp_path / "ledger.xlsx",
        {
            "Report": [
                ["Title", None, None],
                [datetime(2024, 1, 5), "Acme Co", 5000],
                ["x", None, "12.50"],
            ],
            "Other": [["ignored"]],
        },
    )

    rows = read_table(path)

    assert len(rows) == 3
    assert rows[0][0] == "Title"
    assert rows[0][1] is None
    assert rows[1][1] == "Acme Co"
    assert rows[1][2] == 5000
    assert rows[2][1] is None


def test_reads_named_sheet(tmp_path):
    path = write_workbook(
        tmp_path / "gstr2b.xlsx",
        {"Read me": [["notes"]], "B2B": [["29AAAAA0000A1Z5", 150]]},
    )
    assert read_table(path, "B2B") == [["29AAAAA0000A1Z5", 150]]


def test_missing_sheet(tmp_path):
    path = write_workbook(tmp_path / "gstr2b.xlsx", {"B2BA": [["x"]]})
    with pytest.raises(EmptySourceError, match="B2B sheet not found"):
        read_table(path, "B2B")


def test_empty_sheet(tmp_path):
    path = tmp_path / "empty.xlsx"
    Workbook().save(path)
    with pytest.raises(EmptySourceError):
        read_table(path)


def test_reads_csv(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("a,b,c\n05/01/2024,Acme,\"5,000.00\"\n")

    rows = read_table(path)

    assert rows == [["a", "b", "c"], ["05/01/2024", "Acme", "5,000.00"]]


def test_reads_csv_with_narrow_banner_lines(tmp_path):
    path = tmp_path / "statement.csv"
    banner = [f"Statement header {i}" for i in range(17)]
    transaction = "1,06/01/2024,,06/01/2024,BR01,REF,ACME COMPANY,,\"5,000.00\",0"
    footer = [f"Statement footer {i}" for i in range(38)]
    path.write_text("\n".join(banner + [transaction] + footer) + "\n")

    rows = read_table(path)

    assert len(rows) == 56
    assert all(len(row) == 10 for row in rows)
    assert rows[0] == ["Statement header 0"] + [None] * 9
    assert rows[17][6] == "ACME COMPANY"
    assert rows[17][8] == "5,000.00"


def test_empty_csv(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("")
    with pytest.raises(EmptySourceError):
        read_table(path)


def test_unsupported_file_type(tmp_path):
    path = tmp_path / "statement.pdf"
    path.write_bytes(b"%PDF")
    with pytest.raises(SpreadsheetReadError):
        read_table(path)


def test_corrupt_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a zip file")
    with pytest.raises(SpreadsheetReadError):
        read_table(path)


def test_corrupt_xls_workbook(tmp_path):
    path = tmp_path / "statement.xls"
    path.write_text("not an excel file")
    with pytest.raises(SpreadsheetReadError):
        read_table(path)
