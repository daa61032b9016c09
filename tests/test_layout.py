import pytest

from ledger_recon.config import LayoutConfig
from ledger_recon.models.transaction import SourceKind
from ledger_recon.parsers.layout import (
    BANK_HEADER,
    LEDGER_HEADER,
    is_blank,
    normalize,
    normalize_bank_statement,
    normalize_ledger_export,
)
from tests.conftest import bank_row, ledger_row, raw_bank_table, raw_ledger_table


class TestLedgerExport:
    def test_drops_banner_blank_dates_and_columns(self, ledger_table):
        result = normalize_ledger_export(ledger_table)

        assert result[0] == LEDGER_HEADER
        assert result[1:] == [
            ["05/01/2024", "Acme Co", "5,000.00", None],
            ["08/01/2024", "Office Rent", None, "12,000"],
            ["09/01/2024", "Petty cash", "0", None],
        ]

    def test_rows_with_blank_first_cell_are_dropped(self):
        table = raw_ledger_table(
            [
                ["   ", "01/01/2024", "Subtotal", "10", None, "", 0],
                [None, "01/01/2024", "Subtotal", "10", None, "", 0],
                [],
                ledger_row("01/01/2024", "Kept", debit="10"),
            ]
        )
        result = normalize_ledger_export(table)
        assert len(result) == 2
        assert result[1][1] == "Kept"

    def test_filters_on_first_raw_cell_before_dropping_columns(self):
        table = raw_ledger_table([ledger_row("01/01/2024", "Kept", debit="10", kind="Txn")])
        assert normalize_ledger_export(table)[1] == ["01/01/2024", "Kept", "10", None]

    def test_fewer_rows_than_banner_gives_header_only(self):
        assert normalize_ledger_export([["only"], ["three"], ["rows"]]) == [LEDGER_HEADER]

    def test_ragged_rows(self):
        table = raw_ledger_table([["Txn", "01/01/2024", "Short"]])
        assert normalize_ledger_export(table)[1] == ["01/01/2024", "Short"]


class TestBankStatement:
    def test_drops_header_footer_and_columns(self, bank_table):
        result = normalize_bank_statement(bank_table)

        assert result[0] == BANK_HEADER
        assert result[1:] == [
            ["06/01/2024", "ACME COMPANY", None, "5,000.00"],
            ["08/01/2024", "RENT JAN", "12,000.00", None],
            ["10/01/2024", "BANK CHARGES", "118.00", None],
        ]

    def test_ten_rows_gives_header_only(self):
        table = [[f"row {i}"] for i in range(10)]
        assert normalize_bank_statement(table) == [BANK_HEADER]

    def test_rows_between_header_and_footer_size_gives_header_only(self):
        # 40 rows: past the header offset but fewer than header + footer
        table = [[f"row {i}"] for i in range(40)]
        assert normalize_bank_statement(table) == [BANK_HEADER]

    def test_empty_table(self):
        assert normalize_bank_statement([]) == [BANK_HEADER]

    def test_zero_footer_keeps_trailing_rows(self):
        table = [["h"], bank_row("01/01/2024", "Last", deposit="5")]
        result = normalize_bank_statement(table, header_rows=1, footer_rows=0)
        assert result[1] == ["01/01/2024", "Last", None, "5"]


class TestNormalize:
    def test_dispatches_on_kind(self, ledger_table, bank_table):
        assert normalize(ledger_table, SourceKind.LEDGER_EXPORT)[0] == LEDGER_HEADER
        assert normalize(bank_table, SourceKind.BANK_STATEMENT)[0] == BANK_HEADER

    def test_layout_overrides(self):
        layout = LayoutConfig(bank_header_rows=1, bank_footer_rows=1)
        table = [["header"], bank_row("01/01/2024", "Middle", deposit="5"), ["footer"]]

        result = normalize(table, SourceKind.BANK_STATEMENT, layout)
        assert len(result) == 2
        assert result[1][1] == "Middle"

    def test_does_not_modify_input(self, bank_table):
        before = [list(r) for r in bank_table]
        normalize(bank_table, SourceKind.BANK_STATEMENT)
        assert bank_table == before


@pytest.mark.parametrize(
    "cell, expected",
    [(None, True), ("", True), ("  \t", True), (float("nan"), True), ("x", False), (0, False)],
)
def test_is_blank(cell, expected):
    assert is_blank(cell) is expected
