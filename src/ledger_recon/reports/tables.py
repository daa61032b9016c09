"""
Result tables.
Shapes reconciliation results into the named tables handed to the report writer.
"""

from typing import Any, Optional

from ..config import BankSheetsConfig, GstSheetsConfig
from ..models.table import ResultTable
from ..models.tax import GstReconciliationResult
from ..models.transaction import BankReconciliationResult, LedgerEntry, MatchResult

ENTRY_HEADERS = ["Date", "Name", "Amount"]
MATCHED_PAIR_HEADERS = [
    "Pass",
    "Ledger Date",
    "Ledger Name",
    "Ledger Amount",
    "Bank Date",
    "Bank Name",
    "Bank Amount",
    "Score",
]
MATCHING_GST_HEADERS = ["GST Number", "Name", "Filing Tax", "Ledger Tax", "Difference"]
FILING_ONLY_HEADERS = ["GST Number", "Tax"]
LEDGER_ONLY_HEADERS = ["GST Number", "Name", "Tax"]


def _entry_rows(entries: list[LedgerEntry]) -> list[list[Any]]:
    return [[e.display_date, e.name, e.amount] for e in entries]


def _pair_rows(label: str, run: MatchResult) -> list[list[Any]]:
    return [
        [
            label,
            source.display_date,
            source.name,
            source.amount,
            target.display_date,
            target.name,
            target.amount,
            round(score, 4),
        ]
        for source, target, score in run.matched_pairs
    ]


def bank_tables(
    result: BankReconciliationResult,
    sheets: Optional[BankSheetsConfig] = None,
) -> list[ResultTable]:
    """
    Build the enabled bank reconciliation tables.

    Args:
        result: Bank reconciliation result
        sheets: Sheet names and switches; defaults when omitted

    Returns:
        Tables in report order
    """
    sheets = sheets or BankSheetsConfig()
    tables: list[ResultTable] = []

    unmatched = [
        (sheets.unmatched_ledger_debits, result.unmatched_ledger_debits),
        (sheets.unmatched_ledger_credits, result.unmatched_ledger_credits),
        (sheets.unmatched_bank_deposits, result.unmatched_bank_deposits),
        (sheets.unmatched_bank_withdrawals, result.unmatched_bank_withdrawals),
    ]
    for sheet, entries in unmatched:
        if sheet.enabled:
            tables.append(ResultTable(sheet.name, list(ENTRY_HEADERS), _entry_rows(entries)))

    if sheets.matched_pairs.enabled:
        rows = _pair_rows("Debit / Deposit", result.debit_run) + _pair_rows(
            "Credit / Withdrawal", result.credit_run
        )
        tables.append(ResultTable(sheets.matched_pairs.name, list(MATCHED_PAIR_HEADERS), rows))

    return tables


def gst_tables(
    result: GstReconciliationResult,
    sheets: Optional[GstSheetsConfig] = None,
) -> list[ResultTable]:
    """
    Build the enabled GST comparison tables.

    Args:
        result: GST comparison result
        sheets: Sheet names and switches; defaults when omitted

    Returns:
        Tables in report order
    """
    sheets = sheets or GstSheetsConfig()
    tables: list[ResultTable] = []

    if sheets.matching.enabled:
        rows = [
            [m.tax_id, m.name, m.filing_tax, m.ledger_tax, m.difference]
            for m in result.matching
        ]
        tables.append(ResultTable(sheets.matching.name, list(MATCHING_GST_HEADERS), rows))

    if sheets.filing_only.enabled:
        rows = [[r.tax_id, r.total_tax] for r in result.filing_only]
        tables.append(ResultTable(sheets.filing_only.name, list(FILING_ONLY_HEADERS), rows))

    if sheets.ledger_only.enabled:
        rows = [[r.tax_id, r.name or "", r.total_tax] for r in result.ledger_only]
        tables.append(ResultTable(sheets.ledger_only.name, list(LEDGER_ONLY_HEADERS), rows))

    return tables


def bank_summary_rows(result: BankReconciliationResult) -> list[tuple[str, Any]]:
    """Label/value pairs describing a bank reconciliation."""
    s = result.summary
    return [
        ("Ledger Debits:", s.ledger_debit_count),
        ("Ledger Credits:", s.ledger_credit_count),
        ("Bank Deposits:", s.bank_deposit_count),
        ("Bank Withdrawals:", s.bank_withdrawal_count),
        ("Ledger Debit Total:", s.ledger_debit_total),
        ("Ledger Credit Total:", s.ledger_credit_total),
        ("Bank Deposit Total:", s.bank_deposit_total),
        ("Bank Withdrawal Total:", s.bank_withdrawal_total),
        ("Debit / Deposit Matches:", s.debit_deposit_matches),
        ("Credit / Withdrawal Matches:", s.credit_withdrawal_matches),
        ("Unmatched Ledger Debits:", s.unmatched_ledger_debits),
        ("Unmatched Ledger Credits:", s.unmatched_ledger_credits),
        ("Unmatched Bank Deposits:", s.unmatched_bank_deposits),
        ("Unmatched Bank Withdrawals:", s.unmatched_bank_withdrawals),
    ]


def gst_summary_rows(result: GstReconciliationResult) -> list[tuple[str, Any]]:
    """Label/value pairs describing a GST comparison."""
    s = result.summary
    rows: list[tuple[str, Any]] = []
    if s is not None:
        rows += [
            ("GST Numbers in Filing:", s.total_filing),
            ("GST Numbers in Ledger:", s.total_ledger),
            ("Matching:", s.matching_count),
            ("Matching With Equal Tax:", sum(1 for m in result.matching if m.is_exact)),
            ("Only in Filing:", s.filing_only_count),
            ("Only in Ledger:", s.ledger_only_count),
        ]
    if result.filing_statistics is not None:
        stats = result.filing_statistics
        rows.append(("Distinct Filing GST Numbers:", stats.unique_tax_ids))
        rows.append(("Filing Tax Total:", stats.total_tax))
    return rows
