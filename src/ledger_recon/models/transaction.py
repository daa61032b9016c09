"""Data models for bank reconciliation entries and results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class SourceKind(Enum):
    """Layout of a raw source table."""

    LEDGER_EXPORT = "ledger_export"
    BANK_STATEMENT = "bank_statement"


class EntryKind(Enum):
    """Which amount column an entry was extracted from."""

    LEDGER_DEBIT = "ledger_debit"
    LEDGER_CREDIT = "ledger_credit"
    BANK_WITHDRAWAL = "bank_withdrawal"
    BANK_DEPOSIT = "bank_deposit"


@dataclass(frozen=True)
class LedgerEntry:
    """
    A single dated, named, positive amount from a ledger export or bank statement.

    Both sides of a match use this model; the kind is carried by the list
    the entry was extracted into.
    """

    # None when the source date cell could not be parsed
    date: Optional[date]

    name: str

    # Always positive; zero and blank amounts are dropped at extraction
    amount: Decimal

    # Original date cell text, kept for reporting unparseable dates
    date_text: str = ""

    @property
    def display_date(self):
        """Date for output tables, falling back to the source text."""
        return self.date if self.date is not None else self.date_text


@dataclass(frozen=True)
class MatchCandidate:
    """A provisional pairing of one source entry with one target entry."""

    source_index: int
    target_index: int
    score: float


@dataclass
class MatchResult:
    """Outcome of one greedy matching run between two entry lists."""

    source_entries: list[LedgerEntry]
    target_entries: list[LedgerEntry]

    # Committed candidates in commit order
    matches: list[MatchCandidate] = field(default_factory=list)

    @property
    def matched_source_indices(self) -> set[int]:
        return {m.source_index for m in self.matches}

    @property
    def matched_target_indices(self) -> set[int]:
        return {m.target_index for m in self.matches}

    @property
    def unmatched_source(self) -> list[LedgerEntry]:
        """Source entries never committed, in original order."""
        matched = self.matched_source_indices
        return [e for i, e in enumerate(self.source_entries) if i not in matched]

    @property
    def unmatched_target(self) -> list[LedgerEntry]:
        """Target entries never committed, in original order."""
        matched = self.matched_target_indices
        return [e for i, e in enumerate(self.target_entries) if i not in matched]

    @property
    def matched_pairs(self) -> list[tuple[LedgerEntry, LedgerEntry, float]]:
        return [
            (self.source_entries[m.source_index], self.target_entries[m.target_index], m.score)
            for m in self.matches
        ]


@dataclass(frozen=True)
class BankReconciliationSummary:
    """Summary of a ledger vs bank statement reconciliation."""

    ledger_debit_count: int
    ledger_credit_count: int
    bank_deposit_count: int
    bank_withdrawal_count: int

    ledger_debit_total: Decimal
    ledger_credit_total: Decimal
    bank_deposit_total: Decimal
    bank_withdrawal_total: Decimal

    # Pairs committed in each of the two independent runs
    debit_deposit_matches: int
    credit_withdrawal_matches: int

    unmatched_ledger_debits: int
    unmatched_ledger_credits: int
    unmatched_bank_deposits: int
    unmatched_bank_withdrawals: int

    @property
    def matched_count(self) -> int:
        return self.debit_deposit_matches + self.credit_withdrawal_matches

    @property
    def unmatched_count(self) -> int:
        return (
            self.unmatched_ledger_debits
            + self.unmatched_ledger_credits
            + self.unmatched_bank_deposits
            + self.unmatched_bank_withdrawals
        )


@dataclass
class BankReconciliationResult:
    """Both matching runs of a bank reconciliation plus their summary."""

    # Ledger debits against bank deposits
    debit_run: MatchResult

    # Ledger credits against bank withdrawals
    credit_run: MatchResult

    summary: BankReconciliationSummary

    @property
    def unmatched_ledger_debits(self) -> list[LedgerEntry]:
        return self.debit_run.unmatched_source

    @property
    def unmatched_ledger_credits(self) -> list[LedgerEntry]:
        return self.credit_run.unmatched_source

    @property
    def unmatched_bank_deposits(self) -> list[LedgerEntry]:
        return self.debit_run.unmatched_target

    @property
    def unmatched_bank_withdrawals(self) -> list[LedgerEntry]:
        return self.credit_run.unmatched_target
