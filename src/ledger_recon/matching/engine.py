"""
Greedy matching engine for ledger and bank statement entries.
Scores every amount-eligible pair and commits the best pairs one-to-one.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
import logging

from ..models.transaction import (
    LedgerEntry,
    MatchCandidate,
    MatchResult,
    BankReconciliationSummary,
    BankReconciliationResult,
)
from ..config import MatchingConfig
from .similarity import similarity

logger = logging.getLogger(__name__)


class TransactionMatcher:
    """
    Pairs source entries with target entries by amount, date and name.

    Candidates are committed greedily in descending score order, so the
    result is one-to-one on each side but not a globally optimal assignment.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the matcher.

        Args:
            config: Tolerances; defaults when omitted
            logger: Logger for diagnostics; the module logger when omitted
        """
        self.config = config or MatchingConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.amount_tolerance = Decimal(str(self.config.amount_tolerance))
        self.amount_tolerance_ratio = Decimal(str(self.config.amount_tolerance_ratio))

    def is_eligible(self, source: LedgerEntry, target: LedgerEntry) -> bool:
        """Amount gate: difference within the smaller of the absolute and relative tolerance."""
        tolerance = min(
            self.amount_tolerance, source.amount * self.amount_tolerance_ratio
        )
        return abs(source.amount - target.amount) <= tolerance

    def date_proximity(self, a: Optional[date], b: Optional[date]) -> float:
        """1.0 on the same day, decaying linearly to 0 at the window edge."""
        if a is None or b is None:
            return 0.0
        days_apart = abs((a - b).days)
        return max(0.0, 1.0 - days_apart / self.config.date_window_days)

    def score(self, source: LedgerEntry, target: LedgerEntry) -> Optional[float]:
        """
        Score a pair of entries.

        Returns:
            1 + date proximity + name similarity, or None if the pair fails
            the amount gate
        """
        if not self.is_eligible(source, target):
            return None
        return (
            1.0
            + self.date_proximity(source.date, target.date)
            + similarity(source.name, target.name)
        )

    def build_candidates(
        self, sources: list[LedgerEntry], targets: list[LedgerEntry]
    ) -> list[MatchCandidate]:
        """Score every eligible pair of the cross product, in source-major order."""
        candidates: list[MatchCandidate] = []
        for source_index, source in enumerate(sources):
            for target_index, target in enumerate(targets):
                score = self.score(source, target)
                if score is not None:
                    candidates.append(MatchCandidate(source_index, target_index, score))
        return candidates

    def match(
        self, sources: list[LedgerEntry], targets: list[LedgerEntry]
    ) -> MatchResult:
        """
        Match two entry lists.

        Args:
            sources: Ledger-side entries
            targets: Bank-side entries

        Returns:
            Match result with committed pairs and unmatched partitions
        """
        candidates = self.build_candidates(sources, targets)

        # sorted() is stable: equal scores keep generation order
        ranked = sorted(candidates, key=lambda c: c.score, reverse=True)

        used_sources: set[int] = set()
        used_targets: set[int] = set()
        committed: list[MatchCandidate] = []

        for candidate in ranked:
            if candidate.source_index in used_sources:
                continue
            if candidate.target_index in used_targets:
                continue
            used_sources.add(candidate.source_index)
            used_targets.add(candidate.target_index)
            committed.append(candidate)

        self.logger.debug(
            f"{len(candidates)} eligible pairs, {len(committed)} committed "
            f"({len(sources)} source, {len(targets)} target entries)"
        )

        return MatchResult(
            source_entries=list(sources),
            target_entries=list(targets),
            matches=committed,
        )


class BankReconciliationEngine:
    """
    Reconciles ledger entries against bank statement entries.

    Ledger debits are matched to bank deposits and ledger credits to bank
    withdrawals, in two independent runs.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.matcher = TransactionMatcher(config, logger=self.logger)

    def reconcile(
        self,
        ledger_debits: list[LedgerEntry],
        ledger_credits: list[LedgerEntry],
        bank_withdrawals: list[LedgerEntry],
        bank_deposits: list[LedgerEntry],
    ) -> BankReconciliationResult:
        """
        Run both matching passes.

        Args:
            ledger_debits: Debit entries from the ledger export
            ledger_credits: Credit entries from the ledger export
            bank_withdrawals: Withdrawal entries from the bank statement
            bank_deposits: Deposit entries from the bank statement

        Returns:
            Both match results and a summary
        """
        self.logger.info(
            f"Starting bank reconciliation: {len(ledger_debits)} debits, "
            f"{len(ledger_credits)} credits, {len(bank_deposits)} deposits, "
            f"{len(bank_withdrawals)} withdrawals"
        )

        debit_run = self.matcher.match(ledger_debits, bank_deposits)
        credit_run = self.matcher.match(ledger_credits, bank_withdrawals)

        summary = self.generate_summary(debit_run, credit_run)
        result = BankReconciliationResult(
            debit_run=debit_run, credit_run=credit_run, summary=summary
        )

        self._log_unmatched(result)
        self.logger.info(
            f"Bank reconciliation complete: {summary.matched_count} matches, "
            f"{summary.unmatched_count} unmatched entries"
        )
        return result

    def generate_summary(
        self, debit_run: MatchResult, credit_run: MatchResult
    ) -> BankReconciliationSummary:
        """Count and total the entries of both runs."""
        return BankReconciliationSummary(
            ledger_debit_count=len(debit_run.source_entries),
            ledger_credit_count=len(credit_run.source_entries),
            bank_deposit_count=len(debit_run.target_entries),
            bank_withdrawal_count=len(credit_run.target_entries),
            ledger_debit_total=_total(debit_run.source_entries),
            ledger_credit_total=_total(credit_run.source_entries),
            bank_deposit_total=_total(debit_run.target_entries),
            bank_withdrawal_total=_total(credit_run.target_entries),
            debit_deposit_matches=len(debit_run.matches),
            credit_withdrawal_matches=len(credit_run.matches),
            unmatched_ledger_debits=len(debit_run.unmatched_source),
            unmatched_ledger_credits=len(credit_run.unmatched_source),
            unmatched_bank_deposits=len(debit_run.unmatched_target),
            unmatched_bank_withdrawals=len(credit_run.unmatched_target),
        )

    def _log_unmatched(self, result: BankReconciliationResult) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return

        sections = [
            ("Ledger debits without matching bank deposits", result.unmatched_ledger_debits),
            ("Ledger credits without matching bank withdrawals", result.unmatched_ledger_credits),
            ("Bank deposits without matching ledger debits", result.unmatched_bank_deposits),
            ("Bank withdrawals without matching ledger credits", result.unmatched_bank_withdrawals),
        ]
        for title, entries in sections:
            self.logger.debug(f"{title}: {len(entries)}")
            for entry in entries:
                self.logger.debug(
                    f"  Date: {entry.display_date}, Name: {entry.name}, Amount: {entry.amount}"
                )


def _total(entries: list[LedgerEntry]) -> Decimal:
    return sum((e.amount for e in entries), Decimal("0"))
