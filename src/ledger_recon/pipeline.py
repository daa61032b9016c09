"""
Reconciliation pipeline.
Runs the bank and GST reconciliation stages in order, stopping at the first failure.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar
import logging

from .config import ReconConfig
from .gst.aggregator import GstAggregator
from .gst.reconciler import GstReconciler
from .matching.engine import BankReconciliationEngine
from .models.tax import GstReconciliationResult
from .models.transaction import BankReconciliationResult, SourceKind
from .parsers.extractor import TransactionExtractor
from .parsers.gst_parser import GstParser
from .parsers.layout import CellTable, normalize
from .parsers.spreadsheet import read_table
from .utils.exceptions import ReconciliationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StageOutcome(Generic[T]):
    """Success value or failure message of one pipeline stage."""

    stage: str
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class ReconciliationPipeline:
    """
    Orchestrates reconciliation runs.

    Every stage reports a StageOutcome; the first failed stage ends the run
    and its outcome is returned, so no partial result is produced.
    """

    def __init__(
        self,
        config: Optional[ReconConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Application configuration; defaults when omitted
            logger: Logger injected into every stage
        """
        self.config = config or ReconConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.extractor = TransactionExtractor(
            date_formats=self.config.input.date_formats,
            dayfirst=self.config.input.dayfirst,
        )
        self.engine = BankReconciliationEngine(self.config.matching, logger=self.logger)
        self.gst_parser = GstParser(self.config.gst)
        self.aggregator = GstAggregator(logger=self.logger)
        self.reconciler = GstReconciler(logger=self.logger)

    def run_stage(self, stage: str, func: Callable[..., T], *args: Any) -> StageOutcome[T]:
        """
        Run one stage, turning reconciliation errors into a failed outcome.

        Args:
            stage: Stage name for messages
            func: Callable performing the stage
            *args: Arguments passed to func

        Returns:
            Outcome carrying the stage's value or its error message
        """
        self.logger.debug(f"Running stage: {stage}")
        try:
            return StageOutcome(stage=stage, value=func(*args))
        except ReconciliationError as e:
            self.logger.error(f"Stage '{stage}' failed: {e}")
            return StageOutcome(stage=stage, error=str(e))

    def run_bank(
        self, ledger_table: CellTable, bank_table: CellTable
    ) -> StageOutcome[BankReconciliationResult]:
        """
        Reconcile a raw ledger export table against a raw bank statement table.

        Returns:
            Outcome of the final stage, or of the first failed stage
        """
        layout = self.config.layout

        ledger = self.run_stage(
            "normalize ledger export", normalize, ledger_table, SourceKind.LEDGER_EXPORT, layout
        )
        if not ledger.success:
            return ledger

        bank = self.run_stage(
            "normalize bank statement", normalize, bank_table, SourceKind.BANK_STATEMENT, layout
        )
        if not bank.success:
            return bank

        ledger_entries = self.run_stage(
            "extract ledger entries", self.extractor.extract_ledger_entries, ledger.value
        )
        if not ledger_entries.success:
            return ledger_entries

        bank_entries = self.run_stage(
            "extract bank entries", self.extractor.extract_bank_entries, bank.value
        )
        if not bank_entries.success:
            return bank_entries

        debits, credits = ledger_entries.value
        withdrawals, deposits = bank_entries.value
        return self.run_stage(
            "match transactions", self.engine.reconcile, debits, credits, withdrawals, deposits
        )

    def run_gst(
        self, ledger_table: CellTable, filing_table: CellTable
    ) -> StageOutcome[GstReconciliationResult]:
        """
        Compare a raw ledger GST report table against a raw B2B filing table.

        Returns:
            Outcome of the final stage, or of the first failed stage
        """
        ledger_lines = self.run_stage(
            "parse ledger GST report", self.gst_parser.parse_ledger, ledger_table
        )
        if not ledger_lines.success:
            return ledger_lines

        filing_lines = self.run_stage(
            "parse B2B filing", self.gst_parser.parse_filing, filing_table
        )
        if not filing_lines.success:
            return filing_lines

        ledger_records = self.run_stage(
            "aggregate ledger GST", self.aggregator.aggregate, ledger_lines.value, True
        )
        if not ledger_records.success:
            return ledger_records

        filing_records = self.run_stage(
            "aggregate filing GST", self.aggregator.aggregate, filing_lines.value, False
        )
        if not filing_records.success:
            return filing_records

        outcome = self.run_stage(
            "compare GST", self.reconciler.reconcile, ledger_records.value, filing_records.value
        )
        if outcome.success:
            outcome.value.filing_statistics = self.aggregator.statistics(filing_records.value)
        return outcome

    def run_bank_files(
        self, ledger_path: Path, bank_path: Path
    ) -> StageOutcome[BankReconciliationResult]:
        """Read both spreadsheets and run the bank reconciliation."""
        ledger_table = self.run_stage(
            "read ledger export", read_table, ledger_path, self.config.input.ledger_sheet
        )
        if not ledger_table.success:
            return ledger_table

        bank_table = self.run_stage(
            "read bank statement", read_table, bank_path, self.config.input.bank_sheet
        )
        if not bank_table.success:
            return bank_table

        return self.run_bank(ledger_table.value, bank_table.value)

    def run_gst_files(
        self, ledger_path: Path, filing_path: Path
    ) -> StageOutcome[GstReconciliationResult]:
        """Read the ledger GST report and the filing's B2B sheet and compare them."""
        ledger_table = self.run_stage(
            "read ledger GST report", read_table, ledger_path, self.config.input.ledger_sheet
        )
        if not ledger_table.success:
            return ledger_table

        filing_table = self.run_stage(
            "read B2B filing", read_table, filing_path, self.config.gst.filing_sheet
        )
        if not filing_table.success:
            return filing_table

        return self.run_gst(ledger_table.value, filing_table.value)
