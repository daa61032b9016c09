"""
Command-line interface for the ledger, bank statement and GST reconciliation tool.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import load_config, generate_default_config, ReconConfig
from .models.transaction import LedgerEntry, SourceKind
from .parsers.extractor import TransactionExtractor
from .parsers.layout import normalize
from .parsers.spreadsheet import read_table
from .pipeline import ReconciliationPipeline, StageOutcome
from .reports.excel_generator import ExcelReportGenerator
from .reports.tables import bank_summary_rows, gst_summary_rows
from .utils.exceptions import ReconciliationError
from .utils.logging_config import setup_logging

console = Console()

PREVIEW_ROWS = 20


@click.group()
@click.version_option(version=__version__)
def main():
    """Ledger to Bank Statement and GST B2B Reconciliation Tool."""
    pass


def _load(config: Optional[Path], verbose: bool) -> ReconConfig:
    """Load configuration and set up logging, exiting on a bad config."""
    try:
        recon_config = load_config(config)
    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    log_settings = recon_config.logging
    setup_logging(
        logging.DEBUG if verbose else log_settings.level,
        log_file=Path(log_settings.file) if log_settings.file else None,
        log_format=log_settings.format,
        max_bytes=log_settings.max_bytes,
        backup_count=log_settings.backup_count,
    )
    return recon_config


def _fail(outcome: StageOutcome) -> None:
    console.print(f"[red]Error during {outcome.stage}: {outcome.error}[/red]")
    sys.exit(1)


@main.command()
@click.argument("ledger_file", type=click.Path(exists=True, path_type=Path))
@click.argument("bank_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--dry-run", is_flag=True, help="Reconcile and show summary without generating report"
)
def bank(
    ledger_file: Path,
    bank_file: Path,
    config: Optional[Path],
    output: Optional[Path],
    verbose: bool,
    dry_run: bool,
):
    """
    Reconcile a ledger export with a bank statement.

    LEDGER_FILE: Path to the ledger transaction report

    BANK_FILE: Path to the bank statement
    """
    recon_config = _load(config, verbose)
    pipeline = ReconciliationPipeline(recon_config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Matching transactions...", total=None)
        outcome = pipeline.run_bank_files(ledger_file, bank_file)
        progress.update(task, completed=True)

    if not outcome.success:
        _fail(outcome)

    _display_summary("Bank Reconciliation Summary", bank_summary_rows(outcome.value))

    if dry_run:
        console.print("\n[yellow]Dry run - no report generated[/yellow]")
        return

    output = output or Path(recon_config.output.bank_report_filename)
    _write_report(
        lambda: ExcelReportGenerator(recon_config).generate_bank_report(outcome.value, output),
        verbose,
    )


@main.command()
@click.argument("ledger_file", type=click.Path(exists=True, path_type=Path))
@click.argument("filing_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--dry-run", is_flag=True, help="Compare and show summary without generating report"
)
def gst(
    ledger_file: Path,
    filing_file: Path,
    config: Optional[Path],
    output: Optional[Path],
    verbose: bool,
    dry_run: bool,
):
    """
    Compare ledger GST totals with a B2B filing extract.

    LEDGER_FILE: Path to the ledger GST report

    FILING_FILE: Path to the workbook holding the B2B sheet
    """
    recon_config = _load(config, verbose)
    pipeline = ReconciliationPipeline(recon_config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Comparing GST totals...", total=None)
        outcome = pipeline.run_gst_files(ledger_file, filing_file)
        progress.update(task, completed=True)

    if not outcome.success:
        _fail(outcome)

    _display_summary("GST B2B Reconciliation Summary", gst_summary_rows(outcome.value))

    if dry_run:
        console.print("\n[yellow]Dry run - no report generated[/yellow]")
        return

    output = output or Path(recon_config.output.gst_report_filename)
    _write_report(
        lambda: ExcelReportGenerator(recon_config).generate_gst_report(outcome.value, output),
        verbose,
    )


@main.command("parse-ledger")
@click.argument("ledger_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_ledger(ledger_file: Path, config: Optional[Path]):
    """
    Parse a ledger export and display its debits and credits.

    LEDGER_FILE: Path to the ledger transaction report
    """
    recon_config = _load(config, verbose=False)
    extractor = TransactionExtractor(
        recon_config.input.date_formats, recon_config.input.dayfirst
    )

    try:
        raw = read_table(ledger_file, recon_config.input.ledger_sheet)
        table = normalize(raw, SourceKind.LEDGER_EXPORT, recon_config.layout)
        debits, credits = extractor.extract_ledger_entries(table)
    except ReconciliationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    _display_entries(f"Ledger Debits: {ledger_file.name}", debits)
    _display_entries(f"Ledger Credits: {ledger_file.name}", credits)


@main.command("parse-bank")
@click.argument("bank_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_bank(bank_file: Path, config: Optional[Path]):
    """
    Parse a bank statement and display its withdrawals and deposits.

    BANK_FILE: Path to the bank statement
    """
    recon_config = _load(config, verbose=False)
    extractor = TransactionExtractor(
        recon_config.input.date_formats, recon_config.input.dayfirst
    )

    try:
        raw = read_table(bank_file, recon_config.input.bank_sheet)
        table = normalize(raw, SourceKind.BANK_STATEMENT, recon_config.layout)
        withdrawals, deposits = extractor.extract_bank_entries(table)
    except ReconciliationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    _display_entries(f"Bank Withdrawals: {bank_file.name}", withdrawals)
    _display_entries(f"Bank Deposits: {bank_file.name}", deposits)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _write_report(write, verbose: bool) -> None:
    try:
        report_path = write()
    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)
    console.print(f"\n[green]Report generated: {report_path}[/green]")


def _display_summary(title: str, rows) -> None:
    """Display reconciliation summary in console."""
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in rows:
        table.add_row(label.rstrip(":"), str(value))

    console.print(table)


def _display_entries(title: str, entries: list[LedgerEntry]) -> None:
    """Display the first entries of a list and a total."""
    table = Table(title=title)
    table.add_column("Date")
    table.add_column("Name")
    table.add_column("Amount", justify="right")

    for entry in entries[:PREVIEW_ROWS]:
        name = entry.name[:40] + "..." if len(entry.name) > 40 else entry.name
        table.add_row(str(entry.display_date), name, f"{entry.amount:,.2f}")

    console.print(table)

    if len(entries) > PREVIEW_ROWS:
        console.print(f"... and {len(entries) - PREVIEW_ROWS} more entries")

    console.print(f"Total entries: {len(entries)}\n")


if __name__ == "__main__":
    main()
