"""Configuration loader and validation for reconciliation settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from openpyxl.utils import column_index_from_string

from .parsers.layout import (
    LEDGER_HEADER_ROWS,
    LEDGER_DROPPED_COLUMNS,
    BANK_HEADER_ROWS,
    BANK_FOOTER_ROWS,
    BANK_DROPPED_COLUMNS,
)
from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class InputConfig(BaseModel):
    """Configuration for reading source spreadsheets."""

    # Tried in order before falling back to pandas' parser
    date_formats: list[str] = Field(
        default_factory=lambda: [
            "%d/%m/%Y",
            "%d-%m-%Y",
            "%Y-%m-%d",
            "%d/%m/%y",
            "%d-%b-%Y",
            "%d %b %Y",
        ]
    )
    dayfirst: bool = True
    ledger_sheet: Optional[str] = None
    bank_sheet: Optional[str] = None


class LayoutConfig(BaseModel):
    """Fixed row and column offsets of the known export templates."""

    ledger_header_rows: int = Field(default=LEDGER_HEADER_ROWS, ge=0)
    ledger_dropped_columns: list[int] = Field(
        default_factory=lambda: list(LEDGER_DROPPED_COLUMNS)
    )
    bank_header_rows: int = Field(default=BANK_HEADER_ROWS, ge=0)
    bank_footer_rows: int = Field(default=BANK_FOOTER_ROWS, ge=0)
    bank_dropped_columns: list[int] = Field(
        default_factory=lambda: list(BANK_DROPPED_COLUMNS)
    )


class MatchingConfig(BaseModel):
    """Configuration for the transaction matcher."""

    # A pair is eligible when |a - b| <= min(amount_tolerance, a * amount_tolerance_ratio)
    amount_tolerance: float = Field(default=1.0, ge=0)
    amount_tolerance_ratio: float = Field(default=0.001, ge=0)

    # Date proximity decays linearly to zero over this many days
    date_window_days: int = Field(default=7, gt=0)


def _check_column_letter(value: str) -> str:
    try:
        column_index_from_string(value.upper())
    except ValueError as e:
        raise ValueError(f"Invalid spreadsheet column: {value!r}") from e
    return value.upper()


class GstConfig(BaseModel):
    """Column layout of the GST ledger report and the B2B filing extract."""

    ledger_header_rows: int = Field(default=2, ge=0)
    ledger_name_column: str = "B"
    ledger_tax_id_column: str = "C"
    # Per-line tax is the sum of these columns (the three GST components)
    ledger_tax_columns: list[str] = Field(default_factory=lambda: ["G", "J", "M"])

    filing_sheet: str = "B2B"
    filing_header_rows: int = Field(default=0, ge=0)
    filing_tax_id_column: str = "A"
    filing_tax_column: str = "K"

    @field_validator(
        "ledger_name_column",
        "ledger_tax_id_column",
        "filing_tax_id_column",
        "filing_tax_column",
    )
    @classmethod
    def _validate_column(cls, value: str) -> str:
        return _check_column_letter(value)

    @field_validator("ledger_tax_columns")
    @classmethod
    def _validate_columns(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one ledger tax column is required")
        return [_check_column_letter(v) for v in value]


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class BankSheetsConfig(BaseModel):
    """Sheets of the bank reconciliation report."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    unmatched_ledger_debits: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Ledger Debits")
    )
    unmatched_ledger_credits: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Ledger Credits")
    )
    unmatched_bank_deposits: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Bank Deposits")
    )
    unmatched_bank_withdrawals: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Bank Withdrawals")
    )
    matched_pairs: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Matched Pairs", enabled=False)
    )


class GstSheetsConfig(BaseModel):
    """Sheets of the GST comparison report."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    matching: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Matching GST"))
    filing_only: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Only in Filing")
    )
    ledger_only: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Only in Ledger")
    )


class OutputConfig(BaseModel):
    """Configuration for output."""

    bank_report_filename: str = "Bank_Reconciliation_Report.xlsx"
    gst_report_filename: str = "GST_B2B_Reconciliation_Report.xlsx"
    bank_sheets: BankSheetsConfig = Field(default_factory=BankSheetsConfig)
    gst_sheets: GstSheetsConfig = Field(default_factory=GstSheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    # Optional rotating log file receiving DEBUG output
    file: Optional[str] = None
    max_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=3, ge=0)


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    gst: GstConfig = Field(default_factory=GstConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return ReconConfig().model_dump(exclude={"config_file_path"})


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    yaml_content = """# Ledger / Bank / GST Reconciliation Configuration
# Generated configuration file - customize as needed

"""
    yaml_content += yaml.dump(
        get_default_config(), default_flow_style=False, sort_keys=False
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
