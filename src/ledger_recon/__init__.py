"""Reconciliation of ledger exports against bank statements and GST B2B filings."""

__version__ = "0.1.0"
