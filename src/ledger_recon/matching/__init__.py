"""Matching engine and name similarity scoring."""

from .engine import TransactionMatcher, BankReconciliationEngine
from .similarity import similarity, normalize_name

__all__ = [
    "TransactionMatcher",
    "BankReconciliationEngine",
    "similarity",
    "normalize_name",
]
