"""GST aggregation and comparison."""

from .aggregator import GstAggregator, round_money
from .reconciler import GstReconciler

__all__ = ["GstAggregator", "GstReconciler", "round_money"]
