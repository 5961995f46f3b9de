"""Diagnostics for comparing naive and compensated summation."""

from compensated.diagnostics.lossy_values import lossy_pair, lossy_value, naive_residual
from compensated.diagnostics.report import naive_sum, summation_report

__all__ = [
    "lossy_value",
    "lossy_pair",
    "naive_residual",
    "naive_sum",
    "summation_report",
]
