"""
Compensated Summation

Kahan and Kahan-Neumaier compensated summation for any additive value type:
built-in and numpy scalars, complex-like types and user-defined aggregates.
The summation algorithm is selected from the operations the raw type supports.
"""

__version__ = "0.1.0"

from compensated.accumulation.accumulator import CompensatedAccumulator
from compensated.accumulation.merger import compensated_sum, merge_accumulators
from compensated.accumulation.operators import add_left, equals_left, subtract_left
from compensated.capabilities.classifier import Kind, RawTypeTraits, classify
from compensated.utils.config_parser import load_config
from compensated.utils.exceptions import (
    CapabilityError,
    CompensatedError,
    ConfigurationError,
)
from compensated.utils.logging import setup_logging

__all__ = [
    "CompensatedAccumulator",
    "compensated_sum",
    "merge_accumulators",
    "add_left",
    "subtract_left",
    "equals_left",
    "Kind",
    "RawTypeTraits",
    "classify",
    "load_config",
    "setup_logging",
    "CompensatedError",
    "CapabilityError",
    "ConfigurationError",
]
