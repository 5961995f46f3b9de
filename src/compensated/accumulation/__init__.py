"""Compensated accumulation of raw values."""

from compensated.accumulation.accumulator import CompensatedAccumulator
from compensated.accumulation.merger import compensated_sum, merge_accumulators
from compensated.accumulation.operators import add_left, equals_left, subtract_left
from compensated.accumulation.strategies import (
    ComplexNeumaierStrategy,
    KahanStrategy,
    NeumaierStrategy,
    SummationStrategy,
    strategy_for,
)

__all__ = [
    "CompensatedAccumulator",
    "compensated_sum",
    "merge_accumulators",
    "add_left",
    "subtract_left",
    "equals_left",
    "SummationStrategy",
    "NeumaierStrategy",
    "ComplexNeumaierStrategy",
    "KahanStrategy",
    "strategy_for",
]
