"""Operations with the raw value on the left-hand side of an accumulator."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from compensated.accumulation.accumulator import CompensatedAccumulator


def add_left(raw: Any, accumulator: "CompensatedAccumulator") -> "CompensatedAccumulator":
    """``raw + accumulator``, evaluated as ``accumulator + raw``."""
    return accumulator + raw


def subtract_left(raw: Any, accumulator: "CompensatedAccumulator") -> "CompensatedAccumulator":
    """``raw - accumulator``, evaluated as ``(-accumulator) + raw``."""
    return (-accumulator) + raw


def equals_left(raw: Any, accumulator: "CompensatedAccumulator") -> bool:
    """``raw == accumulator``, evaluated as ``accumulator == raw``."""
    return accumulator == raw
