"""Summation strategies, one algorithm body per capability kind."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Tuple, Type

from compensated.capabilities.classifier import Kind, RawTypeTraits


def neumaier_correction(
    total: Any, naive_sum: Any, increment: Any, magnitude: Callable[[Any], Any]
) -> Any:
    """
    Rounding error of ``naive_sum = total + increment``.

    The naive sum is cancelled against whichever addend has the larger
    magnitude; ties cancel against ``total``.
    """
    if magnitude(total) >= magnitude(increment):
        return (total - naive_sum) + increment
    return (increment - naive_sum) + total


def kahan_correction(total: Any, naive_sum: Any, increment: Any) -> Any:
    """Rounding error of ``naive_sum = total + increment`` without ordering."""
    return (total - naive_sum) + increment


class SummationStrategy(ABC):
    """
    Base class for a single compensated addition step.

    Parameters
    ----------
    traits : RawTypeTraits
        Capabilities of the raw value type being summed
    """

    kind: Kind

    def __init__(self, traits: RawTypeTraits):
        self.traits = traits

    @abstractmethod
    def step(self, total: Any, compensation: Any, increment: Any) -> Tuple[Any, Any]:
        """
        Add one increment to a (sum, compensation) pair.

        Parameters
        ----------
        total : Any
            Running naive sum
        compensation : Any
            Running compensation
        increment : Any
            Raw value to add

        Returns
        -------
        Tuple[Any, Any]
            The new (sum, compensation) pair
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.traits.raw_type.__qualname__})"


class NeumaierStrategy(SummationStrategy):
    """Kahan-Neumaier summation for ordered types with an absolute value."""

    kind = Kind.REAL

    def step(self, total: Any, compensation: Any, increment: Any) -> Tuple[Any, Any]:
        naive_sum = total + increment
        correction = neumaier_correction(total, naive_sum, increment, self.traits.magnitude)
        return naive_sum, compensation + correction


class ComplexNeumaierStrategy(SummationStrategy):
    """Kahan-Neumaier summation applied separately to real and imaginary parts."""

    kind = Kind.COMPLEX

    def step(self, total: Any, compensation: Any, increment: Any) -> Tuple[Any, Any]:
        traits = self.traits
        naive_sum = total + increment

        corrections = [
            neumaier_correction(part(total), part(naive_sum), part(increment), traits.part_magnitude)
            for part in (traits.real_part, traits.imag_part)
        ]

        return naive_sum, compensation + traits.raw_type(*corrections)


class KahanStrategy(SummationStrategy):
    """Plain Kahan summation for types with only ``+`` and ``-``."""

    kind = Kind.GENERIC

    def step(self, total: Any, compensation: Any, increment: Any) -> Tuple[Any, Any]:
        naive_sum = total + increment
        return naive_sum, compensation + kahan_correction(total, naive_sum, increment)


STRATEGIES: Dict[Kind, Type[SummationStrategy]] = {
    strategy.kind: strategy
    for strategy in (NeumaierStrategy, ComplexNeumaierStrategy, KahanStrategy)
}


def strategy_for(traits: RawTypeTraits) -> SummationStrategy:
    """
    Build the summation strategy matching a classified raw type.

    Parameters
    ----------
    traits : RawTypeTraits
        Result of :func:`compensated.capabilities.classify`

    Returns
    -------
    SummationStrategy
        Strategy instance bound to the raw type's capabilities
    """
    return STRATEGIES[traits.kind](traits)
