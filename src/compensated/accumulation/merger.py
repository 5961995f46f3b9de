"""Functions for merging accumulators and summing sequences."""

import logging
from typing import Any, Iterable, List

from compensated.accumulation.accumulator import CompensatedAccumulator

logger = logging.getLogger(__name__)


def merge_accumulators(accumulators: List[CompensatedAccumulator]) -> CompensatedAccumulator:
    """
    Merge multiple accumulators into a single accumulator.

    Accumulators are folded in list order into a copy of the first one; the
    inputs are left unchanged.

    Parameters
    ----------
    accumulators : List[CompensatedAccumulator]
        List of accumulators to merge

    Returns
    -------
    CompensatedAccumulator
        New accumulator holding the combined total

    Raises
    ------
    ValueError
        If accumulators list is empty

    Examples
    --------
    >>> acc1 = CompensatedAccumulator(2.0**32)
    >>> acc2 = CompensatedAccumulator(2.0**-32)
    >>> merged = merge_accumulators([acc1, acc2])
    """
    if not accumulators:
        raise ValueError("Cannot merge empty list of accumulators")

    merged = accumulators[0].copy()

    for acc in accumulators[1:]:
        merged += acc

    logger.debug(f"Merged {len(accumulators)} accumulators of {merged.raw_type.__qualname__}")
    return merged


def compensated_sum(values: Iterable[Any], start: Any = None) -> Any:
    """
    Sum raw values with compensated addition.

    Parameters
    ----------
    values : Iterable
        Raw values, added left to right
    start : Any, optional
        Initial value; it also fixes the raw type. When None, the first
        element of ``values`` is used, by default None

    Returns
    -------
    Any
        Compensated total as a raw value; 0 for an empty input without ``start``

    Examples
    --------
    >>> compensated_sum([2.0**32, 2.0**-32, -(2.0**32), -(2.0**-32)])
    0.0
    """
    iterator = iter(values)
    if start is None:
        try:
            start = next(iterator)
        except StopIteration:
            return 0

    accumulator = CompensatedAccumulator(start)
    accumulator.accumulate(iterator)
    return accumulator.value()
