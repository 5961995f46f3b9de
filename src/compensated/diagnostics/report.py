"""Comparison of naive and compensated summation over a sequence."""

import logging
import math
from typing import Any, Dict, Iterable, Optional

import numpy as np

from compensated.accumulation.accumulator import CompensatedAccumulator

logger = logging.getLogger(__name__)


def naive_sum(values: np.ndarray) -> np.generic:
    """
    Left-to-right sum without compensation, in the dtype of ``values``.

    ``np.sum`` uses pairwise summation, which would hide part of the
    error this report is meant to show.
    """
    total = values.dtype.type(0)
    for value in values:
        total = total + value
    return total


def summation_report(values: Iterable[float], dtype: Optional[Any] = None) -> Dict[str, Any]:
    """
    Summarize naive vs compensated summation of a sequence.

    Parameters
    ----------
    values : Iterable[float]
        Real values to sum, in order
    dtype : dtype-like, optional
        Floating-point dtype to sum in. If None, inferred from ``values``
        (integers are summed as float64), by default None

    Returns
    -------
    Dict[str, Any]
        n_values, dtype, naive_sum, compensated_sum, error_estimate,
        reference_sum (correctly rounded float64 sum of the inputs),
        naive_abs_error and compensated_abs_error

    Raises
    ------
    ValueError
        If the values are not real numbers

    Examples
    --------
    >>> report = summation_report([1e16, 1.0, -1e16])
    >>> report["naive_sum"], report["compensated_sum"]
    (np.float64(0.0), np.float64(1.0))
    """
    array = np.asarray(list(values), dtype=dtype)
    if array.dtype.kind in "iub":
        array = array.astype(np.float64)
    if array.dtype.kind != "f":
        raise ValueError(f"Expected real floating-point values, got dtype {array.dtype}")
    array = array.ravel()

    accumulator = CompensatedAccumulator[array.dtype.type]()
    accumulator.accumulate(array)

    naive = naive_sum(array)
    compensated = accumulator.value()
    reference = math.fsum(float(value) for value in array)

    report = {
        "n_values": int(array.size),
        "dtype": str(array.dtype),
        "naive_sum": naive,
        "compensated_sum": compensated,
        "error_estimate": accumulator.error(),
        "reference_sum": reference,
        "naive_abs_error": abs(float(naive) - reference),
        "compensated_abs_error": abs(float(compensated) - reference),
    }

    logger.debug(
        f"Summed {report['n_values']} {report['dtype']} values: "
        f"naive error {report['naive_abs_error']:.3e}, "
        f"compensated error {report['compensated_abs_error']:.3e}"
    )
    return report
