"""Huge and tiny magnitudes whose naive sum loses precision."""

from typing import Any, Tuple

import numpy as np

HUGE = "huge"
TINY = "tiny"


def lossy_value(dtype: Any = np.float64, which: str = HUGE) -> np.floating:
    """
    Power of two that is huge or tiny for a floating-point dtype.

    The exponent is half the bit width of the dtype (32 for float64, 16 for
    float32), so the ratio between the huge and the tiny value exceeds the
    mantissa precision: ``huge + tiny == huge`` in naive arithmetic.

    Parameters
    ----------
    dtype : dtype-like, optional
        Floating-point dtype, by default np.float64
    which : str, optional
        "huge" or "tiny", by default "huge"

    Returns
    -------
    np.floating
        The requested value as a scalar of ``dtype``

    Raises
    ------
    ValueError
        If ``dtype`` is not a real floating-point dtype or ``which`` is unknown

    Examples
    --------
    >>> lossy_value(np.float32, "tiny")
    np.float32(1.5258789e-05)
    """
    dtype = np.dtype(dtype)
    if dtype.kind != "f":
        raise ValueError(f"Expected a floating-point dtype, got {dtype}")
    if which not in (HUGE, TINY):
        raise ValueError(f"which must be '{HUGE}' or '{TINY}', got {which!r}")

    half_bits = 4 * dtype.itemsize
    exponent = half_bits if which == HUGE else -half_bits
    return dtype.type(2.0**exponent)


def lossy_pair(dtype: Any = np.float64) -> Tuple[np.floating, np.floating]:
    """Return ``(huge, tiny)`` for ``dtype``."""
    return lossy_value(dtype, HUGE), lossy_value(dtype, TINY)


def naive_residual(dtype: Any = np.float64) -> np.floating:
    """
    Evaluate ``huge + tiny - huge - tiny`` with plain arithmetic.

    Exact arithmetic gives zero; the returned residual is nonzero for every
    floating-point dtype because ``tiny`` is absorbed by ``huge``.
    """
    huge, tiny = lossy_pair(dtype)
    return huge + tiny - huge - tiny
