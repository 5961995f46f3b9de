#!/usr/bin/env python
"""
Example script demonstrating compensated summation.

This script compares naive floating-point addition with CompensatedAccumulator
for real, complex and user-defined raw value types.
"""

import sys
from pathlib import Path

import numpy as np

from compensated import CompensatedAccumulator, load_config, setup_logging
from compensated.diagnostics import lossy_pair, naive_residual, summation_report
from compensated.utils.config_parser import get_nested_value


class Point:
    """A 3D vector with only + and -, summed with plain Kahan."""

    def __init__(self, x=0.0, y=None, z=None):
        self.x = float(x)
        self.y = self.x if y is None else float(y)
        self.z = self.x if z is None else float(z)

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __repr__(self):
        return f"Point({self.x}, {self.y}, {self.z})"


def demonstrate_real(dtype):
    """Demonstrate the huge/tiny cancellation with real values."""
    huge, tiny = lossy_pair(dtype)
    print(f"1. Real values ({np.dtype(dtype).name}): huge = {huge}, tiny = {tiny}")
    print(f"   - Naive huge + tiny - huge - tiny = {naive_residual(dtype)}")

    acc = CompensatedAccumulator(huge)
    acc += tiny
    acc -= huge
    acc -= tiny
    print(f"   - Compensated result              = {acc.value()}")
    print()


def demonstrate_complex():
    """Demonstrate component-wise compensation with complex values."""
    huge, tiny = (float(v) for v in lossy_pair(np.float64))
    z = complex(huge, tiny)
    w = complex(tiny, huge)

    print(f"3. Complex values: z = {z}, w = {w}")
    acc = CompensatedAccumulator(z)
    acc += w
    acc -= z
    acc -= w
    print(f"   - acc(z) += w; -= z; -= w  ->  real = {acc.real}, imag = {acc.imag}")

    # Mixing raw values on the left with accumulators
    kz = CompensatedAccumulator(z)
    kw = CompensatedAccumulator(w)
    mixed = z + kw - kz - w
    print(f"   - z + acc(w) - acc(z) - w ->  real = {mixed.real}, imag = {mixed.imag}")
    print()


def demonstrate_custom_type():
    """Demonstrate plain Kahan summation with a user-defined aggregate."""
    huge, tiny = (float(v) for v in lossy_pair(np.float64))
    huge_point, tiny_point = Point(huge), Point(tiny)

    print("4. Custom aggregate type (Point with only + and -)")
    result = (
        CompensatedAccumulator(huge_point)
        + CompensatedAccumulator(tiny_point)
        - CompensatedAccumulator(huge_point)
        - CompensatedAccumulator(tiny_point)
    ).value()
    print(f"   - huge + tiny - huge - tiny = {result}")
    print()


def demonstrate_sequence(sequence, dtype):
    """Report naive vs compensated summation of a configured sequence."""
    report = summation_report(sequence, dtype=dtype)
    print(f"2. Summing {report['n_values']} values as {report['dtype']}")
    print(f"   - Reference:   {report['reference_sum']}")
    print(f"   - Naive:       {report['naive_sum']} (error {report['naive_abs_error']:.3e})")
    print(
        f"   - Compensated: {report['compensated_sum']} "
        f"(error {report['compensated_abs_error']:.3e})"
    )
    print()


def main():
    """Main demonstration function."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).with_name(
        "demo_config.yaml"
    )
    config = load_config(config_path)

    logger = setup_logging(
        get_nested_value(config, "summation_demo.log_level", "INFO"),
        trace_classification=get_nested_value(
            config, "summation_demo.trace_classification", False
        ),
    )
    logger.info(f"Running summation demo from {config_path}")

    sequence = get_nested_value(config, "summation_demo.sequence", [1.0, 2.0, 3.0, 4.0])

    for dtype_name in config["summation_demo"]["dtypes"]:
        dtype = np.dtype(dtype_name)
        print("=" * 80)
        print(f"Compensated Summation Demonstration - {dtype.name}")
        print("=" * 80)
        print()
        demonstrate_real(dtype)
        demonstrate_sequence(sequence, dtype)

    demonstrate_complex()
    demonstrate_custom_type()
    logger.info("Demonstration complete")


if __name__ == "__main__":
    main()
