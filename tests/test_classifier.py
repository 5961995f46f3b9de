"""
Unit tests for raw value type classification.
"""

import logging
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from compensated.accumulation.strategies import (
    ComplexNeumaierStrategy,
    KahanStrategy,
    NeumaierStrategy,
    strategy_for,
)
from compensated.capabilities import Kind, classify
from compensated.utils.exceptions import CapabilityError

from custom_types import (
    CustomComplex,
    Gadget,
    MisnamedSubtraction,
    OnlyAddition,
    RealWithCustomAbs,
)


class TestClassification:
    """Test selection of the summation kind."""

    @pytest.mark.parametrize(
        "raw_type", [float, int, Fraction, Decimal, np.float32, np.float64]
    )
    def test_real_scalars(self, raw_type):
        """Ordered scalars with abs() are real."""
        traits = classify(raw_type)
        assert traits.kind is Kind.REAL
        assert traits.magnitude is abs
        assert traits.algorithm == "Kahan-Neumaier"

    @pytest.mark.parametrize("raw_type", [complex, np.complex128])
    def test_complex_scalars(self, raw_type):
        """Built-in and numpy complex numbers are complex."""
        traits = classify(raw_type)
        assert traits.kind is Kind.COMPLEX
        assert traits.real_part(raw_type(3, 4)) == 3
        assert traits.imag_part(raw_type(3, 4)) == 4

    def test_ordered_complex_is_never_real(self):
        """numpy complex scalars are ordered, yet must not get the real algorithm."""
        assert classify(np.complex64).kind is not Kind.REAL
        assert classify(np.complex128).kind is not Kind.REAL

    def test_float_subclass_is_real(self):
        """Parts of a base type do not make a subclass complex."""

        class Seconds(float):
            pass

        assert classify(Seconds).kind is Kind.REAL

    def test_custom_real_with_member_abs(self):
        """A member abs() is accepted when no free abs() exists."""
        traits = classify(RealWithCustomAbs)
        assert traits.kind is Kind.REAL
        assert traits.magnitude is not abs
        assert traits.magnitude(RealWithCustomAbs(-2.5)) == 2.5

    def test_custom_complex_with_methods(self):
        """real()/imag() methods plus a two-argument constructor make a complex type."""
        traits = classify(CustomComplex)
        assert traits.kind is Kind.COMPLEX
        assert traits.real_part(CustomComplex(1, 2)) == np.float32(1)
        assert traits.imag_part(CustomComplex(1, 2)) == np.float32(2)

    def test_generic_aggregate(self):
        """A type with only + and - is generic and summed with plain Kahan."""
        traits = classify(Gadget)
        assert traits.kind is Kind.GENERIC
        assert traits.magnitude is None
        assert traits.algorithm == "Kahan"

    def test_classification_is_cached(self):
        """Each type is classified once."""
        assert classify(float) is classify(float)


class TestNegation:
    """Test detection of unary minus."""

    def test_native_unary_minus(self):
        """float uses its own unary minus."""
        traits = classify(float)
        assert traits.has_unary_minus
        assert traits.negate(2.0) == -2.0

    def test_synthesized_unary_minus(self):
        """Types without unary minus negate by subtracting from zero."""
        traits = classify(Gadget)
        assert not traits.has_unary_minus
        assert traits.negate(Gadget(1, 2, 3)) == Gadget(-1, -2, -3)


class TestRejection:
    """Test rejection of types lacking the baseline capability."""

    def test_no_zero_construction(self):
        """object(0) fails, so object is rejected."""
        with pytest.raises(CapabilityError) as excinfo:
            classify(object)
        assert excinfo.value.capability == "zero construction"
        assert "object" in str(excinfo.value)

    def test_no_binary_minus(self):
        """str has + but no -."""
        with pytest.raises(CapabilityError) as excinfo:
            classify(str)
        assert excinfo.value.capability == "binary -"

    def test_custom_type_without_minus(self):
        """A user type with only + is rejected."""
        with pytest.raises(CapabilityError) as excinfo:
            classify(OnlyAddition)
        assert excinfo.value.raw_type is OnlyAddition
        assert "binary -" in str(excinfo.value)

    def test_operator_raising_attribute_error(self):
        """Errors other than TypeError from a user operator reject the type too."""
        with pytest.raises(CapabilityError) as excinfo:
            classify(MisnamedSubtraction)
        assert excinfo.value.capability == "binary -"
        assert "'w'" in str(excinfo.value)

    def test_capability_error_is_type_error(self):
        """Rejections can be caught as TypeError."""
        with pytest.raises(TypeError):
            classify(str)

    def test_non_type_argument(self):
        """Only types can be classified."""
        with pytest.raises(TypeError):
            classify(3.0)

    def test_rejection_is_logged(self, caplog):
        """Rejected types are reported at debug level."""
        caplog.set_level(logging.DEBUG, logger="compensated")
        with pytest.raises(CapabilityError):
            classify(OnlyAddition)
        assert "Rejected raw type OnlyAddition" in caplog.text


class TestStrategySelection:
    """Test mapping of kinds to summation strategies."""

    @pytest.mark.parametrize(
        "raw_type, strategy_class",
        [
            (float, NeumaierStrategy),
            (RealWithCustomAbs, NeumaierStrategy),
            (complex, ComplexNeumaierStrategy),
            (CustomComplex, ComplexNeumaierStrategy),
            (Gadget, KahanStrategy),
        ],
    )
    def test_strategy_for_kind(self, raw_type, strategy_class):
        """Each kind gets exactly one algorithm."""
        strategy = strategy_for(classify(raw_type))
        assert isinstance(strategy, strategy_class)
        assert strategy.kind is classify(raw_type).kind

    def test_new_type_classification_is_logged(self, caplog):
        """Newly classified types are reported at debug level."""

        class Meters(float):
            pass

        caplog.set_level(logging.DEBUG, logger="compensated")
        classify(Meters)
        assert "Classified raw type" in caplog.text
        assert "Meters" in caplog.text
