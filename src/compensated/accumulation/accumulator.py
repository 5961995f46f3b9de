"""Compensated accumulator for any additive raw value type."""

import copy
import logging
import numbers
from typing import Any, ClassVar, Dict, Generic, Iterable, Optional, Tuple, TypeVar

import numpy as np

from compensated.accumulation.operators import add_left, subtract_left
from compensated.accumulation.strategies import SummationStrategy, strategy_for
from compensated.capabilities.classifier import Additive, Kind, RawTypeTraits, classify
from compensated.utils.exceptions import CapabilityError

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Additive)

_SPECIALIZATIONS: Dict[Tuple[type, type], type] = {}


class CompensatedAccumulator(Generic[V]):
    """
    A raw value paired with a running compensation for lost low-order bits.

    The accumulator keeps a naive running ``sum`` and a ``compensation`` term
    such that ``sum + compensation`` is the best available estimate of the
    exact total. Each addition picks its algorithm from the capabilities of
    the raw value type, decided once per type:

    * ordered types with an absolute value use Kahan-Neumaier summation,
    * complex-like types use Kahan-Neumaier on each component,
    * any other type with ``+`` and ``-`` uses plain Kahan summation.

    An accumulator is specialized for one raw type, either explicitly with
    ``CompensatedAccumulator[float]`` or implicitly from the type of the
    initial value. Types lacking zero construction, ``+`` or ``-`` are
    rejected with :class:`CapabilityError` at specialization.

    Parameters
    ----------
    initial : V or CompensatedAccumulator, optional
        Starting value. Zero when omitted; when another accumulator is given
        both of its fields are copied.

    Attributes
    ----------
    raw_type : type
        Raw value type of the specialization
    kind : Kind
        Capability kind of ``raw_type``

    Examples
    --------
    >>> huge, tiny = 2.0**32, 2.0**-32
    >>> acc = CompensatedAccumulator(huge)
    >>> acc += tiny
    >>> acc -= huge
    >>> acc -= tiny
    >>> acc.value()
    0.0
    """

    __slots__ = ("_sum", "_compensation")

    # numpy scalars on the left defer to __radd__/__rsub__/__eq__
    __array_ufunc__ = None

    raw_type: ClassVar[Optional[type]] = None
    kind: ClassVar[Optional[Kind]] = None
    _traits: ClassVar[Optional[RawTypeTraits]] = None
    _strategy: ClassVar[Optional[SummationStrategy]] = None

    def __class_getitem__(cls, raw_type):
        if isinstance(raw_type, TypeVar):
            return super().__class_getitem__(raw_type)
        if cls.raw_type is not None:
            raise TypeError(f"{cls.__name__} is already specialized")
        return cls._specialize(raw_type)

    @classmethod
    def _specialize(cls, raw_type: type) -> type:
        # bool is not closed under + and -: True + True is the int 2
        if raw_type is bool:
            raw_type = int
        key = (cls, raw_type)
        if key not in _SPECIALIZATIONS:
            traits = classify(raw_type)
            name = f"{cls.__name__}[{raw_type.__qualname__}]"
            _SPECIALIZATIONS[key] = type(cls)(
                name,
                (cls,),
                {
                    "__slots__": (),
                    "__module__": cls.__module__,
                    "__qualname__": name,
                    "raw_type": raw_type,
                    "kind": traits.kind,
                    "_traits": traits,
                    "_strategy": strategy_for(traits),
                },
            )
            logger.debug(f"Specialized {name} with {traits.algorithm} summation")
        return _SPECIALIZATIONS[key]

    def __new__(cls, initial: Any = None):
        if cls.raw_type is None:
            if isinstance(initial, CompensatedAccumulator):
                raw_type = initial.raw_type
            elif initial is None:
                raw_type = float
            else:
                raw_type = type(initial)
            cls = cls._specialize(raw_type)
        return object.__new__(cls)

    def __init__(self, initial: Any = None):
        if isinstance(initial, CompensatedAccumulator):
            self._sum = self._coerce(initial._sum)
            self._compensation = self._coerce(initial._compensation)
        else:
            self.reset(initial)

    @classmethod
    def _from_parts(cls, total: Any, compensation: Any) -> "CompensatedAccumulator[V]":
        instance = object.__new__(cls)
        instance._sum = total
        instance._compensation = compensation
        return instance

    # --- raw operand handling ---

    def _coerce(self, value: Any) -> Any:
        """Convert a raw operand to the raw type, refusing lossy conversions."""
        raw_type = self.raw_type
        if isinstance(value, raw_type):
            return value
        if not isinstance(value, numbers.Number):
            raise TypeError(
                f"Cannot use {type(value).__name__} as a {raw_type.__qualname__} raw value"
            )

        try:
            converted = raw_type(value)
        except (TypeError, ValueError, ArithmeticError) as e:
            raise TypeError(f"Cannot convert {value!r} to {raw_type.__qualname__}: {e}")

        # numpy compares against Python scalars in its own precision
        exact = converted.item() if isinstance(converted, np.generic) else converted
        # NaN compares unequal to itself but converts without loss
        if isinstance(converted, numbers.Number) and exact != value and value == value:
            raise TypeError(f"{value!r} is not exactly representable as {raw_type.__qualname__}")
        return converted

    def _parts_of(self, operand: Any) -> Tuple[Any, ...]:
        """Raw increments equivalent to adding ``operand``."""
        if isinstance(operand, CompensatedAccumulator):
            return (self._coerce(operand._sum), self._coerce(operand._compensation))
        return (self._coerce(operand),)

    def _negated_parts_of(self, operand: Any) -> Tuple[Any, ...]:
        negate = self._traits.negate
        return tuple(negate(part) for part in self._parts_of(operand))

    def _add_parts(self, parts: Tuple[Any, ...]) -> None:
        step = self._strategy.step
        for part in parts:
            self._sum, self._compensation = step(self._sum, self._compensation, part)

    # --- state ---

    @property
    def sum(self) -> V:
        """Running naive sum."""
        return self._sum

    @property
    def compensation(self) -> V:
        """Running compensation term."""
        return self._compensation

    def reset(self, value: Any = None) -> None:
        """
        Replace the state with a single raw value.

        Parameters
        ----------
        value : V, optional
            New value of the sum; zero when omitted. The compensation is
            cleared.
        """
        self._sum = self._traits.zero() if value is None else self._coerce(value)
        self._compensation = self._traits.zero()

    def copy(self) -> "CompensatedAccumulator[V]":
        """Return an independent accumulator with the same state."""
        return self._from_parts(self._sum, self._compensation)

    def __copy__(self) -> "CompensatedAccumulator[V]":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "CompensatedAccumulator[V]":
        return self._from_parts(
            copy.deepcopy(self._sum, memo), copy.deepcopy(self._compensation, memo)
        )

    # --- conversion ---

    def value(self) -> V:
        """
        Best estimate of the accumulated total, ``sum + compensation``.

        Returns
        -------
        V
            The compensated total as a raw value
        """
        return self._sum + self._compensation

    def error(self) -> V:
        """
        Estimate of the error made by converting to a raw value.

        Returns
        -------
        V
            ``(sum - value()) + compensation``
        """
        converted = self.value()
        return (self._sum - converted) + self._compensation

    @property
    def real(self) -> Any:
        """Real part of the total (complex-like raw types only)."""
        traits = self._require_complex()
        return traits.real_part(self._sum) + traits.real_part(self._compensation)

    @property
    def imag(self) -> Any:
        """Imaginary part of the total (complex-like raw types only)."""
        traits = self._require_complex()
        return traits.imag_part(self._sum) + traits.imag_part(self._compensation)

    def _require_complex(self) -> RawTypeTraits:
        if self.kind is not Kind.COMPLEX:
            raise CapabilityError(
                self.raw_type, "real/imag parts", "only complex-like raw types can be split"
            )
        return self._traits

    def __float__(self) -> float:
        return float(self.value())

    def __complex__(self) -> complex:
        return complex(self.value())

    def __int__(self) -> int:
        return int(self.value())

    # --- arithmetic ---

    def add(self, increment: Any) -> "CompensatedAccumulator[V]":
        """
        Return a new accumulator holding this total plus ``increment``.

        Parameters
        ----------
        increment : V or CompensatedAccumulator
            Raw value, or accumulator whose sum and compensation are added in turn

        Returns
        -------
        CompensatedAccumulator
            New accumulator; ``self`` is unchanged
        """
        result = self.copy()
        result.add_inplace(increment)
        return result

    def add_inplace(self, increment: Any) -> None:
        """Add a raw value or another accumulator to this accumulator."""
        self._add_parts(self._parts_of(increment))

    def subtract(self, decrement: Any) -> "CompensatedAccumulator[V]":
        """Return a new accumulator holding this total minus ``decrement``."""
        result = self.copy()
        result.subtract_inplace(decrement)
        return result

    def subtract_inplace(self, decrement: Any) -> None:
        """Subtract a raw value or another accumulator by adding its negation."""
        self._add_parts(self._negated_parts_of(decrement))

    def negate(self) -> "CompensatedAccumulator[V]":
        """Return the accumulator with both fields negated."""
        negate = self._traits.negate
        return self._from_parts(negate(self._sum), negate(self._compensation))

    def accumulate(self, values: Iterable[Any]) -> None:
        """
        Add every element of ``values`` in order.

        Parameters
        ----------
        values : Iterable
            Raw values (or accumulators) folded left to right
        """
        for item in values:
            self.add_inplace(item)

    def __add__(self, other: Any) -> "CompensatedAccumulator[V]":
        try:
            parts = self._parts_of(other)
        except TypeError:
            return NotImplemented
        result = self.copy()
        result._add_parts(parts)
        return result

    def __radd__(self, other: Any) -> "CompensatedAccumulator[V]":
        return add_left(other, self)

    def __iadd__(self, other: Any) -> "CompensatedAccumulator[V]":
        try:
            parts = self._parts_of(other)
        except TypeError:
            return NotImplemented
        self._add_parts(parts)
        return self

    def __sub__(self, other: Any) -> "CompensatedAccumulator[V]":
        try:
            parts = self._negated_parts_of(other)
        except TypeError:
            return NotImplemented
        result = self.copy()
        result._add_parts(parts)
        return result

    def __rsub__(self, other: Any) -> "CompensatedAccumulator[V]":
        return subtract_left(other, self)

    def __isub__(self, other: Any) -> "CompensatedAccumulator[V]":
        try:
            parts = self._negated_parts_of(other)
        except TypeError:
            return NotImplemented
        self._add_parts(parts)
        return self

    def __neg__(self) -> "CompensatedAccumulator[V]":
        return self.negate()

    # --- comparison ---

    def equals(self, other: Any) -> bool:
        """
        Whether ``other`` represents the same mathematical value.

        Two accumulators are compared as ``sum1 - sum2 == comp2 - comp1`` so
        that differently split totals compare equal. A raw value matches when
        either ``compensation == value - sum`` or ``sum == value - compensation``.

        Parameters
        ----------
        other : V or CompensatedAccumulator
            Value to compare with

        Returns
        -------
        bool
            True on equality
        """
        return self._equals_parts(self._parts_of(other))

    def _equals_parts(self, parts: Tuple[Any, ...]) -> bool:
        # accumulator operands arrive as (sum, compensation), raw ones alone
        if len(parts) == 2:
            other_sum, other_compensation = parts
            return bool(self._sum - other_sum == other_compensation - self._compensation)

        (value,) = parts
        return bool(
            self._compensation == value - self._sum
            or self._sum == value - self._compensation
        )

    def __eq__(self, other: Any) -> bool:
        try:
            parts = self._parts_of(other)
        except TypeError:
            return NotImplemented
        return self._equals_parts(parts)

    def __ne__(self, other: Any) -> bool:
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return NotImplemented
        return not equal

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sum={self._sum!r}, compensation={self._compensation!r})"
