"""
Structural classification of raw value types for compensated summation.

A raw value type is admissible when it can be built from the additive identity
(``V(0)``) and supports binary ``+`` and ``-``. Admissible types are then
classified as:

* ``Kind.REAL``: ordered and equipped with an absolute value (free ``abs()`` or
  a member ``.abs()``); summed with the Kahan-Neumaier algorithm.
* ``Kind.COMPLEX``: exposes ``real`` and ``imag`` parts of a real kind and can be
  rebuilt as ``V(real, imag)``; Kahan-Neumaier is applied per component. This
  takes precedence over ordering, which some complex types also provide.
* ``Kind.GENERIC``: anything else; summed with plain Kahan.

Classification probes the operations on the zero element of the type once and
caches the outcome, so accumulators never inspect types while summing.
"""

import functools
import logging
import operator
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

from compensated.utils.exceptions import CapabilityError

logger = logging.getLogger(__name__)

# errors a user-defined operator may raise when probed on the zero element
_PROBE_ERRORS = (TypeError, ValueError, AttributeError, ArithmeticError)


@runtime_checkable
class Additive(Protocol):
    """Baseline capability: binary ``+`` and ``-``."""

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...


@runtime_checkable
class SupportsMemberAbs(Protocol):
    """Absolute value supplied as a member method rather than ``__abs__``."""

    def abs(self) -> Any: ...


class Kind(Enum):
    """Summation strategy selected for a raw value type."""

    REAL = "real"
    COMPLEX = "complex"
    GENERIC = "generic"


@dataclass(frozen=True)
class RawTypeTraits:
    """
    Capabilities discovered for a raw value type.

    Attributes
    ----------
    raw_type : type
        The classified type
    kind : Kind
        Selected summation strategy
    zero : Callable[[], Any]
        Factory for the additive identity
    negate : Callable[[Any], Any]
        Unary minus, or subtraction from zero when the type has none
    has_unary_minus : bool
        Whether ``negate`` is the native unary minus
    magnitude : Callable[[Any], Any], optional
        Absolute value (REAL only)
    real_part, imag_part : Callable[[Any], Any], optional
        Component accessors (COMPLEX only)
    part_magnitude : Callable[[Any], Any], optional
        Absolute value of a component (COMPLEX only)
    """

    raw_type: type
    kind: Kind
    zero: Callable[[], Any]
    negate: Callable[[Any], Any]
    has_unary_minus: bool = False
    magnitude: Optional[Callable[[Any], Any]] = None
    real_part: Optional[Callable[[Any], Any]] = None
    imag_part: Optional[Callable[[Any], Any]] = None
    part_magnitude: Optional[Callable[[Any], Any]] = None

    @property
    def algorithm(self) -> str:
        """Human-readable name of the summation algorithm for this type."""
        if self.kind is Kind.GENERIC:
            return "Kahan"
        return "Kahan-Neumaier"


def _type_name(raw_type: type) -> str:
    return getattr(raw_type, "__qualname__", repr(raw_type))


def _subtract_from_zero(raw_type: type, value: Any) -> Any:
    return raw_type(0) - value


def _make_zero(raw_type: type) -> Any:
    """Build the additive identity of ``raw_type`` or reject the type."""
    try:
        return raw_type(0)
    except _PROBE_ERRORS as e:
        raise CapabilityError(
            raw_type, "zero construction", f"{_type_name(raw_type)}(0) failed ({e})"
        )


def _check_binary(raw_type: type, zero: Any, op: Callable[[Any, Any], Any], symbol: str) -> None:
    """Probe a binary operator on the zero element and check its result type."""
    capability = f"binary {symbol}"
    try:
        result = op(zero, zero)
    except _PROBE_ERRORS as e:
        raise CapabilityError(raw_type, capability, str(e))

    if isinstance(result, raw_type):
        return

    try:
        raw_type(result)
    except _PROBE_ERRORS as e:
        raise CapabilityError(
            raw_type,
            capability,
            f"result of type '{_type_name(type(result))}' is not convertible back ({e})",
        )


def _is_ordered(value: Any) -> bool:
    """Whether all four ordering comparisons work on ``value``."""
    try:
        for compare in (operator.lt, operator.le, operator.gt, operator.ge):
            bool(compare(value, value))
    except (TypeError, ValueError):
        return False
    return True


def _magnitude_function(zero: Any) -> Optional[Callable[[Any], Any]]:
    """
    Find the absolute-value operation of a type, free function first.

    The magnitude itself must be ordered, since the Neumaier branch compares
    magnitudes.
    """
    if isinstance(zero, typing.SupportsAbs):
        try:
            if _is_ordered(abs(zero)):
                return abs
        except TypeError:
            pass

    if isinstance(zero, SupportsMemberAbs):
        member_abs = operator.methodcaller("abs")
        try:
            if _is_ordered(member_abs(zero)):
                return member_abs
        except TypeError:
            pass

    return None


def _part_accessor(zero: Any, name: str) -> Optional[Callable[[Any], Any]]:
    """Accessor for ``real``/``imag`` exposed either as attribute or method."""
    if not hasattr(zero, name):
        return None
    if callable(getattr(zero, name)):
        return operator.methodcaller(name)
    return operator.attrgetter(name)


def _split_parts(raw_type: type, zero: Any) -> Optional[Tuple[Callable, Callable, Any, Any]]:
    """
    Accessors and values of the ``real``/``imag`` parts of the zero element.

    Returns None unless both parts exist and belong to a type that is not a
    base of ``raw_type`` (``float.real`` is a float, so floats do not split).
    """
    real_part = _part_accessor(zero, "real")
    imag_part = _part_accessor(zero, "imag")
    if real_part is None or imag_part is None:
        return None

    try:
        re, im = real_part(zero), imag_part(zero)
    except TypeError:
        return None

    if any(issubclass(raw_type, type(part)) for part in (re, im)):
        return None
    return real_part, imag_part, re, im


def _complex_traits(
    raw_type: type, split: Tuple[Callable, Callable, Any, Any]
) -> Optional[dict]:
    """Return the complex-specific traits of a splittable type, or None."""
    real_part, imag_part, re, im = split

    for part in (re, im):
        try:
            part_traits = classify(type(part))
        except CapabilityError:
            return None
        if part_traits.kind is not Kind.REAL or part_traits.magnitude is not abs:
            return None

    try:
        raw_type(re, im)
    except (TypeError, ValueError):
        return None

    return {"real_part": real_part, "imag_part": imag_part, "part_magnitude": abs}


@functools.lru_cache(maxsize=None)
def classify(raw_type: type) -> RawTypeTraits:
    """
    Classify a raw value type for compensated summation.

    Parameters
    ----------
    raw_type : type
        Candidate raw value type

    Returns
    -------
    RawTypeTraits
        Discovered capabilities and the selected summation kind

    Raises
    ------
    CapabilityError
        If the type cannot be built from zero or lacks binary ``+``/``-``

    Examples
    --------
    >>> classify(float).kind
    <Kind.REAL: 'real'>
    >>> classify(complex).kind
    <Kind.COMPLEX: 'complex'>
    """
    if not isinstance(raw_type, type):
        raise TypeError(f"Expected a type to classify, got {raw_type!r}")

    try:
        zero = _make_zero(raw_type)
        if not isinstance(zero, Additive):
            missing = "binary +" if not hasattr(zero, "__add__") else "binary -"
            raise CapabilityError(raw_type, missing)
        _check_binary(raw_type, zero, operator.add, "+")
        _check_binary(raw_type, zero, operator.sub, "-")
    except CapabilityError as e:
        logger.debug(f"Rejected raw type {_type_name(raw_type)}: {e}")
        raise

    try:
        operator.neg(zero)
        has_unary_minus = True
    except _PROBE_ERRORS:
        has_unary_minus = False

    common = {
        "raw_type": raw_type,
        "zero": functools.partial(raw_type, 0),
        "negate": (
            operator.neg
            if has_unary_minus
            else functools.partial(_subtract_from_zero, raw_type)
        ),
        "has_unary_minus": has_unary_minus,
    }

    # numpy orders complex scalars lexicographically, so a type that splits
    # into parts of another type is never real, ordered or not
    split = _split_parts(raw_type, zero)
    complex_traits = _complex_traits(raw_type, split) if split is not None else None
    magnitude = None
    if split is None and _is_ordered(zero):
        magnitude = _magnitude_function(zero)

    if magnitude is not None:
        traits = RawTypeTraits(kind=Kind.REAL, magnitude=magnitude, **common)
    elif complex_traits is not None:
        traits = RawTypeTraits(kind=Kind.COMPLEX, **complex_traits, **common)
    else:
        traits = RawTypeTraits(kind=Kind.GENERIC, **common)

    logger.debug(
        f"Classified raw type {_type_name(raw_type)} as {traits.kind.value} "
        f"({traits.algorithm} summation)"
    )
    return traits
