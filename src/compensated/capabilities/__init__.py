"""Capability classification of raw value types."""

from compensated.capabilities.classifier import (
    Additive,
    Kind,
    RawTypeTraits,
    SupportsMemberAbs,
    classify,
)

__all__ = [
    "Additive",
    "Kind",
    "RawTypeTraits",
    "SupportsMemberAbs",
    "classify",
]
