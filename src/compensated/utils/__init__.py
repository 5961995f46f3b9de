"""Utility modules for the compensated summation library."""

from compensated.utils.config_parser import get_nested_value, load_config
from compensated.utils.exceptions import (
    CapabilityError,
    CompensatedError,
    ConfigurationError,
)
from compensated.utils.logging import get_logger, setup_logging

__all__ = [
    "load_config",
    "get_nested_value",
    "CompensatedError",
    "CapabilityError",
    "ConfigurationError",
    "setup_logging",
    "get_logger",
]
