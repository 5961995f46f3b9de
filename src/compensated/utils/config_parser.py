"""Configuration file parsing for the summation demonstration."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from compensated.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_DTYPES = ("float32", "float64")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate a summation demo configuration from a YAML file.

    Parameters
    ----------
    config_path : Union[str, Path]
        Path to YAML configuration file

    Returns
    -------
    Dict[str, Any]
        Parsed configuration dictionary

    Raises
    ------
    ConfigurationError
        If configuration file is missing, unparsable or fails validation

    Examples
    --------
    >>> config = load_config("examples/demo_config.yaml")
    >>> print(config["summation_demo"]["dtypes"])
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML configuration: {e}")

    _validate_config(config)

    logger.info(f"Loaded configuration from {config_path}")
    return config


def _validate_config(config: Any) -> None:
    """
    Validate configuration structure and required fields.

    Parameters
    ----------
    config : Any
        Parsed YAML document

    Raises
    ------
    ConfigurationError
        If required fields are missing or invalid
    """
    if not isinstance(config, dict) or "summation_demo" not in config:
        raise ConfigurationError("Configuration must contain 'summation_demo' key")

    demo_config = config["summation_demo"]
    if not isinstance(demo_config, dict):
        raise ConfigurationError("summation_demo must be a mapping")

    if "dtypes" not in demo_config:
        raise ConfigurationError("Missing required field: summation_demo.dtypes")

    _validate_dtypes(demo_config["dtypes"])

    if "log_level" in demo_config:
        _validate_log_level(demo_config["log_level"])

    if "sequence" in demo_config:
        _validate_sequence(demo_config["sequence"])

    if "trace_classification" in demo_config and not isinstance(
        demo_config["trace_classification"], bool
    ):
        raise ConfigurationError("trace_classification must be true or false")


def _validate_dtypes(dtypes: List[str]) -> None:
    """Validate the list of floating-point dtypes to demonstrate."""
    if not isinstance(dtypes, list) or len(dtypes) == 0:
        raise ConfigurationError("dtypes must be a non-empty list")

    for dtype in dtypes:
        if dtype not in SUPPORTED_DTYPES:
            raise ConfigurationError(
                f"Unsupported dtype '{dtype}', expected one of {list(SUPPORTED_DTYPES)}"
            )


def _validate_log_level(log_level: str) -> None:
    """Validate logging level name."""
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        raise ConfigurationError(f"Invalid log_level: {log_level}")


def _validate_sequence(sequence: List[float]) -> None:
    """Validate the sequence of values to accumulate."""
    if not isinstance(sequence, list):
        raise ConfigurationError("sequence must be a list of numbers")

    for item in sequence:
        # bool is an int subclass but never a meaningful summand here
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise ConfigurationError(f"sequence contains a non-numeric entry: {item!r}")


def get_nested_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get a value from nested dictionary using dot notation.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    key_path : str
        Dot-separated path to value (e.g., "summation_demo.log_level")
    default : Any, optional
        Default value if key not found, by default None

    Returns
    -------
    Any
        Value at the specified path, or default if not found

    Examples
    --------
    >>> config = {"summation_demo": {"log_level": "DEBUG"}}
    >>> get_nested_value(config, "summation_demo.log_level")
    'DEBUG'
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
