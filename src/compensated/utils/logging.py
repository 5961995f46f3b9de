"""Logging configuration for the compensated summation library."""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

PACKAGE_LOGGER = "compensated"
CLASSIFIER_LOGGER = f"{PACKAGE_LOGGER}.capabilities"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _numeric_level(log_level: Union[str, int]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, log_level.upper(), logging.INFO)


def setup_logging(
    log_level: Union[str, int] = "INFO",
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
    trace_classification: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Handlers are attached to the ``compensated`` logger only, so the host
    application's root logger is left alone. Calling this again replaces the
    handlers of a previous call.

    Parameters
    ----------
    log_level : str or int, optional
        Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number, by default "INFO".
        Unknown names fall back to INFO.
    log_file : Path, optional
        Also write to this file, creating its directory. If None, logs only
        to stdout, by default None
    log_format : str, optional
        Format string for all handlers. If None, uses DEFAULT_FORMAT, by default None
    trace_classification : bool, optional
        Report every raw type classification and rejection at DEBUG level,
        whatever ``log_level`` is, by default False

    Returns
    -------
    logging.Logger
        The configured ``compensated`` logger

    Examples
    --------
    >>> logger = setup_logging("WARNING", trace_classification=True)
    >>> acc = CompensatedAccumulator(1 + 2j)  # logs "Classified raw type complex ..."
    """
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_numeric_level(log_level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    # levels are decided by the loggers; handlers pass everything through
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logging.getLogger(CLASSIFIER_LOGGER).setLevel(
        logging.DEBUG if trace_classification else logging.NOTSET
    )

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger below the package logger, for scripts built on the library.

    Parameters
    ----------
    name : str, optional
        Child name. If None, returns the ``compensated`` logger itself, by default None

    Examples
    --------
    >>> get_logger("demo").name
    'compensated.demo'
    """
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
