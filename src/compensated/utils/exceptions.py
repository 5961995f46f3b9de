"""Custom exception classes for the compensated summation library."""


class CompensatedError(Exception):
    """Base exception class for the compensated summation library."""

    pass


class CapabilityError(CompensatedError, TypeError):
    """
    Exception raised when a raw value type lacks a required capability.

    Parameters
    ----------
    raw_type : type
        The rejected raw value type
    capability : str
        Name of the missing capability (e.g. "binary +")
    detail : str, optional
        Extra context appended to the message
    """

    def __init__(self, raw_type: type, capability: str, detail: str = ""):
        self.raw_type = raw_type
        self.capability = capability
        name = getattr(raw_type, "__qualname__", repr(raw_type))
        message = f"Raw value type '{name}' is missing the '{capability}' capability"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConfigurationError(CompensatedError):
    """Exception raised for configuration errors."""

    pass
