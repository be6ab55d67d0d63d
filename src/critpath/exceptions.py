"""Custom exceptions for critpath.

The scheduling engine never raises for bad scheduling data; these are only
raised at file and configuration boundaries.
"""


class CritpathError(Exception):
    """Base exception for all critpath errors."""

    pass


class ParseError(CritpathError):
    """Raised when a snapshot file cannot be read or parsed."""

    pass


class ValidationError(CritpathError):
    """Raised when snapshot content fails structural validation."""

    pass


class ConfigError(CritpathError):
    """Raised when a configuration file is missing or invalid."""

    pass
