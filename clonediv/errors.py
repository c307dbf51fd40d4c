"""
Exceptions raised by clonediv.
"""


class CloneDivError(Exception):
    """Base class for errors raised by this package."""


class InvalidInputError(CloneDivError, ValueError):
    """Counts, group collections or test parameters which can't be tested."""


class ConfigurationError(CloneDivError, ValueError):
    """Settings which don't describe a valid run, e.g. an unknown correction method."""
