"""
Pathwise exception hierarchy.

The calculation engine never raises for degenerate numeric input; these
exceptions belong to the layers around it (configuration, input files, CLI).
All of them inherit from PathwiseError so consumers can catch library-level
errors in one place.
"""


class PathwiseError(Exception):
    """Base exception class for all pathwise errors."""


class ConfigurationError(PathwiseError):
    """Raised for configuration errors (missing keys, invalid values)."""


class HouseholdFileError(PathwiseError):
    """Raised when a household input file cannot be read or fails validation."""
