from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a loader argument is out of its accepted range."""


class DimensionMismatch(ValueError):
    """Raised when the arrays of a tuple dataset disagree on observation count."""
