"""
Domain errors for the comparison engine.
Every ComparisonError is terminal for one request: it describes the input data,
not a transient failure, so callers render a fallback instead of retrying.
"""


class ComparisonError(Exception):
    """Base class for failures that abort a single comparison."""


class EmptySeriesError(ComparisonError):
    """A price series has no observations."""


class NoOverlapError(ComparisonError):
    """The benchmark has no data on or after the subject's first day."""


class DivisionByZeroError(ComparisonError, ZeroDivisionError):
    """A ratio was requested against a zero base value."""


class InvalidInputError(ComparisonError, ValueError):
    """Snapshots are out of order or carry malformed timestamps or prices."""


class UpstreamError(RuntimeError):
    """An upstream API call failed or answered with errors."""
