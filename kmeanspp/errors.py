"""Exception types raised by kmeanspp.

All errors derive from ``ValueError`` so callers that already guard
bad input with ``except ValueError`` keep working.
"""


class KMeansError(ValueError):
    """Base class for kmeanspp errors."""


class InvalidConfiguration(KMeansError):
    """Clustering parameters violate a constraint checked by ``configure``."""


class DimensionMismatch(KMeansError):
    """Two vectors or a matrix and its declared shape disagree in size."""


class MalformedInput(KMeansError):
    """A delimited text row is ragged or holds a non-numeric field."""
