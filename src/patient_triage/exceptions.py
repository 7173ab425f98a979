"""
Error taxonomy for the triage core.

Every error also derives from the closest builtin so callers can catch
either the specific class or e.g. ``ValueError``.
"""


class TriageError(Exception):
    """Base class for triage core errors"""


class InvalidArgumentError(TriageError, ValueError):
    """A required value was absent (None) or otherwise unusable."""


class BoundaryViolationError(TriageError, IndexError):
    """A heap position outside ``[1, size]``."""


class EmptyQueueError(TriageError, LookupError):
    """An element was required from an empty structure."""


class InternalInconsistencyError(TriageError, RuntimeError):
    """
    A heap or the two-heap mirror was found broken.

    Indicates a locator or ordering bug, not caller misuse.
    """
