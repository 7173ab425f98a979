"""
Ordering capability.

A comparator is any callable ``compare(a, b)`` returning a negative number,
zero or a positive number when ``a`` sorts before, together with, or after
``b``. The heap never compares entries itself.
"""

from typing import Any, Callable, TypeVar

E = TypeVar("E")

Comparator = Callable[[E, E], int]


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison of two naturally ordered values."""
    return (a > b) - (a < b)


def by_key(key: Callable[[E], Any]) -> Comparator:
    """
    Build a comparator that orders entries by ``key(entry)``.

    Example:
        >>> by_priority = by_key(lambda p: p.priority)
    """

    def compare(a: E, b: E) -> int:
        return compare_values(key(a), key(b))

    return compare
