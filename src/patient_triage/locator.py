"""
Locator capability.

A locator lets a heap tell an entry where it currently lives and later ask
for it back. One entry that sits in two heaps at once needs two locators
writing to two distinct slots, otherwise a swap in one heap would clobber
the other heap's bookkeeping.
"""

from typing import Generic, Optional, Protocol, TypeVar

from .exceptions import InvalidArgumentError

E = TypeVar("E")


class Locator(Protocol[E]):
    """Structural contract: anything with these two methods is a locator."""

    def set_position(self, entry: E, index: Optional[int]) -> None:
        ...

    def get_position(self, entry: E) -> Optional[int]:
        ...


class AttributeLocator(Generic[E]):
    """
    Locator that stores the position in a named attribute of the entry.

    Example:
        >>> priority_locator = AttributeLocator("priority_position")
        >>> time_locator = AttributeLocator("time_position")
    """

    def __init__(self, attribute: str):
        if not attribute:
            raise InvalidArgumentError("attribute name must be non-empty")
        self.attribute = attribute

    def set_position(self, entry: E, index: Optional[int]) -> None:
        setattr(entry, self.attribute, index)

    def get_position(self, entry: E) -> Optional[int]:
        return getattr(entry, self.attribute, None)

    def __repr__(self) -> str:
        return f"AttributeLocator({self.attribute!r})"
