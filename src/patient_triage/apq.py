"""
Adaptable priority queue.

Array-backed binary min-heap whose entries are location-aware: every swap
reports the new index of both entries through the injected locator, so an
entry can be removed from the middle of the heap in O(log n) once its
position is known.
"""

from typing import Generic, Iterator, List, Optional, TypeVar

from .exceptions import (
    BoundaryViolationError,
    InternalInconsistencyError,
    InvalidArgumentError,
)
from .locator import Locator
from .ordering import Comparator

E = TypeVar("E")


class AdaptablePriorityQueue(Generic[E]):
    """
    Min-heap with position-based removal.

    Storage is 1-indexed: slot 0 holds a sentinel so that
    ``parent(i) = i // 2``, ``left(i) = 2i`` and ``right(i) = 2i + 1``.

    Invariants after every public call:
        - Heap order: ``compare(heap[i], heap[i // 2]) >= 0`` for i > 1
        - Position mirror: ``locator.get_position(heap[i]) == i``

    Ties:
        Sift-up only swaps on strictly smaller keys and sift-down only on
        strictly greater ones, preferring the left child when both children
        are equal. Equal entries that never have to cross each other keep
        their insertion order.

    Example:
        >>> apq = AdaptablePriorityQueue(by_key(lambda p: p.priority),
        ...                              AttributeLocator("position"))
        >>> apq.insert(patient)
        >>> apq.remove_at(patient.position)
    """

    def __init__(self, comparator: Comparator, locator: Locator[E]):
        """
        Args:
            comparator: Three-way comparison over entries
            locator: Reads and writes each entry's slot in this heap

        Raises:
            InvalidArgumentError: If comparator or locator is None
        """
        if comparator is None:
            raise InvalidArgumentError("comparator must not be None")
        if locator is None:
            raise InvalidArgumentError("locator must not be None")

        self.comparator = comparator
        self.locator = locator
        self._heap: List[Optional[E]] = [None]  # sentinel at index 0

    # === Public contract ===

    def insert(self, entry: E) -> None:
        """
        Append an entry and sift it up.

        Raises:
            InvalidArgumentError: If entry is None
        """
        if entry is None:
            raise InvalidArgumentError("entry must not be None")

        position = self.size() + 1
        # Storage is untouched if the locator rejects the entry.
        self.locator.set_position(entry, position)
        self._heap.append(entry)
        try:
            self._upheap(position)
        except Exception:
            self._rollback_insert(entry)
            raise

    def remove_at(self, position: int) -> E:
        """
        Remove and return the entry at ``position``.

        The last entry is moved into the vacated slot and repaired in
        whichever direction it violates the heap order.

        Raises:
            BoundaryViolationError: If position is outside [1, size]
        """
        if position is None or position < 1 or position > self.size():
            raise BoundaryViolationError(
                f"position {position} out of range [1, {self.size()}]"
            )

        last = self.size()
        self._swap(position, last)
        removed = self._heap.pop()
        self.locator.set_position(removed, None)

        if position <= self.size():
            # The moved entry may belong below or above its new slot.
            if self._downheap(position) == position:
                self._upheap(position)

        return removed

    def extract_min(self) -> Optional[E]:
        """Remove and return the minimum entry, or None if empty."""
        if self.is_empty():
            return None

        minimum = self._heap[1]
        self._swap(1, self.size())
        self._heap.pop()
        self.locator.set_position(minimum, None)
        self._downheap(1)
        return minimum

    def peek_min(self) -> Optional[E]:
        """Return the minimum entry without removing it, or None if empty."""
        if self.is_empty():
            return None
        return self._heap[1]

    def is_empty(self) -> bool:
        return self.size() == 0

    def size(self) -> int:
        return len(self._heap) - 1

    def verify(self) -> None:
        """
        Check heap order and position mirror.

        Raises:
            InternalInconsistencyError: On the first violating index
        """
        for i in range(1, self.size() + 1):
            entry = self._heap[i]
            located = self.locator.get_position(entry)
            if located != i:
                raise InternalInconsistencyError(
                    f"entry at index {i} reports position {located}"
                )
            if i > 1 and self.comparator(entry, self._heap[self._parent(i)]) < 0:
                raise InternalInconsistencyError(
                    f"heap order violated at index {i} "
                    f"(parent index {self._parent(i)})"
                )

    def __iter__(self) -> Iterator[E]:
        """Entries in storage order (not sorted)."""
        return iter(self._heap[1:])

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __repr__(self) -> str:
        return f"AdaptablePriorityQueue(size={self.size()}, locator={self.locator!r})"

    # === Heap repair ===

    def _upheap(self, position: int) -> int:
        """Move the entry at position towards the root; return its final slot."""
        while position > 1:
            parent = self._parent(position)
            if self.comparator(self._heap[position], self._heap[parent]) < 0:
                self._swap(position, parent)
                position = parent
            else:
                break
        return position

    def _downheap(self, position: int) -> int:
        """Move the entry at position towards the leaves; return its final slot."""
        size = self.size()
        while self._left(position) <= size:
            child = self._left(position)
            right = self._right(position)
            if right <= size and self.comparator(self._heap[right], self._heap[child]) < 0:
                child = right

            if self.comparator(self._heap[position], self._heap[child]) > 0:
                self._swap(position, child)
                position = child
            else:
                break
        return position

    def _rollback_insert(self, entry: E) -> None:
        """
        Undo a half-finished insert without calling the comparator.

        A failed sift-up leaves the entry somewhere on the path from the last
        slot to the root; walking it back down that path restores the exact
        pre-insert layout.
        """
        position = self.locator.get_position(entry)
        path = []
        i = self.size()
        while i > position:
            path.append(i)
            i = self._parent(i)
        for child in reversed(path):
            self._swap(position, child)
            position = child

        self._heap.pop()
        self.locator.set_position(entry, None)

    def _swap(self, i: int, j: int) -> None:
        """Swap two slots, updating both locator positions first."""
        first, second = self._heap[i], self._heap[j]
        self.locator.set_position(first, j)
        self.locator.set_position(second, i)
        self._heap[i], self._heap[j] = second, first

    @staticmethod
    def _parent(i: int) -> int:
        return i // 2

    @staticmethod
    def _left(i: int) -> int:
        return 2 * i

    @staticmethod
    def _right(i: int) -> int:
        return 2 * i + 1
