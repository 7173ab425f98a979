"""
Unit tests for the adaptable priority queue.

Tests:
    1. Empty-queue behavior and argument validation
    2. Heap order and position mirror under inserts/removals
    3. Tie handling (sift-up stability, left-child preference)
    4. remove_at repair in both directions
    5. Rollback when the comparator fails mid-insert
"""

import random
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from patient_triage import (
    AdaptablePriorityQueue,
    AttributeLocator,
    BoundaryViolationError,
    InternalInconsistencyError,
    InvalidArgumentError,
    by_key,
    compare_values,
)


@dataclass(eq=False)
class Item:
    key: Any
    label: str = ""
    position: Optional[int] = None


def make_queue() -> AdaptablePriorityQueue:
    return AdaptablePriorityQueue(by_key(lambda item: item.key), AttributeLocator("position"))


def fill(apq, keys):
    items = [Item(key, label=f"item_{i}") for i, key in enumerate(keys)]
    for item in items:
        apq.insert(item)
    return items


# === Unit Tests: Construction and Empty Queue ===


def test_empty_queue_reports_empty():
    """Fresh queue peeks/extracts None without mutating."""
    apq = make_queue()

    assert apq.is_empty()
    assert apq.size() == 0
    assert len(apq) == 0
    assert not apq
    assert apq.peek_min() is None
    assert apq.peek_min() is None
    assert apq.extract_min() is None
    assert apq.is_empty()


def test_constructor_rejects_missing_capabilities():
    with pytest.raises(InvalidArgumentError, match="comparator"):
        AdaptablePriorityQueue(None, AttributeLocator("position"))

    with pytest.raises(InvalidArgumentError, match="locator"):
        AdaptablePriorityQueue(compare_values, None)


def test_insert_none_rejected():
    apq = make_queue()

    with pytest.raises(InvalidArgumentError, match="entry must not be None"):
        apq.insert(None)

    # Also catchable as the builtin
    with pytest.raises(ValueError):
        apq.insert(None)

    assert apq.is_empty()


# === Unit Tests: Heap Order and Position Mirror ===


def test_insert_sets_positions():
    """Every entry knows its slot after each insert."""
    apq = make_queue()
    items = fill(apq, [5, 3, 8, 1, 9, 2])

    stored = list(apq)
    for item in items:
        assert stored[item.position - 1] is item
    assert apq.peek_min().key == 1
    apq.verify()


def test_extract_min_returns_sorted_sequence():
    """N random inserts followed by N extractions come out sorted."""
    rng = random.Random(42)
    apq = make_queue()
    keys = [rng.randint(0, 50) for _ in range(300)]

    for item in fill(apq, keys):
        assert item.position is not None
    apq.verify()

    extracted = []
    while not apq.is_empty():
        item = apq.extract_min()
        assert item.position is None
        extracted.append(item.key)
        apq.verify()

    assert extracted == sorted(keys)


def test_mixed_operations_keep_invariants():
    """Random inserts, removals and extractions never break the heap."""
    rng = random.Random(7)
    apq = make_queue()
    present = []

    for step in range(1000):
        action = rng.random()
        if action < 0.5 or not present:
            item = Item(rng.randint(0, 100), label=f"step_{step}")
            apq.insert(item)
            present.append(item)
        elif action < 0.8:
            victim = rng.choice(present)
            removed = apq.remove_at(victim.position)
            assert removed is victim
            present.remove(victim)
        else:
            minimum = apq.extract_min()
            assert minimum.key == min(item.key for item in present)
            present.remove(minimum)

        apq.verify()
        assert apq.size() == len(present)


# === Unit Tests: Ties ===


def test_stability_example():
    """{3,A}, {1,B}, {3,C}: B first, then one of A or C."""
    apq = make_queue()
    a, b, c = Item(3, "A"), Item(1, "B"), Item(3, "C")
    for item in (a, b, c):
        apq.insert(item)

    assert apq.extract_min() is b
    assert apq.extract_min() in (a, c)


def test_equal_keys_do_not_sift_up_past_each_other():
    """Equal keys inserted in sequence leave the first one at the root."""
    apq = make_queue()
    first, second, third = Item(4, "first"), Item(4, "second"), Item(4, "third")
    for item in (first, second, third):
        apq.insert(item)

    assert apq.peek_min() is first
    assert [first.position, second.position, third.position] == [1, 2, 3]


def test_sift_down_prefers_left_child_on_tie():
    apq = make_queue()
    root, left, right, leaf = Item(1), Item(5, "left"), Item(5, "right"), Item(9)
    for item in (root, left, right, leaf):
        apq.insert(item)

    assert apq.extract_min() is root
    assert apq.peek_min() is left
    assert right.position == 3
    apq.verify()


# === Unit Tests: remove_at ===


@pytest.mark.parametrize("position", [0, -1, 4, None])
def test_remove_at_out_of_bounds(position):
    apq = make_queue()
    fill(apq, [1, 2, 3])

    with pytest.raises(BoundaryViolationError, match="out of range"):
        apq.remove_at(position)

    assert apq.size() == 3


def test_remove_at_on_empty_queue():
    apq = make_queue()

    with pytest.raises(IndexError):
        apq.remove_at(1)


def test_remove_at_last_position():
    apq = make_queue()
    items = fill(apq, [1, 2, 3])
    last = next(item for item in items if item.position == 3)

    assert apq.remove_at(3) is last
    assert last.position is None
    assert apq.size() == 2
    apq.verify()


def test_remove_at_moves_replacement_up_when_needed():
    """
    The entry moved into the vacated slot can be smaller than its new parent.

    Heap by key: [1, 10, 2, 11, 12, 3, 4]. Removing 11 (slot 4) moves 4 under
    10; it has to rise to slot 2.
    """
    apq = make_queue()
    items = {item.key: item for item in fill(apq, [1, 10, 2, 11, 12, 3, 4])}
    assert items[11].position == 4

    removed = apq.remove_at(4)

    assert removed is items[11]
    assert items[4].position == 2
    assert items[10].position == 4
    apq.verify()


def test_remove_at_moves_replacement_down_when_needed():
    apq = make_queue()
    items = {item.key: item for item in fill(apq, [1, 2, 3, 4, 5, 6, 20])}

    apq.remove_at(items[2].position)

    assert items[20].position == 4
    assert items[4].position == 2
    apq.verify()
    assert [apq.extract_min().key for _ in range(6)] == [1, 3, 4, 5, 6, 20]


# === Unit Tests: Consistency Checks and Rollback ===


def test_verify_detects_stale_position():
    apq = make_queue()
    items = fill(apq, [1, 2, 3])
    items[2].position = 99

    with pytest.raises(InternalInconsistencyError, match="reports position 99"):
        apq.verify()


def test_failed_insert_is_rolled_back():
    """A comparator error mid sift-up leaves the queue exactly as before."""
    apq = make_queue()
    fill(apq, [1, 2, 3, 4, 5, 6, 7])
    before = list(apq)

    bad = Item("not comparable")
    with pytest.raises(TypeError):
        apq.insert(bad)

    assert list(apq) == before
    assert bad.position is None
    apq.verify()


@dataclass(frozen=True)
class FrozenItem:
    key: int


def test_insert_rejected_by_locator_leaves_storage_unchanged():
    """An entry the locator cannot tag never enters storage."""
    apq = make_queue()

    with pytest.raises(AttributeError):
        apq.insert(FrozenItem(5))
    with pytest.raises(AttributeError):
        apq.insert(5)

    assert apq.size() == 0
    assert list(apq) == []

    # Still usable afterwards
    items = fill(apq, [3, 1])
    assert apq.peek_min() is items[1]
    apq.verify()


def test_attribute_locator_rejects_empty_name():
    with pytest.raises(InvalidArgumentError, match="attribute name"):
        AttributeLocator("")


def test_repr_mentions_size():
    apq = make_queue()
    fill(apq, [1, 2])
    assert "size=2" in repr(apq)


# === Unit Tests: Ordering Helpers ===


def test_compare_values_three_way():
    assert compare_values(1, 2) < 0
    assert compare_values(2, 2) == 0
    assert compare_values(3, 2) > 0


def test_by_key_orders_by_key():
    compare = by_key(len)
    assert compare("ab", "abc") < 0
    assert compare("abc", "xyz") == 0
