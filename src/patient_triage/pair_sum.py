"""Two-pointer pair-sum check over a sorted integer array."""

from typing import Iterable

import numpy as np

from .exceptions import InvalidArgumentError


class SortedIntegerArray:
    """
    Sorted copy of an integer sequence.

    k_pair_sum runs in O(n) after the O(n log n) sort done at construction.
    """

    def __init__(self, values: Iterable[int]):
        if values is None:
            raise InvalidArgumentError("values must not be None")
        self.values = np.sort(np.asarray(list(values), dtype=np.int64))

    def k_pair_sum(self, k: int) -> bool:
        """
        True if two elements at distinct positions sum to k.

        Raises:
            InvalidArgumentError: If k is None
        """
        if k is None:
            raise InvalidArgumentError("k must not be None")

        i, j = 0, len(self.values) - 1
        while i < j:
            # Python ints, so the sum cannot overflow
            total = int(self.values[i]) + int(self.values[j])
            if total < k:
                i += 1
            elif total > k:
                j -= 1
            else:
                return True
        return False

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"SortedIntegerArray(n={len(self.values)})"
