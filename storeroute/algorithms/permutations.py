"""Lexicographic permutation enumeration with prefix skipping.

``PermutationEnumerator`` yields every ordering of ``range(size)`` exactly
once, starting from the identity ordering and advancing by the standard
next-lexicographic-permutation rule:

    0 1 2 3
    0 1 3 2
    0 2 1 3
    0 2 3 1
    0 3 1 2
    0 3 2 1
    1 0 2 3
    ...

Callers can discard all remaining orderings that share the current prefix
with ``skip_remaining_right``. The route planner uses this for
branch-and-bound pruning.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

Ordering = Tuple[int, ...]


class PermutationEnumerator(Iterator[Ordering]):
    """Iterator over index orderings of ``size`` items in lexicographic order.

    The first ``next()`` returns the identity ordering without advancing; each
    later call advances first, then returns the new ordering. Every returned
    ordering is a fresh tuple, so it stays valid across later calls.

    Example:
        >>> enum = PermutationEnumerator(3)
        >>> [ordering for ordering in enum]
        [(0, 1, 2), (0, 2, 1), (1, 0, 2), (1, 2, 0), (2, 0, 1), (2, 1, 0)]
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ValueError(f"'size' must be a non-negative integer, got {size!r}")
        self._size = size
        self._iteration: Optional[List[int]] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def current(self) -> Optional[Ordering]:
        """The most recently returned ordering, or None before the first call."""
        if self._iteration is None:
            return None
        return tuple(self._iteration)

    def has_more(self) -> bool:
        """Return False once the current ordering is the final (descending) one."""
        if self._iteration is None:
            return True
        iteration = self._iteration
        return any(iteration[i] < iteration[i + 1] for i in range(self._size - 1))

    def __iter__(self) -> PermutationEnumerator:
        return self

    def __next__(self) -> Ordering:
        if self._iteration is None:
            self._iteration = list(range(self._size))
        elif not self.has_more():
            raise StopIteration
        else:
            self._advance()
        return tuple(self._iteration)

    def skip_remaining_right(self, position: int) -> None:
        """Discard the remaining orderings that share the prefix up to ``position``.

        Reorders all entries strictly right of ``position`` into descending
        order, the last arrangement for the current prefix. The next advance
        therefore increments the entry at ``position`` itself. Positions closer
        than two to the end leave too little suffix to skip and are ignored.

        Args:
            position: Index of the last prefix entry to keep fixed.

        Raises:
            ValueError: If ``position`` is negative.
            RuntimeError: If no ordering has been produced yet.
        """
        if position < 0:
            raise ValueError(f"'position' must be non-negative, got {position}")
        if self._iteration is None:
            raise RuntimeError("skip_remaining_right() called before next().")
        if position > self._size - 3:
            return
        self._iteration[position + 1 :] = sorted(
            self._iteration[position + 1 :], reverse=True
        )

    def _advance(self) -> None:
        """Step to the next lexicographic ordering. Requires ``has_more()``."""
        iteration = self._iteration
        assert iteration is not None

        # Rightmost entry that is smaller than its right neighbour.
        pivot = self._size - 2
        while iteration[pivot] > iteration[pivot + 1]:
            pivot -= 1

        # The suffix is descending, so the rightmost larger entry is the
        # smallest value exceeding the pivot.
        successor = self._size - 1
        while iteration[successor] < iteration[pivot]:
            successor -= 1

        iteration[pivot], iteration[successor] = iteration[successor], iteration[pivot]
        iteration[pivot + 1 :] = reversed(iteration[pivot + 1 :])

    def __repr__(self) -> str:
        return f"PermutationEnumerator(size={self._size}, current={self.current})"
