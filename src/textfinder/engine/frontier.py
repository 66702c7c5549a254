"""
Pending-work stack shared by the search workers.

The frontier is an index-addressed backing list plus a top index. Pushing past
the end grows the list to ``(index + 1) * 2`` slots; popping and clearing only
move the index, so storage stays at its high-water mark for the lifetime of the
frontier. Released slots keep their old references until overwritten. This
keeps push and pop at amortized O(1) at the cost of never returning memory
before ``reset``.

The frontier is not synchronized. Every access from worker threads must happen
while holding the lock of the search run that owns it.
"""

from typing import Generic, List, Optional, Tuple, TypeVar


T = TypeVar('T')


class Frontier(Generic[T]):
    """Growable last-in-first-out stack. Traversal using it is depth-first."""

    def __init__(self, capacity: int = 0):
        self._nodes: List[Optional[T]] = []
        self._index = -1
        self.reset(capacity)

    def reset(self, capacity: int = 0) -> None:
        """Drop all items and replace the backing storage with ``capacity`` empty slots."""
        if capacity < 0:
            raise ValueError("Capacity cannot be negative")
        self._nodes = [None] * capacity
        self._index = -1

    def clear(self) -> None:
        """Drop all items, keeping the backing storage."""
        self._index = -1

    @property
    def count(self) -> int:
        return self._index + 1

    @property
    def any(self) -> bool:
        return self._index >= 0

    @property
    def capacity(self) -> int:
        return len(self._nodes)

    def push(self, item: T) -> None:
        desired = self._index + 1
        if desired > len(self._nodes) - 1:
            # double
            new_capacity = (desired + 1) * 2
            self._nodes.extend([None] * (new_capacity - len(self._nodes)))
        self._nodes[desired] = item
        self._index = desired

    def pop(self) -> T:
        """
        Remove and return the most recently pushed item.

        Raises:
            IndexError: If the frontier is empty
        """
        if self._index < 0:
            raise IndexError("pop from empty frontier")
        item = self._nodes[self._index]
        self._index -= 1
        return item

    def try_pop(self) -> Tuple[Optional[T], bool]:
        """Pop if possible, returning ``(item, True)`` or ``(None, False)``."""
        if self._index < 0:
            return None, False
        return self.pop(), True

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"Frontier(count={self.count}, capacity={self.capacity})"
