"""Capacity-bounded set of selected ballot numbers."""

from __future__ import annotations

from ballot_quiz.constants.picker_constants import SELECTION_CAPACITY


class SelectionCapacityError(RuntimeError):
    """Raised when adding to a selection that is already full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Selection is limited to {capacity} entries.")
        self.capacity = capacity


class SelectionSet:
    """Tracks membership only; the maximum size is enforced on insertion."""

    def __init__(self, capacity: int = SELECTION_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Selection capacity must be a positive integer.")
        self._capacity = capacity
        self._members: set[int] = set()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __contains__(self, ballot_number: object) -> bool:
        return ballot_number in self._members

    def __len__(self) -> int:
        return len(self._members)

    def is_full(self) -> bool:
        return len(self._members) >= self._capacity

    def add(self, ballot_number: int) -> None:
        if ballot_number in self._members:
            return
        if self.is_full():
            raise SelectionCapacityError(self._capacity)
        self._members.add(ballot_number)

    def discard(self, ballot_number: int) -> None:
        self._members.discard(ballot_number)

    def clear(self) -> None:
        self._members.clear()

    def snapshot(self) -> frozenset[int]:
        return frozenset(self._members)
