"""Capacity-managed slot storage shared by series and country containers."""

from collections.abc import Iterator
from typing import Generic, TypeVar

import structlog
from attrs import define, field

from ..data.files import MIN_CAPACITY

T = TypeVar("T")

logger = structlog.get_logger(__name__)


@define(slots=True)
class GrowableBuffer(Generic[T]):
    """Ordered slots with explicit capacity doubling and halving.

    Capacity doubles when the buffer is full before an insert and halves when
    occupancy drops to a quarter, never below ``floor``. Each check performs at
    most one resize step.
    """

    floor: int = MIN_CAPACITY
    _slots: list[T | None] = field(init=False, repr=False)
    _count: int = field(default=0, init=False)

    def __attrs_post_init__(self) -> None:
        if self.floor < 1:
            raise ValueError("floor must be a positive integer.")
        self._slots = [None] * self.floor

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        for idx in range(self._count):
            yield self._slots[idx]  # type: ignore[misc]

    def _check_index(self, idx: int) -> int:
        if not 0 <= idx < self._count:
            raise IndexError(f"index {idx} out of range for {self._count} entries")
        return idx

    def __getitem__(self, idx: int) -> T:
        return self._slots[self._check_index(idx)]  # type: ignore[return-value]

    def __setitem__(self, idx: int, item: T) -> None:
        self._slots[self._check_index(idx)] = item

    def reset(self) -> None:
        """Drop every entry and return to the minimum capacity."""
        self._slots = [None] * self.floor
        self._count = 0

    def check_and_resize(self) -> bool:
        """Apply one step of the resize policy; return True when it resized."""
        capacity = self.capacity
        if self._count >= capacity:
            self._resize(capacity * 2)
            return True
        if self._count != 0 and self._count <= capacity // 4:
            new_capacity = max(capacity // 2, self.floor)
            if new_capacity != capacity:
                self._resize(new_capacity)
                return True
        return False

    def _resize(self, new_capacity: int) -> None:
        slots: list[T | None] = [None] * new_capacity
        slots[: self._count] = self._slots[: self._count]
        logger.debug(
            "buffer.resized", old_capacity=self.capacity, new_capacity=new_capacity, count=self._count
        )
        self._slots = slots

    def append(self, item: T) -> None:
        """Add ``item`` after the last live entry."""
        self.check_and_resize()
        self._slots[self._count] = item
        self._count += 1

    def insert(self, idx: int, item: T) -> None:
        """Insert ``item`` at ``idx``, shifting later entries one slot right."""
        if not 0 <= idx <= self._count:
            raise IndexError(f"insert position {idx} out of range for {self._count} entries")
        self.check_and_resize()
        # Walk from the tail so no live entry is overwritten before it moves.
        for pos in range(self._count, idx, -1):
            self._slots[pos] = self._slots[pos - 1]
        self._slots[idx] = item
        self._count += 1

    def remove(self, idx: int) -> T:
        """Remove and return the entry at ``idx``, shifting later entries left."""
        item = self[idx]
        for pos in range(idx + 1, self._count):
            self._slots[pos - 1] = self._slots[pos]
        self._count -= 1
        self._slots[self._count] = None
        return item

    def copy(self) -> "GrowableBuffer[T]":
        """Return a buffer with its own slot list and the same capacity."""
        clone: GrowableBuffer[T] = GrowableBuffer(floor=self.floor)
        clone._slots = list(self._slots)
        clone._count = self._count
        return clone

    def to_list(self) -> list[T]:
        """Return the live entries as a plain list."""
        return list(self)


__all__ = ["GrowableBuffer"]
