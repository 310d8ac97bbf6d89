"""
Module: layout.queue

Purpose:
    The copy queue - every copy that still has to be placed, in order.
    Designs are expanded into requested_copies repetitions each, keeping
    all copies of one design together.

Key Classes:
    - CopyQueue: Ordered queue of Design references with a read cursor

Used By:
    - gangsheet.layout.paginator: Consumes the queue sheet by sheet
    - gangsheet.controller: Builds the queue from a request
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from gangsheet.core.models import AssetFootprint, Design


class CopyQueue:
    """
    Ordered queue of copies to place.

    The queue never copies Design objects; each entry is a reference to
    the Design it came from. Advancing moves a cursor, so remaining()
    is a cheap slice.

    Example:
        >>> queue = CopyQueue.from_designs([a, b])  # a: 2 copies, b: 1 copy
        >>> [d.name for d in queue.remaining()]
        ['a', 'a', 'b']
        >>> queue.advance(2)
        >>> len(queue)
        1
    """

    def __init__(self, items: Iterable[Design]) -> None:
        self._items: Tuple[Design, ...] = tuple(items)
        self._cursor = 0

    @classmethod
    def from_designs(cls, designs: Sequence[Design]) -> CopyQueue:
        """Expand each design into requested_copies queue entries."""
        items: list[Design] = []
        for design in designs:
            items.extend([design] * design.requested_copies)
        return cls(items)

    def __len__(self) -> int:
        return len(self._items) - self._cursor

    @property
    def is_empty(self) -> bool:
        return self._cursor >= len(self._items)

    def remaining(self) -> Tuple[Design, ...]:
        """Entries not yet consumed, in order."""
        return self._items[self._cursor:]

    def advance(self, count: int) -> None:
        """Mark the next count entries as consumed."""
        if count < 0:
            raise ValueError(f"Cannot advance by a negative count: {count}")
        if count > len(self):
            raise ValueError(f"Cannot advance by {count}, only {len(self)} remaining")
        self._cursor += count

    def distinct_footprints(self) -> set[AssetFootprint]:
        """Footprints still present in the queue."""
        return {d.footprint for d in self.remaining()}
