"""Autosave ring slot selection.  Pure: callers gather the slot metadata."""

from typing import Iterable, NamedTuple


class SlotInfo(NamedTuple):
    index: int
    mtime: float


def acquire(existing: Iterable[SlotInfo], slot_count: int) -> int:
    """
    Return the 1-based slot index the next autosave should be written to.

    The first free slot wins.  With every slot occupied, the one with the
    oldest mtime is evicted, lowest index first on ties.
    """
    occupied = {slot.index: slot for slot in existing if 1 <= slot.index <= slot_count}

    for index in range(1, slot_count + 1):
        if index not in occupied:
            return index

    oldest = min(occupied.values(), key=lambda s: (s.mtime, s.index))
    return oldest.index
