#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from typing import Iterable, Iterator, List, Optional, Tuple

from prefill.common.definitions.errors import EmptyQueue
from prefill.common.definitions.prefill.shapes import ShapeDescriptor


class AllocationQueue:
    """
    Interleaved emission order of planned blocks.

    Holds one ``[shape, remaining]`` slot per shape and walks them round robin:
    every round hands out one block of each shape that still has some left,
    in the order the shapes were given. Exhausted slots drop out, so later
    rounds only contain the shapes with larger counts.

    The queue is meant to be drained by a single consumer and is not
    synchronized; concurrent consumers must serialize their calls to remove().
    """

    def __init__(self, slots: Iterable[Tuple[ShapeDescriptor, int]] = ()):
        self._slots: List[list] = [[shape, count] for shape, count in slots if count > 0]
        self._index = 0
        self._size = sum(count for _, count in self._slots)

    @property
    def size(self) -> int:
        """Number of emissions left."""
        return self._size

    @property
    def remaining_bytes(self) -> int:
        return sum(shape.byte_size * count for shape, count in self._slots)

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def peek(self) -> Optional[ShapeDescriptor]:
        if self.is_empty():
            return None
        return self._slots[self._index][0]

    def remove(self) -> ShapeDescriptor:
        """
        Remove and return the next shape to allocate.

        Raises:
            EmptyQueue: if every planned block has already been handed out.
        """
        if self.is_empty():
            raise EmptyQueue("No blocks left in the allocation queue")

        slot = self._slots[self._index]
        shape = slot[0]
        slot[1] -= 1
        self._size -= 1

        if slot[1] == 0:
            # the next slot shifts into the current index
            del self._slots[self._index]
        else:
            self._index += 1
        if self._index >= len(self._slots):
            self._index = 0

        return shape

    def drain(self) -> Iterator[ShapeDescriptor]:
        """Remove and yield every remaining shape, in order."""
        while not self.is_empty():
            yield self.remove()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, shapes={len(self._slots)})"
