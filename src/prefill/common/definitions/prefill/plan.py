#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from dataclasses import dataclass
from numbers import Integral

from prefill.common.definitions.prefill.shapes import ShapeDescriptor


@dataclass
class AllocationPlanEntry:
    """Number of blocks of a single shape to preallocate"""
    shape: ShapeDescriptor
    count: int = 0

    def __post_init__(self):
        if not isinstance(self.count, Integral) or isinstance(self.count, bool) or self.count < 0:
            raise ValueError(f"Block count must be a non-negative integer, got {self.count!r}")
        self.count = int(self.count)

    @property
    def byte_size(self) -> int:
        return self.count * self.shape.byte_size
