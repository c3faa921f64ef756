#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from typing import Protocol


class CapacitySource(Protocol):
    """Anything with a byte capacity to fill, a block pool or a memory cache."""

    @property
    def max_size(self) -> int:
        ...
