#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.
from dataclasses import dataclass, field
from functools import lru_cache
from numbers import Integral
from typing import Optional, Tuple

import numpy as np
import torch

from prefill.common.definitions.errors import InvalidShape


@lru_cache(maxsize=64)
def bytes_per_element(dtype: torch.dtype) -> int:
    """Size in bytes of a single element of ``dtype``."""
    return torch.tensor([], dtype=dtype).element_size()


def _is_positive_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class ShapeDescriptor:
    """
    One kind of block to preallocate.

    Two descriptors with the same dims, dtype and weight are interchangeable,
    they compare and hash equal.

    Attributes:
        dims (Tuple[int, ...]): Block dimensions, every entry positive.
        dtype (torch.dtype): Element format of the block.
        weight (int): Relative share of the budget this shape receives.
        byte_size (int): Bytes taken by one block, derived from dims and dtype.
    """
    dims: Tuple[int, ...]
    dtype: torch.dtype = torch.float32
    weight: int = 1
    byte_size: int = field(init=False)

    def __post_init__(self):
        dims = tuple(self.dims) if isinstance(self.dims, (tuple, list)) else (self.dims,)
        if not dims or not all(_is_positive_int(d) for d in dims):
            raise InvalidShape(f"Block dimensions must be positive integers, got {self.dims!r}")
        if not isinstance(self.dtype, torch.dtype):
            raise InvalidShape(f"Block format must be a torch.dtype, got {self.dtype!r}")
        if not _is_positive_int(self.weight):
            raise InvalidShape(f"Weight must be a positive integer, got {self.weight!r}")

        dims = tuple(int(d) for d in dims)
        object.__setattr__(self, 'dims', dims)
        object.__setattr__(self, 'weight', int(self.weight))
        # object dtype keeps the product in Python ints, int64 would wrap
        byte_size = int(np.prod(dims, dtype=object)) * bytes_per_element(self.dtype)
        if byte_size <= 0:
            raise InvalidShape(f"Block byte size must be positive, got {byte_size} for {dims}")
        object.__setattr__(self, 'byte_size', byte_size)


@dataclass
class ShapeConfig:
    """
    Mutable description of a shape whose format may be left to a default.

    ``dtype`` set to None means "not set": ``build`` fills it in with the
    default format. An explicitly chosen dtype is never overridden.
    """
    dims: Tuple[int, ...]
    dtype: Optional[torch.dtype] = None
    weight: int = 1

    @classmethod
    def square(cls, size: int, **kwargs) -> 'ShapeConfig':
        return cls(dims=(size, size), **kwargs)

    def build(self, default_dtype: torch.dtype = torch.float32) -> ShapeDescriptor:
        dtype = self.dtype if self.dtype is not None else default_dtype
        return ShapeDescriptor(dims=tuple(self.dims), dtype=dtype, weight=self.weight)
