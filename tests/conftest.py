from dataclasses import dataclass

import pytest
import torch

from prefill import BlockPreFiller, ShapeDescriptor

DEFAULT_DIMS = (100, 50)
DEFAULT_DTYPE = torch.float32
DEFAULT_BLOCK_SIZE = 100 * 50 * 4

DEFAULT_BLOCKS_IN_POOL = 10
DEFAULT_BLOCKS_IN_CACHE = 10
POOL_SIZE = DEFAULT_BLOCKS_IN_POOL * DEFAULT_BLOCK_SIZE
CACHE_SIZE = DEFAULT_BLOCKS_IN_CACHE * DEFAULT_BLOCK_SIZE


@dataclass
class FakeCapacity:
    """Stands in for a block pool or a memory cache"""
    max_size: int


@pytest.fixture
def default_shape():
    return ShapeDescriptor(DEFAULT_DIMS, DEFAULT_DTYPE)


@pytest.fixture
def block_pool():
    return FakeCapacity(max_size=POOL_SIZE)


@pytest.fixture
def memory_cache():
    return FakeCapacity(max_size=CACHE_SIZE)


@pytest.fixture
def prefiller(memory_cache, block_pool):
    return BlockPreFiller(memory_cache, block_pool)
