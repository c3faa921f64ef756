import dataclasses

import numpy as np
import pytest
import torch

from prefill import AllocationPlanEntry, InvalidShape, PreFillError, ShapeConfig, ShapeDescriptor
from prefill.common.definitions.prefill.shapes import bytes_per_element


@pytest.mark.parametrize("dims, dtype, expected", [
    ((100, 50), torch.float32, 20000),
    ((100, 50), torch.float16, 10000),
    ((3, 4, 5), torch.uint8, 60),
    ((7,), torch.int64, 56),
])
def test_byte_size_follows_dims_and_dtype(dims, dtype, expected):
    assert ShapeDescriptor(dims, dtype).byte_size == expected


def test_bytes_per_element():
    assert bytes_per_element(torch.float32) == 4
    assert bytes_per_element(torch.bfloat16) == 2


def test_default_weight_and_dtype():
    shape = ShapeDescriptor((10, 10))
    assert shape.weight == 1
    assert shape.dtype == torch.float32


def test_list_and_numpy_dims_are_normalized():
    shape = ShapeDescriptor([np.int64(10), 20])
    assert shape.dims == (10, 20)
    assert all(type(d) is int for d in shape.dims)


@pytest.mark.parametrize("dims", [(), (0, 10), (-1,), (1.5, 2), (True, 2), ("10", 2)])
def test_invalid_dims_are_rejected(dims):
    with pytest.raises(InvalidShape):
        ShapeDescriptor(dims)


@pytest.mark.parametrize("weight", [0, -1, 1.5, True])
def test_invalid_weight_is_rejected(weight):
    with pytest.raises(InvalidShape):
        ShapeDescriptor((10, 10), weight=weight)


def test_invalid_dtype_is_rejected():
    with pytest.raises(InvalidShape):
        ShapeDescriptor((10, 10), dtype="float32")


def test_invalid_shape_is_a_value_error():
    with pytest.raises(ValueError):
        ShapeDescriptor((0,))
    assert issubclass(InvalidShape, PreFillError)


def test_equal_descriptors_are_interchangeable():
    first = ShapeDescriptor((100, 50), torch.float32, weight=2)
    second = ShapeDescriptor((100, 50), torch.float32, weight=2)

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_weight_and_dtype_are_part_of_identity():
    shape = ShapeDescriptor((100, 50))
    assert shape != ShapeDescriptor((100, 50), weight=2)
    assert shape != ShapeDescriptor((100, 50), torch.float16)
    assert shape != ShapeDescriptor((50, 100))


def test_descriptor_is_immutable():
    shape = ShapeDescriptor((10, 10))
    with pytest.raises(dataclasses.FrozenInstanceError):
        shape.weight = 3


def test_config_uses_default_dtype_when_unset():
    shape = ShapeConfig((100, 50)).build(torch.float16)
    assert shape.dtype == torch.float16
    assert shape.byte_size == 10000


def test_config_keeps_explicit_dtype():
    shape = ShapeConfig((100, 50), dtype=torch.float64).build(torch.float16)
    assert shape.dtype == torch.float64


def test_config_square_and_weight():
    shape = ShapeConfig.square(100, weight=3).build()
    assert shape.dims == (100, 100)
    assert shape.weight == 3
    assert shape.dtype == torch.float32


def test_config_validates_on_build():
    config = ShapeConfig((10, 10), weight=0)
    with pytest.raises(InvalidShape):
        config.build()


def test_plan_entry_byte_size():
    entry = AllocationPlanEntry(ShapeDescriptor((100, 50)), count=3)
    assert entry.byte_size == 60000


def test_plan_entry_rejects_negative_count():
    with pytest.raises(ValueError):
        AllocationPlanEntry(ShapeDescriptor((10, 10)), count=-1)


@pytest.mark.parametrize("dims, dtype", [
    ((2**32, 2**32), torch.float32),
    ((2**31, 2**31, 4), torch.uint8),
    ((2**21, 2**21, 2**21), torch.float16),
])
def test_huge_dims_keep_exact_byte_size(dims, dtype):
    shape = ShapeDescriptor(dims, dtype)

    expected = bytes_per_element(dtype)
    for d in dims:
        expected *= d
    assert shape.byte_size == expected
    assert shape.byte_size > 0


def test_plan_entry_accepts_numpy_count():
    entry = AllocationPlanEntry(ShapeDescriptor((10, 10)), count=np.int64(3))
    assert entry.count == 3
    assert type(entry.count) is int


@pytest.mark.parametrize("count", [True, 1.0, "2"])
def test_plan_entry_rejects_non_integer_count(count):
    with pytest.raises(ValueError):
        AllocationPlanEntry(ShapeDescriptor((10, 10)), count=count)
