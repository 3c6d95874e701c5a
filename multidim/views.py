import math
from typing import Any, Sequence

import numpy


def nest(flat: numpy.ndarray, dimensions: Sequence[int]) -> Any:
    """Partition ``flat`` bottom-up into nested views of the given dimensions.

    Innermost rows are basic slices of ``flat`` so they share its storage, but
    each has exactly its own length: they cannot be resized in place and
    ``numpy.append`` on one returns a new array instead of spilling into the
    next row. Outer levels are fresh lists.
    """
    assert flat.ndim == 1
    assert flat.size == math.prod(dimensions)
    level: Any = flat
    count = flat.size
    for size in reversed(dimensions[1:]):
        level = [level[offset : offset + size] for offset in range(0, count, size)]
        count //= size
    return level


def tolist(value: Any) -> Any:
    if isinstance(value, numpy.ndarray):
        return value.tolist()
    if isinstance(value, (list, tuple)):
        return [tolist(sub) for sub in value]
    return value


def shape_of(value: Any) -> tuple[int, ...]:
    if isinstance(value, numpy.ndarray):
        return value.shape
    if isinstance(value, (list, tuple)):
        if not value:
            return (0,)
        inner = {shape_of(sub) for sub in value}
        if len(inner) != 1:
            raise ValueError(f"Value is ragged, got row shapes {sorted(inner)}")
        (sub_shape,) = inner
        return (len(value), *sub_shape)
    return ()
