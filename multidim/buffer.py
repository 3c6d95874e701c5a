import numpy

from .type_system import Type


def allocate(leaf: Type, size: int) -> numpy.ndarray:
    """Allocate one contiguous buffer of ``size`` zero-valued leaves."""
    return numpy.full(size, leaf.zero, dtype=leaf.dtype)
