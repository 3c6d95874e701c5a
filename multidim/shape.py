import logging
import math
import numbers
from dataclasses import dataclass
from typing import Sequence

from .errors import BadDimension, BadTarget
from .type_system import Type, Vector, rank_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shape:
    levels: tuple[Vector, ...]
    leaf: Type
    dimensions: tuple[int, ...]

    def __post_init__(self):
        assert len(self.levels) == len(self.dimensions)

    @property
    def rank(self) -> int:
        return len(self.dimensions)

    @property
    def size(self) -> int:
        return math.prod(self.dimensions)

    @property
    def pretty(self) -> str:
        dims = "".join(f"[{d}]" for d in self.dimensions)
        return f"{dims}{self.leaf.pretty}"


def _dimension_size(d: int, size) -> int:
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise BadDimension(f"dimension {d}: size must be an integer, got {size!r}")
    if size <= 0:
        raise BadDimension(f"dimension {d}: invalid size {size}")
    return int(size)


def resolve_shape(type_: Type, dimensions: Sequence[int]) -> Shape:
    """Walk ``type_`` one container level per requested dimension.

    Fails with BadTarget when the type runs out of container levels and with
    BadDimension on a non-positive size. Dimensions are numbered from 1 in
    error messages.
    """
    levels: list[Vector] = []
    sizes: list[int] = []
    t = type_
    for d, size in enumerate(dimensions, start=1):
        if not isinstance(t, Vector):
            raise BadTarget(
                f"{type_.pretty}: dimension {d} is not a container level "
                f"(the type nests only {rank_of(type_)} level(s))"
            )
        sizes.append(_dimension_size(d, size))
        levels.append(t)
        t = t.elem
    shape = Shape(tuple(levels), t, tuple(sizes))
    logger.debug("Resolved %s against %s", shape.pretty, type_.pretty)
    return shape
