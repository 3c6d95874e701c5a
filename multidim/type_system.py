import abc
import collections.abc
import numbers
import typing
from dataclasses import dataclass
from typing import Any, TypeAlias

import numpy

Type: TypeAlias = "Scalar | Vector"
ScalarKind: TypeAlias = (
    type[bool] | type[int] | type[float] | type[complex] | type[str]
)
SCALAR_TYPES: tuple[ScalarKind, ...] = (bool, int, float, complex, str)

_DTYPES: dict[ScalarKind, numpy.dtype] = {
    bool: numpy.dtype(numpy.bool_),
    int: numpy.dtype(numpy.int64),
    float: numpy.dtype(numpy.float64),
    complex: numpy.dtype(numpy.complex128),
    str: numpy.dtype(object),
}
_INT64 = numpy.iinfo(numpy.int64)
_CONTAINER_ORIGINS: tuple[Any, ...] = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)


@dataclass(frozen=True)
class AbstractType(abc.ABC):
    @property
    @abc.abstractmethod
    def pretty(self) -> str:
        ...

    @property
    @abc.abstractmethod
    def dtype(self) -> numpy.dtype:
        ...

    @property
    @abc.abstractmethod
    def zero(self) -> Any:
        ...

    @abc.abstractmethod
    def accepts(self, value: Any) -> bool:
        ...

    def coerce(self, value: Any) -> Any:
        return value


@dataclass(frozen=True)
class Scalar(AbstractType):
    kind: ScalarKind

    def __post_init__(self):
        assert self.kind in SCALAR_TYPES

    @property
    def pretty(self) -> str:
        return self.kind.__name__

    @property
    def dtype(self) -> numpy.dtype:
        return _DTYPES[self.kind]

    @property
    def zero(self) -> Any:
        return self.kind()

    def coerce(self, value: Any) -> Any:
        return self.kind(value)

    def accepts(self, value: Any) -> bool:
        if self.kind is bool:
            return isinstance(value, (bool, numpy.bool_))
        if self.kind is str:
            return isinstance(value, str)
        if isinstance(value, numpy.bool_):
            value = bool(value)
        if self.kind is int:
            return (
                isinstance(value, numbers.Integral)
                and _INT64.min <= int(value) <= _INT64.max
            )
        if self.kind is float:
            return isinstance(value, numbers.Real)
        return isinstance(value, numbers.Complex)


@dataclass(frozen=True)
class Vector(AbstractType):
    elem: Type

    def __post_init__(self):
        assert isinstance(self.elem, AbstractType)

    @property
    def pretty(self) -> str:
        return f"[]{self.elem.pretty}"

    @property
    def dtype(self) -> numpy.dtype:
        return numpy.dtype(object)

    @property
    def zero(self) -> Any:
        return None

    def accepts(self, value: Any) -> bool:
        return value is None or isinstance(value, (list, tuple, numpy.ndarray))


def scalar_type(type_: ScalarKind) -> Scalar:
    return Scalar(type_)


def vector_type(type_: ScalarKind) -> Vector:
    return Vector(scalar_type(type_))


def matrix_type(type_: ScalarKind) -> Vector:
    return Vector(Vector(scalar_type(type_)))


def ndarray_type(rank: int, type_: ScalarKind) -> Type:
    return Vector(ndarray_type(rank - 1, type_)) if rank else scalar_type(type_)


def type_from_annotation(annotation: Any) -> Type:
    """Translate a Python annotation such as ``list[list[int]]`` into a Type.

    Each ``list`` (or ``Sequence``) level becomes a Vector; the innermost
    argument must be one of the supported scalar kinds.
    """
    if isinstance(annotation, AbstractType):
        return annotation
    if annotation in SCALAR_TYPES:
        return scalar_type(annotation)
    origin = typing.get_origin(annotation)
    if origin in _CONTAINER_ORIGINS:
        args = typing.get_args(annotation)
        if len(args) != 1:
            raise TypeError(
                f"Container annotation {annotation} must have exactly one element type"
            )
        (elem,) = args
        return Vector(type_from_annotation(elem))
    raise TypeError(f"Annotation {annotation!r} does not describe a multidimensional type.")


def rank_of(type_: Type) -> int:
    match type_:
        case Vector(elem):
            return 1 + rank_of(elem)
    return 0
