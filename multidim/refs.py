import abc
from typing import Any

import numpy

from .errors import BadInitializer, BadTarget
from .type_system import Type, type_from_annotation

_UNSET: Any = object()


class Ref(abc.ABC):
    """A mutable location holding one value of a declared type."""

    @property
    @abc.abstractmethod
    def type(self) -> Type:
        ...

    @property
    @abc.abstractmethod
    def value(self) -> Any:
        ...

    @value.setter
    @abc.abstractmethod
    def value(self, value: Any) -> None:
        ...


class Target(Ref):
    _type: Type
    _value: Any

    def __init__(self, type_: Any, value: Any = _UNSET):
        try:
            self._type = type_from_annotation(type_)
        except TypeError as exc:
            raise BadTarget(str(exc)) from exc
        if value is _UNSET:
            value = self._type.zero
        self._value = value

    @property
    def type(self) -> Type:
        return self._type

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Target({self._type.pretty}, {self._value!r})"


class CellRef(Ref):
    """Reference to a single leaf of a flat buffer."""

    def __init__(self, buffer: numpy.ndarray, index: int, leaf: Type):
        self._buffer = buffer
        self._index = index
        self._leaf = leaf

    @property
    def type(self) -> Type:
        return self._leaf

    @property
    def index(self) -> int:
        return self._index

    @property
    def value(self) -> Any:
        return self._buffer.item(self._index)

    @value.setter
    def value(self, value: Any) -> None:
        if not self._leaf.accepts(value):
            raise BadInitializer(
                f"Cannot store {type(value).__name__} into a {self._leaf.pretty} cell"
            )
        self._buffer[self._index] = value

    def __repr__(self) -> str:
        return f"CellRef({self._index}, {self.value!r})"
