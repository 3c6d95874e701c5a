import abc
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence, TypeAlias

import numpy

from .errors import BadInitializer
from .refs import CellRef, Ref
from .type_system import Type

logger = logging.getLogger(__name__)

_REF_NAMES = {"Ref", "CellRef", "Target"}


def _describe(fun: Any) -> str:
    return getattr(fun, "__qualname__", None) or repr(fun)


def _signature(fun: Callable) -> inspect.Signature | None:
    try:
        return inspect.signature(fun)
    except (TypeError, ValueError):
        return None


def _check_arity(form: str, fun: Any, count: int) -> None:
    if not callable(fun):
        raise BadInitializer(
            f"{form} initializer expects a callable, got {type(fun).__name__}"
        )
    sig = _signature(fun)
    if sig is None:
        # Builtins without introspectable signatures are taken on trust.
        return
    try:
        sig.bind(*range(count))
    except TypeError as exc:
        raise BadInitializer(
            f"{form} initializer {_describe(fun)} cannot be called "
            f"with {count} positional argument(s): {exc}"
        ) from exc


@dataclass(frozen=True)
class AbstractInitializer(abc.ABC):
    @abc.abstractmethod
    def check(self, rank: int) -> None:
        ...


@dataclass(frozen=True)
class Constant(AbstractInitializer):
    value: Any

    def check(self, rank: int) -> None:
        pass


@dataclass(frozen=True)
class Producer(AbstractInitializer):
    fun: Callable[[], Any]

    def check(self, rank: int) -> None:
        _check_arity("Producer", self.fun, 0)


@dataclass(frozen=True)
class Mutator(AbstractInitializer):
    fun: Callable[[Ref], None]

    def check(self, rank: int) -> None:
        _check_arity("Mutator", self.fun, 1)


@dataclass(frozen=True)
class IndexedProducer(AbstractInitializer):
    fun: Callable[..., Any]

    def check(self, rank: int) -> None:
        if not rank:
            raise BadInitializer("IndexedProducer needs at least one dimension")
        _check_arity("IndexedProducer", self.fun, rank)


@dataclass(frozen=True)
class IndexedMutator(AbstractInitializer):
    fun: Callable[..., None]

    def check(self, rank: int) -> None:
        if not rank:
            raise BadInitializer("IndexedMutator needs at least one dimension")
        _check_arity("IndexedMutator", self.fun, rank + 1)


Initializer: TypeAlias = (
    Constant | Producer | Mutator | IndexedProducer | IndexedMutator
)


def _is_ref_annotation(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.rsplit(".", 1)[-1] in _REF_NAMES
    return inspect.isclass(annotation) and issubclass(annotation, Ref)


def _is_none_annotation(annotation: Any) -> bool:
    return annotation is None or annotation is type(None) or annotation == "None"


def _infer(fun: Callable, rank: int) -> Initializer:
    sig = _signature(fun)
    if sig is None:
        raise BadInitializer(
            f"Cannot inspect the signature of {_describe(fun)}, "
            f"wrap it in an explicit initializer form"
        )
    positional = []
    for param in sig.parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            raise BadInitializer(
                f"{_describe(fun)} is variadic, wrap it in an explicit initializer form"
            )
        if param.default is not param.empty:
            continue
        if param.kind is param.KEYWORD_ONLY:
            raise BadInitializer(
                f"{_describe(fun)} requires keyword-only argument {param.name!r}"
            )
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional.append(param)

    n = len(positional)
    if n == 0:
        return Producer(fun)
    if rank == 0 or _is_ref_annotation(positional[0].annotation):
        if n == 1:
            return Mutator(fun)
        if rank and n == rank + 1:
            return IndexedMutator(fun)
    elif n == rank:
        if rank > 1:
            return IndexedProducer(fun)
        # A single argument is either a cell reference or the only coordinate.
        if _is_none_annotation(sig.return_annotation):
            return Mutator(fun)
        if positional[0].annotation is int or positional[0].annotation == "int":
            return IndexedProducer(fun)
        if sig.return_annotation is not sig.empty:
            return IndexedProducer(fun)
        raise BadInitializer(
            f"{_describe(fun)} takes one argument, which is ambiguous for a single "
            f"dimension: wrap it in Mutator or IndexedProducer"
        )
    elif n == 1:
        return Mutator(fun)
    elif n == rank + 1:
        return IndexedMutator(fun)
    raise BadInitializer(
        f"{_describe(fun)} takes {n} argument(s), which matches no initializer "
        f"form for {rank} dimension(s)"
    )


def classify(build: Any, rank: int) -> Initializer | None:
    """Resolve the caller's initializer into one of the tagged forms.

    ``None`` means absent. Explicit forms are checked against ``rank``; any
    other non-callable is a Constant and bare callables are classified by
    their positional arity.
    """
    if build is None:
        initializer = None
    elif isinstance(build, AbstractInitializer):
        build.check(rank)
        initializer = build
    elif not callable(build):
        initializer = Constant(build)
    else:
        initializer = _infer(build, rank)
    logger.debug("Classified %r as %s for rank %d", build, initializer, rank)
    return initializer


class Odometer:
    """Row-major coordinate counter: the last coordinate moves fastest."""

    def __init__(self, bounds: Sequence[int]):
        assert all(bound > 0 for bound in bounds)
        self.bounds = tuple(bounds)
        self._coords = [0] * len(self.bounds)

    @property
    def position(self) -> tuple[int, ...]:
        return tuple(self._coords)

    def advance(self) -> bool:
        """Step to the next coordinate, returning False once it wraps to zero."""
        for d in reversed(range(len(self.bounds))):
            self._coords[d] += 1
            if self._coords[d] < self.bounds[d]:
                return True
            self._coords[d] = 0
        return False

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        yield self.position
        while self.advance():
            yield self.position


def _produced(value: Any, type_: Type, fun: Callable) -> Any:
    if not type_.accepts(value):
        raise BadInitializer(
            f"{_describe(fun)} returned {type(value).__name__}, "
            f"expected {type_.pretty}"
        )
    return value


def _constant(value: Any, type_: Type) -> Any:
    if not type_.accepts(value):
        raise BadInitializer(
            f"Constant of type {type(value).__name__} "
            f"is not assignable to {type_.pretty}"
        )
    return value


def _mutated(result: Any, fun: Callable) -> None:
    if result is not None:
        raise BadInitializer(
            f"{_describe(fun)} returned {type(result).__name__}, "
            f"mutators must not return a value"
        )


def apply(
    initializer: Initializer | None,
    flat: numpy.ndarray,
    leaf: Type,
    dimensions: Sequence[int],
) -> None:
    """Initialize every cell of ``flat`` in row-major order."""
    match initializer:
        case None:
            return
        case Constant(value):
            value = _constant(value, leaf)
            if flat.dtype == object:
                # Sequences must land in a cell whole rather than broadcast.
                for i in range(flat.size):
                    flat[i] = value
            else:
                flat[:] = value
        case Producer(fun):
            for i in range(flat.size):
                flat[i] = _produced(fun(), leaf, fun)
        case Mutator(fun):
            for i in range(flat.size):
                _mutated(fun(CellRef(flat, i, leaf)), fun)
        case IndexedProducer(fun):
            for i, coords in enumerate(Odometer(dimensions)):
                flat[i] = _produced(fun(*coords), leaf, fun)
        case IndexedMutator(fun):
            for i, coords in enumerate(Odometer(dimensions)):
                _mutated(fun(CellRef(flat, i, leaf), *coords), fun)
        case _:
            raise BadInitializer(f"Unrecognised initializer: {initializer!r}")


def apply_scalar(initializer: Initializer | None, ref: Ref) -> None:
    """Initialize the single value behind ``ref`` when no dimensions are given."""
    match initializer:
        case None:
            return
        case Constant(value):
            ref.value = ref.type.coerce(_constant(value, ref.type))
        case Producer(fun):
            ref.value = ref.type.coerce(_produced(fun(), ref.type, fun))
        case Mutator(fun):
            before = ref.value
            _mutated(fun(ref), fun)
            if ref.value is before:
                return
            if not ref.type.accepts(ref.value):
                raise BadInitializer(
                    f"{_describe(fun)} stored {type(ref.value).__name__}, "
                    f"expected {ref.type.pretty}"
                )
            ref.value = ref.type.coerce(ref.value)
        case _:
            raise BadInitializer(
                f"{type(initializer).__name__} needs coordinates, "
                f"which do not exist without dimensions"
            )
