import logging
from typing import Any

from .buffer import allocate
from .errors import BadTarget
from .initializers import apply, apply_scalar, classify
from .refs import Ref, Target
from .shape import resolve_shape
from .views import nest

logger = logging.getLogger(__name__)


def init(target: Ref, initializer: Any, *dimensions: int) -> None:
    """Allocate a multidimensional value into ``target`` and initialize its cells.

    ``dimensions`` gives the size of each nesting level, outermost first; with
    no dimensions the single value behind ``target`` is initialized instead.
    ``initializer`` is ``None`` (cells keep their zero value), a constant, or
    a callable in one of the forms of :mod:`multidim.initializers`.

    The target is only written once everything succeeded: on any error it
    keeps its previous value.
    """
    if not isinstance(target, Ref):
        if dimensions:
            raise BadTarget(
                f"target must be a reference to a container, got {type(target).__name__}"
            )
        raise BadTarget(f"target must be a reference, got {type(target).__name__}")
    shape = resolve_shape(target.type, dimensions)
    cells = classify(initializer, shape.rank)

    if not shape.rank:
        staging = Target(target.type, target.value)
        apply_scalar(cells, staging)
        target.value = staging.value
        return

    flat = allocate(shape.leaf, shape.size)
    value = nest(flat, shape.dimensions)
    apply(cells, flat, shape.leaf, shape.dimensions)
    logger.debug("Initialized %s with %d cells", shape.pretty, flat.size)
    target.value = value


def build(type_: Any, initializer: Any, *dimensions: int) -> Any:
    """Like :func:`init`, but allocate into a fresh target and return its value."""
    target = Target(type_)
    init(target, initializer, *dimensions)
    return target.value
