from .core import build, init
from .errors import BadDimension, BadInitializer, BadTarget, MultidimError
from .initializers import (
    Constant,
    IndexedMutator,
    IndexedProducer,
    Initializer,
    Mutator,
    Odometer,
    Producer,
)
from .refs import CellRef, Ref, Target
from .shape import Shape, resolve_shape
from .type_system import (
    Scalar,
    Vector,
    matrix_type,
    ndarray_type,
    scalar_type,
    type_from_annotation,
    vector_type,
)
from .views import shape_of, tolist

__all__ = [
    "init",
    "build",
    "Target",
    "Ref",
    "CellRef",
    "Constant",
    "Producer",
    "Mutator",
    "IndexedProducer",
    "IndexedMutator",
    "Initializer",
    "Odometer",
    "Shape",
    "resolve_shape",
    "Scalar",
    "Vector",
    "scalar_type",
    "vector_type",
    "matrix_type",
    "ndarray_type",
    "type_from_annotation",
    "tolist",
    "shape_of",
    "MultidimError",
    "BadTarget",
    "BadDimension",
    "BadInitializer",
]
