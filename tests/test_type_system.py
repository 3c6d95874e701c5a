import collections.abc
import typing

import numpy
import pytest

from multidim import (
    Scalar,
    Vector,
    matrix_type,
    ndarray_type,
    scalar_type,
    type_from_annotation,
    vector_type,
)
from multidim.type_system import rank_of


def test_constructors_agree():
    assert ndarray_type(0, int) == scalar_type(int)
    assert ndarray_type(1, float) == vector_type(float)
    assert ndarray_type(2, str) == matrix_type(str)
    assert ndarray_type(3, bool) == Vector(Vector(Vector(Scalar(bool))))


@pytest.mark.parametrize(
    "annotation,expected",
    [
        (int, scalar_type(int)),
        (list[float], vector_type(float)),
        (list[list[int]], matrix_type(int)),
        (typing.List[typing.List[str]], matrix_type(str)),
        (collections.abc.Sequence[complex], vector_type(complex)),
        (list[list[list[bool]]], ndarray_type(3, bool)),
        (matrix_type(int), matrix_type(int)),
    ],
)
def test_type_from_annotation(annotation, expected):
    assert type_from_annotation(annotation) == expected


@pytest.mark.parametrize("annotation", [dict[str, int], list[int, str], bytes, None])
def test_type_from_annotation_rejects(annotation):
    with pytest.raises(TypeError):
        type_from_annotation(annotation)


def test_rank_and_pretty():
    cube = ndarray_type(3, int)
    assert rank_of(cube) == 3
    assert rank_of(scalar_type(str)) == 0
    assert cube.pretty == "[][][]int"


def test_zero_and_dtype():
    assert scalar_type(int).zero == 0
    assert scalar_type(str).zero == ""
    assert scalar_type(bool).zero is False
    assert matrix_type(int).zero is None
    assert scalar_type(float).dtype == numpy.float64
    assert scalar_type(str).dtype == object
    assert vector_type(int).dtype == object


@pytest.mark.parametrize(
    "kind,value,accepted",
    [
        (int, 3, True),
        (int, numpy.int32(3), True),
        (int, 2**63 - 1, True),
        (int, 2**63, False),
        (int, -(2**70), False),
        (int, 2.5, False),
        (int, "3", False),
        (float, 2, True),
        (float, numpy.float32(0.5), True),
        (float, 1j, False),
        (complex, 1j, True),
        (bool, True, True),
        (bool, numpy.bool_(False), True),
        (bool, 1, False),
        (str, "x", True),
        (str, 1, False),
    ],
)
def test_scalar_accepts(kind, value, accepted):
    assert scalar_type(kind).accepts(value) is accepted


def test_vector_accepts():
    row = vector_type(int)
    assert row.accepts([1, 2])
    assert row.accepts(numpy.zeros(2))
    assert row.accepts(None)
    assert not row.accepts(3)


def test_coerce():
    assert type(scalar_type(float).coerce(1)) is float
    assert scalar_type(int).coerce(numpy.int64(3)) == 3
    assert type(scalar_type(int).coerce(numpy.int64(3))) is int
    row = [1, 2]
    assert vector_type(int).coerce(row) is row
