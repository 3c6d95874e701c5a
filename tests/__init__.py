import pytest

with_dimensions = pytest.mark.parametrize(
    "dimensions",
    [(1,), (4,), (3, 2), (2, 3), (2, 3, 4), (1, 1, 1, 1), (2, 1, 3, 2)],
    ids=lambda dims: "x".join(map(str, dims)),
)
with_bad_size = pytest.mark.parametrize("size", [0, -3], ids=["zero", "negative"])
