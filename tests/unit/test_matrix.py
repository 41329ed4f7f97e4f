import numpy as np
import pytest

from denseprop.core.errors import DimensionMismatch
from denseprop.core.matrix import Matrix
from denseprop.core.vector import Vector


def _sample_matrix() -> Matrix:
    return Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


def test_shape_queries():
    m = Matrix(3, 4)
    assert m.rows == 3
    assert m.cols == 4
    assert m.shape == (3, 4)
    assert len(m) == 3


def test_row_read_write_round_trip():
    m = Matrix(2, 2)
    m[1] = Vector([7.0, 8.0])
    assert m[1] == Vector([7.0, 8.0])
    assert m[1, 0] == 7.0
    m[0, 1] = -1.0
    assert m[0] == Vector([0.0, -1.0])
    with pytest.raises(DimensionMismatch):
        m[0] = Vector([1.0, 2.0, 3.0])


def test_negative_and_out_of_range_indices_raise():
    m = _sample_matrix()
    with pytest.raises(IndexError):
        m[-1]
    with pytest.raises(IndexError):
        m[0, -1]
    with pytest.raises(IndexError):
        m[2, 0] = 1.0
    with pytest.raises(IndexError):
        m[-2] = Vector([0.0, 0.0, 0.0])
    with pytest.raises(IndexError):
        m.subtract_from_row(-1, Vector([1.0, 1.0, 1.0]))
    assert m == _sample_matrix()


def test_row_subtract_assign_through_indexing():
    m = _sample_matrix()
    m[0] -= Vector([1.0, 1.0, 1.0])
    assert m[0] == Vector([0.0, 1.0, 2.0])


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(DimensionMismatch):
        Matrix.from_rows([[1.0, 2.0], [3.0]])


def test_matrix_vector_product():
    result = _sample_matrix() @ Vector([1.0, 0.0, -1.0])
    assert result == Vector([-2.0, -2.0])
    assert len(result) == 2
    assert _sample_matrix() * Vector([1.0, 1.0, 1.0]) == Vector([6.0, 15.0])


def test_matrix_vector_product_rejects_wrong_width():
    with pytest.raises(DimensionMismatch):
        _sample_matrix() @ Vector([1.0, 2.0])


def test_row_wise_vector_subtraction():
    result = _sample_matrix() - Vector([1.0, 4.0])
    assert result == Matrix.from_rows([[0.0, 1.0, 2.0], [0.0, 1.0, 2.0]])
    with pytest.raises(DimensionMismatch):
        _sample_matrix() - Vector([1.0, 2.0, 3.0])


def test_transpose_swaps_shape_and_entries():
    m = _sample_matrix()
    t = m.transpose()
    assert t.shape == (3, 2)
    assert t[2, 1] == m[1, 2]
    assert t.T == m


def test_double_transpose_is_identity():
    rng = np.random.default_rng(0)
    m = Matrix(5, 3).fill_uniform(-1.0, 1.0, rng)
    assert m.transpose().transpose() == m


def test_fill_uniform_respects_bounds():
    m = Matrix(20, 20).fill_uniform(-0.25, 0.75, np.random.default_rng(7))
    values = m.to_numpy()
    assert values.min() >= -0.25
    assert values.max() <= 0.75
    assert len(np.unique(values)) > 1
