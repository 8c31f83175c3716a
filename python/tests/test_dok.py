import copy
import math

import numpy as np
import pytest

from dokmat.errors import InvalidArgumentError, OutOfBoundsError
from dokmat.sparse import DOK, SparseMatrix


def make_simple_dok():
    # A = [[0,0,0,0],[0,0,0,0],[0,0,0,5]]
    A = DOK()
    A.set((2, 3), 5.0)
    return A


def test_empty_matrix():
    A = DOK()
    assert A.shape == (0, 0)
    assert A.nnz == 0
    assert A.ndim == 2
    assert A.dtype == np.float64
    assert not A.transposed


def test_set_infers_shape_and_get_defaults():
    A = make_simple_dok()
    assert A.shape == (3, 4)
    assert A.get((0, 0)) == 0.0
    assert A.get((2, 3)) == 5.0
    assert A.get((2, 2)) == 0.0


def test_get_out_of_bounds_reports_axis_index_and_size():
    A = make_simple_dok()
    with pytest.raises(OutOfBoundsError) as excinfo:
        A.get((5, 0))
    err = excinfo.value
    assert (err.axis, err.index, err.size) == (0, 5, 3)
    assert str(err) == "index 5 is out of bounds for axis 0 with size 3"

    with pytest.raises(OutOfBoundsError, match="index 4 is out of bounds for axis 1 with size 4"):
        A.get((1, 4))


def test_get_on_empty_matrix_is_out_of_bounds():
    A = DOK()
    with pytest.raises(OutOfBoundsError, match="axis 0 with size 0"):
        A.get((0, 0))


def test_get_filter_returns_nan_and_never_raises():
    A = make_simple_dok()
    assert math.isnan(A.get((0, 0), filter=True))
    assert math.isnan(A.get((100, 100), filter=True))
    assert A.get((2, 3), filter=True) == 5.0
    assert math.isnan(DOK().get((0, 0), filter=True))


def test_last_write_wins():
    A = DOK()
    A.set((1, 1), 1.0)
    A.set((1, 1), -2.5)
    assert A.get((1, 1)) == -2.5
    assert A.nnz == 1


def test_shape_grows_regardless_of_insertion_order():
    A = DOK()
    A.set((4, 1), 1.0)
    A.set((1, 6), 2.0)
    assert A.shape == (5, 7)

    B = DOK()
    B.set((1, 6), 2.0)
    B.set((4, 1), 1.0)
    assert B.shape == (5, 7)


def test_shape_never_shrinks_on_overwrite():
    A = make_simple_dok()
    A.set((0, 0), 1.0)
    A.set((2, 3), 0.0)
    assert A.shape == (3, 4)


def test_large_coordinates_are_accepted():
    A = DOK()
    A.set((2**40, 3), 1.0)
    assert A.shape == (2**40 + 1, 4)
    assert A.get((2**40, 3)) == 1.0
    assert A.get((12345, 0)) == 0.0


def test_nan_and_inf_are_stored_as_given():
    A = DOK()
    A.set((0, 0), float("nan"))
    A.set((0, 1), float("inf"))
    assert math.isnan(A.get((0, 0)))
    assert math.isinf(A.get((0, 1)))


@pytest.mark.parametrize("key", [(1,), (1, 2, 3), 5, "ab", (1.5, 0), (0, None)])
def test_malformed_keys_are_rejected(key):
    A = make_simple_dok()
    with pytest.raises(InvalidArgumentError):
        A.set(key, 1.0)
    with pytest.raises(InvalidArgumentError):
        A.get(key)


def test_negative_keys_are_rejected():
    A = make_simple_dok()
    with pytest.raises(InvalidArgumentError, match="non-negative"):
        A.set((-1, 0), 1.0)
    assert A.shape == (3, 4)


def test_numpy_integer_keys_and_values():
    A = DOK()
    A.set((np.int64(1), np.uint32(2)), np.float32(1.5))
    assert A.get((1, 2)) == 1.5
    assert isinstance(A.get((1, 2)), float)


def test_non_numeric_value_is_rejected():
    A = DOK()
    with pytest.raises(InvalidArgumentError, match="value must be a real number"):
        A.set((0, 0), "x")
    assert A.shape == (0, 0)


def test_items_and_toarray():
    A = make_simple_dok()
    A.set((0, 1), 2.0)
    assert dict(A.items()) == {(2, 3): 5.0, (0, 1): 2.0}
    expected = np.zeros((3, 4))
    expected[2, 3] = 5.0
    expected[0, 1] = 2.0
    np.testing.assert_allclose(A.toarray(), expected)
    assert DOK().toarray().shape == (0, 0)


def test_copy_is_independent():
    A = make_simple_dok()
    A.transpose()
    for B in (A.copy(), copy.copy(A), copy.deepcopy(A)):
        assert B.shape == A.shape
        assert B.transposed
        B.set((10, 10), 1.0)
        assert A.shape == (4, 3)
        assert A.nnz == 1
        B.transpose()
        assert A.transposed


def test_from_arrays():
    A = DOK.from_arrays([0, 1, 2], [0, 1, 2], [1.0, 2.0, 3.0])
    assert A.shape == (3, 3)
    assert A.nnz == 3
    np.testing.assert_allclose(A.toarray(), np.diag([1.0, 2.0, 3.0]))


def test_repr():
    A = make_simple_dok()
    assert repr(A) == "<DOK shape=(3, 4) nnz=1 transposed=False>"


def test_toarray_materializes_through_get_range():
    assert DOK.toarray is SparseMatrix.toarray
    A = make_simple_dok()
    A.transpose()
    np.testing.assert_allclose(A.toarray(), A.get_range(slice(None), slice(None)))
    assert A.toarray().shape == (4, 3)


def test_base_matrix_is_abstract():
    base = SparseMatrix()
    assert base.ndim == 2
    with pytest.raises(NotImplementedError):
        base.toarray()
