import math

import numpy as np
import pytest

from dokmat.errors import OutOfBoundsError
from dokmat.sparse import DOK


def make_dok():
    A = DOK()
    A.set((2, 3), 5.0)
    A.set((0, 1), 7.0)
    return A


def test_transpose_swaps_shape_and_keys():
    A = make_dok()
    A.transpose()
    assert A.transposed
    assert A.shape == (4, 3)
    assert A.get((3, 2)) == 5.0
    assert A.get((1, 0)) == 7.0
    assert math.isnan(A.get((2, 3), filter=True))


def test_transpose_matches_dense_transpose():
    A = make_dok()
    before = A.toarray()
    A.transpose()
    np.testing.assert_allclose(A.toarray(), before.T)


def test_double_transpose_is_identity():
    A = make_dok()
    before = A.toarray()
    A.transpose()
    A.transpose()
    assert not A.transposed
    assert A.shape == (3, 4)
    np.testing.assert_allclose(A.toarray(), before)


def test_set_after_transpose_uses_logical_coordinates():
    A = make_dok()
    A.transpose()
    A.set((5, 0), 1.0)
    assert A.shape == (6, 3)
    assert A.get((5, 0)) == 1.0
    A.transpose()
    assert A.shape == (3, 6)
    assert A.get((0, 5)) == 1.0


def test_out_of_bounds_reports_logical_axis_when_transposed():
    A = make_dok()
    A.transpose()
    with pytest.raises(OutOfBoundsError) as excinfo:
        A.get((4, 0))
    assert (excinfo.value.axis, excinfo.value.index, excinfo.value.size) == (0, 4, 4)
    with pytest.raises(OutOfBoundsError) as excinfo:
        A.get((0, 3))
    assert (excinfo.value.axis, excinfo.value.index, excinfo.value.size) == (1, 3, 3)


def test_items_are_logical_when_transposed():
    A = make_dok()
    A.transpose()
    assert dict(A.items()) == {(3, 2): 5.0, (1, 0): 7.0}


def test_transpose_empty_matrix():
    A = DOK()
    A.transpose()
    assert A.shape == (0, 0)
    A.set((1, 4), 2.0)
    assert A.shape == (2, 5)
