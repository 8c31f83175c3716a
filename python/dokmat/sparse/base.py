"""Base class for sparse matrices.

This class defines the minimal interface shared by concrete sparse types in
`dokmat.sparse`: dimensionality, dtype bookkeeping and dense materialization
through ``get_range``.
"""

import numpy as np


class SparseMatrix:
    """Abstract base class for 2D sparse matrices.

    Parameters
    ----------
    dtype : numpy.dtype, optional
        Element dtype, defaults to ``np.float64``.

    Attributes
    ----------
    ndim : int
        Always 2.
    dtype : numpy.dtype
        Element dtype.
    shape : tuple[int, int]
        Matrix shape; concrete types decide how it is derived.
    """

    ndim = 2

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)

    @property
    def shape(self):
        raise NotImplementedError

    def get_range(self, rows, cols):
        raise NotImplementedError

    def toarray(self):
        """Return a dense numpy.ndarray of the full shape.

        Materializes every cell through ``get_range``, so unset cells come
        back as zeros.
        """
        return self.get_range(slice(None), slice(None))
