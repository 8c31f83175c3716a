"""Dictionary-of-keys (DOK) sparse matrix.

This module exposes the `DOK` class, a 2-D float64 matrix whose explicitly
set entries live in a ``dict`` keyed by ``(row, col)``. Memory grows with the
number of stored entries, not with the product of the dimensions.

Notes
-----
- The shape is never declared. It is inferred from the largest row and
  column ever written and never shrinks.
- Unset cells inside the shape read as ``0.0``. Reads beyond the shape raise
  :class:`~dokmat.errors.OutOfBoundsError`.
- `DOK.transpose` is O(1): it flips an orientation flag and every later
  access translates logical keys into the stored (physical) ones.
- Copies are deep. Two `DOK` objects never share storage.
"""

import logging
import math

import numpy as np

from ..errors import InvalidArgumentError, OutOfBoundsError, ShapeMismatchError
from ._indexing import is_scalar_selector, normalize_key, resolve_range, split_index
from ._marshal import as_block, coordinate_triples
from .base import SparseMatrix

logger = logging.getLogger(__name__)

_MISSING = object()


class DOK(SparseMatrix):
    """Dictionary-of-keys sparse matrix.

    Attributes
    ----------
    shape : tuple[int, int]
        Logical shape, ``(0, 0)`` until the first write.
    nnz : int
        Number of explicitly stored entries.
    transposed : bool
        Whether the logical view is the transpose of the stored entries.
    dtype : numpy.dtype
        Always ``float64``.

    Examples
    --------
    Grow a matrix by writing to it and read it back::

        >>> from dokmat.sparse import DOK
        >>> a = DOK()
        >>> a.set((2, 3), 5.0)
        >>> a.shape
        (3, 4)
        >>> a.get((0, 0))
        0.0
        >>> a.transpose()
        >>> a.shape
        (4, 3)
        >>> a[3, 2]
        5.0
        >>> a.get_range_sparse(slice(None), slice(None))
        (array([3]), array([2]), array([5.]))
    """

    def __init__(self):
        super().__init__(dtype=np.float64)
        self._data = {}
        # bounds are kept in physical (stored) coordinates
        self._max_row = 0
        self._max_col = 0
        self._transposed = False

    @classmethod
    def from_arrays(cls, i, j, x):
        """Construct from coordinate/value buffers.

        Parameters
        ----------
        i, j, x : array_like
            See `DOK.set_many`.
        """
        out = cls()
        out.set_many(i, j, x)
        return out

    # -- state -------------------------------------------------------------

    @property
    def shape(self):
        """Logical ``(rows, cols)``; swapped when transposed."""
        if not self._data:
            return (0, 0)
        rows, cols = self._max_row + 1, self._max_col + 1
        if self._transposed:
            return (cols, rows)
        return (rows, cols)

    @property
    def nnz(self):
        """Number of stored entries (int)."""
        return len(self._data)

    @property
    def transposed(self):
        return self._transposed

    def transpose(self):
        """Transpose the matrix in place.

        Only the orientation flag changes; no entry is moved. Calling it twice
        restores the original view.
        """
        self._transposed = not self._transposed
        logger.debug("transpose: now %s with shape %s",
                     "transposed" if self._transposed else "untransposed", self.shape)

    def copy(self):
        """Return an independent deep copy (entries, bounds and orientation)."""
        out = type(self)()
        out._data = dict(self._data)
        out._max_row = self._max_row
        out._max_col = self._max_col
        out._transposed = self._transposed
        return out

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # -- point access --------------------------------------------------------

    def _physical(self, row, col):
        if self._transposed:
            return (col, row)
        return (row, col)

    def _set(self, row, col, value):
        key = self._physical(row, col)
        if key[0] > self._max_row:
            self._max_row = key[0]
        if key[1] > self._max_col:
            self._max_col = key[1]
        self._data[key] = value

    def _lookup(self, row, col):
        return self._data.get(self._physical(row, col), _MISSING)

    def _check_bounds(self, row, col):
        nrows, ncols = self.shape
        if row >= nrows:
            raise OutOfBoundsError(0, row, nrows)
        if col >= ncols:
            raise OutOfBoundsError(1, col, ncols)

    def _get(self, row, col):
        value = self._lookup(row, col)
        if value is _MISSING:
            self._check_bounds(row, col)
            return 0.0
        return value

    def set(self, key, value):
        """Store ``value`` at logical ``key``, growing the shape if needed.

        Parameters
        ----------
        key : tuple[int, int]
            Logical ``(row, col)``; any non-negative integers.
        value : float
            Value to store. NaN and infinities are stored as given.

        Raises
        ------
        InvalidArgumentError
            If ``key`` is not a pair of non-negative integers or ``value`` is
            not a number.
        """
        row, col = normalize_key(key)
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"value must be a real number, got {value!r}", argument="value"
            ) from None
        self._set(row, col, value)

    def get(self, key, filter=False):
        """Read the value at logical ``key``.

        Parameters
        ----------
        key : tuple[int, int]
            Logical ``(row, col)``.
        filter : bool, optional
            When True, an unset cell yields ``nan`` instead of ``0.0`` and no
            bounds check is made.

        Returns
        -------
        float
            Stored value, ``0.0`` for an unset cell inside the shape, or
            ``nan`` for an unset cell when ``filter`` is True.

        Raises
        ------
        OutOfBoundsError
            If ``filter`` is False, the cell is unset and ``key`` lies outside
            the current logical shape.
        """
        row, col = normalize_key(key)
        if filter:
            value = self._lookup(row, col)
            return math.nan if value is _MISSING else value
        return self._get(row, col)

    def set_many(self, i, j, x):
        """Store ``x[k]`` at ``(i[k], j[k])`` for every ``k``.

        Parameters
        ----------
        i, j : array_like of int, shape (n,)
            Logical row and column coordinates.
        x : array_like of float, shape (n,)
            Values.

        Raises
        ------
        InvalidArgumentError
            If a buffer is not 1-D, the lengths differ, or a coordinate is
            negative or non-integral. Validation covers the whole batch before
            the first entry is written, so a failed call leaves the matrix
            untouched.
        """
        rows, cols, values = coordinate_triples(i, j, x)
        logger.debug("set_many: writing %d entries", values.size)
        for row, col, value in zip(rows.tolist(), cols.tolist(), values.tolist()):
            self._set(row, col, value)

    def items(self):
        """Iterate ``((row, col), value)`` over stored entries, in logical coordinates."""
        for (row, col), value in self._data.items():
            if self._transposed:
                yield (col, row), value
            else:
                yield (row, col), value

    # -- range access --------------------------------------------------------

    def _resolve(self, rows, cols):
        nrows, ncols = self.shape
        return resolve_range(rows, nrows, 0), resolve_range(cols, ncols, 1)

    def get_range(self, rows, cols):
        """Dense read of a rectangular range.

        Parameters
        ----------
        rows, cols : int, slice or tuple of (start, stop, step)
            Axis selectors resolved against the current logical shape.

        Returns
        -------
        numpy.ndarray
            float64 array of shape ``(len(rows), len(cols))`` with ``0.0`` for
            unset cells.

        Raises
        ------
        OutOfBoundsError
            If an integer selector addresses an unset cell beyond the shape.
        InvalidArgumentError
            On a malformed selector.
        """
        row_range, col_range = self._resolve(rows, cols)
        out = np.empty((len(row_range), len(col_range)), dtype=np.float64)
        for ix, row in enumerate(row_range):
            for jx, col in enumerate(col_range):
                out[ix, jx] = self._get(row, col)
        return out

    def get_range_sparse(self, rows, cols):
        """Sparse read of a rectangular range.

        Only explicitly stored entries are returned, so the caller never
        materializes the zeros of the range.

        Parameters
        ----------
        rows, cols : int, slice or tuple of (start, stop, step)
            Axis selectors resolved against the current logical shape.

        Returns
        -------
        tuple of numpy.ndarray
            ``(rows, cols, values)`` as int64, int64 and float64 arrays of
            length ``k``, the number of stored entries found. Coordinates are
            logical and the order is row-major over the selected range.
        """
        row_range, col_range = self._resolve(rows, cols)
        out_rows, out_cols, out_values = [], [], []
        if len(row_range) * len(col_range) > len(self._data):
            # fewer stored entries than cells: scan the entries instead
            found = sorted(
                (key, value)
                for key, value in self.items()
                if key[0] in row_range and key[1] in col_range
            )
            for (row, col), value in found:
                out_rows.append(row)
                out_cols.append(col)
                out_values.append(value)
        else:
            for row in row_range:
                for col in col_range:
                    value = self._lookup(row, col)
                    if value is not _MISSING:
                        out_rows.append(row)
                        out_cols.append(col)
                        out_values.append(value)
        return (
            np.array(out_rows, dtype=np.int64),
            np.array(out_cols, dtype=np.int64),
            np.array(out_values, dtype=np.float64),
        )

    def set_range(self, rows, cols, block):
        """Dense write of a rectangular range.

        Parameters
        ----------
        rows, cols : int, slice or tuple of (start, stop, step)
            Axis selectors resolved against the current logical shape.
        block : array_like, shape (len(rows), len(cols))
            Values written row-major into the selected cells.

        Raises
        ------
        ShapeMismatchError
            If ``block`` is not 2-D or its shape differs from the range.
        InvalidArgumentError
            On a malformed selector.
        """
        row_range, col_range = self._resolve(rows, cols)
        block = as_block(block)
        expected = (len(row_range), len(col_range))
        if block.ndim != 2 or block.shape != expected:
            raise ShapeMismatchError(expected, block.shape)
        logger.debug("set_range: writing block of shape %s", expected)
        for ix, row in enumerate(row_range):
            for jx, col in enumerate(col_range):
                self._set(row, col, float(block[ix, jx]))

    # -- Python indexing -----------------------------------------------------

    def _scalar_key(self, a, b):
        nrows, ncols = self.shape
        return resolve_range(a, nrows, 0).start, resolve_range(b, ncols, 1).start

    def __getitem__(self, index):
        """``M[i, j]`` reads one cell; any slice selector reads a dense range."""
        a, b = split_index(index)
        if is_scalar_selector(a) and is_scalar_selector(b):
            return self._get(*self._scalar_key(a, b))
        return self.get_range(a, b)

    def __setitem__(self, index, value):
        """``M[i, j] = v`` writes one cell; any slice selector writes a range."""
        a, b = split_index(index)
        if is_scalar_selector(a) and is_scalar_selector(b):
            self.set(self._scalar_key(a, b), value)
        else:
            self.set_range(a, b, value)

    def __repr__(self):
        return (
            f"<{type(self).__name__} shape={self.shape} nnz={self.nnz} "
            f"transposed={self._transposed}>"
        )
