"""Conversion of NumPy buffers into coordinate/value sequences.

Bulk writes arrive as three parallel buffers ``i``, ``j`` and ``x``. They are
checked here, before the matrix is touched: every buffer must be
1-dimensional and all must have the same length. Coordinate buffers must hold
non-negative integers.
"""

import operator

import numpy as np

from ..errors import InvalidArgumentError, format_shape


def _as_array(name, a):
    try:
        return np.asarray(a)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be array-like", argument=name) from None


def check_array_ndim(ndim, **arrays):
    """Raise if any named array does not have exactly ``ndim`` dimensions."""
    for name, a in arrays.items():
        if a.ndim != ndim:
            raise InvalidArgumentError(
                f"{name} must be a {ndim}-dimensional array", argument=name
            )


def check_shapes_match(**arrays):
    """Raise if the named arrays do not all share the shape of the first one."""
    items = list(arrays.items())
    if not items:
        return
    first_name, first = items[0]
    for name, a in items[1:]:
        if a.shape != first.shape:
            raise InvalidArgumentError(
                f"{first_name}, {name} could not be broadcast together with shape "
                f"{format_shape(first.shape)}  {format_shape(a.shape)}",
                argument=name,
            )


_INT64_LIMIT = 2**63


def _python_ints(name, values):
    try:
        ints = [operator.index(v) for v in values]
    except TypeError:
        raise InvalidArgumentError(f"{name} must contain integers", argument=name) from None
    if any(v < 0 for v in ints):
        raise InvalidArgumentError(f"{name} must contain non-negative indices", argument=name)
    if max(ints) < _INT64_LIMIT:
        return np.array(ints, dtype=np.int64)
    out = np.empty(len(ints), dtype=object)
    out[:] = ints
    return out


def as_index_array(name, a):
    """Convert a coordinate buffer to integers, rejecting non-integral or negative input.

    Coordinates that fit are returned as int64. Anything beyond the int64
    range (large uint64, Python ints, big integral floats) comes back as an
    object array of Python ints, since keys have no upper limit.
    """
    arr = np.asarray(a)
    if arr.size == 0:
        return arr.astype(np.int64)
    kind = arr.dtype.kind
    if kind == "f":
        if not np.all(np.isfinite(arr)) or not np.all(arr == np.floor(arr)):
            raise InvalidArgumentError(f"{name} must contain integers", argument=name)
        return _python_ints(name, [int(v) for v in arr.tolist()])
    if kind in "uO":
        return _python_ints(name, arr.tolist())
    if kind not in "ib":
        raise InvalidArgumentError(
            f"{name} must be an integer array, got dtype {arr.dtype}", argument=name
        )
    arr = arr.astype(np.int64)
    if np.any(arr < 0):
        raise InvalidArgumentError(f"{name} must contain non-negative indices", argument=name)
    return arr


def as_value_array(name, a):
    try:
        return np.asarray(a, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be convertible to float64", argument=name) from None


def coordinate_triples(i, j, x):
    """Validate bulk-write buffers and return them as ``(rows, cols, values)``.

    Parameters
    ----------
    i, j : array_like of int
        Row and column coordinates, 1-D, non-negative.
    x : array_like of float
        Values, 1-D, same length as ``i`` and ``j``.

    Returns
    -------
    tuple of numpy.ndarray
        rows, cols and ``float64`` values. Coordinates are ``int64``, or
        ``object`` arrays of Python ints when they exceed the int64 range.

    Raises
    ------
    InvalidArgumentError
        Naming the first argument that violates a constraint.
    """
    raw = {"i": _as_array("i", i), "j": _as_array("j", j), "x": _as_array("x", x)}
    check_array_ndim(1, **raw)
    check_shapes_match(**raw)
    rows = as_index_array("i", raw["i"])
    cols = as_index_array("j", raw["j"])
    values = as_value_array("x", raw["x"])
    return rows, cols, values


def as_block(block):
    """Convert the right-hand side of a range write to a float64 array."""
    try:
        return np.asarray(block, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgumentError("block must be convertible to float64", argument="block") from None
