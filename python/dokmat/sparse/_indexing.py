"""Key normalization and range resolution for :class:`~dokmat.sparse.DOK`.

A *key* addresses one cell and is a ``(row, col)`` pair of non-negative
integers. A *selector* addresses one axis of a range and is an ``int``, a
``slice`` or a ``(start, stop, step)`` tuple; it is resolved against the
current logical extent of that axis into a :class:`range`.
"""

from __future__ import annotations

import operator
from typing import Tuple

from ..errors import InvalidArgumentError, OutOfBoundsError

Key = Tuple[int, int]

AXIS_NAMES = ("rows", "cols")


def normalize_key(key) -> Key:
    """Return ``key`` as a tuple of two non-negative Python ints.

    Raises
    ------
    InvalidArgumentError
        If ``key`` is not a pair of integers or a component is negative.
    """
    try:
        row, col = key
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"key must be a (row, col) pair, got {key!r}", argument="key"
        ) from None
    try:
        row = operator.index(row)
        col = operator.index(col)
    except TypeError:
        raise InvalidArgumentError(
            f"key components must be integers, got {key!r}", argument="key"
        ) from None
    if row < 0 or col < 0:
        raise InvalidArgumentError(
            f"key components must be non-negative, got ({row}, {col})", argument="key"
        )
    return row, col


def split_index(index) -> Tuple[object, object]:
    """Split an indexing expression ``M[a, b]`` into its two axis selectors."""
    if not isinstance(index, tuple) or len(index) != 2:
        raise InvalidArgumentError("number of indices must be equal to 2", argument="index")
    return index[0], index[1]


def is_scalar_selector(selector) -> bool:
    if isinstance(selector, (slice, tuple)):
        return False
    try:
        operator.index(selector)
    except TypeError:
        return False
    return True


def resolve_range(selector, extent: int, axis: int) -> range:
    """Resolve one axis selector against ``extent``.

    Parameters
    ----------
    selector : int, slice or tuple of (start, stop, step)
        Axis selector. Slices clamp to ``[0, extent)`` like Python slices.
        An integer ``k`` selects ``[k, k + 1)`` without clamping; negative
        integers count from the end.
    extent : int
        Current logical size of the axis.
    axis : int
        Logical axis number, used in error reports.

    Returns
    -------
    range
        Iteration sequence; ``len()`` of it is the slice length.

    Raises
    ------
    InvalidArgumentError
        On a zero or negative step, non-integer bounds, or an unsupported
        selector type.
    OutOfBoundsError
        If a negative integer selector still falls before 0 once wrapped.
    """
    name = AXIS_NAMES[axis]
    if isinstance(selector, tuple):
        if len(selector) != 3:
            raise InvalidArgumentError(
                f"{name} range must be a (start, stop, step) triple, got {selector!r}",
                argument=name,
            )
        selector = slice(*selector)

    if isinstance(selector, slice):
        if selector.step is not None:
            try:
                step = operator.index(selector.step)
            except TypeError:
                raise InvalidArgumentError(
                    f"{name} slice step must be an integer", argument=name
                ) from None
            if step <= 0:
                raise InvalidArgumentError(
                    f"{name} slice step must be positive, got {step}", argument=name
                )
        try:
            start, stop, step = selector.indices(extent)
        except TypeError:
            raise InvalidArgumentError(
                f"{name} slice bounds must be integers or None", argument=name
            ) from None
        return range(start, stop, step)

    try:
        index = operator.index(selector)
    except TypeError:
        raise InvalidArgumentError(
            f"{name} selector must be an int, a slice or a (start, stop, step) triple, "
            f"got {type(selector).__name__}",
            argument=name,
        ) from None
    if index < 0:
        wrapped = index + extent
        if wrapped < 0:
            raise OutOfBoundsError(axis, index, extent)
        index = wrapped
    return range(index, index + 1)
