"""Error types raised by dokmat.

Every error derives from :class:`DokmatError` and also from the builtin
exception a NumPy user would expect (``IndexError`` for out-of-bounds reads,
``ValueError`` for malformed input), so existing ``except`` clauses keep
working.
"""

from __future__ import annotations

from typing import Optional, Tuple


def format_shape(shape) -> str:
    """Render a shape tuple the way NumPy prints it, e.g. ``(3,)`` or ``(2, 3)``."""
    shape = tuple(int(s) for s in shape)
    if len(shape) == 1:
        return f"({shape[0]},)"
    return "(" + ", ".join(str(s) for s in shape) + ")"


class DokmatError(Exception):
    """Base exception for all dokmat errors."""


class OutOfBoundsError(DokmatError, IndexError):
    """A read addressed an index beyond the current logical extent.

    Attributes
    ----------
    axis : int
        Logical axis (0 for rows, 1 for columns as the caller sees them).
    index : int
        Offending index.
    size : int
        Current extent of ``axis``.
    """

    def __init__(self, axis: int, index: int, size: int):
        self.axis = int(axis)
        self.index = int(index)
        self.size = int(size)
        super().__init__(
            f"index {self.index} is out of bounds for axis {self.axis} with size {self.size}"
        )


class ShapeMismatchError(DokmatError, ValueError):
    """A dense block does not match the resolved range it is written into."""

    def __init__(self, expected: Tuple[int, ...], actual: Tuple[int, ...]):
        self.expected = tuple(int(s) for s in expected)
        self.actual = tuple(int(s) for s in actual)
        super().__init__(
            "could not broadcast input array from shape "
            f"{format_shape(self.actual)} into shape {format_shape(self.expected)}"
        )


class InvalidArgumentError(DokmatError, ValueError):
    """Malformed key, range selector or bulk input.

    Attributes
    ----------
    argument : str or None
        Name of the offending argument when one can be identified.
    """

    def __init__(self, message: str, argument: Optional[str] = None):
        self.argument = argument
        super().__init__(message)
