from .base import SparseMatrix
from .dok import DOK

__all__ = [
    "SparseMatrix",
    "DOK",
]
