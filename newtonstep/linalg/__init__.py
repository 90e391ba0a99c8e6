"""Minimal dense linear algebra for newtonstep."""

from .matrix import Matrix, Scalar
from .solve import (
    SingularMatrixError,
    condition_number,
    default_rcond,
    is_singular,
    solve,
)

__all__ = [
    "Matrix",
    "Scalar",
    "SingularMatrixError",
    "condition_number",
    "default_rcond",
    "is_singular",
    "solve",
]
