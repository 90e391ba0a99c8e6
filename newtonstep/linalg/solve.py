"""
Linear solve with explicit singularity detection.

Singularity is decided by a rank check on the singular values of ``A`` rather
than by testing the determinant against zero: ``A`` is treated as singular
when

    min(s) <= rcond * max(s)

with ``rcond = SINGULAR_RCOND_FACTOR * n * eps(dtype)`` unless the caller
passes ``rcond`` explicitly. This is the relative threshold used by
rank-revealing decompositions. With the default factor of 1 it only rejects
matrices that are rank-deficient to working precision (condition number
above roughly ``1 / (n * eps)``). A matrix such as ``[[1, 1], [1, 1 + 1e-14]]``
is still accepted even though its solution carries only a couple of correct
digits. Callers that want an ill-conditioning cutoff should raise the factor
with :func:`newtonstep.config.set_singular_rcond_factor` or pass ``rcond``.
Systems that pass the check are solved with LU and partial pivoting
(``numpy.linalg.solve``).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .. import config
from .matrix import Matrix


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised when a linear system is singular or too ill-conditioned to solve."""


def default_rcond(n: int, dtype: np.dtype) -> float:
    """Relative singular-value threshold for an ``n x n`` system."""
    return config.get_singular_rcond_factor() * n * float(np.finfo(dtype).eps)


def _check_square(a: Matrix) -> None:
    if a.rows != a.cols:
        raise ValueError(f"Coefficient matrix must be square, got {a.shape}")


def _singular_values(a: Matrix) -> Optional[np.ndarray]:
    data = a.to_numpy()
    if not np.all(np.isfinite(data)):
        return None
    return np.linalg.svd(data, compute_uv=False)


def is_singular(a: Matrix, rcond: Optional[float] = None) -> bool:
    """Return True if ``a`` fails the relative rank check.

    Matrices containing NaN or Inf are reported as singular.
    """
    _check_square(a)
    s = _singular_values(a)
    if s is None:
        return True
    smax = float(s.max())
    if smax == 0.0:
        return True
    if rcond is None:
        rcond = default_rcond(a.rows, a.dtype)
    return float(s.min()) <= rcond * smax


def condition_number(a: Matrix) -> float:
    """2-norm condition number of ``a``; ``inf`` when ``a`` is singular."""
    _check_square(a)
    s = _singular_values(a)
    if s is None or float(s.min()) == 0.0:
        return float("inf")
    return float(s.max() / s.min())


def solve(a: Matrix, b: Matrix, rcond: Optional[float] = None) -> Matrix:
    """Solve ``a @ x = b`` for ``x``.

    Args:
        a: Square ``n x n`` coefficient matrix. Symmetry is not required.
        b: Right-hand side with ``n`` rows (usually an ``n x 1`` vector).
        rcond: Relative singular-value threshold; see module docstring.

    Returns:
        The solution, with the shape of ``b``.

    Raises:
        ValueError: If the shapes are incompatible.
        TypeError: If ``a`` and ``b`` have different scalar types.
        SingularMatrixError: If ``a`` is singular or ill-conditioned, or the
            solution is not finite.
    """
    _check_square(a)
    if b.rows != a.rows:
        raise ValueError(
            f"Right-hand side has {b.rows} rows, expected {a.rows}"
        )
    if a.dtype != b.dtype:
        raise TypeError(f"Mixed precision in solve: {a.dtype} and {b.dtype}")
    if is_singular(a, rcond=rcond):
        raise SingularMatrixError(
            f"Matrix of shape {a.shape} is singular to working precision"
        )
    try:
        x = np.linalg.solve(a.to_numpy(), b.to_numpy())
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(str(exc)) from exc
    if not np.all(np.isfinite(x)):
        raise SingularMatrixError("Solution contains non-finite values")
    return Matrix.from_array(x, dtype=a.dtype)


__all__ = [
    "SingularMatrixError",
    "condition_number",
    "default_rcond",
    "is_singular",
    "solve",
]
