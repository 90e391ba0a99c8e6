"""Numeric configuration for newtonstep.

All matrices share a single floating-point scalar type. The default is
``float64``; it can be chosen at import time through the
``NEWTONSTEP_PRECISION`` environment variable or changed at runtime with
:func:`set_scalar_dtype` / :func:`precision_context`.

Both settings are process-wide module state, not thread-local. Entering
:func:`precision_context` in one thread also changes the dtype of matrices
built by evaluators running in other threads, which then fail the
mixed-precision check. Concurrent optimization runs should agree on one
precision, set once at start-up, or pass ``dtype=`` explicitly when
constructing matrices.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

import numpy as np

_PRECISION_ENV_VAR = "NEWTONSTEP_PRECISION"

_DTYPE_ALIASES: dict[str, np.dtype] = {
    "float32": np.dtype(np.float32),
    "single": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "double": np.dtype(np.float64),
}

# Multiplier of ``n * eps`` in the relative singular-value threshold used by
# the linear solve to declare a matrix singular.
SINGULAR_RCOND_FACTOR = 1.0


def _resolve_dtype(precision: str | np.dtype | type) -> np.dtype:
    if isinstance(precision, str):
        key = precision.strip().lower()
        if key not in _DTYPE_ALIASES:
            supported = sorted(_DTYPE_ALIASES)
            raise ValueError(
                f"Unsupported precision: {precision!r}. Supported: {supported}"
            )
        return _DTYPE_ALIASES[key]
    dtype = np.dtype(precision)
    if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError(f"Unsupported scalar dtype: {dtype}")
    return dtype


_scalar_dtype: np.dtype = _resolve_dtype(os.getenv(_PRECISION_ENV_VAR, "float64"))


def get_scalar_dtype() -> np.dtype:
    """Return the scalar dtype used for newly constructed matrices."""
    return _scalar_dtype


def set_scalar_dtype(precision: str | np.dtype | type) -> None:
    """
    Globally set the scalar dtype for newly constructed matrices.

    Parameters
    ----------
    precision:
        ``"float32"``/``"single"``, ``"float64"``/``"double"`` or the
        corresponding NumPy dtype.

    Raises
    ------
    ValueError
        If the precision is not a supported floating-point type.
    """
    global _scalar_dtype
    _scalar_dtype = _resolve_dtype(precision)


@contextmanager
def precision_context(precision: str | np.dtype | type) -> Iterator[None]:
    """
    Context manager to temporarily switch the scalar dtype.

    Example
    -------
    >>> from newtonstep import Matrix
    >>> with precision_context("float32"):
    ...     m = Matrix(2, 2)
    >>> m.dtype
    dtype('float32')
    """
    global _scalar_dtype
    prev = _scalar_dtype
    _scalar_dtype = _resolve_dtype(precision)
    try:
        yield
    finally:
        _scalar_dtype = prev


def get_singular_rcond_factor() -> float:
    """Return the multiplier applied to ``n * eps`` for singularity checks."""
    return SINGULAR_RCOND_FACTOR


def set_singular_rcond_factor(factor: float) -> None:
    """Set the multiplier applied to ``n * eps`` for singularity checks."""
    if not factor > 0:
        raise ValueError("factor must be positive")
    global SINGULAR_RCOND_FACTOR
    SINGULAR_RCOND_FACTOR = float(factor)


__all__ = [
    "SINGULAR_RCOND_FACTOR",
    "get_scalar_dtype",
    "get_singular_rcond_factor",
    "precision_context",
    "set_scalar_dtype",
    "set_singular_rcond_factor",
]
