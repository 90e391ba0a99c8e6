"""Finite-difference evaluators for callers without closed-form derivatives.

The helpers operate on :class:`~newtonstep.linalg.Matrix` column vectors and
return matrices of the point's scalar type, so they plug straight into
:func:`newtonstep.optimize.newton_raphson`.
"""

from __future__ import annotations

import numpy as np

from ..linalg import Matrix
from .core import Evaluator, Objective


def _as_point(x: Matrix) -> np.ndarray:
    if not x.is_vector:
        raise ValueError(f"x must be a column vector, got shape {x.shape}")
    return x.to_numpy().ravel()


def _call(fun: Objective, point: np.ndarray, dtype: np.dtype) -> float:
    return float(fun(Matrix.from_array(point, dtype=dtype)))


def approx_grad(fun: Objective, x: Matrix, eps: float = 1e-6) -> Matrix:
    """Compute a central-difference gradient approximation.

    Parameters
    ----------
    fun:
        Objective returning a scalar given an ``n x 1`` point.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    point = _as_point(x).astype(float)
    grad = np.zeros_like(point)
    for i in range(point.size):
        ei = np.zeros_like(point)
        ei[i] = eps
        grad[i] = (_call(fun, point + ei, x.dtype) - _call(fun, point - ei, x.dtype)) / (2.0 * eps)
    return Matrix.from_array(grad, dtype=x.dtype)


def approx_hessian(fun: Objective, x: Matrix, eps: float = 1e-4) -> Matrix:
    """Approximate the Hessian using second-order central differences."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    point = _as_point(x).astype(float)
    n = point.size
    hess = np.zeros((n, n), dtype=float)
    fx = _call(fun, point, x.dtype)
    for i in range(n):
        ei = np.zeros_like(point)
        ei[i] = eps
        f_ip = _call(fun, point + ei, x.dtype)
        f_im = _call(fun, point - ei, x.dtype)
        hess[i, i] = (f_ip - 2 * fx + f_im) / (eps**2)
        for j in range(i + 1, n):
            ej = np.zeros_like(point)
            ej[j] = eps
            f_pp = _call(fun, point + ei + ej, x.dtype)
            f_pm = _call(fun, point + ei - ej, x.dtype)
            f_mp = _call(fun, point - ei + ej, x.dtype)
            f_mm = _call(fun, point - ei - ej, x.dtype)
            value = (f_pp - f_pm - f_mp + f_mm) / (4 * eps**2)
            hess[i, j] = value
            hess[j, i] = value
    return Matrix.from_array(hess, dtype=x.dtype)


def numeric_gradient(fun: Objective, eps: float = 1e-6) -> Evaluator:
    """Wrap :func:`approx_grad` into a gradient evaluator."""
    if eps <= 0:
        raise ValueError("eps must be positive")

    def df(x: Matrix) -> Matrix:
        return approx_grad(fun, x, eps=eps)

    return df


def numeric_hessian(fun: Objective, eps: float = 1e-4) -> Evaluator:
    """Wrap :func:`approx_hessian` into a Hessian evaluator."""
    if eps <= 0:
        raise ValueError("eps must be positive")

    def ddf(x: Matrix) -> Matrix:
        return approx_hessian(fun, x, eps=eps)

    return ddf


__all__ = ["approx_grad", "approx_hessian", "numeric_gradient", "numeric_hessian"]
