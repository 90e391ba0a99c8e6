"""Single-step Newton-Raphson update."""

from __future__ import annotations

import numpy as np

from ..linalg import Matrix, SingularMatrixError, solve
from ..logging import get_logger
from .core import Evaluator, Status

logger = get_logger(__name__)


def _evaluate(fn: Evaluator, x: Matrix, what: str) -> Matrix:
    value = fn(x)
    if not isinstance(value, Matrix):
        raise TypeError(f"{what} evaluator must return a Matrix, got {type(value).__name__}")
    return value


def newton_raphson(df: Evaluator, ddf: Evaluator, x: Matrix) -> Status:
    """
    Perform one Newton-Raphson update of ``x`` in place.

    Solves ``ddf(x) @ dx = -df(x)`` and applies ``x += dx``. The Hessian is
    not assumed to be symmetric or positive definite; whatever stationary
    point the local quadratic model points to is taken.

    Parameters
    ----------
    df:
        Gradient evaluator mapping an ``n x 1`` point to an ``n x 1`` vector.
    ddf:
        Hessian evaluator mapping an ``n x 1`` point to an ``n x n`` matrix.
    x:
        Current point, an ``n x 1`` column vector. Mutated only on success.

    Returns
    -------
    Status
        ``SUCCESS`` after applying the update. ``SINGULAR_HESSIAN`` when the
        Hessian fails the rank check of :func:`newtonstep.linalg.solve`, and
        ``NUMERICAL_ERROR`` when the gradient, Hessian or updated point is not
        finite. On either failure ``x`` is left untouched.

    Raises
    ------
    ValueError
        If ``x`` is not a column vector or the evaluators return shapes that
        do not match it.
    TypeError
        If an evaluator does not return a :class:`Matrix`.

    Notes
    -----
    There is no iteration limit here or anywhere below it: the caller decides
    when to stop calling. A loop of the form ``while status is SUCCESS and
    norm(df(x)) > tol`` runs forever if the iterates oscillate or diverge, so
    callers should bound it (see :func:`newtonstep.optimize.iterate`).
    """
    if not isinstance(x, Matrix):
        raise TypeError(f"x must be a Matrix, got {type(x).__name__}")
    if not x.is_vector:
        raise ValueError(f"x must be a column vector, got shape {x.shape}")
    n = x.rows

    grad = _evaluate(df, x, "Gradient")
    hess = _evaluate(ddf, x, "Hessian")
    if grad.shape != (n, 1):
        raise ValueError(f"Gradient has shape {grad.shape}, expected {(n, 1)}")
    if hess.shape != (n, n):
        raise ValueError(f"Hessian has shape {hess.shape}, expected {(n, n)}")

    if not (grad.is_finite() and hess.is_finite()):
        logger.warning("Non-finite gradient or Hessian at %s", x.to_numpy().ravel())
        return Status.NUMERICAL_ERROR

    try:
        step = solve(hess, -grad)
    except SingularMatrixError as exc:
        logger.warning("Singular Hessian, point left unchanged: %s", exc)
        return Status.SINGULAR_HESSIAN

    with np.errstate(over="ignore", invalid="ignore"):
        updated = x + step
    if not updated.is_finite():
        logger.warning("Newton update overflowed, point left unchanged")
        return Status.NUMERICAL_ERROR

    x.assign(updated)
    logger.debug("Newton step |dx|=%.3e -> x=%s", step.norm(), x.to_numpy().ravel())
    return Status.SUCCESS


__all__ = ["newton_raphson"]
