"""Convenience loop around :func:`newton_raphson`.

``iterate`` is one possible caller policy: keep stepping while the last step
succeeded and the gradient norm exceeds ``tol``. It has no implicit iteration
cap. With the default ``maxiter=None`` the loop only ends on convergence or a
failed step, so a non-convex problem whose iterates oscillate or diverge
without overflowing will loop forever. Pass ``maxiter`` to bound it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..linalg import Matrix
from ..logging import get_logger
from .core import Evaluator, Status, check_convergence
from .newton import newton_raphson

logger = get_logger(__name__)

Callback = Callable[[int, Matrix, Status], None]


@dataclass
class IterationResult:
    """Summary of an :func:`iterate` run.

    Attributes:
        x: The caller's point (the same object that was passed in).
        status: Status of the last step, ``SUCCESS`` if no step was needed.
        nit: Number of steps taken.
        converged: Whether the gradient norm reached ``tol``.
        grad_norm: Gradient norm at the final point.
        message: Human-readable reason the loop ended.
        history: Copies of the point after every step, when requested.
    """

    x: Matrix
    status: Status
    nit: int
    converged: bool
    grad_norm: float
    message: str
    history: List[Matrix] = field(default_factory=list)


def iterate(
    df: Evaluator,
    ddf: Evaluator,
    x: Matrix,
    tol: float = 1e-3,
    maxiter: Optional[int] = None,
    callback: Optional[Callback] = None,
    history: bool = False,
) -> IterationResult:
    """Repeat Newton-Raphson steps on ``x`` until the gradient norm is small.

    Args:
        df: Gradient evaluator.
        ddf: Hessian evaluator.
        x: Starting point, updated in place.
        tol: Stop once ``norm(df(x)) <= tol``. No floor is applied, so
            ``tol=0`` keeps stepping until the gradient is exactly zero.
        maxiter: Optional bound on the number of steps. ``None`` means
            unbounded.
        callback: Called as ``callback(nit, x, status)`` after each step.
        history: Record a copy of ``x`` after each step.

    Returns:
        An :class:`IterationResult`; ``x`` in it is the caller's object.
    """
    if tol < 0:
        raise ValueError("tol must be non-negative")
    if maxiter is not None and maxiter < 0:
        raise ValueError("maxiter must be non-negative")

    hist: list[Matrix] = []
    status = Status.SUCCESS
    nit = 0
    grad_norm = df(x).norm()

    while status is Status.SUCCESS and not check_convergence(grad_norm, tol):
        if maxiter is not None and nit >= maxiter:
            break
        status = newton_raphson(df, ddf, x)
        nit += 1
        if history:
            hist.append(x.copy())
        if callback is not None:
            callback(nit, x, status)
        grad_norm = df(x).norm()

    converged = status is Status.SUCCESS and check_convergence(grad_norm, tol)
    if converged:
        message = "Gradient tolerance satisfied."
    elif status is Status.SINGULAR_HESSIAN:
        message = "Singular Hessian encountered."
    elif status is Status.NUMERICAL_ERROR:
        message = "Non-finite values encountered."
    else:
        message = "Maximum iterations reached."
    logger.info("Newton iteration stopped after %d step(s): %s", nit, message)

    return IterationResult(
        x=x,
        status=status,
        nit=nit,
        converged=converged,
        grad_norm=grad_norm,
        message=message,
        history=hist,
    )


__all__ = ["Callback", "IterationResult", "iterate"]
