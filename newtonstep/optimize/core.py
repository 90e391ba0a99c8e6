"""Status values and evaluator types shared by the Newton-Raphson routines."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from ..linalg import Matrix

Evaluator = Callable[[Matrix], Matrix]
Objective = Callable[[Matrix], float]


class Status(Enum):
    """Outcome of a single Newton-Raphson step."""

    SUCCESS = "success"
    SINGULAR_HESSIAN = "singular_hessian"
    NUMERICAL_ERROR = "numerical_error"


def check_convergence(grad_norm: float, tol: float) -> bool:
    """Return True once ``grad_norm <= tol``; ``tol`` is used as given."""
    return grad_norm <= tol


__all__ = ["Evaluator", "Objective", "Status", "check_convergence"]
