"""newtonstep - a small dense-matrix Newton-Raphson toolkit."""

__version__ = "0.1.0"

from .config import (
    get_scalar_dtype,
    precision_context,
    set_scalar_dtype,
    set_singular_rcond_factor,
)
from .linalg import Matrix, SingularMatrixError, condition_number, is_singular, solve
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    IterationResult,
    Status,
    approx_grad,
    approx_hessian,
    iterate,
    newton_raphson,
    numeric_gradient,
    numeric_hessian,
)

__all__ = [
    "IterationResult",
    "Matrix",
    "SingularMatrixError",
    "Status",
    "__version__",
    "approx_grad",
    "approx_hessian",
    "condition_number",
    "configure_logging",
    "get_logger",
    "get_scalar_dtype",
    "is_singular",
    "iterate",
    "newton_raphson",
    "numeric_gradient",
    "numeric_hessian",
    "precision_context",
    "set_log_level",
    "set_scalar_dtype",
    "set_singular_rcond_factor",
    "solve",
]
