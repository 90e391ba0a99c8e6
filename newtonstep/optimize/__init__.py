"""Newton-Raphson step primitive and helpers.

Example
-------
>>> from newtonstep import Matrix
>>> from newtonstep.optimize import Status, newton_raphson
>>> def df(x):
...     return Matrix.vector([2 * x[0] + 2, 2 * x[1] + 8])
>>> def ddf(x):
...     return Matrix.from_array([[2.0, 0.0], [0.0, 2.0]])
>>> x = Matrix.vector([-3.0, -2.0])
>>> newton_raphson(df, ddf, x) is Status.SUCCESS
True
>>> round(x[0], 6), round(x[1], 6)
(-1.0, -4.0)
"""

from .core import Evaluator, Objective, Status, check_convergence
from .driver import Callback, IterationResult, iterate
from .newton import newton_raphson
from .utils import approx_grad, approx_hessian, numeric_gradient, numeric_hessian

__all__ = [
    "Callback",
    "Evaluator",
    "IterationResult",
    "Objective",
    "Status",
    "approx_grad",
    "approx_hessian",
    "check_convergence",
    "iterate",
    "newton_raphson",
    "numeric_gradient",
    "numeric_hessian",
]
