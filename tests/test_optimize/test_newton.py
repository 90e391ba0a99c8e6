import logging
from io import StringIO

import numpy as np
import pytest

from newtonstep import Matrix, configure_logging, solve
from newtonstep.optimize import Status, newton_raphson


def polynomial_grad(x: Matrix) -> Matrix:
    d = Matrix(2, 1)
    d[0] = 2.0 * x[0] + 2.0
    d[1] = 2.0 * x[1] + 8.0
    return d


def polynomial_hess(_: Matrix) -> Matrix:
    return Matrix.from_array([[2.0, 0.0], [0.0, 2.0]])


def test_quadratic_minimum_in_one_step():
    x = Matrix.vector([-3.0, -2.0])
    status = newton_raphson(polynomial_grad, polynomial_hess, x)
    assert status is Status.SUCCESS
    assert abs(x[0] - (-1.0)) < 1e-3
    assert abs(x[1] - (-4.0)) < 1e-3
    assert polynomial_grad(x).norm() < 1e-12


def test_point_is_mutated_in_place():
    x = Matrix.vector([-3.0, -2.0])
    alias = x
    newton_raphson(polynomial_grad, polynomial_hess, x)
    assert alias is x
    assert alias.allclose(Matrix.vector([-1.0, -4.0]))


def test_general_quadratic_from_random_starts(rng):
    a = np.array([[3.0, 0.5], [0.5, 2.0]])
    b = np.array([1.0, -1.0])
    expected = Matrix.from_array(np.linalg.solve(a, b))

    def grad(x: Matrix) -> Matrix:
        return Matrix.from_array(a) @ x - Matrix.from_array(b)

    def hess(_: Matrix) -> Matrix:
        return Matrix.from_array(a)

    for _ in range(5):
        x = Matrix.from_array(rng.normal(scale=10.0, size=2))
        assert newton_raphson(grad, hess, x) is Status.SUCCESS
        assert x.allclose(expected, atol=1e-10)


def test_step_at_optimum_is_zero_update():
    x = Matrix.vector([-1.0, -4.0])
    status = newton_raphson(polynomial_grad, polynomial_hess, x)
    assert status is Status.SUCCESS
    assert x == Matrix.vector([-1.0, -4.0])


def test_singular_hessian_leaves_point_unchanged():
    x = Matrix.vector([-3.0, -2.0])
    status = newton_raphson(polynomial_grad, lambda _: Matrix(2, 2), x)
    assert status is Status.SINGULAR_HESSIAN
    assert x == Matrix.vector([-3.0, -2.0])


def test_rank_deficient_hessian_is_singular():
    x = Matrix.vector([1.0, 1.0])
    hess = Matrix.from_array([[1.0, 1.0], [1.0, 1.0]])
    status = newton_raphson(polynomial_grad, lambda _: hess, x)
    assert status is Status.SINGULAR_HESSIAN
    assert x == Matrix.vector([1.0, 1.0])


def test_indefinite_hessian_steps_to_saddle():
    # f(x, y) = x^2 - y^2 has a saddle at the origin.
    def grad(x: Matrix) -> Matrix:
        return Matrix.vector([2.0 * x[0], -2.0 * x[1]])

    def hess(_: Matrix) -> Matrix:
        return Matrix.from_array([[2.0, 0.0], [0.0, -2.0]])

    x = Matrix.vector([0.7, -1.3])
    assert newton_raphson(grad, hess, x) is Status.SUCCESS
    assert x.allclose(Matrix.vector([0.0, 0.0]), atol=1e-12)


def test_non_symmetric_hessian_is_accepted():
    hess = Matrix.from_array([[2.0, 1.0], [0.0, 2.0]])
    target = Matrix.vector([1.0, -1.0])

    def grad(x: Matrix) -> Matrix:
        return hess @ (x - target)

    x = Matrix.vector([5.0, 5.0])
    assert newton_raphson(grad, lambda _: hess, x) is Status.SUCCESS
    assert x.allclose(target, atol=1e-12)


def test_non_finite_gradient_reports_numerical_error():
    x = Matrix.vector([1.0, 2.0])
    status = newton_raphson(
        lambda _: Matrix.vector([float("nan"), 0.0]), polynomial_hess, x
    )
    assert status is Status.NUMERICAL_ERROR
    assert x == Matrix.vector([1.0, 2.0])


def test_non_finite_hessian_reports_numerical_error():
    x = Matrix.vector([1.0, 2.0])
    bad = Matrix.identity(2)
    bad[1, 1] = float("inf")
    assert newton_raphson(polynomial_grad, lambda _: bad, x) is Status.NUMERICAL_ERROR
    assert x == Matrix.vector([1.0, 2.0])


def test_overflowing_update_reports_numerical_error():
    x = Matrix.vector([1e308])
    grad = lambda _: Matrix.vector([-1e308])
    hess = lambda _: Matrix.vector([1.0])
    assert newton_raphson(grad, hess, x) is Status.NUMERICAL_ERROR
    assert x[0] == 1e308


def test_each_evaluator_called_once_per_step():
    calls = {"df": 0, "ddf": 0}

    def df(x: Matrix) -> Matrix:
        calls["df"] += 1
        return polynomial_grad(x)

    def ddf(x: Matrix) -> Matrix:
        calls["ddf"] += 1
        return polynomial_hess(x)

    newton_raphson(df, ddf, Matrix.vector([0.0, 0.0]))
    assert calls == {"df": 1, "ddf": 1}


def test_gradient_shape_mismatch_raises():
    x = Matrix.vector([1.0, 2.0])
    with pytest.raises(ValueError):
        newton_raphson(lambda _: Matrix(3, 1), polynomial_hess, x)


def test_hessian_shape_mismatch_raises():
    x = Matrix.vector([1.0, 2.0])
    with pytest.raises(ValueError):
        newton_raphson(polynomial_grad, lambda _: Matrix.identity(3), x)


def test_point_must_be_column_vector():
    with pytest.raises(ValueError):
        newton_raphson(polynomial_grad, polynomial_hess, Matrix(1, 2))


def test_evaluator_must_return_matrix():
    x = Matrix.vector([1.0, 2.0])
    with pytest.raises(TypeError):
        newton_raphson(lambda _: np.zeros((2, 1)), polynomial_hess, x)


def test_singular_hessian_is_logged():
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        newton_raphson(polynomial_grad, lambda _: Matrix(2, 2), Matrix.vector([0.0, 0.0]))
        assert "Singular Hessian" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_stored_point_is_exactly_point_plus_step(rng):
    a = Matrix.from_array([[3.0, 0.5], [0.5, 2.0]])
    b = Matrix.vector([1.0, -1.0])

    def grad(x: Matrix) -> Matrix:
        return a @ x - b

    start = Matrix.from_array(rng.normal(scale=10.0, size=2))
    expected = start + solve(a, -grad(start))
    x = start.copy()
    assert newton_raphson(grad, lambda _: a, x) is Status.SUCCESS
    assert x == expected
