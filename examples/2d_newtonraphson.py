"""
Example: locating the minimum of a quadratic with Newton-Raphson

The function being optimized is

    f(x, y) = x^2 + y^2 + 2x + 8y

with its global minimum at (-1, -4). Its gradient is

    df/dx = 2x + 2
    df/dy = 2y + 8

and its Hessian is the constant matrix [[2, 0], [0, 2]]. Because the Hessian
is constant, a single Newton step lands on the minimum.
"""

from newtonstep import Matrix, Status, newton_raphson


def df(x: Matrix) -> Matrix:
    """Gradient of the polynomial."""
    d = Matrix(2, 1)
    d[0] = 2.0 * x[0] + 2.0
    d[1] = 2.0 * x[1] + 8.0
    return d


def ddf(x: Matrix) -> Matrix:
    """Hessian of the polynomial."""
    d = Matrix(2, 2)
    d[0, 0] = 2.0
    d[0, 1] = 0.0
    d[1, 0] = 0.0
    d[1, 1] = 2.0
    return d


def main() -> None:
    x = Matrix(2, 1)
    x[0] = -3.0
    x[1] = -2.0

    # Iterate while the gradient norm is above a user-selected threshold.
    status = Status.SUCCESS
    while status is Status.SUCCESS and df(x).norm() > 0.001:
        status = newton_raphson(df, ddf, x)
        print(f"Parameters: {x.T} Error: {df(x).norm():.3f}")

    assert abs(x[0] - (-1.0)) < 0.001
    assert abs(x[1] - (-4.0)) < 0.001
    print(f"Minimum found at ({x[0]:.3f}, {x[1]:.3f})")


if __name__ == "__main__":
    main()
