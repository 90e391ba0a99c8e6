"""Dense, mutable, fixed-shape matrix used throughout newtonstep.

A :class:`Matrix` wraps a two-dimensional ``numpy.ndarray`` whose shape never
changes after construction. Column vectors are ``n x 1`` matrices and accept a
one-argument index as shorthand for ``(i, 0)``.

Element access is bounds-checked: any index outside ``[0, rows)`` x
``[0, cols)`` raises :class:`IndexError`. Negative indices are rejected rather
than wrapped around.
"""

from __future__ import annotations

from typing import Any, Iterable, Union

import numpy as np

from ..config import get_scalar_dtype

Scalar = Union[int, float, np.floating]


def _check_index(index: Any, bound: int, axis: str) -> int:
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise IndexError(f"{axis} index must be an integer, got {index!r}")
    index = int(index)
    if index < 0 or index >= bound:
        raise IndexError(f"{axis} index {index} out of range [0, {bound})")
    return index


class Matrix:
    """
    Dense ``rows x cols`` matrix of a single floating-point scalar type.

    Parameters
    ----------
    rows, cols:
        Positive dimensions. Zero or negative values raise ``ValueError``.
    dtype:
        Scalar type; defaults to :func:`newtonstep.config.get_scalar_dtype`.

    Examples
    --------
    >>> x = Matrix(2, 1)
    >>> x[0] = -3.0
    >>> x[1] = -2.0
    >>> x.T.shape
    (1, 2)
    """

    __slots__ = ("_data",)

    # Keep numpy from hijacking reflected operators such as ``ndarray @ Matrix``.
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int, dtype: Any = None) -> None:
        for name, value in (("rows", rows), ("cols", cols)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        dtype = get_scalar_dtype() if dtype is None else np.dtype(dtype)
        self._data = np.zeros((int(rows), int(cols)), dtype=dtype)

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Matrix:
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def from_array(cls, data: Any, dtype: Any = None) -> Matrix:
        """Build a matrix from array-like data.

        Two-dimensional input keeps its shape; one-dimensional input becomes
        a column vector. The data is always copied.
        """
        dtype = get_scalar_dtype() if dtype is None else np.dtype(dtype)
        arr = np.array(data, dtype=dtype, copy=True)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise ValueError(f"Expected 1-D or 2-D data, got {arr.ndim}-D")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Matrix dimensions must be positive")
        return cls._wrap(arr)

    @classmethod
    def vector(cls, values: Iterable[Scalar], dtype: Any = None) -> Matrix:
        """Build an ``n x 1`` column vector."""
        return cls.from_array(np.fromiter(values, dtype=float), dtype=dtype)

    @classmethod
    def zeros(cls, rows: int, cols: int = 1, dtype: Any = None) -> Matrix:
        return cls(rows, cols, dtype=dtype)

    @classmethod
    def identity(cls, n: int, dtype: Any = None) -> Matrix:
        m = cls(n, n, dtype=dtype)
        np.fill_diagonal(m._data, 1.0)
        return m

    # Shape ----------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape  # type: ignore[return-value]

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_vector(self) -> bool:
        """True for column vectors (``cols == 1``)."""
        return self.cols == 1

    # Element access -------------------------------------------------------

    def _resolve(self, key: Any) -> tuple[int, int]:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError(f"Expected (row, col) index, got {key!r}")
            return (
                _check_index(key[0], self.rows, "row"),
                _check_index(key[1], self.cols, "column"),
            )
        if not self.is_vector:
            raise IndexError(
                f"Single index access requires a column vector, matrix is {self.shape}"
            )
        return _check_index(key, self.rows, "row"), 0

    def __getitem__(self, key: Any) -> float:
        i, j = self._resolve(key)
        return float(self._data[i, j])

    def __setitem__(self, key: Any, value: Scalar) -> None:
        i, j = self._resolve(key)
        self._data[i, j] = value

    def __len__(self) -> int:
        return self.rows

    # Arithmetic -----------------------------------------------------------

    def _check_operand(self, other: Matrix, op: str) -> None:
        if other.dtype != self.dtype:
            raise TypeError(
                f"Mixed precision in {op}: {self.dtype} and {other.dtype}"
            )

    def _check_same_shape(self, other: Matrix, op: str) -> None:
        self._check_operand(other, op)
        if other.shape != self.shape:
            raise ValueError(f"Shape mismatch in {op}: {self.shape} and {other.shape}")

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "addition")
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        return Matrix._wrap(self._data - other._data)

    def __iadd__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "addition")
        self._data += other._data
        return self

    def __isub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        self._data -= other._data
        return self

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __mul__(self, scalar: Any) -> Matrix:
        if isinstance(scalar, Matrix) or not np.isscalar(scalar):
            return NotImplemented
        return Matrix._wrap((self._data * scalar).astype(self.dtype, copy=False))

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> Matrix:
        if isinstance(scalar, Matrix) or not np.isscalar(scalar):
            return NotImplemented
        return Matrix._wrap((self._data / scalar).astype(self.dtype, copy=False))

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_operand(other, "matrix product")
        if self.cols != other.rows:
            raise ValueError(
                f"Inner dimensions do not agree: {self.shape} @ {other.shape}"
            )
        return Matrix._wrap(self._data @ other._data)

    # Linear algebra -------------------------------------------------------

    def transpose(self) -> Matrix:
        """Return the transpose as a new matrix; ``self`` is not modified."""
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def norm(self) -> float:
        """Euclidean norm (Frobenius norm for non-vectors)."""
        return float(np.linalg.norm(self._data))

    def solve(self, rhs: Matrix) -> Matrix:
        """Return ``x`` with ``self @ x == rhs``; see :func:`newtonstep.linalg.solve`."""
        from .solve import solve

        return solve(self, rhs)

    # Misc -----------------------------------------------------------------

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    def assign(self, other: Matrix) -> None:
        """Overwrite every element with those of ``other`` in place."""
        if not isinstance(other, Matrix):
            raise TypeError(f"Expected a Matrix, got {type(other).__name__}")
        self._check_same_shape(other, "assignment")
        self._data[...] = other._data

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the underlying data."""
        return self._data.copy()

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self._data)))

    def allclose(self, other: Matrix, atol: float = 1e-8, rtol: float = 0.0) -> bool:
        if not isinstance(other, Matrix) or other.shape != self.shape:
            return False
        return bool(np.allclose(self._data, other._data, atol=atol, rtol=rtol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, dtype={self.dtype}, data={self._data.tolist()})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join(f"{value:g}" for value in row) for row in self._data
        )


__all__ = ["Matrix", "Scalar"]
