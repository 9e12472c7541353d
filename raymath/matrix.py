"""Dense matrix engine.

This module implements the row-major matrix used to transform tuples,
including multiplication, transposition, submatrix extraction and the
cofactor expansion behind determinants and inverses.

Every matrix stores its elements in a flat, read-only float64 array where
element (row, col) lives at ``row * width + col``. All operations return
new matrices.

The determinant is computed by recursive cofactor expansion along the
first row, which costs O(n!) operations. This is fine for the 4x4
matrices used by the transform builders; beyond ``COFACTOR_SIZE_LIMIT``
the result is still computed but a warning is logged, and an LU based
solver would be the right replacement.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np

from raymath import compare
from raymath.tuples import Tuple

logger = logging.getLogger(__name__)

# Largest size for which cofactor expansion runs without a warning.
COFACTOR_SIZE_LIMIT = 4


class Matrix:
    """Immutable dense matrix of ``height`` rows and ``width`` columns."""

    __slots__ = ("width", "height", "data")

    def __init__(self, width: int, height: int, data: Sequence[float]):
        """Create a matrix from row-major data.

        Args:
            width: Number of columns
            height: Number of rows
            data: Flat sequence of width*height elements, row by row

        Raises:
            ValueError: If the data length does not match the dimensions
        """
        values = np.array(data, dtype=np.float64).ravel()
        if width < 0 or height < 0 or values.shape[0] != width * height:
            raise ValueError(
                f"Matrix of {height}x{width} needs {width * height} elements, "
                f"got {values.shape[0]}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "data", values)

    def __setattr__(self, name, value):
        raise AttributeError("Matrix is immutable")

    def __delattr__(self, name):
        raise AttributeError("Matrix is immutable")

    @classmethod
    def create(cls, width: int, height: int, data: Sequence[float]) -> "Matrix":
        return cls(width, height, data)

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """Return the size x size identity matrix.

        Raises:
            ValueError: If size is less than 1
        """
        if size < 1:
            raise ValueError(f"Identity matrix needs a size of at least 1, got {size}")
        return cls(size, size, np.eye(size, dtype=np.float64).ravel())

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Create a matrix from a list of equally long rows.

        Args:
            rows: Sequence of rows, each a sequence of numbers

        Returns:
            New matrix with len(rows) rows
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {i} has {len(row)} elements, expected {width}"
                )
        return cls(width, height, [value for row in rows for value in row])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Matrix":
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {arr.shape}")
        height, width = arr.shape
        return cls(width, height, arr.ravel())

    @classmethod
    def from_tuple(cls, t: Tuple) -> "Matrix":
        """Return ``t`` as a 4x1 column matrix."""
        return cls(1, 4, t.to_array())

    def to_array(self) -> np.ndarray:
        """Return a writable (height, width) copy of the elements."""
        return self.data.reshape(self.height, self.width).copy()

    def to_tuple(self, cls: type = Tuple) -> Tuple:
        """Convert a 4-element matrix (4x1 or 1x4) back to a tuple.

        Args:
            cls: Tuple class to build, e.g. Color

        Returns:
            Tuple holding the four elements in order
        """
        if self.data.shape[0] != 4:
            raise ValueError(
                f"Only a 4-element matrix converts to a tuple, got {self.height}x{self.width}"
            )
        return cls.from_array(self.data)

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"Index ({row}, {col}) out of range for {self.height}x{self.width} matrix"
            )
        return row * self.width + col

    def get(self, row: int, col: int) -> float:
        return float(self.data[self._index(row, col)])

    def equals(self, other: "Matrix") -> bool:
        """Return True if both matrices have the same shape and every pair of
        elements is equal within ``compare.EPSILON``."""
        if self.width != other.width or self.height != other.height:
            return False
        return all(compare.equal(a, b) for a, b in zip(self.data, other.data))

    def multiply_matrix(self, rhs: "Matrix") -> "Matrix":
        """Standard matrix product ``self * rhs``.

        Args:
            rhs: Matrix with as many rows as this matrix has columns

        Returns:
            Matrix with self.height rows and rhs.width columns

        Raises:
            ValueError: If the inner dimensions differ
        """
        if self.width != rhs.height:
            raise ValueError(
                f"Cannot multiply {self.height}x{self.width} by {rhs.height}x{rhs.width}"
            )

        data = []
        for row in range(self.height):
            for col in range(rhs.width):
                total = 0.0
                for k in range(self.width):
                    total += self.data[row * self.width + k] * rhs.data[k * rhs.width + col]
                data.append(total)

        return Matrix(rhs.width, self.height, data)

    def multiply_scalar(self, scalar: float) -> "Matrix":
        return Matrix(self.width, self.height, self.data * scalar)

    def multiply_tuple(self, t: Tuple) -> Tuple:
        """Transform a tuple by this 4x4 matrix.

        The tuple is treated as a 4x1 column; the result keeps the tuple's
        class so colors stay colors.
        """
        if self.width != 4 or self.height != 4:
            raise ValueError(
                f"Tuple multiplication needs a 4x4 matrix, got {self.height}x{self.width}"
            )
        column = self.multiply_matrix(Matrix.from_tuple(t))
        return column.to_tuple(type(t))

    def multiply(self, other: Union["Matrix", Tuple, float]) -> Union["Matrix", Tuple]:
        """Dispatch to the matrix, tuple or scalar product by operand type."""
        if isinstance(other, Matrix):
            return self.multiply_matrix(other)
        if isinstance(other, Tuple):
            return self.multiply_tuple(other)
        if isinstance(other, (int, float, np.number)):
            return self.multiply_scalar(other)
        raise TypeError(f"Cannot multiply a Matrix by {type(other).__name__}")

    def transpose(self) -> "Matrix":
        data = [
            self.data[row * self.width + col]
            for col in range(self.width)
            for row in range(self.height)
        ]
        return Matrix(self.height, self.width, data)

    def submatrix(self, row: int, col: int) -> "Matrix":
        """Return a copy with one row and one column removed.

        Args:
            row: Row to drop
            col: Column to drop

        Returns:
            (height-1) x (width-1) matrix
        """
        self._index(row, col)
        data = []
        for r in range(self.height):
            if r == row:
                continue
            for c in range(self.width):
                if c == col:
                    continue
                data.append(self.data[r * self.width + c])
        return Matrix(self.width - 1, self.height - 1, data)

    def _require_square(self, min_size: int, operation: str) -> None:
        if not self.is_square or self.width < min_size:
            raise ValueError(
                f"{operation} needs a square matrix of size >= {min_size}, "
                f"got {self.height}x{self.width}"
            )

    def minor(self, row: int, col: int) -> float:
        """Determinant of the submatrix without ``row`` and ``col``."""
        self._require_square(2, "Minor")
        return float(self.submatrix(row, col)._determinant())

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant_2x2(self) -> float:
        if self.width != 2 or self.height != 2:
            raise ValueError(
                f"Closed-form determinant needs a 2x2 matrix, got {self.height}x{self.width}"
            )
        a, b, c, d = self.data
        return float(a * d - b * c)

    def _determinant(self) -> float:
        self._require_square(1, "Determinant")
        if self.width == 1:
            return float(self.data[0])
        if self.width == 2:
            return self.determinant_2x2()

        # Cofactor expansion along the first row
        return sum(self.data[col] * self.cofactor(0, col) for col in range(self.width))

    def determinant(self) -> float:
        """Determinant by recursive cofactor expansion.

        Returns:
            Determinant as a float

        Raises:
            ValueError: If the matrix is not square or is empty
        """
        if self.width > COFACTOR_SIZE_LIMIT:
            logger.warning(
                f"Cofactor expansion on a {self.height}x{self.width} matrix "
                f"costs O(n!); intended for sizes up to {COFACTOR_SIZE_LIMIT}"
            )
        return float(self._determinant())

    def is_invertible(self) -> bool:
        # Exact test: a tiny but non-zero determinant still has an inverse.
        return self.determinant() != 0.0

    def inverse(self) -> Optional["Matrix"]:
        """Invert the matrix with the adjugate method.

        Builds the cofactor matrix, transposes it and divides every element
        by the determinant.

        Returns:
            Inverse matrix, or None if the determinant is exactly zero
        """
        det = self.determinant()
        if det == 0.0:
            logger.debug(f"Matrix {self.height}x{self.width} is singular, no inverse")
            return None

        if self.width == 1:
            return Matrix(1, 1, [1.0 / det])

        cofactors = Matrix(
            self.width,
            self.height,
            [
                self.cofactor(row, col)
                for row in range(self.height)
                for col in range(self.width)
            ],
        )
        return cofactors.transpose().multiply_scalar(1.0 / det)

    def __mul__(self, other: Union["Matrix", Tuple, float]) -> Union["Matrix", Tuple]:
        if not isinstance(other, (Matrix, Tuple, int, float, np.number)):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: float) -> "Matrix":
        if isinstance(other, (int, float, np.number)):
            return self.multiply_scalar(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        rows = self.to_array().tolist()
        return f"Matrix({self.height}x{self.width}, {rows})"
