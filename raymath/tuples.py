"""Tuple algebra for points, vectors and colors.

This module implements the 4-component tuple used throughout the kernel.
Points carry w=1, vectors w=0, and colors reuse the same storage with
red/green/blue accessors over x/y/z.
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np

from raymath import compare


class Tuple:
    """Immutable (x, y, z, w) value."""

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float):
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))
        object.__setattr__(self, "w", float(w))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _new(self, x: float, y: float, z: float, w: float) -> "Tuple":
        return type(self)(x, y, z, w)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Tuple":
        """Build a tuple from a length-4 array.

        Args:
            arr: Array-like with exactly four elements

        Returns:
            New tuple of this class
        """
        arr = np.asarray(arr, dtype=np.float64).ravel()
        if arr.shape[0] != 4:
            raise ValueError(f"Expected 4 components, got shape {arr.shape}")
        return cls(arr[0], arr[1], arr[2], arr[3])

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def is_point(self) -> bool:
        return compare.equal(self.w, 1.0)

    def is_vector(self) -> bool:
        return compare.equal(self.w, 0.0)

    def add(self, other: "Tuple") -> "Tuple":
        return self._new(
            self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w
        )

    def subtract(self, other: "Tuple") -> "Tuple":
        return self._new(
            self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w
        )

    def negate(self) -> "Tuple":
        return self._new(-self.x, -self.y, -self.z, -self.w)

    def multiply_scalar(self, scalar: float) -> "Tuple":
        return self._new(
            self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar
        )

    def divide_scalar(self, scalar: float) -> "Tuple":
        """Divide every component by ``scalar``.

        Division by zero is not guarded: it yields inf or nan components as
        IEEE 754 prescribes instead of raising.

        Args:
            scalar: Divisor

        Returns:
            Scaled tuple
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            scaled = self.to_array() / np.float64(scalar)
        return self._new(*scaled)

    def hadamard(self, other: "Tuple") -> "Tuple":
        """Component-wise product, used to blend two colors."""
        return self._new(
            self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w
        )

    def magnitude(self) -> float:
        # Computed over all four components; meaningful for vectors (w=0).
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2 + self.w ** 2)

    def normalize(self) -> "Tuple":
        """Scale to unit length.

        A zero-length tuple yields nan components; callers must not
        normalize degenerate vectors.
        """
        return self.divide_scalar(self.magnitude())

    def dot(self, other: "Tuple") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: "Tuple") -> "Tuple":
        """3D cross product of the (x, y, z) parts.

        The w components are ignored and the result is always a vector.
        """
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def equals(self, other: "Tuple") -> bool:
        return (
            compare.equal(self.x, other.x)
            and compare.equal(self.y, other.y)
            and compare.equal(self.z, other.z)
            and compare.equal(self.w, other.w)
        )

    def __add__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Tuple":
        return self.negate()

    def __mul__(self, other: Union["Tuple", float]) -> "Tuple":
        if isinstance(other, Tuple):
            return self.hadamard(other)
        if isinstance(other, (int, float, np.number)):
            return self.multiply_scalar(other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Tuple":
        if isinstance(other, (int, float, np.number)):
            return self.multiply_scalar(other)
        return NotImplemented

    def __truediv__(self, other: float) -> "Tuple":
        if isinstance(other, (int, float, np.number)):
            return self.divide_scalar(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.equals(other)

    # Epsilon equality is not transitive, so tuples cannot be hashed.
    __hash__ = None

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x={self.x}, y={self.y}, z={self.z}, w={self.w})"


class Color(Tuple):
    """Tuple read as an RGB color; w is unused and conventionally 0."""

    __slots__ = ()

    @property
    def red(self) -> float:
        return self.x

    @property
    def green(self) -> float:
        return self.y

    @property
    def blue(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Color(red={self.x}, green={self.y}, blue={self.z})"


def tuple_(x: float, y: float, z: float, w: float) -> Tuple:
    return Tuple(x, y, z, w)


def point(x: float, y: float, z: float) -> Tuple:
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    return Tuple(x, y, z, 0.0)


def color(red: float, green: float, blue: float) -> Color:
    return Color(red, green, blue, 0.0)
