"""Floating-point comparison shared by tuples and matrices."""

from __future__ import annotations

# Canonical tolerance for structural equality of tuples and matrices.
EPSILON = 1e-5


def equal(a: float, b: float) -> bool:
    """Return True if ``a`` and ``b`` differ by less than ``EPSILON``.

    NaN never compares equal to anything, itself included.
    """
    return abs(a - b) < EPSILON
