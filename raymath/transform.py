"""Affine transform builders.

Each builder returns a 4x4 matrix. Transforms compose by multiplication,
``t3 * t2 * t1``, and apply right to left to a point or vector; ``chain``
builds that product from transforms listed in the order they apply.
"""

from __future__ import annotations

import math

from raymath.matrix import Matrix


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z); vectors are unaffected since w=0."""
    return Matrix(4, 4, [
        1.0, 0.0, 0.0, x,
        0.0, 1.0, 0.0, y,
        0.0, 0.0, 1.0, z,
        0.0, 0.0, 0.0, 1.0,
    ])


def scale(x: float, y: float, z: float) -> Matrix:
    """Scale along each axis; a negative factor reflects."""
    return Matrix(4, 4, [
        x, 0.0, 0.0, 0.0,
        0.0, y, 0.0, 0.0,
        0.0, 0.0, z, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def rotation_x(radians: float) -> Matrix:
    cos, sin = math.cos(radians), math.sin(radians)
    return Matrix(4, 4, [
        1.0, 0.0, 0.0, 0.0,
        0.0, cos, -sin, 0.0,
        0.0, sin, cos, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def rotation_y(radians: float) -> Matrix:
    cos, sin = math.cos(radians), math.sin(radians)
    return Matrix(4, 4, [
        cos, 0.0, sin, 0.0,
        0.0, 1.0, 0.0, 0.0,
        -sin, 0.0, cos, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def rotation_z(radians: float) -> Matrix:
    cos, sin = math.cos(radians), math.sin(radians)
    return Matrix(4, 4, [
        cos, -sin, 0.0, 0.0,
        sin, cos, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def shear(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear transform.

    Each argument moves one component in proportion to another, e.g. ``xy``
    moves x in proportion to y.

    Args:
        xy: x in proportion to y
        xz: x in proportion to z
        yx: y in proportion to x
        yz: y in proportion to z
        zx: z in proportion to x
        zy: z in proportion to y

    Returns:
        4x4 shear matrix
    """
    return Matrix(4, 4, [
        1.0, xy, xz, 0.0,
        yx, 1.0, yz, 0.0,
        zx, zy, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ])


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in the order they should be applied.

    ``chain(a, b, c)`` equals ``c * b * a``: ``a`` acts first on whatever
    the result is applied to. An empty chain is the identity.

    Args:
        *transforms: 4x4 matrices, first applied first

    Returns:
        Combined 4x4 matrix
    """
    result = Matrix.identity(4)
    for transform in transforms:
        result = transform.multiply_matrix(result)
    return result
