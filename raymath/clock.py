"""Clock-face scene.

This module places the hour marks of a clock on a canvas by composing a
rotation about the y axis, a scale and a translation for every hour. The
canvas plane is x/z, seen from above.
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple as PyTuple

from raymath import transform
from raymath.canvas import Canvas
from raymath.matrix import Matrix
from raymath.tuples import Color, color, point

logger = logging.getLogger(__name__)


def hour_transforms(width: int, height: int, radius: float, hours: int = 12) -> List[Matrix]:
    """Return the transform placing each hour mark on a clock of ``radius``
    centred on a width x height canvas.

    Each transform rotates about the y axis, scales by ``radius`` and moves
    to the centre, in that order.
    """
    return [
        transform.chain(
            transform.rotation_y(hour * 2 * math.pi / hours),
            transform.scale(radius, 1.0, radius),
            transform.translation(width / 2, 0.0, height / 2),
        )
        for hour in range(hours)
    ]


def clock_face(
    canvas: Canvas,
    radius: float,
    pixel: Color = color(1.0, 1.0, 1.0),
    hours: int = 12
) -> List[PyTuple[int, int]]:
    """Mark the hour positions of a clock centred on the canvas.

    Each hour starts as ``point(0, 0, 1)`` (twelve o'clock), is rotated
    about the y axis, scaled by ``radius`` and moved to the canvas centre.
    The x and z components of the result are the pixel coordinates.

    Args:
        canvas: Canvas to draw on
        radius: Clock radius in pixels
        pixel: Color of the hour marks
        hours: Number of marks

    Returns:
        List of (x, y) pixel coordinates drawn
    """
    twelve = point(0.0, 0.0, 1.0)
    drawn = []
    placements = hour_transforms(canvas.width, canvas.height, radius, hours)
    for hour, placement in enumerate(placements):
        mark = placement * twelve
        x, y = round(mark.x), round(mark.z)
        if 0 <= x < canvas.width and 0 <= y < canvas.height:
            canvas.set_pixel(x, y, pixel)
            drawn.append((x, y))
        else:
            logger.warning(f"Hour {hour} at ({x}, {y}) falls outside the canvas")
    return drawn
