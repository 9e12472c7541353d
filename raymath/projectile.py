"""Projectile scene drawn onto a canvas.

This module implements the projectile simulation, advanced by a pure
``step`` function rather than mutating shared tuples.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, NamedTuple

from raymath.canvas import Canvas
from raymath.tuples import Color, Tuple, color, point, vector

logger = logging.getLogger(__name__)


class Environment(NamedTuple):
    gravity: Tuple
    wind: Tuple


class ProjectileState(NamedTuple):
    position: Tuple
    velocity: Tuple


DEFAULT_ENVIRONMENT = Environment(gravity=vector(0.0, 0.1, 0.0), wind=vector(0.0, 0.0, 0.0))
DEFAULT_LAUNCH = ProjectileState(position=point(0.0, 999.0, 0.0), velocity=vector(3.0, -12.0, 0.0))


def step(env: Environment, state: ProjectileState) -> ProjectileState:
    """Advance the projectile by one tick.

    Args:
        env: Gravity and wind acting on the projectile
        state: Current position and velocity

    Returns:
        The next state
    """
    return ProjectileState(
        position=state.position + state.velocity,
        velocity=state.velocity + env.gravity + env.wind,
    )


def simulate(env: Environment, state: ProjectileState, max_steps: int) -> Iterator[ProjectileState]:
    """Yield the initial state and its successors, ``max_steps`` states in total."""
    for _ in range(max_steps):
        yield state
        state = step(env, state)


def plot_trajectory(
    canvas: Canvas,
    env: Environment = DEFAULT_ENVIRONMENT,
    state: ProjectileState = DEFAULT_LAUNCH,
    max_steps: int = 250,
    pixel: Color = color(1.0, 0.0, 0.0)
) -> int:
    """Draw the projectile path until it leaves the canvas.

    Positions are truncated to integer pixel coordinates, with canvas y
    growing downwards.

    Args:
        canvas: Canvas to draw on
        env: Simulation environment
        state: Launch state
        max_steps: Maximum number of ticks to simulate
        pixel: Color of the trail

    Returns:
        Number of pixels drawn
    """
    drawn = 0
    for current in simulate(env, state, max_steps):
        x = math.floor(current.position.x)
        y = math.floor(current.position.y)
        if not (0 <= x < canvas.width and 0 <= y < canvas.height):
            logger.debug(f"Projectile left the canvas at ({x}, {y}) after {drawn} ticks")
            break
        canvas.set_pixel(x, y, pixel)
        drawn += 1
    return drawn
