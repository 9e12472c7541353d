"""Visualization utilities for canvases and simulations.

This module provides matplotlib previews of a rendered canvas and of the
projectile trajectory behind it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np

from raymath.canvas import Canvas
from raymath.projectile import ProjectileState

logger = logging.getLogger(__name__)


def show_canvas(
    canvas: Canvas,
    save_path: Optional[str] = None,
    title: str = "Canvas"
) -> None:
    """Display a canvas, or save the preview if ``save_path`` is given.

    Args:
        canvas: Canvas to display
        save_path: Path to save the figure; shown interactively when None
        title: Figure title
    """
    fig, ax = plt.subplots(figsize=(8, 8))

    # Nearest interpolation keeps single pixels visible
    ax.imshow(canvas.to_array(), interpolation="nearest")
    ax.set_title(f"{title} ({canvas.width}x{canvas.height})")
    ax.axis('off')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Canvas preview saved to {save_path}")
    else:
        plt.show()


def save_trajectory_plot(
    states: Iterable[ProjectileState],
    output_path: str
) -> None:
    """Plot the simulated projectile positions.

    The y axis is inverted so the plot matches the canvas, where y grows
    downwards.

    Args:
        states: Simulated states in time order
        output_path: Path to save the plot
    """
    positions = np.array([[s.position.x, s.position.y] for s in states])
    if positions.size == 0:
        logger.warning("No states to plot")
        return

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(positions[:, 0], positions[:, 1], '-', color='tab:red', linewidth=1.5)
    ax.scatter(positions[0, 0], positions[0, 1], color='tab:blue', label='Launch', zorder=3)
    ax.invert_yaxis()
    ax.set_xlabel("x (pixels)")
    ax.set_ylabel("y (pixels)")
    ax.set_title(f"Projectile trajectory ({len(positions)} ticks)")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Trajectory plot saved to {output_path}")
