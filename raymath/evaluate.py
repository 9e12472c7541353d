"""Evaluation metrics for the matrix engine and renders.

This module implements numerical-quality metrics for inverses and
transform round trips, together with timing utilities and a metrics
container used by the render script.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Union

import numpy as np

from raymath.matrix import Matrix
from raymath.tuples import Tuple

logger = logging.getLogger(__name__)


def inverse_residual(m: Matrix) -> float:
    """Calculate how far ``m * m.inverse()`` is from the identity.

    Args:
        m: Square matrix

    Returns:
        Largest absolute element of ``m * m^-1 - I``, or inf if m is singular
    """
    inverse = m.inverse()
    if inverse is None:
        logger.warning(f"Residual requested for a singular {m.height}x{m.width} matrix")
        return float('inf')

    product = m.multiply_matrix(inverse).to_array()
    residual = np.max(np.abs(product - np.eye(m.height)))
    logger.debug(f"Inverse residual: {residual:.3e}")
    return float(residual)


def round_trip_error(m: Matrix, t: Tuple) -> float:
    """Calculate the error of transforming ``t`` and transforming it back.

    Args:
        m: Invertible 4x4 transform
        t: Point or vector

    Returns:
        Largest absolute component of ``m^-1 * (m * t) - t``, or inf if m is
        singular
    """
    inverse = m.inverse()
    if inverse is None:
        return float('inf')

    restored = inverse.multiply_tuple(m.multiply_tuple(t))
    return float(np.max(np.abs(restored.to_array() - t.to_array())))


class Timer:
    """Wall-clock timer for render stages.

    Works as a context manager around a single block, or records named
    laps so consecutive stages share one timer.
    """

    def __init__(self, name: str = "Timer", logger: Optional[logging.Logger] = None):
        """Initialize timer.

        Args:
            name: Timer name for logging
            logger: Logger to use (if None, uses module logger)
        """
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.end_time = None
        self._last_lap = None
        self._laps: Dict[str, float] = {}

    def start(self) -> None:
        self.start_time = time.perf_counter()

    def stop(self) -> float:
        """Stop the timer and return elapsed time.

        Returns:
            Elapsed time in seconds
        """
        if self.start_time is None:
            self.logger.warning(f"{self.name}: Timer stopped without being started")
            return 0.0

        self.end_time = time.perf_counter()
        elapsed = self.end_time - self.start_time
        self.logger.debug(f"{self.name}: {elapsed:.4f}s")
        return elapsed

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def lap(self, name: str) -> float:
        """Close the current stage and record it under ``name``.

        Args:
            name: Stage name

        Returns:
            Seconds since the previous lap, or since start for the first one
        """
        now = time.perf_counter()
        if self.start_time is None:
            self.start_time = now

        previous = self.start_time if self._last_lap is None else self._last_lap
        self._last_lap = now
        self._laps[name] = now - previous

        self.logger.debug(f"{self.name} - {name}: {self._laps[name]:.4f}s")
        return self._laps[name]

    @property
    def timings(self) -> Dict[str, float]:
        """Recorded laps in the order they were taken."""
        return dict(self._laps)

    @property
    def elapsed(self) -> float:
        """Elapsed time so far; frozen once the timer is stopped."""
        if self.start_time is None:
            return 0.0
        if self.end_time is not None:
            return self.end_time - self.start_time

        return time.perf_counter() - self.start_time


class RenderMetrics:
    """Class for calculating and storing render metrics."""

    def __init__(self):
        self.metrics = {
            "scene": None,
            "width": 0,
            "height": 0,
            "pixels_drawn": 0,
            "max_inverse_residual": None,
            "runtime_s": 0.0,
            "stage_timings": {},
        }

    def update(self, metric_name: str, value: Union[int, float, str, Dict]) -> None:
        self.metrics[metric_name] = value

    def update_stage_timing(self, stage_name: str, time_s: float) -> None:
        self.metrics["stage_timings"][stage_name] = time_s

    def compute_transform_metrics(self, transforms: Dict[str, Matrix]) -> None:
        """Record the worst inverse residual over the transforms of a scene.

        Args:
            transforms: Mapping of transform name to 4x4 matrix
        """
        residuals = {name: inverse_residual(m) for name, m in transforms.items()}
        if residuals:
            worst = max(residuals, key=residuals.get)
            logger.debug(f"Worst inverse residual: {worst} ({residuals[worst]:.3e})")
            self.metrics["max_inverse_residual"] = residuals[worst]

    def to_dict(self) -> Dict:
        return self.metrics.copy()

    def summary(self) -> str:
        """Generate a human-readable summary of metrics.

        Returns:
            Summary string
        """
        lines = [
            "Render Metrics:",
            f"  Scene: {self.metrics['scene']}",
            f"  Canvas: {self.metrics['width']}x{self.metrics['height']}",
            f"  Pixels drawn: {self.metrics['pixels_drawn']}",
        ]

        if self.metrics["max_inverse_residual"] is not None:
            lines.append(f"  Max inverse residual: {self.metrics['max_inverse_residual']:.3e}")

        lines.append(f"  Total runtime: {self.metrics['runtime_s']:.2f}s")

        if self.metrics["stage_timings"]:
            lines.append("  Stage timings:")
            for stage, time_s in self.metrics["stage_timings"].items():
                lines.append(f"    {stage}: {time_s:.2f}s")

        return "\n".join(lines)
