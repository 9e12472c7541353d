"""Pixel canvas and image export.

This module implements a row-major grid of colors that callers fill pixel
by pixel and serialize once, either as a plain-text PPM (P3) document or
as a PNG through OpenCV.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Union

import cv2
import numpy as np

from raymath.tuples import Color, color

logger = logging.getLogger(__name__)

MAX_COLOR_VALUE = 255


def _to_channel(value: float) -> int:
    # NaN channels export as 0; out-of-gamut components are clamped to [0, 1].
    if math.isnan(value):
        value = 0.0
    clamped = min(max(value, 0.0), 1.0)
    return int(round(MAX_COLOR_VALUE * clamped))


class Canvas:
    """Mutable width x height grid of colors, initially black."""

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: List[Color] = [color(0.0, 0.0, 0.0)] * (width * height)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} canvas"
            )
        return self.width * y + x

    def set_pixel(self, x: int, y: int, pixel: Color) -> None:
        self.pixels[self._index(x, y)] = pixel

    def get_pixel(self, x: int, y: int) -> Color:
        return self.pixels[self._index(x, y)]

    def fill(self, pixel: Color) -> None:
        self.pixels = [pixel] * (self.width * self.height)

    def to_ppm(self) -> str:
        """Serialize to a plain PPM (P3) document.

        The header is ``P3``, ``"<width> <height>"`` and the maximum channel
        value, one per line. Every pixel follows as ``"<r> <g> <b>"``, all
        separated by single spaces, and the document ends with a newline.

        Returns:
            PPM text
        """
        header = f"P3\n{self.width} {self.height}\n{MAX_COLOR_VALUE}\n"
        body = " ".join(
            f"{_to_channel(p.red)} {_to_channel(p.green)} {_to_channel(p.blue)}"
            for p in self.pixels
        )
        return header + body + "\n"

    def save(self, path: Union[str, Path] = "image.ppm") -> Path:
        """Write the PPM document to ``path``.

        Args:
            path: Output file path

        Returns:
            The path written
        """
        path = Path(path)
        path.write_text(self.to_ppm())
        logger.info(f"Saved {self.width}x{self.height} canvas to {path}")
        return path

    def to_array(self) -> np.ndarray:
        """Return the canvas as a (height, width, 3) uint8 RGB array."""
        arr = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        for index, p in enumerate(self.pixels):
            y, x = divmod(index, self.width)
            arr[y, x] = (_to_channel(p.red), _to_channel(p.green), _to_channel(p.blue))
        return arr

    def save_png(self, path: Union[str, Path]) -> Path:
        """Write the canvas as a PNG through OpenCV.

        Args:
            path: Output file path

        Returns:
            The path written
        """
        path = Path(path)
        # OpenCV expects BGR channel order
        bgr = cv2.cvtColor(self.to_array(), cv2.COLOR_RGB2BGR)
        if not cv2.imwrite(str(path), bgr):
            raise IOError(f"OpenCV failed to write {path}")
        logger.info(f"Saved {self.width}x{self.height} canvas to {path}")
        return path

    @classmethod
    def from_ppm(cls, text: str) -> "Canvas":
        """Parse a P3 document into a canvas.

        Comments (``#`` to end of line) are skipped. Channels are divided by
        the declared maximum value.

        Args:
            text: PPM document

        Returns:
            New canvas holding the decoded pixels
        """
        tokens = []
        for line in text.splitlines():
            tokens.extend(line.split("#", 1)[0].split())

        if len(tokens) < 4 or tokens[0] != "P3":
            raise ValueError("Not a plain PPM (P3) document")

        width, height, max_value = int(tokens[1]), int(tokens[2]), int(tokens[3])
        if max_value <= 0:
            raise ValueError(f"Invalid maximum color value {max_value}")
        channels = tokens[4:]
        if len(channels) != width * height * 3:
            raise ValueError(
                f"Expected {width * height * 3} channel values, got {len(channels)}"
            )

        canvas = cls(width, height)
        values = [int(v) / max_value for v in channels]
        canvas.pixels = [
            color(values[i], values[i + 1], values[i + 2])
            for i in range(0, len(values), 3)
        ]
        return canvas
