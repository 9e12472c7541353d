"""Tests for the render script.

This module runs the demo scenes end to end on a small canvas and checks
the files and metrics they produce.
"""

import json
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest
import yaml

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from raymath.canvas import Canvas
from scripts import render


SMALL_CONFIG = {
    "canvas": {"width": 100, "height": 100},
    "projectile": {
        "start": [0.0, 99.0, 0.0],
        "velocity": [1.0, -3.0, 0.0],
        "gravity": [0.0, 0.1, 0.0],
        "wind": [0.0, 0.0, 0.0],
        "max_steps": 50,
        "color": [1.0, 0.0, 0.0],
    },
    "clock": {"radius_fraction": 0.3, "hours": 12, "color": [1.0, 1.0, 1.0]},
    "io": {"output_dir": "unused", "png": False},
}


class TestRender(unittest.TestCase):
    """Test rendering scenes to disk."""

    def setUp(self):
        self.output_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.output_dir, "config.yaml")
        with open(self.config_path, "w") as f:
            yaml.safe_dump(SMALL_CONFIG, f)

    def tearDown(self):
        shutil.rmtree(self.output_dir)

    def test_default_config(self):
        config = render.load_config()
        for section in ("canvas", "projectile", "clock", "io"):
            self.assertIn(section, config)

    def test_render_projectile(self):
        out = os.path.join(self.output_dir, "projectile")
        metrics = render.render("projectile", out, self.config_path, visualise_results=True)

        self.assertEqual(metrics["scene"], "projectile")
        self.assertEqual(metrics["pixels_drawn"], 50)
        self.assertIsNone(metrics["max_inverse_residual"])
        for name in ("projectile.ppm", "metrics.json", "log.txt", "trajectory.png", "projectile_preview.png"):
            self.assertTrue(os.path.exists(os.path.join(out, name)), name)

        canvas = Canvas.from_ppm(Path(out, "projectile.ppm").read_text())
        self.assertEqual((canvas.width, canvas.height), (100, 100))

    def test_render_clock(self):
        out = os.path.join(self.output_dir, "clock")
        metrics = render.render("clock", out, self.config_path, png=True)

        self.assertEqual(metrics["pixels_drawn"], 12)
        self.assertLess(metrics["max_inverse_residual"], 1e-9)
        self.assertTrue(os.path.exists(os.path.join(out, "clock.png")))

        with open(os.path.join(out, "metrics.json")) as f:
            saved = json.load(f)
        self.assertEqual(saved["scene"], "clock")
        self.assertEqual(list(saved["stage_timings"]), ["draw", "transform_check", "save"])

    def test_unknown_scene(self):
        with pytest.raises(ValueError):
            render.render("teapot", self.output_dir, self.config_path)


if __name__ == "__main__":
    unittest.main()
