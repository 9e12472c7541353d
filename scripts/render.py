#!/usr/bin/env python3
"""
Render Demo Scenes

This script renders the demo scenes of the linear algebra kernel onto a
canvas: a projectile trajectory advanced tick by tick, and a clock face
placed with composed rotation, scale and translation transforms. The
canvas is written as PPM (optionally PNG) together with a metrics report.
"""

from __future__ import annotations

import argparse
import datetime
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from tqdm import tqdm

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from raymath import clock, evaluate, projectile, visualise
from raymath.canvas import Canvas
from raymath.tuples import color, point, vector


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger("render")

SCENES = ("projectile", "clock")


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    # Default config path
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return config


def render_projectile(
    canvas: Canvas,
    config: Dict,
    trajectory_path: Optional[str] = None
) -> int:
    """Draw the projectile scene described by ``config["projectile"]``.

    Args:
        canvas: Canvas to draw on
        config: Projectile section of the configuration
        trajectory_path: Where to save a trajectory plot (optional)

    Returns:
        Number of pixels drawn
    """
    env = projectile.Environment(
        gravity=vector(*config["gravity"]),
        wind=vector(*config["wind"]),
    )
    launch = projectile.ProjectileState(
        position=point(*config["start"]),
        velocity=vector(*config["velocity"]),
    )
    max_steps = config["max_steps"]

    if trajectory_path:
        states = list(tqdm(
            projectile.simulate(env, launch, max_steps),
            total=max_steps,
            desc="Simulating"
        ))
        visualise.save_trajectory_plot(states, trajectory_path)

    drawn = projectile.plot_trajectory(
        canvas, env, launch, max_steps, color(*config["color"])
    )
    logger.info(f"Projectile drawn over {drawn} ticks")
    return drawn


def render_clock(canvas: Canvas, config: Dict) -> List:
    """Draw the clock scene described by ``config["clock"]``.

    Args:
        canvas: Canvas to draw on
        config: Clock section of the configuration

    Returns:
        Pixel coordinates of the hour marks
    """
    radius = config["radius_fraction"] * min(canvas.width, canvas.height)
    marks = clock.clock_face(
        canvas, radius, color(*config["color"]), hours=config["hours"]
    )
    logger.info(f"Clock drawn with {len(marks)} marks, radius {radius:.1f}px")
    return marks


def scene_transforms(scene: str, config: Dict) -> Dict:
    """Return the transforms a scene relies on, keyed by name."""
    if scene != "clock":
        return {}

    width, height = config["canvas"]["width"], config["canvas"]["height"]
    radius = config["clock"]["radius_fraction"] * min(width, height)
    placements = clock.hour_transforms(width, height, radius, config["clock"]["hours"])
    return {f"hour_{hour}": m for hour, m in enumerate(placements)}


def render(
    scene: str,
    output_dir: str,
    config_path: Optional[str] = None,
    png: Optional[bool] = None,
    visualise_results: bool = False
) -> Dict:
    """Render one scene and save the results.

    Args:
        scene: Scene name (projectile, clock)
        output_dir: Path to output directory
        config_path: Path to configuration file
        png: Also write a PNG; defaults to the configured value
        visualise_results: Save matplotlib previews

    Returns:
        Dictionary of render metrics
    """
    if scene not in SCENES:
        raise ValueError(f"Unknown scene {scene!r}, expected one of {SCENES}")

    render_timer = evaluate.Timer("Render")
    render_timer.start()

    config = load_config(config_path)
    if png is None:
        png = config["io"]["png"]

    os.makedirs(output_dir, exist_ok=True)

    # Set up file logging
    file_handler = logging.FileHandler(os.path.join(output_dir, "log.txt"))
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)

    try:
        logger.info(f"Rendering {scene} scene to {output_dir}")
        metrics = evaluate.RenderMetrics()
        metrics.update("scene", scene)

        canvas = Canvas(config["canvas"]["width"], config["canvas"]["height"])
        metrics.update("width", canvas.width)
        metrics.update("height", canvas.height)

        stages = evaluate.Timer("Stages")
        stages.start()

        # === Stage 1: Draw ===
        if scene == "projectile":
            trajectory_path = (
                os.path.join(output_dir, "trajectory.png") if visualise_results else None
            )
            drawn = render_projectile(canvas, config["projectile"], trajectory_path)
        else:
            drawn = len(render_clock(canvas, config["clock"]))
        metrics.update("pixels_drawn", drawn)
        stages.lap("draw")

        # === Stage 2: Check transforms ===
        metrics.compute_transform_metrics(scene_transforms(scene, config))
        stages.lap("transform_check")

        # === Stage 3: Save ===
        canvas.save(os.path.join(output_dir, f"{scene}.ppm"))
        if png:
            canvas.save_png(os.path.join(output_dir, f"{scene}.png"))
        if visualise_results:
            visualise.show_canvas(
                canvas,
                save_path=os.path.join(output_dir, f"{scene}_preview.png"),
                title=scene.capitalize()
            )
        stages.lap("save")

        for stage, seconds in stages.timings.items():
            metrics.update_stage_timing(stage, seconds)

        metrics.update("runtime_s", render_timer.stop())

        metrics_dict = metrics.to_dict()
        metrics_dict["datetime"] = datetime.datetime.now().isoformat()
        with open(os.path.join(output_dir, "metrics.json"), "w") as f:
            json.dump(metrics_dict, f, indent=2)

        logger.info("\n" + metrics.summary())
        return metrics_dict
    finally:
        logging.getLogger().removeHandler(file_handler)
        file_handler.close()


def main():
    """Main function to parse arguments and render a scene."""
    parser = argparse.ArgumentParser(description="Render Demo Scenes")
    parser.add_argument(
        "--scene", "-s", dest="scene", default="projectile",
        choices=SCENES,
        help="Scene to render"
    )
    parser.add_argument(
        "--output", "-o", dest="output_dir", default=None,
        help="Path to output directory (defaults to io.output_dir in the config)"
    )
    parser.add_argument(
        "--config", "-c", dest="config_path", default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--png", dest="png", action="store_true", default=None,
        help="Also write a PNG image"
    )
    parser.add_argument(
        "--visualise", "-v", dest="visualise", action="store_true",
        help="Save matplotlib previews"
    )
    parser.add_argument(
        "--verbose", dest="verbose", action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        output_dir = args.output_dir
        if output_dir is None:
            output_dir = load_config(args.config_path)["io"]["output_dir"]
        render(
            args.scene,
            output_dir,
            args.config_path,
            args.png,
            args.visualise
        )
    except Exception as e:
        logger.exception(f"Error rendering scene: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
