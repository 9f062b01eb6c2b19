"""
Configuration & Global Constants
================================
This module serves as the central registry for the tunable constants of the
scene generator and the renderer.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers scattered throughout the generators
   and the view.
2. Testing: Tests build a SceneConfig with smaller counts or fixed
   probabilities instead of patching module globals.

Exports:
    SceneConfig: Counts, probabilities and timing of the generated scene.
    ViewConfig: Camera motion, colours and frame timing of the renderer.
    DEFAULT_SCENE_CONFIG, DEFAULT_VIEW_CONFIG: Default instances.
"""
from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class SceneConfig:
    # Detector
    num_segments: int = 20
    segment_probability: float = 0.4
    num_planes: int = 4
    plane_radius_ratios: Tuple[float, float, float] = (0.55, 0.6, 0.65)  # inner, middle, outer
    min_blocks: int = 2
    max_blocks: int = 5
    num_cells: int = 20
    activation_probability: float = 0.2

    # Tracks
    num_muons: int = 15
    curvature: float = 10.0

    # Timer
    duration_millis: float = 5000.0


@dataclass(frozen=True)
class ViewConfig:
    # Camera
    tilt_x: float = -0.1  # radians
    rotation_speed: float = 0.0025  # radians per frame
    frame_interval_ms: int = 16

    # Colours
    background: RGB = (0, 0, 0)
    wireframe_stroke: RGB = (110, 164, 244)
    detector_stroke: RGB = (110, 164, 244)
    detector_fill: RGB = (50, 200, 255)
    detector_fill_opacity: float = 30 / 255
    muon_stroke: RGB = (255, 200, 255)
    electron_stroke: RGB = (255, 100, 255)
    hadron_stroke: RGB = (255, 0, 255)

    # Discretization
    track_resolution: int = 24
    circle_resolution: int = 64
    line_width: float = 1.0


DEFAULT_SCENE_CONFIG = SceneConfig()
DEFAULT_VIEW_CONFIG = ViewConfig()
