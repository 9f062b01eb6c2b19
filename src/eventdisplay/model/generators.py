"""
Detector Component Generators
=============================
Pure functions that stochastically populate the detector. Every function
takes the random generator explicitly and returns a new list; none of them
keeps a reference to what it produced.

Functions:
    generate_segments: End-cap wall quads.
    generate_planes: Rectangular planes around the tube.
    sample_block_count / generate_blocks: Calorimeter blocks.
    track_from_element / tracks_from_elements: Tracks to detector hits.
    sample_muon_endpoint / generate_muons: Muon tracks and their ground cells.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Tuple, TYPE_CHECKING

from eventdisplay.model.geometry_primitives import ORIGIN, Block, Plane, Point, Quad, Track, Vector

if TYPE_CHECKING:
    import numpy as np
    from eventdisplay.model.cell_grid import CellGrid
    from eventdisplay.model.dimensions import Dimensions

logger = logging.getLogger(__name__)

PLANE_Z_SPAN = 0.8
PLANE_WIDTH_RANGE = (0.04, 0.06)
PLANE_HEIGHT_RANGE = (0.04, 0.1)
BLOCK_MARGIN = 0.75
MUON_SPREAD = 0.45
SIGNS = (1.0, -1.0)


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}.")


def _check_probability(value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Probability must be in [0, 1], got {value}.")


# ------------------------------------------------------------------------------
# Segments
# ------------------------------------------------------------------------------

def generate_segments(
    rng: np.random.Generator,
    outer_radius: float,
    inner_radius: float,
    num_segments: int,
    probability: float,
    z: float,
) -> List[Quad]:
    """
    Build the annular wall of one end-cap.

    Each of the `num_segments` angular slices is kept independently with
    `probability`. Vertices run outer-start, outer-end, inner-end, inner-start.

    Args:
        rng: Random generator.
        outer_radius: Radius of the outer edge.
        inner_radius: Radius of the inner edge (the beam pipe).
        num_segments: Number of equal angular slices.
        probability: Inclusion probability per slice.
        z: Depth of the end-cap.

    Returns:
        The kept segments, in angular order.
    """
    _check_count("num_segments", num_segments)
    _check_probability(probability)
    if num_segments == 0:
        return []

    step = 2.0 * math.pi / num_segments
    segments: List[Quad] = []
    for i in range(num_segments):
        if rng.random() < probability:
            theta1 = i * step
            theta2 = (i + 1) * step
            segments.append(Quad(
                Point(math.cos(theta1) * outer_radius, math.sin(theta1) * outer_radius, z),
                Point(math.cos(theta2) * outer_radius, math.sin(theta2) * outer_radius, z),
                Point(math.cos(theta2) * inner_radius, math.sin(theta2) * inner_radius, z),
                Point(math.cos(theta1) * inner_radius, math.sin(theta1) * inner_radius, z),
            ))
    return segments


# ------------------------------------------------------------------------------
# Planes
# ------------------------------------------------------------------------------

def generate_planes(
    rng: np.random.Generator,
    dimensions: Dimensions,
    radius: float,
    length: float,
    num_planes: int,
) -> List[Plane]:
    """Place exactly `num_planes` planes on the circle of `radius`."""
    _check_count("num_planes", num_planes)

    planes: List[Plane] = []
    for _ in range(num_planes):
        angle = float(rng.uniform(0.0, 2.0 * math.pi))
        z = float(rng.uniform(-length * PLANE_Z_SPAN, length * PLANE_Z_SPAN))
        planes.append(Plane(
            position=Point(math.cos(angle) * radius, math.sin(angle) * radius, z),
            width=float(rng.uniform(dimensions.box_width * PLANE_WIDTH_RANGE[0],
                                    dimensions.box_width * PLANE_WIDTH_RANGE[1])),
            height=float(rng.uniform(dimensions.box_width * PLANE_HEIGHT_RANGE[0],
                                     dimensions.box_width * PLANE_HEIGHT_RANGE[1])),
            angle=angle,
        ))
    return planes


# ------------------------------------------------------------------------------
# Blocks
# ------------------------------------------------------------------------------

def sample_block_count(rng: np.random.Generator, min_blocks: int, max_blocks: int) -> int:
    """Uniform integer in [min_blocks, max_blocks]."""
    _check_count("min_blocks", min_blocks)
    if min_blocks > max_blocks:
        raise ValueError(f"min_blocks ({min_blocks}) must not exceed max_blocks ({max_blocks}).")
    return int(rng.integers(min_blocks, max_blocks, endpoint=True))


def generate_blocks(rng: np.random.Generator, dimensions: Dimensions, num_blocks: int) -> List[Block]:
    """
    Place blocks alternately in the upper (even index) and lower (odd index)
    band, keeping each block inside the bounding box.
    """
    _check_count("num_blocks", num_blocks)

    x_max = dimensions.box_width * 0.5 - dimensions.block_width * BLOCK_MARGIN
    y_band = dimensions.box_height * 0.5 - dimensions.block_height * BLOCK_MARGIN
    z_max = dimensions.box_depth * 0.5 - dimensions.block_depth * BLOCK_MARGIN

    blocks: List[Block] = []
    for i in range(num_blocks):
        y = -y_band if i % 2 == 1 else y_band
        x = float(rng.uniform(-x_max, x_max))
        z = float(rng.uniform(-z_max, z_max))
        blocks.append(Block(position=Point(x, y, z)))
    return blocks


# ------------------------------------------------------------------------------
# Tracks
# ------------------------------------------------------------------------------

def track_from_element(rng: np.random.Generator, position: Point, curvature: float) -> Track:
    """
    Track from the origin to `position`.

    The control point is the midpoint pushed by +/- `curvature` on each
    axis, with the sign drawn independently per axis.
    """
    bend = Vector(
        float(rng.choice(SIGNS)) * curvature,
        float(rng.choice(SIGNS)) * curvature,
        float(rng.choice(SIGNS)) * curvature,
    )
    return Track(
        start=Point(ORIGIN.x, ORIGIN.y, ORIGIN.z),
        control=position.scaled(0.5) + bend,
        end=Point(position.x, position.y, position.z),
    )


def tracks_from_elements(
    rng: np.random.Generator,
    positions: Iterable[Point],
    curvature: float,
) -> List[Track]:
    return [track_from_element(rng, position, curvature) for position in positions]


def sample_muon_endpoint(rng: np.random.Generator, dimensions: Dimensions) -> Point:
    """
    x, y uniform inside the central 90% of the box; z is either the front
    or the back face, never in between.
    """
    half_x = dimensions.box_width * MUON_SPREAD
    half_y = dimensions.box_height * MUON_SPREAD
    faces = (-dimensions.box_depth * 0.5, dimensions.box_depth * 0.5)
    return Point(
        float(rng.uniform(-half_x, half_x)),
        float(rng.uniform(-half_y, half_y)),
        float(rng.choice(faces)),
    )


def generate_muons(
    rng: np.random.Generator,
    dimensions: Dimensions,
    grid: CellGrid,
    count: int,
    curvature: float,
) -> Tuple[List[Track], List[Quad]]:
    """
    Generate `count` muon tracks.

    Returns:
        (tracks, cells): one track per muon, and the ground cell hit by each
        muon endpoint that falls inside the lattice.
    """
    _check_count("count", count)

    tracks: List[Track] = []
    cells: List[Quad] = []
    for _ in range(count):
        end_point = sample_muon_endpoint(rng, dimensions)
        cell = grid.map_to_cell(end_point)
        if cell is not None:
            cells.append(cell)
        tracks.append(track_from_element(rng, end_point, curvature))
    return tracks, cells
