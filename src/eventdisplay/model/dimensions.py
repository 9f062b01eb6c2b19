"""
Scene Dimensions
================
Derives every size used by the generators and the renderer from the
viewport size.

Exports:
    Dimensions: Frozen record of all derived sizes.
    InvalidDimensionsError: Raised for non-positive viewport sizes.
    derive_dimensions: Pure factory from (width, height).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, astuple

logger = logging.getLogger(__name__)

# Ratios between the derived sizes
PORTRAIT_DEPTH_RATIO = 0.8
LANDSCAPE_HEIGHT_RATIO = 0.5
LANDSCAPE_DEPTH_RATIO = 1.6
WIDTH_TO_DEPTH_RATIO = 0.625
TUBE_RADIUS_RATIO = 0.5
TUBE_LENGTH_RATIO = 0.9
BEAM_RADIUS_RATIO = 0.08
BLOCK_HEIGHT_RATIO = 0.12
BLOCK_ASPECT_RATIO = 0.75


class InvalidDimensionsError(ValueError):
    """The viewport size cannot produce a scene."""


@dataclass(frozen=True)
class Dimensions:
    box_width: float
    box_height: float
    box_depth: float
    tube_radius: float
    tube_length: float
    beam_radius: float
    block_width: float
    block_height: float
    block_depth: float
    cell_size: float
    num_cells: int

    def all_positive(self) -> bool:
        return all(value > 0.0 for value in astuple(self))


def derive_dimensions(width: float, height: float, num_cells: int = 20) -> Dimensions:
    """
    Compute all scene sizes from the viewport.

    Args:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        num_cells: Number of ground cells per lattice side.

    Returns:
        The derived Dimensions.

    Raises:
        InvalidDimensionsError: If width or height is not a positive finite number.
    """
    for name, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidDimensionsError(f"Viewport {name} must be positive, got {value!r}.")
    if num_cells <= 0:
        raise InvalidDimensionsError(f"num_cells must be positive, got {num_cells!r}.")

    if width < height:
        # Portrait: depth follows the narrow width
        box_depth = width * PORTRAIT_DEPTH_RATIO
        box_width = box_depth * WIDTH_TO_DEPTH_RATIO
        box_height = box_width
    else:
        box_height = height * LANDSCAPE_HEIGHT_RATIO
        box_depth = box_height * LANDSCAPE_DEPTH_RATIO
        box_width = box_depth * WIDTH_TO_DEPTH_RATIO

    tube_radius = box_width * TUBE_RADIUS_RATIO
    block_height = box_width * BLOCK_HEIGHT_RATIO

    dims = Dimensions(
        box_width=box_width,
        box_height=box_height,
        box_depth=box_depth,
        tube_radius=tube_radius,
        tube_length=tube_radius * TUBE_LENGTH_RATIO,
        beam_radius=tube_radius * BEAM_RADIUS_RATIO,
        block_width=block_height * BLOCK_ASPECT_RATIO,
        block_height=block_height,
        block_depth=block_height * BLOCK_ASPECT_RATIO,
        cell_size=box_width / num_cells,
        num_cells=num_cells,
    )
    logger.debug(f"Derived dimensions for {width}x{height}: {dims}")
    return dims
