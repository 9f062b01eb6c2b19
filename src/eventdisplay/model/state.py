"""
Scene State (Data Model)
========================
This module defines the central data structure of the running display.

Why is this file needed?
------------------------
1. State Management: It owns every generated collection and the time of the
   last regeneration in one place.
2. Lifecycle: It is the only place where the scene is cleared and rebuilt,
   either through `tick` (timed) or after a viewport `resize`.
3. Decoupling: The view only ever reads a `SceneSnapshot`; generators only
   return new lists.

Classes:
    SceneStatus: EMPTY or POPULATED.
    SceneSnapshot: Read-only copy of the collections handed to the renderer.
    SceneState: The owner and orchestrator.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from eventdisplay.config import DEFAULT_SCENE_CONFIG, SceneConfig
from eventdisplay.model.cell_grid import CellGrid
from eventdisplay.model.dimensions import Dimensions, derive_dimensions
from eventdisplay.model.generators import (
    generate_blocks, generate_muons, generate_planes, generate_segments,
    sample_block_count, tracks_from_elements,
)
from eventdisplay.model.geometry_primitives import Block, Plane, Quad, Track

logger = logging.getLogger(__name__)


class SceneStatus(IntEnum):
    EMPTY = 0
    POPULATED = 1


@dataclass(frozen=True)
class SceneSnapshot:
    """Everything the renderer needs for one frame."""
    generation: int
    dimensions: Dimensions
    south_segments: Tuple[Quad, ...] = ()
    north_segments: Tuple[Quad, ...] = ()
    inner_planes: Tuple[Plane, ...] = ()
    middle_planes: Tuple[Plane, ...] = ()
    outer_planes: Tuple[Plane, ...] = ()
    blocks: Tuple[Block, ...] = ()
    muon_tracks: Tuple[Track, ...] = ()
    electron_tracks: Tuple[Track, ...] = ()
    hadron_tracks: Tuple[Track, ...] = ()
    cells: Tuple[Quad, ...] = ()

    @property
    def planes(self) -> Tuple[Plane, ...]:
        return self.inner_planes + self.middle_planes + self.outer_planes

    @property
    def segments(self) -> Tuple[Quad, ...]:
        return self.south_segments + self.north_segments


class SceneState:
    """
    Owns the generated detector scene and rebuilds it on a fixed interval.
    Pass this instance to the view; nothing else mutates it.
    """

    def __init__(
        self,
        width: float,
        height: float,
        rng: Optional[np.random.Generator] = None,
        config: SceneConfig = DEFAULT_SCENE_CONFIG,
    ) -> None:
        self.config: SceneConfig = config
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

        self.dimensions: Dimensions = derive_dimensions(width, height, config.num_cells)
        self.grid: CellGrid = CellGrid(self.dimensions)

        self.last_reset_time: float = 0.0
        self.generation: int = 0
        self.clear()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def status(self) -> SceneStatus:
        return SceneStatus.POPULATED if self._populated else SceneStatus.EMPTY

    def clear(self) -> None:
        """Drop every generated collection."""
        self.south_segments: List[Quad] = []
        self.north_segments: List[Quad] = []
        self.inner_planes: List[Plane] = []
        self.middle_planes: List[Plane] = []
        self.outer_planes: List[Plane] = []
        self.blocks: List[Block] = []
        self.muon_tracks: List[Track] = []
        self.electron_tracks: List[Track] = []
        self.hadron_tracks: List[Track] = []
        self.cells: List[Quad] = []
        self.activated_cells: List[Quad] = []
        self._populated: bool = False

    def resize(self, width: float, height: float) -> None:
        """
        Re-derive the dimensions for a new viewport.
        On invalid sizes the error propagates and the state is left untouched.
        """
        dimensions = derive_dimensions(width, height, self.config.num_cells)
        self.dimensions = dimensions
        self.grid = CellGrid(dimensions)
        logger.info(f"Scene resized to {width}x{height}.")

    def tick(self, now_millis: float) -> bool:
        """
        Regenerate once the interval has elapsed since the last reset.

        Returns:
            True if the scene was regenerated.
        """
        if now_millis - self.last_reset_time > self.config.duration_millis:
            self.regenerate()
            self.last_reset_time = now_millis
            return True
        return False

    def regenerate(self) -> None:
        """Build a complete new scene and replace the current one."""
        cfg = self.config
        dims = self.dimensions
        rng = self.rng

        south_segments = generate_segments(
            rng, dims.tube_radius * 0.5, dims.beam_radius,
            cfg.num_segments, cfg.segment_probability, -dims.tube_length,
        )
        north_segments = generate_segments(
            rng, dims.tube_radius * 0.5, dims.beam_radius,
            cfg.num_segments, cfg.segment_probability, dims.tube_length,
        )

        inner_ratio, middle_ratio, outer_ratio = cfg.plane_radius_ratios
        inner_planes = generate_planes(rng, dims, dims.tube_radius * inner_ratio, dims.tube_length, cfg.num_planes)
        middle_planes = generate_planes(rng, dims, dims.tube_radius * middle_ratio, dims.tube_length, cfg.num_planes)
        outer_planes = generate_planes(rng, dims, dims.tube_radius * outer_ratio, dims.tube_length, cfg.num_planes)

        num_blocks = sample_block_count(rng, cfg.min_blocks, cfg.max_blocks)
        blocks = generate_blocks(rng, dims, num_blocks)

        muon_tracks, cells = generate_muons(rng, dims, self.grid, cfg.num_muons, cfg.curvature)

        electron_tracks = tracks_from_elements(
            rng,
            [plane.position for plane in inner_planes + middle_planes + outer_planes],
            cfg.curvature,
        )
        hadron_tracks = tracks_from_elements(rng, [block.position for block in blocks], cfg.curvature)

        activated_cells = self.grid.activate_neighbours(rng, cells, cfg.activation_probability)

        # Swap in the finished scene
        self.clear()
        self.south_segments = south_segments
        self.north_segments = north_segments
        self.inner_planes = inner_planes
        self.middle_planes = middle_planes
        self.outer_planes = outer_planes
        self.blocks = blocks
        self.muon_tracks = muon_tracks
        self.electron_tracks = electron_tracks
        self.hadron_tracks = hadron_tracks
        self.cells = cells + activated_cells
        self.activated_cells = activated_cells
        self._populated = True
        self.generation += 1

        logger.debug(
            f"Generation {self.generation}: "
            f"{len(south_segments) + len(north_segments)} segments, "
            f"{len(blocks)} blocks, {len(muon_tracks)} muons, "
            f"{len(electron_tracks)} electrons, {len(hadron_tracks)} hadrons, "
            f"{len(self.cells)} cells ({len(activated_cells)} activated)."
        )

    def snapshot(self) -> SceneSnapshot:
        """Read-only copy of the current scene for the renderer."""
        return SceneSnapshot(
            generation=self.generation,
            dimensions=self.dimensions,
            south_segments=tuple(self.south_segments),
            north_segments=tuple(self.north_segments),
            inner_planes=tuple(self.inner_planes),
            middle_planes=tuple(self.middle_planes),
            outer_planes=tuple(self.outer_planes),
            blocks=tuple(self.blocks),
            muon_tracks=tuple(self.muon_tracks),
            electron_tracks=tuple(self.electron_tracks),
            hadron_tracks=tuple(self.hadron_tracks),
            cells=tuple(self.cells),
        )
