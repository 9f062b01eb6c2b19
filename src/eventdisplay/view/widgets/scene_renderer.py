"""
Scene Renderer
Draws a SceneSnapshot into any PyVista plotter (Qt interactor or off-screen).
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

import pyvista as pv

from eventdisplay.config import DEFAULT_VIEW_CONFIG, RGB, ViewConfig
from eventdisplay.model.state import SceneSnapshot
from eventdisplay.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


def to_unit_rgb(color: RGB) -> Tuple[float, float, float]:
    return color[0] / 255.0, color[1] / 255.0, color[2] / 255.0


class SceneRenderer:
    def __init__(self, plotter: pv.BasePlotter, view_config: ViewConfig = DEFAULT_VIEW_CONFIG) -> None:
        self.plotter = plotter
        self.view_config = view_config
        self.angle_y: float = 0.0

        self._actors: List[pv.Actor] = []
        self._drawn_generation: Optional[int] = None
        self._viewport_height: float = 1.0

        self.plotter.set_background(to_unit_rgb(view_config.background))
        self.plotter.enable_parallel_projection()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def draw(self, snapshot: SceneSnapshot, viewport_height: float) -> bool:
        """
        Rebuild the actors if the snapshot belongs to a new generation.

        Returns:
            True if the actors were rebuilt.
        """
        self._viewport_height = viewport_height
        if snapshot.generation == self._drawn_generation:
            return False

        try:
            self._clear_actors()
            self._draw_detector(snapshot)
            self._draw_tracks(snapshot)
        except Exception as e:
            logger.exception(f"Failed to draw generation {snapshot.generation}: {e}")
            raise e

        self._drawn_generation = snapshot.generation
        return True

    def invalidate(self) -> None:
        """Force a rebuild on the next draw, e.g. after a resize."""
        self._drawn_generation = None

    def rotate_camera(self) -> None:
        """Advance the turntable by one frame and place the camera."""
        self.angle_y -= self.view_config.rotation_speed
        self.apply_camera()

    def apply_camera(self) -> None:
        tilt = self.view_config.tilt_x
        distance = 4.0 * max(self._viewport_height, 1.0)
        position = (
            -distance * math.sin(self.angle_y) * math.cos(tilt),
            distance * math.sin(tilt),
            distance * math.cos(self.angle_y) * math.cos(tilt),
        )
        # y points down on screen, as in the canvas the scene was sized for
        self.plotter.camera_position = [position, (0.0, 0.0, 0.0), (0.0, -1.0, 0.0)]
        self.plotter.camera.parallel_scale = self._viewport_height * 0.5
        self.plotter.camera.clipping_range = (0.1, 2.0 * distance)

    # ------------------------------------------------------------------------------
    # Internal: Layers
    # ------------------------------------------------------------------------------

    def _clear_actors(self) -> None:
        for actor in self._actors:
            self.plotter.remove_actor(actor, render=False)
        self._actors.clear()

    def _add(self, mesh: pv.DataSet, **kwargs) -> None:
        if mesh.n_points == 0:
            return
        actor = self.plotter.add_mesh(
            mesh,
            pickable=False,
            show_scalar_bar=False,
            lighting=False,
            line_width=self.view_config.line_width,
            render=False,
            **kwargs,
        )
        self._actors.append(actor)

    def _add_detector_surface(self, mesh: pv.DataSet) -> None:
        """Translucent fill plus stroked edges."""
        cfg = self.view_config
        self._add(mesh, color=to_unit_rgb(cfg.detector_fill), opacity=cfg.detector_fill_opacity)
        self._add(mesh, style="wireframe", color=to_unit_rgb(cfg.detector_stroke))

    def _draw_detector(self, snapshot: SceneSnapshot) -> None:
        cfg = self.view_config
        dims = snapshot.dimensions
        wire = to_unit_rgb(cfg.wireframe_stroke)

        self._add(VtkUtils.bounding_box(dims), style="wireframe", color=wire)
        self._add(VtkUtils.tube_polydata(dims, cfg.circle_resolution), color=wire)

        self._add_detector_surface(VtkUtils.quads_to_polydata(snapshot.segments))
        self._add_detector_surface(VtkUtils.planes_to_polydata(snapshot.planes))
        self._add_detector_surface(VtkUtils.blocks_to_polydata(snapshot.blocks, dims))
        self._add_detector_surface(VtkUtils.quads_to_polydata(snapshot.cells))

    def _draw_tracks(self, snapshot: SceneSnapshot) -> None:
        cfg = self.view_config
        for tracks, stroke in (
            (snapshot.muon_tracks, cfg.muon_stroke),
            (snapshot.electron_tracks, cfg.electron_stroke),
            (snapshot.hadron_tracks, cfg.hadron_stroke),
        ):
            self._add(VtkUtils.tracks_to_polydata(tracks, cfg.track_resolution), color=to_unit_rgb(stroke))
