"""
Off-screen rendering of a single frame.
"""
from __future__ import annotations

import logging

import pyvista as pv

from eventdisplay.config import DEFAULT_VIEW_CONFIG, ViewConfig
from eventdisplay.model.state import SceneState, SceneStatus
from eventdisplay.view.widgets.scene_renderer import SceneRenderer

logger = logging.getLogger(__name__)


def render_screenshot(
    scene: SceneState,
    path: str,
    window_size: tuple[int, int],
    view_config: ViewConfig = DEFAULT_VIEW_CONFIG,
) -> None:
    """Render the current scene (regenerating it if empty) into an image file."""
    if scene.status == SceneStatus.EMPTY:
        scene.regenerate()

    plotter = pv.Plotter(off_screen=True, window_size=list(window_size))
    try:
        renderer = SceneRenderer(plotter, view_config)
        renderer.draw(scene.snapshot(), viewport_height=window_size[1])
        renderer.apply_camera()
        plotter.screenshot(path)
    finally:
        plotter.close()
    logger.info(f"Screenshot saved to {path}.")
