"""
3D Visualization Widget (PyVista Wrapper) - Animated Event Display
"""

from __future__ import annotations

from typing import Optional

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QElapsedTimer, QTimer
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor

from eventdisplay.config import DEFAULT_VIEW_CONFIG, ViewConfig
from eventdisplay.model.dimensions import InvalidDimensionsError
from eventdisplay.model.state import SceneState, SceneStatus
from eventdisplay.view.widgets.scene_renderer import SceneRenderer

logger = logging.getLogger(__name__)


class DetectorWidget(QWidget):
    """
    Hosts the plotter and drives the frame loop:
    one `tick` followed by one render per timer shot.
    """

    def __init__(
        self,
        scene: SceneState,
        view_config: ViewConfig = DEFAULT_VIEW_CONFIG,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.scene: SceneState = scene
        self.view_config: ViewConfig = view_config

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._renderer = SceneRenderer(self.plotter, view_config)

        # Monotonic clock for the regeneration interval
        self._clock = QElapsedTimer()
        self._clock.start()

        # Frame loop
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(view_config.frame_interval_ms)
        self._frame_timer.timeout.connect(self.advance_frame)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def start(self) -> None:
        if self.scene.status == SceneStatus.EMPTY:
            self.scene.regenerate()
        self._frame_timer.start()
        logger.info("Animation started.")

    def stop(self) -> None:
        self._frame_timer.stop()
        logger.info("Animation stopped.")

    def advance_frame(self) -> None:
        self.scene.tick(float(self._clock.elapsed()))
        self._renderer.draw(self.scene.snapshot(), self._viewport_height())
        self._renderer.rotate_camera()
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        size = event.size()
        try:
            self.scene.resize(size.width(), size.height())
        except InvalidDimensionsError as e:
            # Minimised windows report a zero size; keep the previous scene
            logger.debug(f"Ignoring resize: {e}")
            return
        self.scene.regenerate()
        self._renderer.invalidate()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.stop()
        self.plotter.close()
        super().closeEvent(event)

    def _viewport_height(self) -> float:
        return float(max(1, self.plotter.height()))
