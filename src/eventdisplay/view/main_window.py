"""
Main Application Window
=======================
The top-level GUI container holding the animated detector view.

Why is this file needed?
------------------------
1. Layout: It gives the detector widget a frameless full-size home.
2. Lifecycle: It starts the frame loop once the window is shown.
"""
from PySide6.QtWidgets import QMainWindow
from PySide6.QtGui import QShowEvent

from eventdisplay.config import DEFAULT_VIEW_CONFIG, ViewConfig
from eventdisplay.model.state import SceneState
from eventdisplay.view.widgets.plot_3d import DetectorWidget


VISIBLE_APP_NAME = "Event Display"

class MainWindow(QMainWindow):
    def __init__(self, scene: SceneState, view_config: ViewConfig = DEFAULT_VIEW_CONFIG) -> None:
        super().__init__()
        self.scene: SceneState = scene

        self.setWindowTitle(VISIBLE_APP_NAME)

        self.detector_widget = DetectorWidget(scene, view_config, self)
        self.setCentralWidget(self.detector_widget)

    def showEvent(self, event: QShowEvent) -> None:
        super().showEvent(event)
        self.detector_widget.start()
