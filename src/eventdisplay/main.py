"""
Application Initialization
==========================
This module parses the command line, builds the scene model and either opens
the animated window or renders a single off-screen frame.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the random generator and the SceneState (Model).
2. Instantiates the Main Window (View) and passes the Model into it.
3. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np

from eventdisplay.logging_config import setup_logging
from eventdisplay.model.dimensions import InvalidDimensionsError
from eventdisplay.model.state import SceneState

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eventdisplay", description="Procedural detector event display.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random generator.")
    parser.add_argument("--width", type=int, default=1280, help="Initial window width in pixels.")
    parser.add_argument("--height", type=int, default=800, help="Initial window height in pixels.")
    parser.add_argument("--screenshot", metavar="PATH", default=None,
                        help="Render one frame off-screen to PATH and exit.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Optional path to save logs to.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Initialize the Data Model
    try:
        scene = SceneState(args.width, args.height, rng=np.random.default_rng(args.seed))
    except InvalidDimensionsError as e:
        logger.error(str(e))
        return 2

    # 3. Headless mode
    if args.screenshot:
        from eventdisplay.view.snapshot import render_screenshot
        render_screenshot(scene, args.screenshot, (args.width, args.height))
        return 0

    # 4. Create the Qt Application and the Main Window
    from PySide6.QtWidgets import QApplication
    from eventdisplay.view.main_window import MainWindow, VISIBLE_APP_NAME

    app = QApplication(sys.argv[:1])
    app.setApplicationName(VISIBLE_APP_NAME)

    window = MainWindow(scene)
    window.resize(args.width, args.height)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
