"""
Application Initialization
==========================
Constructs the session (model) and the main window (view) and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Instantiates the ExperimentSession.
3. Passes the session into the MainWindow, which drives it with a frame timer.
"""
import logging
import sys

import pyqtgraph as pg
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from varresistor.logging_config import setup_logging
from varresistor.model.state import ExperimentSession
from varresistor.view.main_window import MainWindow, VISIBLE_APP_NAME

ORG_ID = "varresistor"
APP_ID = "variable-area-resistor"


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    pg.setConfigOption("background", "k")
    pg.setConfigOption("foreground", "w")
    pg.setConfigOption("antialias", True)
    return app


def main() -> int:
    # Use logging.DEBUG to see every reading during development
    setup_logging(level=logging.INFO)

    app = create_app()
    session = ExperimentSession()
    window = MainWindow(session)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
