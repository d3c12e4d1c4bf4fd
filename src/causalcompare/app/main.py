"""
Run with: python -m causalcompare
"""
from __future__ import annotations

import sys

from causalcompare.app.application import create_app
from causalcompare.app.ui.main_window import MainWindow

import pyqtgraph as pg

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")

def main() -> int:
    """Main entry point for the application."""
    app = create_app()
    win = MainWindow()
    if len(sys.argv) > 1:
        win.open_simulation(sys.argv[1])
    win.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
