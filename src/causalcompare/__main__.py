"""
Application Initialization
==========================
Starts logging and the Qt event loop.

Usage:
    $ python -m causalcompare [SIMULATION_DIR]
"""
import logging
import sys

from causalcompare.logging_config import setup_logging
from causalcompare.app.main import main as run_app


def main() -> int:
    # Use logging.DEBUG to see everything during development
    setup_logging(level=logging.INFO)
    return run_app()


if __name__ == "__main__":
    sys.exit(main())
