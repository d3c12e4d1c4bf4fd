"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: The directory convention used by the simulation loaders
   (sub-folder names, file suffixes, parse markers) is defined once here
   instead of being scattered through the loaders.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DATA_DIR_NAME (str): Sub-folder holding the data sets of a simulation.
    GRAPH_DIR_NAME (str): Sub-folder holding the single ground-truth graph.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/causalcompare/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
EXAMPLE_SIMULATION_PATH: str = os.path.join(ASSETS_PATH, "example_simulation")

# Simulation directory convention
DATA_DIR_NAME: str = "data_noise"
GRAPH_DIR_NAME: str = "graph"
DATA_SUFFIXES: tuple[str, ...] = (".txt",)

# Tabular data convention
DATA_DELIMITER: str = "\t"
COMMENT_MARKER: str = "//"
QUOTE_CHAR: str = '"'
MISSING_VALUE_MARKER: str = "*"
# Numeric columns with at most this many distinct integral values are read as discrete
MIXED_MAX_DISCRETE_CATEGORIES: int = 5

# Circle layout applied to loaded ground-truth graphs (pixels)
CIRCLE_CENTER_X: int = 225
CIRCLE_CENTER_Y: int = 200
CIRCLE_RADIUS: int = 150

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%H:%M:%S'
