"""
Entry Point Script (Bootstrap)
==============================
Starts the application from a source checkout without installing it.

It sits outside the 'src' package and puts 'src' on 'sys.path' so that
'from causalcompare...' imports resolve.

Usage:
    $ python run.py [SIMULATION_DIR]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

appid = 'causalcompare.desktop'  # Arbitrary string
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(appid)
except (AttributeError, ImportError):
    # Not on Windows or ctypes not available
    pass

from causalcompare.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
