"""
Auto-import all parameter editor modules to ensure registration side-effects run.

After importing this package, `registry.list_keys()` and `registry.create_editor()`
will know about all available editors.
"""
from __future__ import annotations

import importlib
import pkgutil

for _module in pkgutil.iter_modules(__path__, __name__ + "."):
    importlib.import_module(_module.name)
