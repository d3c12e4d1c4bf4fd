"""
Auto-import all simulation modules to ensure registration side-effects run.

After importing this package, `list_simulation_keys()` and `create_simulation()`
will know about all available simulations.
"""
from __future__ import annotations

import importlib
import pkgutil

from causalcompare.algcomparison.simulation.base import HasParameterValues, Simulation
from causalcompare.algcomparison.simulation.layout import (
    LayoutViolation, SimulationLayout, SimulationLayoutError,
)
from causalcompare.algcomparison.simulation.registry import (
    create_simulation, list_simulation_keys, register_simulation,
)

for _module in pkgutil.iter_modules(__path__, __name__ + "."):
    importlib.import_module(_module.name)

__all__ = [
    "HasParameterValues",
    "LayoutViolation",
    "Simulation",
    "SimulationLayout",
    "SimulationLayoutError",
    "create_simulation",
    "list_simulation_keys",
    "register_simulation",
]
