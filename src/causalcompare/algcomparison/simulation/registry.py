from __future__ import annotations

from typing import Any

from causalcompare.algcomparison.simulation.base import Simulation

_REGISTRY: dict[str, type[Simulation]] = {}


def register_simulation(cls: type[Simulation]) -> type[Simulation]:
    """Class decorator to register a simulation by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key or key == Simulation.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    if key in _REGISTRY and _REGISTRY[key] is not cls:
        raise ValueError(f"Simulation key '{key}' is already registered to {_REGISTRY[key].__name__}")
    _REGISTRY[key] = cls
    return cls


def create_simulation(key: str, *args: Any, **kwargs: Any) -> Simulation:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No simulation registered for key '{key}'")
    return cls(*args, **kwargs)


def list_simulation_keys() -> list[str]:
    return list(_REGISTRY.keys())
