from __future__ import annotations
from causalcompare.app.ui.editors.base import ParameterEditor

_REGISTRY: dict[str, type[ParameterEditor]] = {}

def register_editor(cls: type[ParameterEditor]) -> type[ParameterEditor]:
    """Class decorator to register an editor by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key or key == ParameterEditor.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    _REGISTRY[key] = cls
    return cls

def create_editor(key: str, parent=None) -> ParameterEditor:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No editor registered for key '{key}'")
    return cls(parent)

def list_keys() -> list[str]:
    return list(_REGISTRY.keys())
