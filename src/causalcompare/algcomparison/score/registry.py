from __future__ import annotations

from causalcompare.algcomparison.score.base import ScoreWrapper

_REGISTRY: dict[str, type[ScoreWrapper]] = {}


def register_score(cls: type[ScoreWrapper]) -> type[ScoreWrapper]:
    """Class decorator to register a score wrapper by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key or key == ScoreWrapper.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    if key in _REGISTRY and _REGISTRY[key] is not cls:
        raise ValueError(f"Score key '{key}' is already registered to {_REGISTRY[key].__name__}")
    _REGISTRY[key] = cls
    return cls


def create_score_wrapper(key: str) -> ScoreWrapper:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No score registered for key '{key}'")
    return cls()


def list_score_keys() -> list[str]:
    return list(_REGISTRY.keys())


def score_descriptions() -> dict[str, str]:
    return {key: cls.DESCRIPTION for key, cls in _REGISTRY.items()}
