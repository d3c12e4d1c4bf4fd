"""
Parameters Store
================
A mutable key/value bag shared by the host application and every plugin.

Typed getters resolve a value in this order:
1. the value explicitly set in the store,
2. the `default` argument of the call,
3. the registered default from `PARAM_DESCRIPTIONS`.

`get()` only ever returns explicitly set values, so callers can tell an
unset key from one holding its default.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from causalcompare.model.params import PARAM_DESCRIPTIONS, ParamValue

logger = logging.getLogger(__name__)

_MISSING = object()


class ParameterTypeError(TypeError):
    """Raised when a stored value cannot be read as the requested type."""

    def __init__(self, key: str, value: Any, expected: str) -> None:
        super().__init__(
            f"Parameter '{key}' holds {value!r} ({type(value).__name__}), expected {expected}."
        )
        self.key = key
        self.value = value
        self.expected = expected


class Parameters:
    """Mutable mapping from parameter keys to int, float, bool or str values."""

    def __init__(self) -> None:
        self._values: Dict[str, ParamValue] = {}

    @classmethod
    def from_dict(cls, values: Mapping[str, ParamValue]) -> Parameters:
        params = cls()
        for key, value in values.items():
            params.set(key, value)
        return params

    # ---- raw access ----

    def set(self, key: str, value: ParamValue) -> None:
        self._values[key] = value

    def get(self, key: str, default: Optional[ParamValue] = None) -> Optional[ParamValue]:
        return self._values.get(key, default)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._values.keys())

    def as_dict(self) -> Dict[str, ParamValue]:
        return dict(self._values)

    def copy(self) -> Parameters:
        return Parameters.from_dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __repr__(self) -> str:
        return f"Parameters({self._values!r})"

    # ---- typed getters ----

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        value = self._resolve(key, default)
        if isinstance(value, bool):
            raise ParameterTypeError(key, value, "int")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ParameterTypeError(key, value, "int")

    def get_double(self, key: str, default: Optional[float] = None) -> float:
        value = self._resolve(key, default)
        if isinstance(value, bool):
            raise ParameterTypeError(key, value, "float")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                pass
        raise ParameterTypeError(key, value, "float")

    def get_boolean(self, key: str, default: Optional[bool] = None) -> bool:
        value = self._resolve(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ParameterTypeError(key, value, "bool")

    def get_string(self, key: str, default: Optional[str] = None) -> str:
        return str(self._resolve(key, default))

    def _resolve(self, key: str, default: Any) -> Any:
        value = self._values.get(key, _MISSING)
        if value is not _MISSING:
            return value
        if default is not None:
            return default
        description = PARAM_DESCRIPTIONS.get(key)
        if description is not None:
            return description.default
        raise KeyError(f"Parameter '{key}' is not set and has no default.")
