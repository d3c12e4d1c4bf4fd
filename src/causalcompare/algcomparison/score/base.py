from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from causalcompare.model.data import DataSet, DataType, Node
from causalcompare.model.parameters import Parameters
from causalcompare.stats.score import Score


class DataTypeMismatchError(TypeError):
    """Raised when a plugin is handed data of a type it does not declare."""

    def __init__(self, plugin: str, expected: DataType, actual: DataType) -> None:
        super().__init__(f"{plugin} requires {expected.value} data, got {actual.value} data.")
        self.expected = expected
        self.actual = actual


class ScoreWrapper(ABC):
    """
    Base class for score plugins.

    Subclasses declare what they need as class attributes and build a fresh
    `Score` per call. Wrappers keep no state between calls; everything a
    `Score` needs is read from `parameters` when `get_score` runs.
    """
    KEY: str = "base"  # Override in subclass
    DESCRIPTION: str = ""
    DATA_TYPE: DataType = DataType.CONTINUOUS
    PARAMETERS: tuple[str, ...] = ()

    def get_score(self, data_model: DataSet, parameters: Parameters) -> Score:
        """Bind a new score to `data_model` using the current parameter values."""
        self.check_data_type(data_model)
        return self._make_score(data_model, parameters)

    def get_description(self) -> str:
        return self.DESCRIPTION

    def get_data_type(self) -> DataType:
        return self.DATA_TYPE

    def get_parameters(self) -> List[str]:
        return list(self.PARAMETERS)

    def get_variable(self, data_model: DataSet, name: str) -> Optional[Node]:
        return data_model.get_variable(name)

    def check_data_type(self, data_model: DataSet) -> None:
        if not isinstance(data_model, DataSet):
            raise TypeError(f"{type(self).__name__} expects a DataSet, got {type(data_model).__name__}.")
        if not self.DATA_TYPE.accepts(data_model.data_type):
            raise DataTypeMismatchError(type(self).__name__, self.DATA_TYPE, data_model.data_type)

    # ---- abstract API for subclasses ----
    @abstractmethod
    def _make_score(self, data_model: DataSet, parameters: Parameters) -> Score:
        """Read this wrapper's parameters and construct the score."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.KEY!r})"
