from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import networkx as nx

from causalcompare.model.data import DataSet, DataType
from causalcompare.model.parameters import Parameters


class Simulation(ABC):
    """
    Base class for simulation plugins.

    A simulation owns an ordered list of data sets and the ground-truth
    graph(s) they were drawn from. `create_data` (re)builds both.
    """
    KEY: str = "base"  # Override in subclass
    DESCRIPTION: str = ""
    DATA_TYPE: DataType = DataType.CONTINUOUS

    @abstractmethod
    def create_data(self, parameters: Parameters, new_model: bool = False) -> None:
        ...

    @abstractmethod
    def get_true_graph(self, index: int) -> Optional[nx.DiGraph]:
        ...

    @abstractmethod
    def get_data_model(self, index: int) -> DataSet:
        ...

    @abstractmethod
    def get_num_data_models(self) -> int:
        ...

    def get_description(self) -> str:
        return self.DESCRIPTION

    def get_parameters(self) -> List[str]:
        return []

    def get_data_type(self) -> DataType:
        return self.DATA_TYPE

    def __len__(self) -> int:
        return self.get_num_data_models()


class HasParameterValues:
    """Mixin for plugins that report values describing themselves (e.g. the source directory)."""

    def get_parameter_values(self) -> Parameters:
        raise NotImplementedError("`get_parameter_values` must be implemented in subclass.")
