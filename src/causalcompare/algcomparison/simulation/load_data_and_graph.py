from __future__ import annotations

import logging
from typing import List, Optional

import networkx as nx

from causalcompare.algcomparison.simulation.base import HasParameterValues, Simulation
from causalcompare.algcomparison.simulation.layout import SimulationLayout
from causalcompare.algcomparison.simulation.registry import register_simulation
from causalcompare.model.data import DataSet, DataType
from causalcompare.model.graph import circle_layout
from causalcompare.model.io import load_continuous_data, load_graph_txt
from causalcompare.model.parameters import Parameters
from causalcompare.model.params import Params

logger = logging.getLogger(__name__)


@register_simulation
class LoadContinuousDataAndSingleGraph(Simulation, HasParameterValues):
    """
    Loads continuous data sets and one shared ground-truth graph from a
    simulation directory (see `SimulationLayout`).

    Not safe for concurrent `create_data` calls on the same instance.
    """
    KEY = "load-data-and-graph"
    DESCRIPTION = "Load data sets and graphs from a directory."
    DATA_TYPE = DataType.CONTINUOUS

    def __init__(self, path: str) -> None:
        self.layout = SimulationLayout(path)
        self.graph: Optional[nx.DiGraph] = None
        self.data_sets: List[DataSet] = []
        self._parameter_values = Parameters()
        self._parameter_values.set("structure", self.layout.name)

    @property
    def path(self) -> str:
        return self.layout.root

    def create_data(self, parameters: Parameters, new_model: bool = False) -> None:
        """
        Load all data sets and the graph, replacing anything loaded before.

        Files that fail to parse are logged and skipped. A layout violation
        (e.g. not exactly one file under `graph/`) is fatal.

        Raises:
            SimulationLayoutError: If the directory does not follow the layout.
            ValueError: If the graph file cannot be parsed.
        """
        self.data_sets = []
        self.graph = None

        self.layout.raise_for_violations()

        for path in self.layout.data_files():
            logger.info(f"Loading data from {path}")
            try:
                self.data_sets.append(load_continuous_data(path))
            except (ValueError, OSError, UnicodeDecodeError) as e:
                logger.warning(f"Couldn't parse {path}: {e}")

        graph_file = self.layout.graph_file()
        if graph_file is not None:
            logger.info(f"Loading graph from {graph_file}")
            self.graph = circle_layout(load_graph_txt(graph_file))

        if parameters.get(Params.NUM_RUNS) is None:
            parameters.set(Params.NUM_RUNS, len(self.data_sets))
        if parameters.get(Params.SAMPLE_SIZE) is None and self.data_sets:
            parameters.set(Params.SAMPLE_SIZE, self.data_sets[0].num_rows)

        logger.info(
            f"Loaded {len(self.data_sets)} data set(s) from {self.path}"
            f"{' with a ground-truth graph' if self.graph is not None else ''}."
        )

    def get_true_graph(self, index: int) -> Optional[nx.DiGraph]:
        # One graph is shared by every data set, whatever the index.
        return self.graph

    def get_data_model(self, index: int) -> DataSet:
        if not 0 <= index < len(self.data_sets):
            raise IndexError(
                f"Data model index {index} out of range for {len(self.data_sets)} data set(s)."
            )
        return self.data_sets[index]

    def get_num_data_models(self) -> int:
        return len(self.data_sets)

    def get_parameter_values(self) -> Parameters:
        return self._parameter_values
