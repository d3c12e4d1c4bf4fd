from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from causalcompare.algcomparison.score import ScoreWrapper, create_score_wrapper, list_score_keys
from causalcompare.algcomparison.simulation import Simulation, create_simulation
from causalcompare.algcomparison.simulation.load_data_and_graph import LoadContinuousDataAndSingleGraph
from causalcompare.model.params import ParamValue
from causalcompare.model.parameters import Parameters
from causalcompare.stats import Score

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store: the shared parameters, the chosen score and the loaded simulation."""
    parameters_changed = Signal(str)
    score_changed = Signal(str)
    simulation_loaded = Signal(object)

    def __init__(self, parameters: Optional[Parameters] = None) -> None:
        super().__init__()
        self.parameters = parameters if parameters is not None else Parameters()
        keys = list_score_keys()
        self.score_key: Optional[str] = keys[0] if keys else None
        self.simulation: Optional[Simulation] = None

    def set_parameter(self, key: str, value: ParamValue) -> None:
        self.parameters.set(key, value)
        self.parameters_changed.emit(key)

    def set_score(self, key: str) -> None:
        create_score_wrapper(key)  # KeyError for unknown keys
        if key != self.score_key:
            self.score_key = key
            self.score_changed.emit(key)

    def score_wrapper(self) -> ScoreWrapper:
        if self.score_key is None:
            raise RuntimeError("No score selected.")
        return create_score_wrapper(self.score_key)

    def load_simulation(self, root: str) -> Simulation:
        """
        Load a simulation directory with the current parameters.

        Errors (e.g. `SimulationLayoutError`) propagate; the previously
        loaded simulation is kept in that case.
        """
        simulation = create_simulation(LoadContinuousDataAndSingleGraph.KEY, root)
        simulation.create_data(self.parameters)
        self.simulation = simulation
        self.simulation_loaded.emit(simulation)
        return simulation

    def score_data_set(self, index: int) -> Score:
        if self.simulation is None:
            raise RuntimeError("No simulation loaded.")
        data_set = self.simulation.get_data_model(index)
        return self.score_wrapper().get_score(data_set, self.parameters)
