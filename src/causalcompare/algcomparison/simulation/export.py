from __future__ import annotations

import logging
import os

from causalcompare.algcomparison.simulation.base import Simulation
from causalcompare.algcomparison.simulation.layout import SimulationLayout
from causalcompare.model.io import save_data, save_graph_txt

logger = logging.getLogger(__name__)


def save_simulation(simulation: Simulation, root: str) -> SimulationLayout:
    """
    Write a simulation's data sets and graph into the directory layout read
    by `LoadContinuousDataAndSingleGraph`.

    Data sets go to `data_noise/data.<i>.txt` (1-based) and the graph of the
    first data set to `graph/graph.txt`.
    """
    layout = SimulationLayout(root)
    os.makedirs(layout.data_path, exist_ok=True)

    for i in range(simulation.get_num_data_models()):
        save_data(simulation.get_data_model(i), os.path.join(layout.data_path, f"data.{i + 1}.txt"))

    graph = simulation.get_true_graph(0)
    if graph is not None:
        os.makedirs(layout.graph_path, exist_ok=True)
        save_graph_txt(graph, os.path.join(layout.graph_path, "graph.txt"))

    logger.info(f"Saved {simulation.get_num_data_models()} data set(s) to {root}")
    return layout
