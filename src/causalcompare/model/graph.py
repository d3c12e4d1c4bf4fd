"""
Graph layout helpers for ground-truth graphs.

Positions are screen pixels (y grows downwards) stored in the node
attribute "pos".
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import networkx as nx
import numpy as np

from causalcompare.config import CIRCLE_CENTER_X, CIRCLE_CENTER_Y, CIRCLE_RADIUS

if TYPE_CHECKING:
    import numpy.typing as npt

POS_ATTR = "pos"


def circle_layout(
    graph: nx.DiGraph,
    center_x: int = CIRCLE_CENTER_X,
    center_y: int = CIRCLE_CENTER_Y,
    radius: int = CIRCLE_RADIUS,
) -> nx.DiGraph:
    """Place the nodes evenly on a circle, clockwise from the top, in insertion order."""
    nodes = list(graph.nodes)
    n = len(nodes)
    for i, node in enumerate(nodes):
        theta = 2.0 * math.pi * i / n
        x = center_x + radius * math.sin(theta)
        y = center_y - radius * math.cos(theta)
        graph.nodes[node][POS_ATTR] = (int(round(x)), int(round(y)))
    return graph


def is_circular_layout(
    graph: nx.DiGraph,
    center_x: int = CIRCLE_CENTER_X,
    center_y: int = CIRCLE_CENTER_Y,
    radius: int = CIRCLE_RADIUS,
    tol: float = 1.0,
) -> bool:
    for _, pos in graph.nodes(data=POS_ATTR):
        if pos is None:
            return False
        if abs(math.hypot(pos[0] - center_x, pos[1] - center_y) - radius) > tol:
            return False
    return True


def node_positions(graph: nx.DiGraph) -> npt.NDArray[np.float64]:
    """(N, 2) array of node positions in node order; unplaced nodes sit at the origin."""
    if graph.number_of_nodes() == 0:
        return np.empty((0, 2))
    return np.array([pos or (0, 0) for _, pos in graph.nodes(data=POS_ATTR)], dtype=float)


def edge_index_array(graph: nx.DiGraph) -> npt.NDArray[np.int_]:
    """(M, 2) array of node indices for each edge."""
    index = {node: i for i, node in enumerate(graph.nodes)}
    if graph.number_of_edges() == 0:
        return np.empty((0, 2), dtype=int)
    return np.array([(index[a], index[b]) for a, b in graph.edges], dtype=int)
