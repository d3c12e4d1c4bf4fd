"""Preview of a ground-truth graph at its stored layout positions."""
from __future__ import annotations

import logging
from typing import Optional

import networkx as nx
from PySide6.QtWidgets import QVBoxLayout, QWidget
import pyqtgraph as pg

from causalcompare.model.graph import edge_index_array, node_positions

logger = logging.getLogger(__name__)


class GraphView(QWidget):
    """
    Draws nodes and edges with pyqtgraph. Positions are read from the "pos"
    node attribute, in pixel coordinates with y growing downwards.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget(background="w")
        self.plot_widget.hideAxis("bottom")
        self.plot_widget.hideAxis("left")
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.getViewBox().invertY(True)
        layout.addWidget(self.plot_widget)

        self.graph: Optional[nx.DiGraph] = None
        self.graph_item: Optional[pg.GraphItem] = None
        self.labels: list[pg.TextItem] = []

    def set_graph(self, graph: Optional[nx.DiGraph]) -> None:
        self.plot_widget.clear()
        self.graph = graph
        self.graph_item = None
        self.labels = []

        if graph is None or graph.number_of_nodes() == 0:
            return

        pos = node_positions(graph)
        adj = edge_index_array(graph)

        self.graph_item = pg.GraphItem()
        self.graph_item.setData(
            pos=pos,
            adj=adj if len(adj) else None,
            size=28,
            symbol="o",
            symbolBrush=pg.mkBrush("#A0C4FF"),
            symbolPen=pg.mkPen("k", width=1.5),
            pen=pg.mkPen("k", width=1.5),
            pxMode=True,
        )
        self.plot_widget.addItem(self.graph_item)

        for node, (x, y) in zip(graph.nodes, pos):
            text = pg.TextItem(str(node), color="k", anchor=(0.5, 0.5))
            text.setPos(float(x), float(y))
            self.plot_widget.addItem(text)
            self.labels.append(text)

        logger.debug(f"Showing graph with {len(pos)} nodes and {len(adj)} edges")
