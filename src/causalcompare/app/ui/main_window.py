"""
Main window: score selection with its parameters, the time series editor,
the loaded data sets and a preview of the ground-truth graph.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QComboBox, QDockWidget, QFileDialog, QGroupBox, QLabel, QListWidget, QMainWindow, QMessageBox,
    QPlainTextEdit, QSplitter, QVBoxLayout, QWidget,
)

from causalcompare.algcomparison.score import DataTypeMismatchError, score_descriptions
from causalcompare.algcomparison.simulation import Simulation, SimulationLayoutError
from causalcompare.algcomparison.simulation.export import save_simulation
from causalcompare.app.application import VISIBLE_APP_NAME
from causalcompare.app.state import Store
from causalcompare.app.ui.editors.parameter_panel import ParameterPanel
from causalcompare.app.ui.editors.time_series import TimeSeriesParamsEditor
from causalcompare.app.ui.graph_view import GraphView
from causalcompare.config import EXAMPLE_SIMULATION_PATH

logger = logging.getLogger(__name__)


class Console(QPlainTextEdit):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)

    def _log(self, level: str, msg: str) -> None:
        self.appendPlainText(f"{datetime.now().strftime('%d.%m.%Y %H:%M:%S')} [{level}] {msg}")

    def info(self, msg: str) -> None:
        self._log("info", msg)

    def warn(self, msg: str) -> None:
        self._log("warn", msg)

    def error(self, msg: str) -> None:
        self._log("error", msg)


class MainWindow(QMainWindow):
    def __init__(self, store: Optional[Store] = None):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)

        # Global store
        self.store = store if store is not None else Store()

        # ---- Left: score, parameters, data sets ----
        left = QWidget(self)
        v = QVBoxLayout(left)

        score_box = QGroupBox(self.tr("Score"), left)
        score_layout = QVBoxLayout(score_box)
        self.score_combo = QComboBox(score_box)
        for key, description in score_descriptions().items():
            self.score_combo.addItem(self.tr(description), userData=key)
        score_layout.addWidget(self.score_combo)
        self.data_type_label = QLabel(score_box)
        score_layout.addWidget(self.data_type_label)
        v.addWidget(score_box)

        self.parameter_panel = ParameterPanel(left)
        self.parameter_panel.set_params(self.store.parameters)
        v.addWidget(self.parameter_panel)

        self.time_series_editor = TimeSeriesParamsEditor(left)
        self.time_series_editor.set_params(self.store.parameters)
        self.time_series_editor.setup()
        self.time_series_editor.setVisible(self.time_series_editor.must_be_shown())
        v.addWidget(self.time_series_editor)

        data_box = QGroupBox(self.tr("Data sets"), left)
        data_layout = QVBoxLayout(data_box)
        self.data_list = QListWidget(data_box)
        data_layout.addWidget(self.data_list)
        v.addWidget(data_box, 1)

        # ---- Right: graph preview ----
        self.graph_view = GraphView(self)

        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        split.addWidget(left)
        split.addWidget(self.graph_view)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        self.setCentralWidget(split)

        # ---- Bottom: console ----
        self.console = Console(self)
        dock = QDockWidget(self.tr("Log"), self)
        dock.setWidget(self.console)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, dock)

        # ---- Actions ----
        toolbar = self.addToolBar(self.tr("File"))
        self.act_open = QAction(self.tr("Open simulation directory…"), self)
        self.act_open.triggered.connect(self._on_open)
        toolbar.addAction(self.act_open)
        self.act_open_example = QAction(self.tr("Open example"), self)
        self.act_open_example.triggered.connect(lambda: self.open_simulation(EXAMPLE_SIMULATION_PATH))
        toolbar.addAction(self.act_open_example)
        self.act_save = QAction(self.tr("Save simulation as…"), self)
        self.act_save.triggered.connect(self._on_save)
        self.act_save.setEnabled(False)
        toolbar.addAction(self.act_save)

        # ---- Wiring ----
        self.score_combo.currentIndexChanged.connect(self._on_score_selected)
        self.data_list.currentRowChanged.connect(self._on_data_set_selected)
        self.parameter_panel.param_edited.connect(self._on_param_edited)
        self.time_series_editor.param_edited.connect(self._on_param_edited)
        self.store.score_changed.connect(lambda *_: self._rebuild_score_parameters())
        self.store.simulation_loaded.connect(self._on_simulation_loaded)

        if self.store.score_key is not None:
            self.score_combo.setCurrentIndex(max(self.score_combo.findData(self.store.score_key), 0))
        self._rebuild_score_parameters()

    # ---- public API ----

    def open_simulation(self, root: str) -> Optional[Simulation]:
        """Load a simulation directory; layout, parse and read errors are reported, not raised."""
        try:
            simulation = self.store.load_simulation(root)
        except SimulationLayoutError as e:
            for violation in e.violations:
                self.console.error(str(violation))
            QMessageBox.critical(self, self.tr("Invalid simulation directory"), str(e))
            return None
        except (ValueError, OSError) as e:
            logger.error(f"Failed to load simulation from {root}: {e}")
            self.console.error(str(e))
            QMessageBox.critical(self, self.tr("Could not load simulation"), str(e))
            return None
        self.console.info(f"Loaded {simulation.get_num_data_models()} data set(s) from {root}")
        return simulation

    # ---- slots ----

    @Slot()
    def _on_open(self) -> None:
        root = QFileDialog.getExistingDirectory(self, self.tr("Open simulation directory"))
        if root:
            self.open_simulation(root)

    @Slot()
    def _on_save(self) -> None:
        if self.store.simulation is None:
            return
        root = QFileDialog.getExistingDirectory(self, self.tr("Save simulation to directory"))
        if root:
            save_simulation(self.store.simulation, root)
            self.console.info(f"Saved simulation to {root}")

    @Slot(int)
    def _on_score_selected(self, index: int) -> None:
        key = self.score_combo.itemData(index)
        if key:
            self.store.set_score(key)

    def _rebuild_score_parameters(self) -> None:
        if self.store.score_key is None:
            return
        wrapper = self.store.score_wrapper()
        self.data_type_label.setText(self.tr("Data type: ") + wrapper.get_data_type().value)
        self.parameter_panel.set_keys(wrapper.get_parameters())
        self.parameter_panel.setup()
        self.parameter_panel.setVisible(self.parameter_panel.must_be_shown())

    @Slot(object)
    def _on_simulation_loaded(self, simulation: Simulation) -> None:
        self.data_list.clear()
        for i in range(simulation.get_num_data_models()):
            data_set = simulation.get_data_model(i)
            self.data_list.addItem(
                f"{data_set.name} ({data_set.num_rows} x {data_set.num_columns}, {data_set.data_type.value})"
            )
        self.graph_view.set_graph(simulation.get_true_graph(0))
        self.act_save.setEnabled(True)

    @Slot(int)
    def _on_data_set_selected(self, row: int) -> None:
        if row < 0 or self.store.simulation is None:
            return
        try:
            score = self.store.score_data_set(row)
        except (DataTypeMismatchError, ValueError) as e:
            self.console.warn(str(e))
            return
        self.console.info(f"{score!r} bound to data set {row + 1}")

    @Slot(str, object)
    def _on_param_edited(self, key: str, value: object) -> None:
        self.store.parameters_changed.emit(key)
        logger.debug(f"Parameter {key} = {value!r}")
