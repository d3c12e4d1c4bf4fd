from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSpinBox, QWidget

from causalcompare.app.ui.editors.base import ParameterEditor, clear_layout
from causalcompare.app.ui.editors.registry import register_editor
from causalcompare.model.params import Params

MAX_INT = 2**31 - 1


@register_editor
class TimeSeriesParamsEditor(ParameterEditor):
    """Edits the number of time lags of a time series transformation."""
    KEY = "time-series"
    TITLE = "Time Series"

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.spin: QSpinBox | None = None

    def setup(self) -> None:
        params = self._require_params()
        if self.spin is not None:
            self.spin.valueChanged.disconnect(self._on_value_changed)
        clear_layout(self.layout_root)

        self.spin = QSpinBox(self)
        self.spin.setRange(0, MAX_INT)
        self.spin.setSingleStep(1)
        self.spin.setValue(params.get_int(Params.NUM_TIME_LAGS, 1))
        self.spin.valueChanged.connect(self._on_value_changed)

        row = QHBoxLayout()
        row.setContentsMargins(10, 10, 10, 10)
        row.addWidget(QLabel(self.tr("Number of time lags: "), self))
        row.addStretch()
        row.addSpacing(15)
        row.addWidget(self.spin)
        self.layout_root.addLayout(row)

    def must_be_shown(self) -> bool:
        return True

    @Slot(int)
    def _on_value_changed(self, value: int) -> None:
        self._write(Params.NUM_TIME_LAGS, int(value))
