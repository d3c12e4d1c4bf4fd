from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from PySide6.QtWidgets import (
    QCheckBox, QDoubleSpinBox, QGridLayout, QGroupBox, QLabel, QLineEdit, QSizePolicy, QSpinBox, QWidget,
)

from causalcompare.app.ui.editors.base import ParameterEditor, clear_layout
from causalcompare.app.ui.editors.registry import register_editor
from causalcompare.model.params import PARAM_DESCRIPTIONS, ParamDescription, upper_bound_or

logger = logging.getLogger(__name__)

MAX_INT = 2**31 - 1
MAX_DOUBLE = 1e9


@register_editor
class ParameterPanel(ParameterEditor):
    """
    Generic editor for an ordered list of parameter keys, e.g. the keys a
    score wrapper reads. One control per key, chosen from the type of its
    registered default; keys without a description get a text field.
    """
    KEY = "parameters"

    def __init__(self, parent: QWidget | None = None, keys: Sequence[str] = ()) -> None:
        super().__init__(parent)
        self.keys: list[str] = list(keys)
        self._controls: dict[str, QWidget] = {}

        self.box = QGroupBox(self.tr(self.TITLE), self)
        self.grid = QGridLayout(self.box)
        self.grid.setVerticalSpacing(8)
        self.layout_root.addWidget(self.box)

    def set_keys(self, keys: Iterable[str]) -> None:
        self.keys = list(keys)

    def must_be_shown(self) -> bool:
        return bool(self.keys)

    def control(self, key: str) -> QWidget:
        return self._controls[key]

    def setup(self) -> None:
        self._require_params()
        self._clear()
        for row, key in enumerate(self.keys):
            description = PARAM_DESCRIPTIONS.get(key)
            label = description.short_description if description else key
            self.grid.addWidget(QLabel(self.tr(label), self.box), row, 0)
            control = self._make_control(key, description)
            control.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
            if description:
                control.setToolTip(description.long_description)
            self.grid.addWidget(control, row, 1)
            self._controls[key] = control
        self.box.setVisible(bool(self.keys))

    def _clear(self) -> None:
        clear_layout(self.grid)
        self._controls.clear()

    def _make_control(self, key: str, description: ParamDescription | None) -> QWidget:
        params = self._require_params()
        value_type = description.value_type if description else str

        if value_type is bool:
            w = QCheckBox(self.box)
            w.setChecked(params.get_boolean(key))
            w.toggled.connect(lambda checked, k=key: self._write(k, bool(checked)))
            return w

        if value_type is int:
            w = QSpinBox(self.box)
            lower = int(description.lower_bound) if description.lower_bound is not None else -MAX_INT
            w.setRange(lower, int(upper_bound_or(description, MAX_INT)))
            w.setValue(params.get_int(key))
            self._sync_clamped(key, params.get_int(key), w.value())
            w.setKeyboardTracking(False)
            w.valueChanged.connect(lambda v, k=key: self._write(k, int(v)))
            return w

        if value_type is float:
            w = QDoubleSpinBox(self.box)
            w.setDecimals(6)
            lower = description.lower_bound if description.lower_bound is not None else -MAX_DOUBLE
            w.setRange(lower, upper_bound_or(description, MAX_DOUBLE))
            w.setSingleStep(0.001 if upper_bound_or(description, MAX_DOUBLE) <= 1.0 else 0.1)
            w.setValue(params.get_double(key))
            self._sync_clamped(key, params.get_double(key), w.value())
            w.setKeyboardTracking(False)
            w.valueChanged.connect(lambda v, k=key: self._write(k, float(v)))
            return w

        w = QLineEdit(self.box)
        current = params.get(key)
        w.setText("" if current is None else str(current))
        w.textChanged.connect(lambda text, k=key: self._write(k, text))
        return w

    def _sync_clamped(self, key: str, stored: float, shown: float) -> None:
        # Spin boxes clamp to their range and round to their decimals
        if math.isclose(shown, stored, rel_tol=1e-12, abs_tol=1e-12):
            return
        logger.warning(f"Parameter '{key}' = {stored!r} adjusted to {shown!r} to fit its range.")
        self._write(key, shown)
