from __future__ import annotations

from typing import Any, Optional, Sequence

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLayout, QVBoxLayout, QWidget

from causalcompare.model.params import ParamValue
from causalcompare.model.parameters import Parameters


def clear_layout(layout: QLayout) -> None:
    """Remove and schedule deletion of every widget and nested layout in `layout`."""
    while layout.count():
        item = layout.takeAt(0)
        widget = item.widget()
        if widget is not None:
            widget.setParent(None)
            widget.deleteLater()
        elif item.layout() is not None:
            clear_layout(item.layout())
            item.layout().deleteLater()


class ParameterEditor(QWidget):
    """
    Base class for widgets editing values of a shared `Parameters` store.

    Lifecycle: construct, bind with `set_params`, then `setup()` builds the
    controls from the current values. Every edit is written straight into
    the bound store; there is no commit step.
    """
    KEY: str = "base"  # Override in subclass
    TITLE: str = "Parameters"

    # (key, new value), emitted after each write-through
    param_edited = Signal(str, object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.params: Optional[Parameters] = None
        self.layout_root = QVBoxLayout(self)
        self.layout_root.setContentsMargins(0, 0, 0, 0)

    def set_params(self, params: Parameters) -> None:
        self.params = params

    def set_parent_models(self, parent_models: Sequence[Any]) -> None:
        """Receive the upstream models of the session; unused by most editors."""

    def must_be_shown(self) -> bool:
        """True if the host must show this editor even when it looks trivial."""
        return False

    def _write(self, key: str, value: ParamValue) -> None:
        self._require_params().set(key, value)
        self.param_edited.emit(key, value)

    def _require_params(self) -> Parameters:
        if self.params is None:
            raise RuntimeError(f"{type(self).__name__}: call set_params() before setup().")
        return self.params

    # ---- abstract API for subclasses ----
    def setup(self) -> None:
        """Create the controls from the bound parameters and connect their signals."""
        raise NotImplementedError("`setup` must be implemented in subclass.")
