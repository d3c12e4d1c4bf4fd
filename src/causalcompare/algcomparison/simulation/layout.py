"""
Simulation Directory Layout
===========================
The on-disk schema read by directory-backed simulations:

    <root>/
        data_noise/   data sets, one per file with a recognized suffix (optional)
        graph/        exactly one ground-truth graph file (optional)

`SimulationLayout.validate()` checks the whole layout up front and reports
every violation at once.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import List, Optional

from causalcompare.config import DATA_DIR_NAME, DATA_SUFFIXES, GRAPH_DIR_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutViolation:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SimulationLayoutError(ValueError):
    """Raised when a simulation directory does not follow the expected layout."""

    def __init__(self, root: str, violations: List[LayoutViolation]) -> None:
        lines = "\n".join(f"  - {v}" for v in violations)
        super().__init__(f"Invalid simulation directory '{root}':\n{lines}")
        self.root = root
        self.violations = list(violations)


def _visible_files(directory: str) -> List[str]:
    return sorted(
        entry.path for entry in os.scandir(directory)
        if entry.is_file() and not entry.name.startswith(".")
    )


@dataclass(frozen=True)
class SimulationLayout:
    root: str
    data_dir: str = DATA_DIR_NAME
    graph_dir: str = GRAPH_DIR_NAME
    data_suffixes: tuple[str, ...] = DATA_SUFFIXES

    @property
    def data_path(self) -> str:
        return os.path.join(self.root, self.data_dir)

    @property
    def graph_path(self) -> str:
        return os.path.join(self.root, self.graph_dir)

    @property
    def name(self) -> str:
        return os.path.basename(os.path.normpath(self.root))

    def validate(self) -> List[LayoutViolation]:
        violations: List[LayoutViolation] = []

        if not os.path.exists(self.root):
            return [LayoutViolation(self.root, "directory does not exist")]
        if not os.path.isdir(self.root):
            return [LayoutViolation(self.root, "is not a directory")]

        if os.path.exists(self.data_path) and not os.path.isdir(self.data_path):
            violations.append(LayoutViolation(self.data_path, "is not a directory"))

        if os.path.exists(self.graph_path):
            if not os.path.isdir(self.graph_path):
                violations.append(LayoutViolation(self.graph_path, "is not a directory"))
            else:
                n_files = len(_visible_files(self.graph_path))
                if n_files != 1:
                    violations.append(LayoutViolation(
                        self.graph_path, f"expecting exactly one graph file, found {n_files}"
                    ))

        return violations

    def raise_for_violations(self) -> None:
        violations = self.validate()
        if violations:
            for violation in violations:
                logger.error(f"Layout violation: {violation}")
            raise SimulationLayoutError(self.root, violations)

    def data_files(self) -> List[str]:
        """Data files with a recognized suffix, sorted by name."""
        if not os.path.isdir(self.data_path):
            return []
        return [path for path in _visible_files(self.data_path) if path.endswith(self.data_suffixes)]

    def graph_file(self) -> Optional[str]:
        if not os.path.isdir(self.graph_path):
            return None
        files = _visible_files(self.graph_path)
        return files[0] if len(files) == 1 else None
