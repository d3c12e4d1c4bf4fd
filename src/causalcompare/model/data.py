"""
Data Sets & Variables
=====================
Tabular data sets consumed by the scores and produced by the simulations.

Continuous cells are stored as floats (NaN = missing). Discrete cells are
stored as category indices (MISSING_DISCRETE = missing).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Dict, List, Optional, Sequence, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MISSING_DISCRETE: int = -99


class DataType(Enum):
    CONTINUOUS = "Continuous"
    DISCRETE = "Discrete"
    MIXED = "Mixed"

    def accepts(self, actual: DataType) -> bool:
        """Whether data of type `actual` may be fed to a consumer declaring this type."""
        if self is DataType.MIXED:
            return True
        return self is actual


@dataclass(frozen=True)
class ContinuousVariable:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DiscreteVariable:
    name: str
    categories: tuple[str, ...] = ()

    @property
    def num_categories(self) -> int:
        return len(self.categories)

    def __str__(self) -> str:
        return self.name


Node = Union[ContinuousVariable, DiscreteVariable]


def integral_categories(values: npt.ArrayLike, max_categories: int) -> Optional[tuple[str, ...]]:
    """
    Category labels for a numeric column that can be read as discrete.

    A column qualifies when every present (non-NaN) value is integral and it
    has at most `max_categories` distinct values. Returns None otherwise.
    """
    present = np.asarray(values, dtype=float)
    present = present[~np.isnan(present)]
    if present.size == 0 or not np.all(present == np.round(present)):
        return None
    distinct = np.unique(present)
    if len(distinct) > max_categories:
        return None
    return tuple(str(int(v)) for v in distinct)


def encode_categories(values: npt.ArrayLike, labels: Sequence[str]) -> npt.NDArray[np.float64]:
    """Category index of each integral value; NaN becomes MISSING_DISCRETE."""
    index = {label: k for k, label in enumerate(labels)}
    return np.array(
        [MISSING_DISCRETE if np.isnan(v) else index[str(int(v))] for v in np.asarray(values, dtype=float)],
        dtype=float,
    )


@dataclass(eq=False)
class DataSet:
    """A named table of variables (columns) by cases (rows)."""
    name: str
    variables: List[Node]
    data: npt.NDArray[np.float64] = field(repr=False)

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=float)
        if self.data.ndim != 2:
            raise ValueError(f"Expected a 2-D data array, got shape {self.data.shape}.")
        if self.data.shape[1] != len(self.variables):
            raise ValueError(
                f"Data has {self.data.shape[1]} columns but {len(self.variables)} variables were given."
            )
        names = [v.name for v in self.variables]
        if len(set(names)) != len(names):
            raise ValueError(f"Variable names must be unique: {names}")
        self._index: Dict[str, int] = {name: i for i, name in enumerate(names)}

    @classmethod
    def from_columns(cls, name: str, columns: Dict[str, Sequence[float]],
                     discrete: Optional[Dict[str, Sequence[str]]] = None) -> DataSet:
        """
        Build a data set from named columns.

        Args:
            name: Name of the data set.
            columns: Column name -> values. Values of discrete columns are category indices.
            discrete: Column name -> category labels, for the columns that are discrete.
        """
        discrete = discrete or {}
        variables: List[Node] = []
        for col_name in columns:
            if col_name in discrete:
                variables.append(DiscreteVariable(col_name, tuple(discrete[col_name])))
            else:
                variables.append(ContinuousVariable(col_name))
        matrix = np.column_stack([np.asarray(v, dtype=float) for v in columns.values()])
        return cls(name=name, variables=variables, data=matrix)

    # ---- shape ----

    @property
    def num_rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def num_columns(self) -> int:
        return int(self.data.shape[1])

    @property
    def variable_names(self) -> List[str]:
        return [v.name for v in self.variables]

    # ---- lookup ----

    def get_variable(self, name: str) -> Optional[Node]:
        i = self._index.get(name)
        return None if i is None else self.variables[i]

    def get_column(self, node: Union[Node, str]) -> int:
        name = node if isinstance(node, str) else node.name
        if name not in self._index:
            raise KeyError(f"Variable '{name}' not in data set '{self.name}'.")
        return self._index[name]

    def column(self, i: int) -> npt.NDArray[np.float64]:
        return self.data[:, i]

    # ---- type ----

    @property
    def data_type(self) -> DataType:
        n_discrete = sum(isinstance(v, DiscreteVariable) for v in self.variables)
        if n_discrete == 0:
            return DataType.CONTINUOUS
        if n_discrete == len(self.variables):
            return DataType.DISCRETE
        return DataType.MIXED

    def is_continuous(self) -> bool:
        return self.data_type is DataType.CONTINUOUS

    def is_discrete(self) -> bool:
        return self.data_type is DataType.DISCRETE

    def is_mixed(self) -> bool:
        return self.data_type is DataType.MIXED

    def to_mixed(self, max_discrete_categories: int) -> DataSet:
        """
        Reinterpret continuous columns of few integral values as discrete.

        Returns `self` when no column changes; otherwise a new data set with
        the same name, column order and rows.
        """
        variables: List[Node] = []
        columns = []
        changed = False
        for var, values in zip(self.variables, self.data.T):
            labels = None
            if isinstance(var, ContinuousVariable):
                labels = integral_categories(values, max_discrete_categories)
            if labels is None:
                variables.append(var)
                columns.append(values)
            else:
                variables.append(DiscreteVariable(var.name, labels))
                columns.append(encode_categories(values, labels))
                changed = True

        if not changed:
            return self
        logger.debug(
            f"Data set '{self.name}': {sum(isinstance(v, DiscreteVariable) for v in variables)} "
            f"discrete column(s) after mixed conversion"
        )
        return DataSet(name=self.name, variables=variables, data=np.column_stack(columns))
