from __future__ import annotations

from abc import ABC, abstractmethod
import math
import numbers
from typing import List, Optional, Sequence, Union

from causalcompare.model.data import DataSet, Node

VarRef = Union[int, str, Node]


def column_index(data_set: DataSet, var: VarRef) -> int:
    """Column of `var` given as an index, a name or a node."""
    if isinstance(var, numbers.Integral):
        var = int(var)
        if not 0 <= var < data_set.num_columns:
            raise IndexError(f"Variable index {var} out of range.")
        return var
    return data_set.get_column(var)


class Score(ABC):
    """
    A decomposable score evaluating a node given a set of parents.

    Variables may be referred to by column index, name or node.
    """

    def __init__(self, data_set: DataSet) -> None:
        self.data_set = data_set

    @abstractmethod
    def local_score(self, i: VarRef, parents: Sequence[VarRef] = ()) -> float:
        ...

    def local_score_diff(self, x: VarRef, y: VarRef, z: Sequence[VarRef] = ()) -> float:
        """Score gain of adding `x` as a parent of `y` given parents `z`."""
        z = list(z)
        return self.local_score(y, z + [x]) - self.local_score(y, z)

    def is_effect_edge(self, bump: float) -> bool:
        return bump > 0

    @property
    def variables(self) -> List[Node]:
        return list(self.data_set.variables)

    def get_variable(self, name: str) -> Optional[Node]:
        return self.data_set.get_variable(name)

    @property
    def sample_size(self) -> int:
        return self.data_set.num_rows

    @property
    def max_degree(self) -> int:
        return int(math.ceil(math.log(max(self.sample_size, 1))))

    def _index(self, var: VarRef) -> int:
        return column_index(self.data_set, var)
