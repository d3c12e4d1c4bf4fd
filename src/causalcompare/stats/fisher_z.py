"""
Fisher Z Independence Test
==========================
Tests X _||_ Y | Z on continuous data with causal-learn's Fisher Z
conditional independence test, run over the complete rows of the data set.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from causallearn.utils.cit import CIT, fisherz
import numpy as np

from causalcompare.model.data import DataSet
from causalcompare.stats.score import Score, VarRef, column_index

logger = logging.getLogger(__name__)


class IndTestFisherZ:
    """Partial-correlation test for continuous data."""

    def __init__(self, data_set: DataSet, alpha: float) -> None:
        if not data_set.is_continuous():
            raise ValueError("Data set must be continuous.")
        self.data_set = data_set
        self.alpha = alpha
        self.p_value: float = float("nan")

        # Rows with a missing cell are dropped
        self._complete = data_set.data[~np.isnan(data_set.data).any(axis=1)]
        self._cit: Optional[CIT] = None

    @property
    def alpha(self) -> float:
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Significance out of range: {value}")
        self._alpha = value

    @property
    def sample_size(self) -> int:
        return int(self._complete.shape[0])

    def _index(self, var: VarRef) -> int:
        return column_index(self.data_set, var)

    def _p_value(self, x: int, y: int, z: list[int]) -> float:
        if self.sample_size - len(z) - 3 <= 0:
            return 1.0
        if self._cit is None:
            self._cit = CIT(self._complete, fisherz)
        try:
            p = float(self._cit(x, y, z))
        except ValueError as e:
            # Singular correlation matrix, e.g. a constant column
            logger.debug(f"Fisher Z undefined for {x}, {y} | {z}: {e}")
            return 1.0
        return p if math.isfinite(p) else 1.0

    def is_independent(self, x: VarRef, y: VarRef, z: Sequence[VarRef] = ()) -> bool:
        self.p_value = self._p_value(self._index(x), self._index(y), [self._index(v) for v in z])
        independent = self.p_value > self.alpha
        logger.debug(f"{x} _||_ {y} | {list(z)}: p = {self.p_value:.4g} -> {independent}")
        return independent

    def is_dependent(self, x: VarRef, y: VarRef, z: Sequence[VarRef] = ()) -> bool:
        return not self.is_independent(x, y, z)

    def __repr__(self) -> str:
        return f"Fisher Z, alpha = {self.alpha:g}"


class IndTestScore(Score):
    """
    Turns an independence test into a score: adding x as a parent of y gains
    alpha - p, so dependence (p < alpha) scores positive.
    """

    def __init__(self, test: IndTestFisherZ) -> None:
        super().__init__(test.data_set)
        self.test = test

    @property
    def alpha(self) -> float:
        return self.test.alpha

    def local_score_diff(self, x: VarRef, y: VarRef, z: Sequence[VarRef] = ()) -> float:
        self.test.is_independent(x, y, z)
        return self.test.alpha - self.test.p_value

    def local_score(self, i: VarRef, parents: Sequence[VarRef] = ()) -> float:
        total = 0.0
        parents = list(parents)
        for k, parent in enumerate(parents):
            total += self.local_score_diff(parent, i, parents[:k])
        return total
