from __future__ import annotations

import math
from typing import Sequence

from causallearn.score.LocalScoreFunction import local_score_BIC
import numpy as np

from causalcompare.model.data import DataSet
from causalcompare.stats.score import Score, VarRef


def structure_prior_term(structure_prior: float, num_parents: int, num_variables: int) -> float:
    """Log prior of a parent set of the given size; 0 when the prior is disabled."""
    if structure_prior <= 0 or num_variables <= 1:
        return 0.0
    n = num_variables - 1
    p = min(structure_prior / n, 1.0 - 1e-12)
    return num_parents * math.log(p) + (n - num_parents) * math.log(1.0 - p)


class SemBicScore(Score):
    """
    Linear-Gaussian BIC. causal-learn's `local_score_BIC` returns a cost
    (lower is better) with lambda_value scaling the log(n) penalty, so it is
    negated here.
    """

    def __init__(self, data_set: DataSet, penalty_discount: float = 2.0, structure_prior: float = 0.0) -> None:
        if not data_set.is_continuous():
            raise ValueError("Data set must be continuous.")
        super().__init__(data_set)
        self.penalty_discount = penalty_discount
        self.structure_prior = structure_prior

        self._complete = data_set.data[~np.isnan(data_set.data).any(axis=1)]

    @property
    def sample_size(self) -> int:
        return int(self._complete.shape[0])

    def local_score(self, i: VarRef, parents: Sequence[VarRef] = ()) -> float:
        i = self._index(i)
        pa = [self._index(p) for p in parents]
        if self.sample_size < 2:
            return 0.0

        cost = local_score_BIC(self._complete, i, pa, parameters={"lambda_value": self.penalty_discount})
        prior = structure_prior_term(self.structure_prior, len(pa), self.data_set.num_columns)
        return -float(np.squeeze(cost)) + 2.0 * prior

    def __repr__(self) -> str:
        return f"Sem BIC Score Penalty {self.penalty_discount:.2f}"
