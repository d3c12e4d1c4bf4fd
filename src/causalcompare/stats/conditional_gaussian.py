"""
Conditional Gaussian BIC Score
==============================
Scores mixed continuous/discrete data under the conditional Gaussian model:
continuous variables are jointly Gaussian within every cell of the discrete
variables.

The local likelihood of a child given its parents is the joint likelihood of
(child + parents) minus the joint likelihood of (parents); the degrees of
freedom are taken the same way.
"""
from __future__ import annotations

import logging
import math
from typing import List, Sequence, TYPE_CHECKING

import numpy as np

from causalcompare.model.data import MISSING_DISCRETE, DataSet, DiscreteVariable
from causalcompare.stats.score import Score, VarRef
from causalcompare.stats.sem_bic import structure_prior_term

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def discretize_equal_frequency(values: npt.NDArray[np.float64], num_categories: int) -> npt.NDArray[np.int_]:
    """Bin values into `num_categories` groups of (roughly) equal size."""
    cut_points = np.quantile(values, np.linspace(0.0, 1.0, num_categories + 1)[1:-1])
    return np.searchsorted(cut_points, values, side="right")


class ConditionalGaussianScore(Score):

    def __init__(
        self,
        data_set: DataSet,
        penalty_discount: float = 1.0,
        structure_prior: float = 0.0,
        discretize: bool = True,
    ) -> None:
        super().__init__(data_set)
        self.penalty_discount = penalty_discount
        self.structure_prior = structure_prior
        self.discretize = discretize
        self.num_categories_to_discretize = 3

        self._is_discrete = [isinstance(v, DiscreteVariable) for v in data_set.variables]

    def local_score(self, i: VarRef, parents: Sequence[VarRef] = ()) -> float:
        i = self._index(i)
        pa = [self._index(p) for p in parents]

        rows = self._complete_rows([i] + pa)
        n = len(rows)
        if n == 0:
            return 0.0

        lik, dof = self.likelihood(i, pa, rows)
        prior = structure_prior_term(self.structure_prior, len(pa), self.data_set.num_columns)
        return 2.0 * (lik + prior) - self.penalty_discount * dof * math.log(n)

    def likelihood(self, i: int, parents: List[int], rows: npt.NDArray[np.int_]) -> tuple[float, int]:
        """Log likelihood and degrees of freedom of column i given its parents over the given rows."""
        continuous = [p for p in parents if not self._is_discrete[p]]
        discrete_codes = [self._codes(p, rows) for p in parents if self._is_discrete[p]]
        discrete_sizes = [self._num_categories(p) for p in parents if self._is_discrete[p]]

        if self._is_discrete[i] and self.discretize and continuous:
            for p in continuous:
                discrete_codes.append(
                    discretize_equal_frequency(self.data_set.data[rows, p], self.num_categories_to_discretize)
                )
                discrete_sizes.append(self.num_categories_to_discretize)
            continuous = []

        x_plus, a_plus, sizes_plus = list(continuous), list(discrete_codes), list(discrete_sizes)
        if self._is_discrete[i]:
            a_plus.append(self._codes(i, rows))
            sizes_plus.append(self._num_categories(i))
        else:
            x_plus.append(i)

        lik1, dof1 = self._joint_likelihood(x_plus, a_plus, sizes_plus, rows)
        lik2, dof2 = self._joint_likelihood(continuous, discrete_codes, discrete_sizes, rows)
        return lik1 - lik2, dof1 - dof2

    def _joint_likelihood(
        self,
        continuous: List[int],
        codes: List[npt.NDArray[np.int_]],
        sizes: List[int],
        rows: npt.NDArray[np.int_],
    ) -> tuple[float, int]:
        n = len(rows)
        k = len(continuous)

        if codes:
            _, cell_of_row = np.unique(np.column_stack(codes), axis=0, return_inverse=True)
            cell_of_row = np.asarray(cell_of_row).reshape(-1)
        else:
            cell_of_row = np.zeros(n, dtype=int)

        x = self.data_set.data[np.ix_(rows, continuous)] if k else None

        c1 = c2 = 0.0
        for cell in np.unique(cell_of_row):
            members = cell_of_row == cell
            a = int(members.sum())
            if codes:
                c1 += a * math.log(a) - a * math.log(n)
            if k:
                log_det = self._log_det_cov(x[members])
                c2 += -0.5 * a * log_det - 0.5 * a * k - 0.5 * a * k * math.log(2.0 * math.pi)

        f = int(np.prod(sizes)) if sizes else 1
        h = k * (k + 1) // 2
        return c1 + c2, f * h + f

    @staticmethod
    def _log_det_cov(x: npt.NDArray[np.float64]) -> float:
        # Too few rows (or a degenerate cell) falls back to the identity covariance
        if x.shape[0] <= x.shape[1]:
            return 0.0
        sigma = np.atleast_2d(np.cov(x, rowvar=False, bias=True))
        sign, log_det = np.linalg.slogdet(sigma)
        if sign <= 0 or not np.isfinite(log_det):
            return 0.0
        return float(log_det)

    def _complete_rows(self, cols: List[int]) -> npt.NDArray[np.int_]:
        sub = self.data_set.data[:, cols]
        missing = np.isnan(sub)
        for j, col in enumerate(cols):
            if self._is_discrete[col]:
                missing[:, j] |= sub[:, j] == MISSING_DISCRETE
        return np.flatnonzero(~missing.any(axis=1))

    def _codes(self, col: int, rows: npt.NDArray[np.int_]) -> npt.NDArray[np.int_]:
        return self.data_set.data[rows, col].astype(int)

    def _num_categories(self, col: int) -> int:
        var = self.data_set.variables[col]
        if var.num_categories:
            return var.num_categories
        present = self.data_set.data[:, col]
        present = present[present != MISSING_DISCRETE]
        return int(present.max()) + 1 if present.size else 1

    def __repr__(self) -> str:
        return f"Conditional Gaussian Score Penalty {self.penalty_discount:.2f}"
