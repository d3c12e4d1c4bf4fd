import math

import numpy as np
import pytest

from causalcompare.model.data import DataSet
from causalcompare.stats import ConditionalGaussianScore, IndTestFisherZ, IndTestScore, SemBicScore
from causalcompare.stats.conditional_gaussian import discretize_equal_frequency
from causalcompare.stats.sem_bic import structure_prior_term

from conftest import chain_data


@pytest.fixture
def chain():
    return DataSet.from_columns("chain", {
        name: col for name, col in zip(["X1", "X2", "X3"], chain_data(n=500).T)
    })


def test_fisher_z_detects_dependence_and_screening_off(chain):
    test = IndTestFisherZ(chain, alpha=0.001)

    assert test.is_dependent("X1", "X2")
    assert test.p_value < 0.001
    assert test.is_dependent("X1", "X3")
    assert test.is_independent("X1", "X3", ["X2"])
    assert test.p_value > 0.001


def test_fisher_z_accepts_indices_and_nodes(chain):
    test = IndTestFisherZ(chain, alpha=0.01)
    node = chain.get_variable("X2")
    assert test.is_dependent(0, node)
    with pytest.raises(IndexError):
        test.is_independent(-1, 1)
    with pytest.raises(KeyError):
        test.is_independent("X1", "nope")


def test_fisher_z_ignores_rows_with_missing_values(chain):
    data = chain.data.copy()
    data[:10, 0] = np.nan
    with_missing = DataSet(name="m", variables=chain.variables, data=data)
    test = IndTestFisherZ(with_missing, 0.01)
    assert test.sample_size == 490
    assert test.is_dependent("X1", "X2")
    assert test.p_value < 0.01


def test_fisher_z_treats_constant_column_as_independent(chain):
    data = chain.data.copy()
    data[:, 2] = 1.0
    constant = DataSet(name="c", variables=chain.variables, data=data)
    test = IndTestFisherZ(constant, 0.01)
    assert test.is_independent("X1", "X3")
    assert test.p_value == 1.0


def test_fisher_z_too_few_rows_is_independent():
    tiny = DataSet.from_columns("t", {"A": [0.1, 0.5, 0.9], "B": [1.0, 2.0, 2.5]})
    test = IndTestFisherZ(tiny, 0.05)
    assert test.is_independent("A", "B")
    assert test.p_value == 1.0


def test_fisher_z_rejects_bad_input(chain):
    with pytest.raises(ValueError):
        IndTestFisherZ(chain, alpha=2.0)
    discrete = DataSet.from_columns("d", {"A": [0, 1]}, discrete={"A": ["0", "1"]})
    with pytest.raises(ValueError):
        IndTestFisherZ(discrete, alpha=0.01)


def test_ind_test_score_sign(chain):
    score = IndTestScore(IndTestFisherZ(chain, alpha=0.001))
    assert score.local_score_diff("X1", "X2") > 0
    assert score.local_score_diff("X1", "X3", ["X2"]) < 0
    assert score.is_effect_edge(score.local_score_diff("X1", "X2"))
    assert score.local_score("X2") == 0.0


def test_sem_bic_prefers_true_parent(chain):
    score = SemBicScore(chain, penalty_discount=2.0)
    assert score.local_score("X2", ["X1"]) > score.local_score("X2")
    assert score.local_score("X3", ["X2"]) > score.local_score("X3", ["X2", "X1"])
    assert score.local_score_diff("X1", "X2") > 0
    assert score.sample_size == 500


def test_sem_bic_is_negated_bic_cost(chain):
    score = SemBicScore(chain, penalty_discount=2.0)
    n = chain.num_rows
    cov = np.cov(chain.data, rowvar=False)
    residual = cov[1, 1] - cov[1, 0] ** 2 / cov[0, 0]
    expected = -(n * math.log(residual) + math.log(n) * 2.0)
    assert score.local_score("X2", ["X1"]) == pytest.approx(expected, rel=1e-6)
    assert score.local_score("X1") == pytest.approx(-n * math.log(cov[0, 0]), rel=1e-6)


def test_structure_prior_term():
    assert structure_prior_term(0.0, 2, 5) == 0.0
    assert structure_prior_term(1.0, 0, 5) == pytest.approx(4 * math.log(0.75))
    assert structure_prior_term(1.0, 1, 5) > structure_prior_term(1.0, 3, 5)


def test_discretize_equal_frequency():
    codes = discretize_equal_frequency(np.arange(9, dtype=float), 3)
    assert codes.tolist() == [0, 0, 0, 1, 1, 1, 2, 2, 2]


@pytest.fixture
def mixed():
    rng = np.random.default_rng(3)
    n = 600
    a = rng.integers(0, 2, size=n)
    x = np.where(a == 1, 1.5, -1.5) + rng.normal(size=n)
    y = rng.normal(size=n)
    b = (x + 0.3 * rng.normal(size=n) > 0).astype(int)
    return DataSet.from_columns(
        "mixed", {"A": a, "X": x, "Y": y, "B": b}, discrete={"A": ["0", "1"], "B": ["0", "1"]},
    )


def test_conditional_gaussian_finds_mixed_dependencies(mixed):
    score = ConditionalGaussianScore(mixed, penalty_discount=2.0)
    # discrete parent of a continuous child
    assert score.local_score("X", ["A"]) > score.local_score("X")
    # unrelated parent is penalized
    assert score.local_score("Y", ["A"]) < score.local_score("Y")


def test_conditional_gaussian_discretizes_continuous_parents(mixed):
    score = ConditionalGaussianScore(mixed, penalty_discount=1.0, discretize=True)
    score.num_categories_to_discretize = 4
    assert score.local_score("B", ["X"]) > score.local_score("B")

    no_bins = ConditionalGaussianScore(mixed, penalty_discount=1.0, discretize=False)
    assert math.isfinite(no_bins.local_score("B", ["X"]))


def test_conditional_gaussian_skips_missing_discrete_cells():
    data = DataSet.from_columns(
        "m", {"A": [0, 1, -99, 1], "X": [0.1, 1.0, 5.0, 1.2]}, discrete={"A": ["0", "1"]},
    )
    score = ConditionalGaussianScore(data)
    assert len(score._complete_rows([0, 1])) == 3
