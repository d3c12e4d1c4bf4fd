import numpy as np
import pytest

from causalcompare.algcomparison.score import (
    DataTypeMismatchError, ScoreWrapper, create_score_wrapper, list_score_keys, register_score,
    score_descriptions,
)
from causalcompare.algcomparison.score.cg_bic import ConditionalGaussianBicParams, ConditionalGaussianBicScore
from causalcompare.algcomparison.score.fisher_z import FisherZParams, FisherZScore
from causalcompare.algcomparison.score.sem_bic import SemBicScoreWrapper
from causalcompare.model.data import DataSet, DataType, DiscreteVariable
from causalcompare.model.parameters import Parameters
from causalcompare.model.params import Params
from causalcompare.stats import ConditionalGaussianScore, IndTestScore, SemBicScore

from conftest import chain_data


class RecordingParameters(Parameters):
    """Remembers every key a consumer reads."""

    def __init__(self):
        super().__init__()
        self.read = []

    def _resolve(self, key, default):
        self.read.append(key)
        return super()._resolve(key, default)

    def get(self, key, default=None):
        self.read.append(key)
        return super().get(key, default)


@pytest.fixture
def continuous_data():
    return DataSet.from_columns("cont", {
        name: col for name, col in zip(["X1", "X2", "X3"], chain_data().T)
    })


@pytest.fixture
def mixed_data():
    rng = np.random.default_rng(1)
    n = 400
    a = rng.integers(0, 2, size=n)
    x = np.where(a == 1, 2.0, -2.0) + rng.normal(size=n)
    y = rng.normal(size=n)
    return DataSet.from_columns("mixed", {"A": a, "X": x, "Y": y}, discrete={"A": ["0", "1"]})


@pytest.fixture
def discrete_data():
    return DataSet.from_columns("disc", {"A": [0, 1, 1, 0], "B": [1, 1, 0, 0]},
                                discrete={"A": ["0", "1"], "B": ["0", "1"]})


# ---- registry ----

def test_registry_lists_all_scores():
    keys = list_score_keys()
    assert {"fisher-z-score", "cg-bic-score", "sem-bic-score"} <= set(keys)
    assert score_descriptions()["fisher-z-score"] == "Fisher Z Score"
    assert isinstance(create_score_wrapper("cg-bic-score"), ConditionalGaussianBicScore)


def test_registry_rejects_unknown_and_duplicate_keys():
    with pytest.raises(KeyError):
        create_score_wrapper("no-such-score")

    with pytest.raises(ValueError):
        @register_score
        class Duplicate(ScoreWrapper):
            KEY = "fisher-z-score"

            def _make_score(self, data_model, parameters):
                raise NotImplementedError

    with pytest.raises(ValueError):
        @register_score
        class NoKey(ScoreWrapper):
            def _make_score(self, data_model, parameters):
                raise NotImplementedError


# ---- Fisher Z ----

def test_fisher_z_declarations():
    wrapper = FisherZScore()
    assert wrapper.get_parameters() == ["alpha"]
    assert wrapper.get_data_type() is DataType.CONTINUOUS
    assert wrapper.get_description() == "Fisher Z Score"


def test_fisher_z_get_parameters_returns_a_fresh_list():
    wrapper = FisherZScore()
    wrapper.get_parameters().append("junk")
    assert wrapper.get_parameters() == ["alpha"]


def test_fisher_z_uses_alpha_from_parameters(continuous_data):
    score = FisherZScore().get_score(continuous_data, Parameters.from_dict({Params.ALPHA: 0.05}))
    assert isinstance(score, IndTestScore)
    assert score.alpha == pytest.approx(0.05)


def test_fisher_z_default_alpha(continuous_data):
    score = FisherZScore().get_score(continuous_data, Parameters())
    assert score.alpha == pytest.approx(0.001)


def test_fisher_z_rejects_discrete_data(discrete_data):
    with pytest.raises(DataTypeMismatchError) as info:
        FisherZScore().get_score(discrete_data, Parameters())
    assert info.value.expected is DataType.CONTINUOUS
    assert info.value.actual is DataType.DISCRETE


def test_fisher_z_rejects_out_of_range_alpha(continuous_data):
    with pytest.raises(ValueError):
        FisherZScore().get_score(continuous_data, Parameters.from_dict({Params.ALPHA: 1.5}))
    with pytest.raises(ValueError):
        FisherZParams(alpha=-0.1)


def test_wrappers_reject_non_data_set_input():
    with pytest.raises(TypeError):
        FisherZScore().get_score(np.zeros((3, 2)), Parameters())


# ---- CG-BIC ----

def test_cg_bic_declarations():
    wrapper = ConditionalGaussianBicScore()
    assert wrapper.get_parameters() == [
        "penaltyDiscount", "structurePrior", "discretize", "numCategoriesToDiscretize",
    ]
    assert wrapper.get_data_type() is DataType.MIXED
    assert wrapper.get_description() == "Conditional Gaussian BIC Score"


def test_cg_bic_snapshots_parameters(mixed_data):
    params = Parameters.from_dict({
        Params.PENALTY_DISCOUNT: 3.0,
        Params.STRUCTURE_PRIOR: 1.0,
        Params.DISCRETIZE: False,
        Params.NUM_CATEGORIES_TO_DISCRETIZE: 5,
    })
    score = ConditionalGaussianBicScore().get_score(mixed_data, params)

    params.set(Params.DISCRETIZE, True)
    params.set(Params.NUM_CATEGORIES_TO_DISCRETIZE, 7)
    params.set(Params.PENALTY_DISCOUNT, 1.0)

    assert isinstance(score, ConditionalGaussianScore)
    assert score.discretize is False
    assert score.num_categories_to_discretize == 5
    assert score.penalty_discount == pytest.approx(3.0)
    assert score.structure_prior == pytest.approx(1.0)


def test_cg_bic_accepts_continuous_and_discrete_data(continuous_data, discrete_data):
    wrapper = ConditionalGaussianBicScore()
    assert isinstance(wrapper.get_score(continuous_data, Parameters()), ConditionalGaussianScore)
    assert isinstance(wrapper.get_score(discrete_data, Parameters()), ConditionalGaussianScore)


def test_cg_bic_reads_integral_columns_as_discrete():
    rng = np.random.default_rng(2)
    n = 300
    a = rng.integers(0, 2, size=n).astype(float)
    x = 2.0 * a + rng.normal(size=n)
    counts = rng.integers(0, 40, size=n).astype(float)
    data = DataSet.from_columns("loaded", {"A": a, "X": x, "N": counts})
    assert data.data_type is DataType.CONTINUOUS

    score = ConditionalGaussianBicScore().get_score(data, Parameters())

    converted = score.data_set
    assert converted.name == "loaded"
    assert isinstance(converted.get_variable("A"), DiscreteVariable)
    assert converted.get_variable("A").categories == ("0", "1")
    assert not isinstance(converted.get_variable("X"), DiscreteVariable)
    assert not isinstance(converted.get_variable("N"), DiscreteVariable)
    assert score.local_score("X", ["A"]) > score.local_score("X")


def test_to_mixed_returns_same_data_set_when_nothing_changes(continuous_data, mixed_data):
    assert continuous_data.to_mixed(5) is continuous_data
    assert mixed_data.to_mixed(5) is mixed_data


def test_cg_bic_params_validation():
    with pytest.raises(ValueError):
        ConditionalGaussianBicParams(1.0, 0.0, True, 1)
    with pytest.raises(ValueError):
        ConditionalGaussianBicParams(-1.0, 0.0, True, 3)


# ---- SEM BIC ----

def test_sem_bic_reads_penalty(continuous_data):
    wrapper = SemBicScoreWrapper()
    score = wrapper.get_score(continuous_data, Parameters.from_dict({Params.PENALTY_DISCOUNT: 4.0}))
    assert isinstance(score, SemBicScore)
    assert score.penalty_discount == pytest.approx(4.0)
    assert wrapper.get_data_type() is DataType.CONTINUOUS


# ---- shared behavior ----

@pytest.mark.parametrize("key", ["fisher-z-score", "cg-bic-score", "sem-bic-score"])
def test_wrappers_read_only_declared_parameters(key, continuous_data):
    wrapper = create_score_wrapper(key)
    params = RecordingParameters()
    wrapper.get_score(continuous_data, params)
    assert params.read
    assert set(params.read) <= set(wrapper.get_parameters())


@pytest.mark.parametrize("key", ["fisher-z-score", "cg-bic-score", "sem-bic-score"])
def test_get_variable_uses_the_given_data_model(key, continuous_data):
    wrapper = create_score_wrapper(key)
    other = DataSet.from_columns("other", {"Z": [1.0, 2.0]})

    assert wrapper.get_variable(continuous_data, "X2").name == "X2"
    assert wrapper.get_variable(other, "X2") is None
    assert wrapper.get_variable(other, "Z").name == "Z"


def test_wrappers_are_stateless(continuous_data):
    wrapper = FisherZScore()
    first = wrapper.get_score(continuous_data, Parameters.from_dict({Params.ALPHA: 0.01}))
    second = wrapper.get_score(continuous_data, Parameters.from_dict({Params.ALPHA: 0.2}))
    assert first is not second
    assert first.alpha == pytest.approx(0.01)
    assert second.alpha == pytest.approx(0.2)
