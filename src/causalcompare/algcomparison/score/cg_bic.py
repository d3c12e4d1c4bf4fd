from __future__ import annotations

from dataclasses import dataclass

from causalcompare.algcomparison.score.base import ScoreWrapper
from causalcompare.algcomparison.score.registry import register_score
from causalcompare.config import MIXED_MAX_DISCRETE_CATEGORIES
from causalcompare.model.data import DataSet, DataType
from causalcompare.model.parameters import Parameters
from causalcompare.model.params import Params
from causalcompare.stats import ConditionalGaussianScore, Score


@dataclass(frozen=True)
class ConditionalGaussianBicParams:
    penalty_discount: float
    structure_prior: float
    discretize: bool
    num_categories_to_discretize: int

    def __post_init__(self) -> None:
        if self.penalty_discount < 0:
            raise ValueError(f"penaltyDiscount must be >= 0, got {self.penalty_discount}")
        if self.structure_prior < 0:
            raise ValueError(f"structurePrior must be >= 0, got {self.structure_prior}")
        if self.num_categories_to_discretize < 2:
            raise ValueError(
                f"numCategoriesToDiscretize must be >= 2, got {self.num_categories_to_discretize}"
            )

    @classmethod
    def from_parameters(cls, parameters: Parameters) -> ConditionalGaussianBicParams:
        return cls(
            penalty_discount=parameters.get_double(Params.PENALTY_DISCOUNT),
            structure_prior=parameters.get_double(Params.STRUCTURE_PRIOR),
            discretize=parameters.get_boolean(Params.DISCRETIZE),
            num_categories_to_discretize=parameters.get_int(Params.NUM_CATEGORIES_TO_DISCRETIZE),
        )


@register_score
class ConditionalGaussianBicScore(ScoreWrapper):
    KEY = "cg-bic-score"
    DESCRIPTION = "Conditional Gaussian BIC Score"
    DATA_TYPE = DataType.MIXED
    PARAMETERS = (
        Params.PENALTY_DISCOUNT,
        Params.STRUCTURE_PRIOR,
        Params.DISCRETIZE,
        Params.NUM_CATEGORIES_TO_DISCRETIZE,
    )

    def _make_score(self, data_model: DataSet, parameters: Parameters) -> Score:
        config = ConditionalGaussianBicParams.from_parameters(parameters)
        score = ConditionalGaussianScore(
            data_model.to_mixed(MIXED_MAX_DISCRETE_CATEGORIES),
            penalty_discount=config.penalty_discount,
            structure_prior=config.structure_prior,
            discretize=config.discretize,
        )
        score.num_categories_to_discretize = config.num_categories_to_discretize
        return score
