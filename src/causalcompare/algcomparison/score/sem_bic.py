from __future__ import annotations

from dataclasses import dataclass

from causalcompare.algcomparison.score.base import ScoreWrapper
from causalcompare.algcomparison.score.registry import register_score
from causalcompare.model.data import DataSet, DataType
from causalcompare.model.parameters import Parameters
from causalcompare.model.params import Params
from causalcompare.stats import Score, SemBicScore


@dataclass(frozen=True)
class SemBicParams:
    penalty_discount: float
    structure_prior: float

    def __post_init__(self) -> None:
        if self.penalty_discount < 0:
            raise ValueError(f"penaltyDiscount must be >= 0, got {self.penalty_discount}")
        if self.structure_prior < 0:
            raise ValueError(f"structurePrior must be >= 0, got {self.structure_prior}")

    @classmethod
    def from_parameters(cls, parameters: Parameters) -> SemBicParams:
        return cls(
            penalty_discount=parameters.get_double(Params.PENALTY_DISCOUNT),
            structure_prior=parameters.get_double(Params.STRUCTURE_PRIOR),
        )


@register_score
class SemBicScoreWrapper(ScoreWrapper):
    KEY = "sem-bic-score"
    DESCRIPTION = "Sem BIC Score"
    DATA_TYPE = DataType.CONTINUOUS
    PARAMETERS = (Params.PENALTY_DISCOUNT, Params.STRUCTURE_PRIOR)

    def _make_score(self, data_model: DataSet, parameters: Parameters) -> Score:
        config = SemBicParams.from_parameters(parameters)
        return SemBicScore(data_model, config.penalty_discount, config.structure_prior)
