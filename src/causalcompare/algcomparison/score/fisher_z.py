from __future__ import annotations

from dataclasses import dataclass

from causalcompare.algcomparison.score.base import ScoreWrapper
from causalcompare.algcomparison.score.registry import register_score
from causalcompare.model.data import DataSet, DataType
from causalcompare.model.parameters import Parameters
from causalcompare.model.params import Params
from causalcompare.stats import IndTestFisherZ, IndTestScore, Score


@dataclass(frozen=True)
class FisherZParams:
    alpha: float = 0.001

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {self.alpha}")

    @classmethod
    def from_parameters(cls, parameters: Parameters) -> FisherZParams:
        return cls(alpha=parameters.get_double(Params.ALPHA))


@register_score
class FisherZScore(ScoreWrapper):
    """Correlation-based score: a Fisher Z partial-correlation test used as a score."""
    KEY = "fisher-z-score"
    DESCRIPTION = "Fisher Z Score"
    DATA_TYPE = DataType.CONTINUOUS
    PARAMETERS = (Params.ALPHA,)

    def _make_score(self, data_model: DataSet, parameters: Parameters) -> Score:
        config = FisherZParams.from_parameters(parameters)
        return IndTestScore(IndTestFisherZ(data_model, config.alpha))
