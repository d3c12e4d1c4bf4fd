"""
The STATS layer holds the statistical procedures the plugins delegate to:
independence tests and decomposable scores over a `DataSet`.
It has NO knowledge of `Parameters`; plugins pass plain values in.
"""
from causalcompare.stats.score import Score
from causalcompare.stats.fisher_z import IndTestFisherZ, IndTestScore
from causalcompare.stats.sem_bic import SemBicScore
from causalcompare.stats.conditional_gaussian import ConditionalGaussianScore

__all__ = [
    "Score",
    "IndTestFisherZ",
    "IndTestScore",
    "SemBicScore",
    "ConditionalGaussianScore",
]
