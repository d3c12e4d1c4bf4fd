"""
Parameter Keys & Descriptions
=============================
Centralized metadata for every named parameter a plugin may read from the
shared `Parameters` store.

The descriptions give the UI a label, a default and a valid range for each
key, so editors can be built from a plugin's list of parameter keys alone.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict, Optional, Union

ParamValue = Union[int, float, bool, str]


class Params:
    """String constants for the parameter keys."""
    NUM_TIME_LAGS = "numTimeLags"
    ALPHA = "alpha"
    PENALTY_DISCOUNT = "penaltyDiscount"
    STRUCTURE_PRIOR = "structurePrior"
    DISCRETIZE = "discretize"
    NUM_CATEGORIES_TO_DISCRETIZE = "numCategoriesToDiscretize"
    NUM_RUNS = "numRuns"
    SAMPLE_SIZE = "sampleSize"


@dataclass(frozen=True)
class ParamDescription:
    key: str
    short_description: str
    long_description: str
    default: ParamValue
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None

    @property
    def value_type(self) -> type:
        return type(self.default)

    def in_bounds(self, value: float) -> bool:
        if self.lower_bound is not None and value < self.lower_bound:
            return False
        if self.upper_bound is not None and value > self.upper_bound:
            return False
        return True


PARAM_DESCRIPTIONS: Dict[str, ParamDescription] = {
    Params.NUM_TIME_LAGS: ParamDescription(
        key=Params.NUM_TIME_LAGS,
        short_description="Number of time lags",
        long_description="The number of lagged copies of each variable in a time series model.",
        default=1,
        lower_bound=0,
    ),
    Params.ALPHA: ParamDescription(
        key=Params.ALPHA,
        short_description="Cutoff for p values (alpha)",
        long_description="Significance level used by independence tests; p values below it reject independence.",
        default=0.001,
        lower_bound=0.0,
        upper_bound=1.0,
    ),
    Params.PENALTY_DISCOUNT: ParamDescription(
        key=Params.PENALTY_DISCOUNT,
        short_description="Penalty discount",
        long_description="Multiplier of the BIC complexity penalty; larger values give sparser graphs.",
        default=2.0,
        lower_bound=0.0,
    ),
    Params.STRUCTURE_PRIOR: ParamDescription(
        key=Params.STRUCTURE_PRIOR,
        short_description="Structure prior coefficient",
        long_description="Expected number of parents per node; 0 disables the structure prior.",
        default=0.0,
        lower_bound=0.0,
    ),
    Params.DISCRETIZE: ParamDescription(
        key=Params.DISCRETIZE,
        short_description="Discretize continuous parents of discrete children",
        long_description="If true, continuous parents of a discrete child are binned before scoring.",
        default=True,
    ),
    Params.NUM_CATEGORIES_TO_DISCRETIZE: ParamDescription(
        key=Params.NUM_CATEGORIES_TO_DISCRETIZE,
        short_description="Number of categories for discretization",
        long_description="Number of equal-frequency bins used when discretizing continuous variables.",
        default=3,
        lower_bound=2,
    ),
    Params.NUM_RUNS: ParamDescription(
        key=Params.NUM_RUNS,
        short_description="Number of runs",
        long_description="The number of data sets (runs) to generate or load.",
        default=1,
        lower_bound=1,
    ),
    Params.SAMPLE_SIZE: ParamDescription(
        key=Params.SAMPLE_SIZE,
        short_description="Sample size",
        long_description="The number of rows (cases) in each simulated data set.",
        default=1000,
        lower_bound=1,
    ),
}


def get_description(key: str) -> ParamDescription:
    description = PARAM_DESCRIPTIONS.get(key)
    if description is None:
        raise KeyError(f"No description registered for parameter '{key}'")
    return description


def upper_bound_or(description: ParamDescription, fallback: float) -> float:
    """Upper bound of a description, replacing a missing or infinite bound."""
    if description.upper_bound is None or math.isinf(description.upper_bound):
        return fallback
    return description.upper_bound
