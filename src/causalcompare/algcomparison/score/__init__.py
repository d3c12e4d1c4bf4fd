"""
Auto-import all score wrapper modules to ensure registration side-effects run.

After importing this package, `list_score_keys()` and `create_score_wrapper()`
will know about all available scores.
"""
from __future__ import annotations

import importlib
import pkgutil

from causalcompare.algcomparison.score.base import DataTypeMismatchError, ScoreWrapper
from causalcompare.algcomparison.score.registry import (
    create_score_wrapper, list_score_keys, register_score, score_descriptions,
)

for _module in pkgutil.iter_modules(__path__, __name__ + "."):
    importlib.import_module(_module.name)

__all__ = [
    "DataTypeMismatchError",
    "ScoreWrapper",
    "create_score_wrapper",
    "list_score_keys",
    "register_score",
    "score_descriptions",
]
