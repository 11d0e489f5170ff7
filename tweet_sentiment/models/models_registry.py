# models_registry.py
from itertools import product
from typing import Any, Dict, List, Tuple

from ..config import LEXICON_GRID, LEXICON_GRID_FAST
from .lexicon import create_lexicon_factory


def expand_grid(grid: Dict[str, List[Any]]) -> List[Dict[str, Any]]:
    """{"a": [1, 2], "b": [3]} -> [{"a": 1, "b": 3}, {"a": 2, "b": 3}]"""
    keys = list(grid)
    return [dict(zip(keys, values)) for values in product(*(grid[k] for k in keys))]


def get_factory_and_grid(model: str, fast: bool = True) -> Tuple:
    """
    Return (factory, param_grid). factory: params(dict) -> estimator
    param_grid: List[dict]
    """
    model = model.lower()

    if model in {"lexicon", "frequency", "lex"}:
        grid = LEXICON_GRID_FAST if fast else LEXICON_GRID
        return create_lexicon_factory(), expand_grid(grid)

    raise ValueError(f"Unknown model: {model}")
