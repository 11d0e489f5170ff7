# Lexicon model for tweet sentiment classification

from .lexicon import (
    WordStat,
    LexiconModel,
    LexiconSentiment,
    classify_score,
    create_lexicon_factory,
)
from .models_registry import get_factory_and_grid

__all__ = [
    "WordStat",
    "LexiconModel",
    "LexiconSentiment",
    "classify_score",
    "create_lexicon_factory",
    "get_factory_and_grid",
]
