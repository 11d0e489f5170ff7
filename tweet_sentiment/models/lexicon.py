# lexicon.py
"""Frequency lexicon: per-token positive/negative counts and a net-count scorer."""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config import MIN_TOKEN_LENGTH, NEGATIVE, POSITIVE
from ..core.text_value import TextValue
from ..core.tokenizer import tokenize


class WordStat:
    """Occurrence counts of one token in positive and negative training texts."""

    __slots__ = ("positive", "negative")

    def __init__(self, positive: int = 0, negative: int = 0):
        self.positive = positive
        self.negative = negative

    @property
    def net(self) -> int:
        return self.positive - self.negative

    def copy(self) -> "WordStat":
        return WordStat(self.positive, self.negative)

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordStat):
            return NotImplemented
        return (self.positive, self.negative) == (other.positive, other.negative)

    def __repr__(self) -> str:
        return f"WordStat(positive={self.positive}, negative={self.negative})"


def classify_score(score: int) -> int:
    """Strictly positive scores are positive; ties and negatives are negative."""
    return POSITIVE if score > 0 else NEGATIVE


def _key(token) -> TextValue:
    return token if isinstance(token, TextValue) else TextValue(token)


class LexiconModel:
    """
    Mapping token -> WordStat, built by ``update`` and read by ``score``.

    Entries are never removed and counts only grow. Keys are private copies
    of the tokens passed in, so callers may keep mutating their own values.
    """

    def __init__(self, min_token_length: int = MIN_TOKEN_LENGTH):
        self.min_token_length = min_token_length
        self._stats: Dict[TextValue, WordStat] = {}

    def update(self, token: TextValue, is_positive: bool) -> None:
        token = _key(token)
        if len(token) < self.min_token_length:
            return
        stat = self._stats.get(token)
        if stat is None:
            stat = self._stats[TextValue(token)] = WordStat()
        if is_positive:
            stat.positive += 1
        else:
            stat.negative += 1

    def update_all(self, tokens: Iterable[TextValue], is_positive: bool) -> None:
        for token in tokens:
            self.update(token, is_positive)

    def score(self, tokens: Iterable[TextValue]) -> int:
        """Sum of (positive - negative) over known tokens; unknown tokens add 0."""
        total = 0
        for token in tokens:
            stat = self._stats.get(_key(token))
            if stat is not None:
                total += stat.net
        return total

    def classify(self, tokens: Iterable[TextValue]) -> int:
        return classify_score(self.score(tokens))

    def get(self, token: TextValue) -> Optional[WordStat]:
        stat = self._stats.get(_key(token))
        return stat.copy() if stat is not None else None

    def merge(self, other: "LexiconModel") -> "LexiconModel":
        """Add another model's counts into this one."""
        for token, stat in other._stats.items():
            mine = self._stats.get(token)
            if mine is None:
                mine = self._stats[TextValue(token)] = WordStat()
            mine.positive += stat.positive
            mine.negative += stat.negative
        return self

    def most_polar(self, n: int = 20) -> Tuple[List[Tuple[TextValue, int]], List[Tuple[TextValue, int]]]:
        """
        The ``n`` tokens with the highest and the lowest net count.

        Ties are broken by token order so the result is stable.
        """
        items = sorted(self._stats.items(), key=lambda kv: (-kv[1].net, kv[0]))
        positive = [(tok.copy(), st.net) for tok, st in items if st.net > 0][:n]
        negative = sorted(
            ((tok.copy(), st.net) for tok, st in items if st.net < 0),
            key=lambda kv: (kv[1], kv[0]),
        )[:n]
        return positive, negative

    def items(self):
        for token, stat in sorted(self._stats.items(), key=lambda kv: kv[0]):
            yield token.copy(), stat.copy()

    def __contains__(self, token) -> bool:
        return _key(token) in self._stats

    def __len__(self) -> int:
        return len(self._stats)


class LexiconSentiment:
    """Wraps LexiconModel as a fit/predict estimator over raw texts.

    params:
      - min_token_length: tokens shorter than this are not counted (default 2)
    """

    def __init__(self, **params: Dict[str, Any]):
        self.p = params
        self.model: Optional[LexiconModel] = None

    def fit(self, texts, y):
        self.model = LexiconModel(
            min_token_length=self.p.get("min_token_length", MIN_TOKEN_LENGTH)
        )
        for text, label in zip(texts, y):
            self.model.update_all(tokenize(text), int(label) == POSITIVE)
        return self

    def predict(self, texts) -> List[int]:
        if self.model is None:
            raise ValueError("LexiconSentiment must be fitted before predict()")
        return [self.model.classify(tokenize(t)) for t in texts]

    def decision_function(self, texts) -> List[int]:
        if self.model is None:
            raise ValueError("LexiconSentiment must be fitted before decision_function()")
        return [self.model.score(tokenize(t)) for t in texts]


def create_lexicon_factory():
    def factory(params: Dict[str, Any]):
        return LexiconSentiment(**params)

    return factory
