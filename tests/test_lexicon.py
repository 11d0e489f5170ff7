import pytest

from tweet_sentiment.config import NEGATIVE, POSITIVE
from tweet_sentiment.core.text_value import TextValue
from tweet_sentiment.core.tokenizer import tokenize
from tweet_sentiment.models.lexicon import (
    LexiconModel,
    LexiconSentiment,
    WordStat,
    classify_score,
)
from tweet_sentiment.models.models_registry import expand_grid, get_factory_and_grid


@pytest.fixture
def good_bad():
    model = LexiconModel()
    model.update_all(tokenize("good"), True)
    model.update_all(tokenize("bad"), False)
    return model


def test_scores(good_bad):
    assert good_bad.score(tokenize("good")) == 1
    assert good_bad.score(tokenize("bad")) == -1
    assert good_bad.score(tokenize("unseen")) == 0
    assert good_bad.score(tokenize("good bad")) == 0
    assert good_bad.score([]) == 0


def test_tie_resolves_negative(good_bad):
    assert good_bad.classify(tokenize("good bad")) == NEGATIVE
    assert good_bad.classify(tokenize("good")) == POSITIVE
    assert classify_score(0) == NEGATIVE
    assert classify_score(-3) == NEGATIVE
    assert classify_score(1) == POSITIVE


def test_short_tokens_are_ignored():
    model = LexiconModel()
    model.update(TextValue("a"), True)
    model.update(TextValue(""), True)
    model.update(TextValue("ok"), True)
    assert len(model) == 1
    assert "a" not in model
    assert "ok" in model


def test_counts_accumulate_per_polarity():
    model = LexiconModel()
    for positive in (True, True, False):
        model.update(TextValue("meh"), positive)
    assert model.get("meh") == WordStat(2, 1)
    assert model.get("missing") is None


def test_keys_are_private_copies():
    model = LexiconModel()
    token = TextValue("fine")
    model.update(token, True)
    token[0] = ord("l")
    assert "fine" in model
    assert "line" not in model


def test_merge_sums_pairs():
    a, b = LexiconModel(), LexiconModel()
    a.update_all(tokenize("happy happy sad"), True)
    b.update_all(tokenize("happy sad"), False)
    b.update_all(tokenize("new"), True)
    a.merge(b)
    assert a.get("happy") == WordStat(2, 1)
    assert a.get("sad") == WordStat(1, 1)
    assert a.get("new") == WordStat(1, 0)


def test_most_polar():
    model = LexiconModel()
    model.update_all(tokenize("great great great nice"), True)
    model.update_all(tokenize("awful awful meh"), False)
    pos, neg = model.most_polar(2)
    assert [(str(t), c) for t, c in pos] == [("great", 3), ("nice", 1)]
    assert [(str(t), c) for t, c in neg] == [("awful", -2), ("meh", -1)]


def test_estimator_fit_predict():
    est = LexiconSentiment(min_token_length=2)
    est.fit(["love it", "hate it", "love love"], [4, 0, 4])
    assert est.predict(["I love this", "pure hate", "nothing known"]) == [4, 0, 0]
    assert est.decision_function(["love"]) == [3]


def test_estimator_requires_fit():
    with pytest.raises(ValueError):
        LexiconSentiment().predict(["x"])


def test_registry():
    factory, grid = get_factory_and_grid("lexicon", fast=True)
    assert grid == [{"min_token_length": 2}]
    assert isinstance(factory(grid[0]), LexiconSentiment)
    _, full = get_factory_and_grid("LEXICON", fast=False)
    assert len(full) == 3
    with pytest.raises(ValueError):
        get_factory_and_grid("electra")
    assert expand_grid({"a": [1, 2], "b": [3]}) == [{"a": 1, "b": 3}, {"a": 2, "b": 3}]
