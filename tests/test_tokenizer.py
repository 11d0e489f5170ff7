from tweet_sentiment.config import TOKEN_DELIMITERS
from tweet_sentiment.core.text_value import TextValue
from tweet_sentiment.core.tokenizer import is_delimiter, tokenize


def _strs(tokens):
    return [str(t) for t in tokens]


def test_basic_split_and_lowercase():
    assert _strs(tokenize("Hello, World!")) == ["hello", "world"]


def test_only_delimiters_gives_no_tokens():
    assert tokenize("   ") == []
    assert tokenize("") == []
    assert tokenize(TOKEN_DELIMITERS.decode("ascii")) == []


def test_every_delimiter_splits():
    for d in TOKEN_DELIMITERS:
        text = TextValue("ab") + TextValue(bytes([d])) + TextValue("cd")
        assert _strs(tokenize(text)) == ["ab", "cd"], chr(d)


def test_non_delimiters_stay_in_tokens():
    assert _strs(tokenize("it's 2day\tok")) == ["it", "s", "2day\tok"]
    assert is_delimiter(ord("~"))
    assert not is_delimiter(ord("a"))


def test_last_token_flushed_without_trailing_delimiter():
    assert _strs(tokenize("good")) == ["good"]
    assert _strs(tokenize("@user #Tag http://x.co/AB")) == ["user", "tag", "http", "x", "co", "ab"]


def test_stable_across_calls():
    first = tokenize("Same INPUT, same output")
    tokenize("something else entirely")
    assert tokenize("Same INPUT, same output") == first
