# tokenizer.py
"""Lowercase word tokenization on a fixed punctuation/space delimiter set."""
from typing import List, Union

from ..config import TOKEN_DELIMITERS
from .text_value import TextValue

_DELIMITERS = frozenset(TOKEN_DELIMITERS)


def is_delimiter(c: int) -> bool:
    return c in _DELIMITERS


def tokenize(text: Union[str, TextValue]) -> List[TextValue]:
    """
    Split ``text`` into lowercase tokens.

    Runs of delimiter bytes separate tokens and never appear in them; empty
    tokens are not produced. Only ASCII letters are case-folded, so bytes of
    multi-byte characters pass through untouched.

    >>> [str(t) for t in tokenize("Hello, World!")]
    ['hello', 'world']
    """
    tokens: List[TextValue] = []
    current = bytearray()

    for c in TextValue(text).lower():
        if c in _DELIMITERS:
            if current:
                tokens.append(TextValue(current))
                current.clear()
        else:
            current.append(c)

    if current:
        tokens.append(TextValue(current))
    return tokens
