# csv_line.py
"""Quote-aware CSV field splitting for tweet dumps."""
from typing import List, Union

from ..config import POSITIVE_MARK
from .text_value import TextValue

_QUOTE = ord('"')
_COMMA = ord(",")


def parse_csv_line(line: Union[str, TextValue], has_label: bool = False) -> List[TextValue]:
    """
    Split one decoded line into fields.

    A double quote toggles the quoted region and is dropped; a comma splits
    fields only outside a quoted region. Doubled quotes are not treated as
    an escape. The trailing field is always emitted, even when empty.

    Args:
        line: One line without its newline
        has_label: Whether the layout starts with a label column; accepted
            for callers that track it, splitting is the same either way

    Returns:
        Fields in order; callers check the count themselves
    """
    fields: List[TextValue] = []
    current = bytearray()
    in_quotes = False

    for c in TextValue(line):
        if c == _QUOTE:
            in_quotes = not in_quotes
            continue
        if c == _COMMA and not in_quotes:
            fields.append(TextValue(current))
            current.clear()
        else:
            current.append(c)

    fields.append(TextValue(current))
    return fields


def is_positive_label(field: TextValue) -> bool:
    """Only the first byte counts: '4' is positive, anything else negative."""
    return len(field) > 0 and field[0] == POSITIVE_MARK
