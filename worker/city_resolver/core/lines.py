"""Split an address into content lines, dropping trailing phone/contact lines.

Shipping addresses are written as name / street lines / city line / phone
line(s). Once the phone lines are stripped the city line is the last line,
which is where scoring looks first.
"""

import re
from typing import List, Tuple

_SEPARATORS = re.compile(r"[\s,/]+")
_NON_DIGITS = re.compile(r"\D", re.ASCII)
_PHONE_DIGITS = re.compile(r"^\+?\d{7,12}$", re.ASCII)
_DIGIT_RUN = re.compile(r"\d{7,}", re.ASCII)


def is_contact_line(line: str) -> bool:
    """True when every token on the line looks like a 7-12 digit phone number."""
    tokens = [token for token in _SEPARATORS.sub(" ", line.strip()).split(" ") if token]
    if not tokens:
        return False
    return all(
        _PHONE_DIGITS.match(_NON_DIGITS.sub("", token)) and _DIGIT_RUN.search(token)
        for token in tokens
    )


def classify_lines(address: str) -> Tuple[List[str], List[str]]:
    """Return ``(content_lines, reversed_content_lines)`` for ``address``.

    At least one line always survives, even if it looks like a phone number.
    """
    lines = [line for line in address.split("\n") if line.strip()]
    while len(lines) > 1 and is_contact_line(lines[-1]):
        lines.pop()
    return lines, lines[::-1]
