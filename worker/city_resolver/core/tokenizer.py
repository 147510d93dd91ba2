"""Word and postal-code extraction used by the auxiliary scoring rules."""

import re
from typing import List, Optional, Tuple

_WORD_SPLIT = re.compile(r"[\s,\n]+")
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_POSTAL_CODE = re.compile(r"\b(\d{5})\b", re.ASCII)


def extract_words(address: str) -> List[str]:
    return [
        _NON_WORD.sub("", word.lower())
        for word in _WORD_SPLIT.split(address)
        if len(word.strip()) > 2
    ]


def extract_postal_code(address: str) -> Optional[str]:
    match = _POSTAL_CODE.search(address)
    return match.group(1) if match else None


def tokenize(address: str) -> Tuple[List[str], Optional[str]]:
    return extract_words(address), extract_postal_code(address)
