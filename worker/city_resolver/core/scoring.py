"""Multi-criterion scoring of gazetteer cities against an address.

Each rule adds to an integer score; the weights and the thresholds in
``decision`` were tuned together and must change together.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from city_resolver.models import CityRecord, ScoredCandidate

logger = logging.getLogger(__name__)

# Weights for reversed_content_lines[0..2]; index 0 is the city line.
LINE_CITY_WEIGHTS = (150, 80, 40)
LINE_DISTRICT_WEIGHTS = (40, 20, 10)
LINE_ZONE_WEIGHTS = (30, 15, 5)
EXACT_LINE_BONUS = 80
ENDS_WITH_BONUS = 40
STARTS_WITH_BONUS = 20


def _positional_score(name: str, district: str, zone: str, reversed_lines: Sequence[str]) -> int:
    score = 0
    for i, raw_line in enumerate(reversed_lines[: len(LINE_CITY_WEIGHTS)]):
        line = raw_line.lower()
        trimmed = line.strip()
        if name in line:
            score += LINE_CITY_WEIGHTS[i]
            if trimmed == name:
                score += EXACT_LINE_BONUS
            if trimmed.endswith(name):
                score += ENDS_WITH_BONUS
            if trimmed.startswith(name):
                score += STARTS_WITH_BONUS
        if district and district in line:
            score += LINE_DISTRICT_WEIGHTS[i]
        if zone and zone in line:
            score += LINE_ZONE_WEIGHTS[i]
    return score


def _any_line_score(name: str, reversed_lines: Sequence[str]) -> int:
    return sum(max(3, 15 - 5 * i) for i, line in enumerate(reversed_lines) if name in line.lower())


def _word_score(name: str, words: Iterable[str]) -> int:
    score = 0
    for word in words:
        if word == name:
            score += 50
        elif word in name and len(word) > 3:
            score += 15
        elif name in word and len(name) > 3:
            score += 10
    return score


def _postal_score(city_id: Optional[int], postal_code: Optional[str]) -> int:
    if not postal_code or not city_id:
        return 0
    city_id_str = str(city_id)
    score = 0
    if postal_code.startswith(city_id_str[:1]):
        score += 25
    if postal_code[:2] == city_id_str[:2]:
        score += 15
    return score


def _district_score(district: str, words: Iterable[str], address_lower: str) -> int:
    if not district:
        return 0
    # Every matching word counts, so multi-word districts accumulate.
    score = sum(10 for word in words if word in district or district in word)
    if district in address_lower:
        score += 15
    return score


def score_city(
    city: CityRecord,
    content_lines: Sequence[str],
    reversed_content_lines: Sequence[str],
    words: Sequence[str],
    address_lower: str,
    postal_code: Optional[str],
) -> int:
    """Score one city against a classified, tokenized address."""
    name = city.name.lower()
    district = (city.district_name or "").lower()
    zone = (city.zone_name or "").lower()

    score = _positional_score(name, district, zone, reversed_content_lines)
    score += _any_line_score(name, reversed_content_lines)
    score += _word_score(name, words)
    score += _postal_score(city.city_id, postal_code)
    score += _district_score(district, words, address_lower)
    if zone and zone in address_lower:
        score += 10
    if content_lines and name in content_lines[0].lower():
        score += 5
    return score


def score_candidates(
    cities: Iterable[CityRecord],
    content_lines: Sequence[str],
    reversed_content_lines: Sequence[str],
    words: Sequence[str],
    address_lower: str,
    postal_code: Optional[str],
) -> List[ScoredCandidate]:
    """Score every city, keeping only positive scores in gazetteer order."""
    candidates: List[ScoredCandidate] = []
    for city in cities:
        score = score_city(city, content_lines, reversed_content_lines, words, address_lower, postal_code)
        if score > 0:
            candidates.append(ScoredCandidate(city=city, score=score))
    logger.debug("Scored %d candidate cities", len(candidates))
    return candidates
