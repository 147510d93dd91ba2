"""Pick a winning city from scored candidates, or none when ambiguous."""

import logging
from typing import List, Optional, Sequence

from city_resolver.models import CityRecord, ScoredCandidate

logger = logging.getLogger(__name__)

MIN_SCORE = 40
MIN_MARGIN = 10
HIGH_CONFIDENCE_SCORE = 60


def rank(candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    # sorted() is stable, so ties keep gazetteer order.
    return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)


def decide(candidates: Sequence[ScoredCandidate]) -> Optional[CityRecord]:
    ranked = rank(candidates)
    if not ranked:
        logger.info("No matching city found in gazetteer")
        return None

    best = ranked[0]
    second_score = ranked[1].score if len(ranked) > 1 else 0

    if best.score > MIN_SCORE and (best.score - second_score > MIN_MARGIN or len(ranked) == 1):
        logger.info("Best city match: %s (score: %d)", best.city.name, best.score)
        return best.city
    if best.score > HIGH_CONFIDENCE_SCORE:
        logger.info("High confidence city match: %s (score: %d)", best.city.name, best.score)
        return best.city

    logger.info(
        "Low confidence city match: %s (score: %d, runner-up: %d)", best.city.name, best.score, second_score
    )
    return None
