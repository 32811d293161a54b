"""
Candidate scoring and polling normalization.

A candidate's base score combines incumbency (scaled by citizen mood),
party popularity and agreement with the electorate's policy profile.
Polling turns base scores into whole percentages that always add up to 100.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

import structlog

from ..data.policy_questions import POLICY_QUESTIONS_BY_ID
from .alea_prng import AleaPRNG
from .apportionment import largest_remainder
from .models import City, Politician

logger = structlog.get_logger()

BASE_SCORE = 15
NO_STATS_SCORE = 10
INCUMBENCY_WEIGHT = 2.0
CHALLENGER_MOOD_WEIGHT = 0.5
PARTY_POPULARITY_WEIGHT = 0.3
INDEPENDENT_BONUS = 5
MAIN_ISSUE_MATCH_POINTS = 3
OTHER_MATCH_POINTS = 1
SCORE_JITTER = 3

MOOD_INCUMBENCY_RANGES = {
    "Prospering": (10, 15),
    "Optimistic": (10, 15),
    "Content": (0, 5),
    "Concerned": (-5, 0),
    "Frustrated": (-15, -10),
    "Very Unhappy": (-15, -10),
}
POOR_MOODS = {"Frustrated", "Very Unhappy"}


def _incumbent_ids(election: Any) -> List[str]:
    incumbents = getattr(election, "incumbents", None) or []
    return [p.id for p in incumbents]


def _question_matches_issue(question_id: str, main_issues: Sequence[str]) -> bool:
    question = POLICY_QUESTIONS_BY_ID.get(question_id)
    if not question:
        return False
    category = question["category"].lower()
    text = question["question_text"].lower()
    for issue in main_issues:
        needle = issue.lower()
        if needle in category or needle in text:
            return True
    return False


def policy_alignment_points(
    stances: Dict[str, str], electorate_profile: Dict[str, str], main_issues: Sequence[str]
) -> int:
    """Points for every stance that matches the electorate's preference."""
    points = 0
    for question_id, stance in stances.items():
        if electorate_profile.get(question_id) != stance:
            continue
        if _question_matches_issue(question_id, main_issues):
            points += MAIN_ISSUE_MATCH_POINTS
        else:
            points += OTHER_MATCH_POINTS
    return points


def calculate_base_candidate_score(
    candidate: Politician,
    election: Any,
    city: Optional[City],
    prng: AleaPRNG,
) -> int:
    """
    Score a candidate for one race.

    ``election`` is anything with an ``incumbents`` list: an
    ``ElectionInstance`` or the parameters used to build one. The result is
    always an integer of at least 1.
    """
    if city is None or city.stats is None:
        return NO_STATS_SCORE

    stats = city.stats
    mood = stats.overall_citizen_mood
    incumbent_ids = _incumbent_ids(election)
    score = float(BASE_SCORE)

    if candidate.is_incumbent and candidate.id in incumbent_ids:
        low, high = MOOD_INCUMBENCY_RANGES.get(mood, (0, 0))
        score += prng.randint(low, high) * INCUMBENCY_WEIGHT
    elif incumbent_ids and mood in POOR_MOODS:
        score += prng.randint(0, 5) * INCUMBENCY_WEIGHT * CHALLENGER_MOOD_WEIGHT

    if candidate.is_independent:
        score += INDEPENDENT_BONUS
    else:
        party = next((p for p in city.political_landscape if p.id == candidate.party_id), None)
        if party is not None:
            score += party.popularity * PARTY_POPULARITY_WEIGHT

    score += policy_alignment_points(
        candidate.policy_stances, stats.electorate_policy_profile, stats.main_issues
    )
    score += prng.randint(-SCORE_JITTER, SCORE_JITTER)

    return max(1, math.floor(score + 0.5))


def score_candidates(
    candidates: List[Politician], election: Any, city: Optional[City], prng: AleaPRNG
) -> List[Politician]:
    return [
        c.model_copy(update={"base_score": calculate_base_candidate_score(c, election, city, prng)})
        for c in candidates
    ]


def _safe_score(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 1.0
    if not math.isfinite(value) or value < 0:
        return 1.0
    return float(value)


def normalize_polling(candidates: List[Politician], adult_population: int) -> List[Politician]:
    """
    Convert base scores into polling percentages.

    Each candidate's weight is ``base_score`` times the share of adults who
    recognise them. Shares are apportioned by largest remainder, breaking
    ties on weight and then base score, so the result sums to exactly 100.
    When nobody is recognised the field is split evenly, with leftover
    points going to the earliest candidates.
    """
    if not candidates:
        return []

    adults = max(1, int(adult_population or 0))
    scores = [_safe_score(c.base_score) for c in candidates]
    weights = [
        score * (min(max(0, c.name_recognition), adults) / adults)
        for score, c in zip(scores, candidates)
    ]

    polls = largest_remainder(weights, 100, tie_keys=[scores])
    if sum(weights) <= 0:
        logger.debug("Zero polling weight, splitting evenly", candidates=len(candidates))

    return [c.model_copy(update={"polling": p}) for c, p in zip(candidates, polls)]
