"""Ordered qualitative level tables and helpers to step through them."""

from typing import Sequence

ECONOMIC_OUTLOOK_LEVELS = [
    "Recession",
    "Stagnant",
    "Slow Growth",
    "Moderate Growth",
    "Booming",
]

MOOD_LEVELS = [
    "Very Unhappy",
    "Frustrated",
    "Concerned",
    "Content",
    "Optimistic",
    "Prospering",
]

RATING_LEVELS = ["Very Poor", "Poor", "Average", "Good", "Excellent"]

POSSIBLE_POLICY_FOCUSES = [
    "Economic Growth",
    "Public Safety",
    "Education Quality",
    "Infrastructure Development",
    "Healthcare Access",
    "Social Welfare",
]

# Approval delta per MOOD_LEVELS index
MOOD_APPROVAL_DELTAS = [-2, -1, 0, 1, 2, 3]


def level_index(current: str, levels: Sequence[str]) -> int:
    """Index of ``current`` in ``levels``, or the middle when unknown."""
    try:
        return list(levels).index(current)
    except ValueError:
        return len(levels) // 2


def adjust_stat_level(current: str, levels: Sequence[str], change: int) -> str:
    """Move ``change`` steps along ``levels``, clamped to both ends."""
    idx = level_index(current, levels) + int(change)
    idx = max(0, min(len(levels) - 1, idx))
    return levels[idx]


def derive_rating_from_value(
    value: float, thresholds: Sequence[float], labels_best_first: Sequence[str]
) -> str:
    """
    Map a "lower is better" value onto a rating label.

    ``thresholds`` run from best to worst; the first one the value does not
    exceed picks the matching label. Values above every threshold get the
    worst label.
    """
    for i, threshold in enumerate(thresholds):
        if value <= threshold:
            return labels_best_first[i]
    return labels_best_first[-1]


def rating_from_per_capita(per_capita: float, thresholds: Sequence[float]) -> str:
    """Rating for a "higher is better" spend per resident.

    ``thresholds`` are the lower bounds for Excellent, Good, Average and Poor.
    """
    best_first = list(reversed(RATING_LEVELS))
    for i, threshold in enumerate(thresholds):
        if per_capita > threshold:
            return best_first[i]
    return best_first[-1]
