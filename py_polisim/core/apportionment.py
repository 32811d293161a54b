"""
Largest-remainder apportionment.

Several parts of the simulation must turn fractional shares into integers
that add up to an exact total: demographic percentages, polling, budget
shares and seat populations. They all go through ``largest_remainder`` so
the tie-breaking rules are written down once.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import structlog

logger = structlog.get_logger()


def largest_remainder(
    weights: Sequence[float],
    total: int,
    minimum: int = 0,
    tie_keys: Optional[Sequence[Sequence[float]]] = None,
) -> List[int]:
    """
    Apportion ``total`` integer units across ``weights``.

    Every bucket first receives ``minimum`` units (as far as the total
    allows). The rest is split proportionally to the weights, floored, and
    the leftover units are handed out one at a time in order of:

        1. fractional remainder, descending
        2. weight, descending
        3. each entry of ``tie_keys``, descending
        4. original index, ascending

    When all weights are zero the remaining units are split evenly and the
    leftover goes to the earliest buckets.

    Args:
        weights: Non-negative weight per bucket. Negative values count as 0.
        total: Units to distribute.
        minimum: Floor applied to every bucket.
        tie_keys: Optional extra per-bucket keys used after weight.

    Returns:
        List of ints with ``sum == total``.
    """
    if total < 0:
        raise ValueError("total must be non-negative")

    n = len(weights)
    if n == 0:
        return []

    w = np.clip(np.asarray(weights, dtype=np.float64), 0.0, None)
    w[~np.isfinite(w)] = 0.0

    floor_each = max(0, min(int(minimum), total // n))
    result = np.full(n, floor_each, dtype=np.int64)
    remaining = total - floor_each * n

    weight_sum = float(w.sum())
    if weight_sum <= 0:
        base, extra = divmod(remaining, n)
        result += base
        result[:extra] += 1
        return result.tolist()

    exact = w / weight_sum * remaining
    floored = np.floor(exact).astype(np.int64)
    result += floored
    leftover = remaining - int(floored.sum())

    if leftover > 0:
        fractions = exact - floored
        extra_keys = [np.asarray(k, dtype=np.float64) for k in (tie_keys or [])]
        # np.lexsort sorts by the last key first, ascending
        sort_keys = [np.arange(n)]
        sort_keys.extend(-k for k in reversed(extra_keys))
        sort_keys.append(-w)
        sort_keys.append(-np.round(fractions, 12))
        order = np.lexsort(sort_keys)
        for idx in order[:leftover]:
            result[idx] += 1

    return result.tolist()


def normalize_by_sum(
    values: Sequence[float], target: float = 100, precision: int = 0
) -> List[float]:
    """
    Scale ``values`` so they sum to ``target`` at ``precision`` decimals.

    Rounding drift is absorbed by the bucket with the largest original
    value. An all-zero input is returned unchanged.
    """
    data = np.asarray(values, dtype=np.float64)
    current = float(data.sum())
    if current == 0 or len(data) == 0:
        return [float(v) for v in data]

    scaled = np.round(data / current * target, precision)
    diff = round(target - float(scaled.sum()), precision)
    if diff != 0:
        scaled[int(np.argmax(data))] += diff
    out = np.round(scaled, precision)
    if precision == 0:
        return [int(v) for v in out]
    return [float(v) for v in out]


def apportion_percentages(values: Sequence[float], minimum: int = 0) -> List[int]:
    """Integer percentages summing to exactly 100."""
    return largest_remainder(values, 100, minimum=minimum)
