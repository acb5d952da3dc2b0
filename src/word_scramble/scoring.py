"""Scoring rules for answered questions."""

from __future__ import annotations

import math

from .constants import (
    AUTO_FILL_PENALTIES,
    BASE_SCORE,
    MAX_TIME_BONUS,
    STREAK_BONUS_PER_ANSWER,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def auto_fill_penalty(uses: int) -> float:
    """
    Return the cumulative penalty fraction after ``uses`` auto-fills.

    The fraction is the sum of the first ``uses`` entries of
    ``AUTO_FILL_PENALTIES`` and is not capped, so three uses give 1.2.
    """
    uses = max(0, min(uses, len(AUTO_FILL_PENALTIES)))
    return math.fsum(AUTO_FILL_PENALTIES[:uses])


def calculate_score(
    time_remaining: float,
    total_time: float,
    prior_streak: int,
    penalty_fraction: float = 0.0,
) -> int:
    """
    Compute the points awarded for a correct answer.

    Args:
        time_remaining: Seconds left on the question clock
        total_time: Seconds allotted to the question
        prior_streak: Consecutive correct answers before this one
        penalty_fraction: Share of the raw score lost to assists

    Returns:
        Points gained, never negative
    """
    time_bonus = 0
    if total_time > 0:
        remaining = max(0.0, min(float(time_remaining), float(total_time)))
        time_bonus = round_half_up(MAX_TIME_BONUS * remaining / total_time)

    streak_bonus = STREAK_BONUS_PER_ANSWER * max(0, prior_streak)
    raw = BASE_SCORE + time_bonus + streak_bonus
    penalty = round_half_up(raw * max(0.0, penalty_fraction))
    return max(0, raw - penalty)
