"""Simulated opponents for multiplayer mode."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .constants import (
    BOT_AVATARS,
    BOT_CORRECT_PROBABILITY,
    BOT_MAX_SCORE,
    BOT_MIN_SCORE,
    BOT_NAMES,
    BOT_ROLE,
)
from .models import Player

logger = logging.getLogger(__name__)


class OpponentSimulator:
    """
    Generates bot players and their per-round results.

    Each bot answers independently: correct with ``correct_probability``,
    gaining a uniform integer score in ``[min_score, max_score)``. The human
    player is never modified.

    Usage:
        simulator = OpponentSimulator(rng=random.Random(7))
        players = [human, *simulator.generate_bots(4)]
        simulator.simulate_round(players)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        correct_probability: float = BOT_CORRECT_PROBABILITY,
        min_score: int = BOT_MIN_SCORE,
        max_score: int = BOT_MAX_SCORE,
    ):
        """
        Initialize simulator.

        Args:
            rng: Random source, injectable for deterministic tests
            correct_probability: Chance that a bot answers correctly
            min_score: Lowest score for a correct bot answer
            max_score: Exclusive upper bound for a correct bot answer
        """
        if max_score <= min_score:
            raise ValueError("max_score must be greater than min_score")
        self.rng = rng or random.Random()
        self.correct_probability = max(0.0, min(1.0, correct_probability))
        self.min_score = min_score
        self.max_score = max_score

    def generate_bots(self, count: int) -> list[Player]:
        """Create ``count`` bots cycling through the name and avatar pools."""
        return [
            Player(
                id=f"bot-{i + 1}",
                name=BOT_NAMES[i % len(BOT_NAMES)],
                avatar=BOT_AVATARS[i % len(BOT_AVATARS)],
                role=BOT_ROLE,
            )
            for i in range(max(0, count))
        ]

    def simulate_round(self, players: list[Player]) -> dict[str, int]:
        """
        Advance every bot by one answer.

        Returns:
            Points gained per bot id
        """
        gained: dict[str, int] = {}
        for player in players:
            if player.is_current_user:
                continue
            if self.rng.random() < self.correct_probability:
                points = self.rng.randrange(self.min_score, self.max_score)
                player.score += points
                player.correct_answers += 1
            else:
                points = 0
            gained[player.id] = points

        logger.debug("Simulated opponent round", extra={"gained": gained})
        return gained
