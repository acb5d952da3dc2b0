"""Letter scrambling for a single word."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class ScrambledWord:
    """Scrambled letters and the source position of each one."""

    letters: tuple[str, ...]
    positions: tuple[int, ...]


def scramble_word(word: str, rng: Optional[random.Random] = None) -> ScrambledWord:
    """
    Shuffle the letters of ``word``.

    Uses a Fisher-Yates shuffle over the letter positions. When the shuffle
    yields the identity permutation of a word with more than one letter, the
    first two positions are swapped so the permutation itself always changes.
    Repeated letters may still land where an equal letter was.

    Args:
        word: Word to scramble
        rng: Random source; defaults to a freshly seeded generator

    Returns:
        ScrambledWord where ``letters[i] == word[positions[i]]``
    """
    rng = rng or random.Random()
    positions = list(range(len(word)))

    for i in range(len(positions) - 1, 0, -1):
        j = rng.randint(0, i)
        positions[i], positions[j] = positions[j], positions[i]

    if len(positions) > 1 and all(pos == idx for idx, pos in enumerate(positions)):
        positions[0], positions[1] = positions[1], positions[0]

    return ScrambledWord(
        letters=tuple(word[pos] for pos in positions),
        positions=tuple(positions),
    )
