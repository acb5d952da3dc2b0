"""Time-based hint reveal."""

from __future__ import annotations

from .constants import HINT_THRESHOLDS_PERCENT
from .models import HintState, Question

NO_HINT_AVAILABLE = "No hint available"


def hint_content(index: int, question: Question) -> str:
    """Build the text of hint ``index`` (0-based) for ``question``."""
    word = question.word
    if index == 0:
        return word.reading_hint or word.first_meaning or NO_HINT_AVAILABLE
    if index == 1:
        return f'Starts with "{word.word[0]}"'
    if index == 2:
        return f'Ends with "{word.word[-1]}"'
    raise IndexError(f"No hint at index {index}")


def threshold_reached(percent: int, elapsed: int, total: int) -> bool:
    """Return True once ``elapsed`` seconds is at least ``percent`` of ``total``."""
    if total <= 0:
        return True
    return elapsed * 100 >= percent * total


def reveal_due_hints(
    hints: HintState, question: Question, elapsed: int, total: int
) -> list[int]:
    """
    Reveal every hint whose threshold has been crossed.

    Content is computed only when a hint is first shown and never rewritten.

    Returns:
        Indices of the hints revealed by this call
    """
    revealed: list[int] = []
    for index, percent in enumerate(HINT_THRESHOLDS_PERCENT):
        if hints.slots[index].shown or not threshold_reached(percent, elapsed, total):
            continue
        hints.reveal(index, hint_content(index, question))
        revealed.append(index)
    return revealed
