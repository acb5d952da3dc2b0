"""Word scramble engine errors."""

from __future__ import annotations


class WordScrambleError(Exception):
    """Base exception for the word scramble engine."""


class PhaseError(WordScrambleError):
    """Action is not allowed in the engine's current phase."""

    def __init__(self, action: str, phase: str, expected: str):
        """Initialize error with the rejected action and phase details."""
        super().__init__(f"Cannot {action} while {phase} (requires {expected})")
        self.action = action
        self.phase = phase
        self.expected = expected


class WordListError(WordScrambleError):
    """Word list file could not be read or validated."""

    def __init__(self, path: str, message: str):
        """Initialize error with the offending path."""
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
