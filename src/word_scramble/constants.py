"""Fixed game rules for the word scramble engine."""

from __future__ import annotations

from typing import Final

BASE_SCORE: Final[int] = 100
MAX_TIME_BONUS: Final[int] = 100
STREAK_BONUS_PER_ANSWER: Final[int] = 10

# Cost of each successive auto-fill, summed (not capped) per question
AUTO_FILL_PENALTIES: Final[tuple[float, ...]] = (0.2, 0.4, 0.6)
MAX_AUTO_FILLS: Final[int] = len(AUTO_FILL_PENALTIES)

# Elapsed-time percentages at which hints 1, 2 and 3 are revealed
HINT_THRESHOLDS_PERCENT: Final[tuple[int, ...]] = (45, 60, 75)

TIME_PRESETS: Final[tuple[int, ...]] = (15, 20, 30, 45, 60)
QUESTION_PRESETS: Final[tuple[int, ...]] = (5, 10, 15, 20)

DEFAULT_TIME_PER_QUESTION: Final[int] = 30
DEFAULT_TOTAL_QUESTIONS: Final[int] = 10
MIN_WORD_LENGTH: Final[int] = 2
MIN_ELIGIBLE_WORDS: Final[int] = 3

BOT_NAMES: Final[tuple[str, ...]] = (
    "Sakura",
    "Yuki",
    "Hana",
    "Ryu",
    "Kenji",
    "Akira",
    "Mei",
    "Kaito",
    "Sora",
    "Haruki",
    "Aoi",
    "Rin",
)
BOT_AVATARS: Final[tuple[str, ...]] = (
    "🤖",
    "🎭",
    "🎪",
    "🎨",
    "🎯",
    "🎲",
    "🎮",
    "👾",
    "🦊",
    "🐱",
    "🐼",
)
DEFAULT_BOT_COUNT: Final[int] = 4
BOT_CORRECT_PROBABILITY: Final[float] = 0.6
BOT_MIN_SCORE: Final[int] = 50
BOT_MAX_SCORE: Final[int] = 200  # exclusive

DEFAULT_PLAYER_ID: Final[str] = "user"
DEFAULT_PLAYER_NAME: Final[str] = "You"
DEFAULT_PLAYER_AVATAR: Final[str] = "👤"
DEFAULT_PLAYER_ROLE: Final[str] = "user"
BOT_ROLE: Final[str] = "bot"
