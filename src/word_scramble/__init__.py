"""Word Scramble - timed word-unscramble game engine."""

from .config import BotSettings, WordScrambleSettings, configure_logging, load_settings
from .engine import GameEngine
from .errors import PhaseError, WordListError, WordScrambleError
from .models import (
    AnswerOutcome,
    GameConfig,
    GameResult,
    GameState,
    HintState,
    Level,
    Player,
    PlayingState,
    Question,
    ResultState,
    SetupState,
    StartRejection,
    StartResult,
    UserIdentity,
    WordEntry,
)
from .opponents import OpponentSimulator
from .scoring import auto_fill_penalty, calculate_score
from .scramble import ScrambledWord, scramble_word
from .timer import CountdownTimer
from .words import count_by_level, filter_eligible, load_sample_words, load_word_entries
from .__version__ import __version__

__all__ = [
    "GameEngine",
    "WordScrambleSettings",
    "BotSettings",
    "load_settings",
    "configure_logging",
    "WordScrambleError",
    "PhaseError",
    "WordListError",
    "AnswerOutcome",
    "GameConfig",
    "GameResult",
    "GameState",
    "HintState",
    "Level",
    "Player",
    "PlayingState",
    "Question",
    "ResultState",
    "SetupState",
    "StartRejection",
    "StartResult",
    "UserIdentity",
    "WordEntry",
    "OpponentSimulator",
    "calculate_score",
    "auto_fill_penalty",
    "ScrambledWord",
    "scramble_word",
    "CountdownTimer",
    "count_by_level",
    "filter_eligible",
    "load_word_entries",
    "load_sample_words",
    "__version__",
]
