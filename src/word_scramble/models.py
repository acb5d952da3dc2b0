"""Data models for the word scramble engine.

The engine state is a tagged union discriminated by ``phase``:

- ``SetupState``: waiting for the player to configure and start a game
- ``PlayingState``: a game in progress, including the per-question fields
- ``ResultState``: the final aggregate of a finished game

Per-question fields (answer slots, hints, auto-fill bookkeeping) only exist
on ``PlayingState``, so they cannot be read or written outside a game.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_PLAYER_AVATAR,
    DEFAULT_PLAYER_ID,
    DEFAULT_PLAYER_NAME,
    DEFAULT_PLAYER_ROLE,
    DEFAULT_TIME_PER_QUESTION,
    DEFAULT_TOTAL_QUESTIONS,
    HINT_THRESHOLDS_PERCENT,
    QUESTION_PRESETS,
    TIME_PRESETS,
)
from .scoring import round_half_up


class Level(str, Enum):
    """JLPT proficiency tier, used as a difficulty filter."""

    N5 = "N5"
    N4 = "N4"
    N3 = "N3"
    N2 = "N2"
    N1 = "N1"


class WordEntry(BaseModel):
    """Vocabulary item offered to the engine."""

    word: str = Field(..., min_length=1, description="Display word to unscramble")
    level: Level
    meaning: Optional[str] = Field(
        default=None, description="Comma-separated dictionary meanings"
    )
    reading_hint: Optional[str] = Field(
        default=None, description="Semantic or reading aid shown as the first hint"
    )
    reading: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def first_meaning(self) -> Optional[str]:
        if not self.meaning:
            return None
        first = self.meaning.split(",")[0].strip()
        return first or None


class UserIdentity(BaseModel):
    """Identity of the human player, supplied by the host application."""

    id: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[str] = None


class Player(BaseModel):
    """Roster entry for the human player or a simulated opponent."""

    id: str
    name: str
    avatar: str
    score: int = 0
    correct_answers: int = 0
    is_current_user: bool = False
    role: str = DEFAULT_PLAYER_ROLE

    @classmethod
    def from_identity(cls, identity: Optional[UserIdentity]) -> "Player":
        """Build the human player, filling gaps with defaults."""
        identity = identity or UserIdentity()
        return cls(
            id=identity.id or DEFAULT_PLAYER_ID,
            name=identity.display_name or DEFAULT_PLAYER_NAME,
            avatar=identity.avatar or DEFAULT_PLAYER_AVATAR,
            role=identity.role or DEFAULT_PLAYER_ROLE,
            is_current_user=True,
        )


class GameConfig(BaseModel):
    """Player-chosen settings for the next game."""

    selected_levels: set[Level] = Field(default_factory=lambda: {Level.N5})
    time_per_question: int = DEFAULT_TIME_PER_QUESTION
    total_questions: int = DEFAULT_TOTAL_QUESTIONS

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("time_per_question")
    @classmethod
    def _time_is_preset(cls, value: int) -> int:
        if value not in TIME_PRESETS:
            raise ValueError(f"time_per_question must be one of {TIME_PRESETS}")
        return value

    @field_validator("total_questions")
    @classmethod
    def _count_is_preset(cls, value: int) -> int:
        if value not in QUESTION_PRESETS:
            raise ValueError(f"total_questions must be one of {QUESTION_PRESETS}")
        return value


class Question(BaseModel):
    """One scrambled word to solve."""

    word: WordEntry
    scrambled_letters: tuple[str, ...]
    original_positions: tuple[int, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def answer(self) -> str:
        return self.word.word

    def __len__(self) -> int:
        return len(self.scrambled_letters)


class HintSlot(BaseModel):
    """A single hint; content is frozen once shown."""

    shown: bool = False
    content: str = ""


class HintState(BaseModel):
    """The three time-revealed hints of the current question."""

    slots: list[HintSlot] = Field(
        default_factory=lambda: [HintSlot() for _ in HINT_THRESHOLDS_PERCENT]
    )

    def reveal(self, index: int, content: str) -> bool:
        """Show hint ``index`` with ``content``; return False if already shown."""
        slot = self.slots[index]
        if slot.shown:
            return False
        slot.shown = True
        slot.content = content
        return True

    @property
    def shown_count(self) -> int:
        return sum(1 for slot in self.slots if slot.shown)


class SetupState(BaseModel):
    """No game in progress."""

    phase: Literal["setup"] = "setup"


class PlayingState(BaseModel):
    """Authoritative state of a game in progress."""

    phase: Literal["playing"] = "playing"
    time_per_question: int
    questions: list[Question]
    is_solo_mode: bool
    players: list[Player]

    current_question_index: int = 0
    score: int = 0
    total_time: int = 0
    correct_answers: int = 0
    wrong_answers: int = 0
    streak: int = 0
    max_streak: int = 0

    # Per-question fields, reset on every advance
    time_remaining: int = 0
    selected_letters: list[Optional[int]] = Field(default_factory=list)
    hints: HintState = Field(default_factory=HintState)
    is_correct: Optional[bool] = None
    show_result: bool = False
    last_score_gained: int = 0
    auto_fill_used: int = 0
    auto_filled_positions: set[int] = Field(default_factory=set)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_question_index]

    @property
    def has_next_question(self) -> bool:
        return self.current_question_index + 1 < len(self.questions)

    @property
    def placed_indices(self) -> list[int]:
        """Scrambled-letter indices currently placed, in slot order."""
        return [index for index in self.selected_letters if index is not None]

    @property
    def is_answer_complete(self) -> bool:
        return all(index is not None for index in self.selected_letters)

    @property
    def candidate_word(self) -> str:
        letters = self.current_question.scrambled_letters
        return "".join(letters[index] for index in self.placed_indices)

    @property
    def human_player(self) -> Player:
        return next(player for player in self.players if player.is_current_user)

    def reset_question(self) -> None:
        """Reset the per-question fields for the current question."""
        self.time_remaining = self.time_per_question
        self.selected_letters = [None] * len(self.current_question)
        self.hints = HintState()
        self.is_correct = None
        self.show_result = False
        self.last_score_gained = 0
        self.auto_fill_used = 0
        self.auto_filled_positions = set()


class GameResult(BaseModel):
    """Final aggregate of a finished game."""

    score: int
    correct_answers: int
    wrong_answers: int
    total_time: int
    max_streak: int
    total_questions: int
    is_solo_mode: bool
    players: list[Player]

    @property
    def accuracy(self) -> int:
        """Percentage of questions answered correctly."""
        if self.total_questions <= 0:
            return 0
        return round_half_up(self.correct_answers * 100 / self.total_questions)

    @property
    def average_time(self) -> int:
        """Average seconds spent per question."""
        if self.total_questions <= 0:
            return 0
        return round_half_up(self.total_time / self.total_questions)

    @property
    def user_rank(self) -> Optional[int]:
        """1-based position of the human player in the final standings."""
        for position, player in enumerate(self.players, start=1):
            if player.is_current_user:
                return position
        return None


class ResultState(BaseModel):
    """A finished game awaiting reset."""

    phase: Literal["result"] = "result"
    result: GameResult


GameState = Annotated[
    Union[SetupState, PlayingState, ResultState],
    Field(discriminator="phase"),
]


class StartRejection(str, Enum):
    """Reason a start action was refused."""

    NO_LEVEL_SELECTED = "no_level_selected"
    NOT_ENOUGH_WORDS = "not_enough_words"


class StartResult(BaseModel):
    """Result of a start action."""

    success: bool
    reason: Optional[StartRejection] = None
    message: str = ""
    question_count: int = 0


class AnswerOutcome(BaseModel):
    """Result of submitting an answer."""

    is_correct: bool
    candidate: str
    answer: str
    score_gained: int
    penalty_fraction: float
    streak: int

