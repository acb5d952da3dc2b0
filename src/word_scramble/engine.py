"""Word scramble game engine."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Iterable
from typing import Optional

from .config import WordScrambleSettings
from .constants import MAX_AUTO_FILLS
from .errors import PhaseError
from .hints import reveal_due_hints
from .models import (
    AnswerOutcome,
    GameConfig,
    GameResult,
    GameState,
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
from .scramble import scramble_word
from .telemetry import get_telemetry
from .timer import CountdownTimer
from .words import WordSource, coerce_entries, count_by_level, filter_eligible

logger = logging.getLogger(__name__)


class GameEngine:
    """
    State machine for the timed word-unscramble game.

    Phases: setup -> playing -> result -> (reset) -> setup.

    The engine owns the only copy of the game state. User actions mutate it
    synchronously; the countdown timer calls ``tick()`` once per interval,
    which always reads the state held by the engine at that moment.

    Usage:
        async with GameEngine(words, user=identity) as engine:
            engine.toggle_level(Level.N4)
            result = engine.start_solo_game()
            if not result.success:
                show_notice(result.message)
            engine.select_letter(2)
            ...
            outcome = engine.submit_answer()
            engine.next_question()

    Pass ``auto_tick=False`` to drive ``tick()`` manually (no event loop
    required).
    """

    def __init__(
        self,
        words: Iterable[WordSource],
        *,
        user: Optional[UserIdentity] = None,
        settings: Optional[WordScrambleSettings] = None,
        rng: Optional[random.Random] = None,
        auto_tick: bool = True,
    ):
        """
        Initialize engine.

        Args:
            words: Candidate vocabulary entries (or mappings to validate)
            user: Identity used for the human player's roster entry
            settings: Engine settings; loaded from the environment if omitted
            rng: Random source for shuffles, auto-fill and bots
            auto_tick: Run the countdown on the event loop while playing
        """
        self.settings = settings or WordScrambleSettings()
        self.words: list[WordEntry] = coerce_entries(words)
        self.user = user
        self.rng = rng or random.Random()
        self.config = GameConfig(
            selected_levels=set(self.settings.default_levels),
            time_per_question=self.settings.default_time_per_question,
            total_questions=self.settings.default_total_questions,
        )
        self.opponents = OpponentSimulator(
            rng=self.rng,
            correct_probability=self.settings.bots.correct_probability,
            min_score=self.settings.bots.min_score,
            max_score=self.settings.bots.max_score,
        )

        self._state: GameState = SetupState()
        self._auto_tick = auto_tick
        self._timer = CountdownTimer(
            self.tick, interval=self.settings.tick_interval_seconds
        )
        self._telemetry = get_telemetry()

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def phase(self) -> str:
        return self._state.phase

    @property
    def timer_running(self) -> bool:
        return self._timer.running

    # Configuration

    def eligible_words(self) -> list[WordEntry]:
        """Words playable with the current level selection."""
        return filter_eligible(
            self.words, self.config.selected_levels, self.settings.min_word_length
        )

    def count_by_level(self) -> dict[Level, int]:
        """Playable word counts per level, independent of the selection."""
        return count_by_level(self.words, self.settings.min_word_length)

    def toggle_level(self, level: Level) -> set[Level]:
        """Add or remove ``level`` from the active filter."""
        self._require_setup("change levels")
        levels = set(self.config.selected_levels)
        levels ^= {Level(level)}
        self.config.selected_levels = levels
        return levels

    def set_time_per_question(self, seconds: int) -> None:
        """Set the per-question time limit to one of the presets."""
        self._require_setup("change the time limit")
        self.config.time_per_question = seconds

    def set_total_questions(self, count: int) -> None:
        """Set the number of questions to one of the presets."""
        self._require_setup("change the question count")
        self.config.total_questions = count

    # Game lifecycle

    def start_solo_game(self) -> StartResult:
        """Start a game with only the human player."""
        return self._start(solo=True)

    def start_multiplayer_game(self) -> StartResult:
        """Start a game against simulated opponents."""
        return self._start(solo=False)

    def _start(self, *, solo: bool) -> StartResult:
        self._require_setup("start a game")
        mode = "solo" if solo else "multiplayer"

        rejection = self._check_start()
        if rejection is not None:
            self._telemetry.record_start_rejected(reason=rejection.reason.value)
            logger.warning(
                "Game start rejected",
                extra={"mode": mode, "reason": rejection.reason.value},
            )
            return rejection

        self._require_tick_loop("start a game")

        with self._telemetry.start_span(
            "word_scramble.start_game", attributes={"mode": mode}
        ) as span:
            try:
                questions = self._generate_questions(self.eligible_words())
                players = [Player.from_identity(self.user)]
                if not solo:
                    players.extend(
                        self.opponents.generate_bots(self.settings.bots.count)
                    )

                state = PlayingState(
                    time_per_question=self.config.time_per_question,
                    questions=questions,
                    is_solo_mode=solo,
                    players=players,
                )
                state.reset_question()
            except Exception as exc:
                span.record_exception(exc)
                raise
            self._state = state
            span.set_attribute("question_count", len(questions))

        self._telemetry.record_game_started(mode=mode)
        logger.info(
            "Game started",
            extra={
                "mode": mode,
                "questions": len(questions),
                "players": len(players),
                "time_per_question": state.time_per_question,
            },
        )
        self._start_timer()
        return StartResult(success=True, question_count=len(questions))

    def _check_start(self) -> Optional[StartResult]:
        if not self.config.selected_levels:
            return StartResult(
                success=False,
                reason=StartRejection.NO_LEVEL_SELECTED,
                message="Select at least one level to play.",
            )

        available = len(self.eligible_words())
        required = self.settings.min_eligible_words
        if available < required:
            return StartResult(
                success=False,
                reason=StartRejection.NOT_ENOUGH_WORDS,
                message=f"At least {required} words are needed to play ({available} available).",
            )
        return None

    def _generate_questions(self, pool: list[WordEntry]) -> list[Question]:
        shuffled = list(pool)
        self.rng.shuffle(shuffled)
        questions = []
        for entry in shuffled[: self.config.total_questions]:
            scrambled = scramble_word(entry.word, self.rng)
            questions.append(
                Question(
                    word=entry,
                    scrambled_letters=scrambled.letters,
                    original_positions=scrambled.positions,
                )
            )
        return questions

    def next_question(self) -> None:
        """Advance past a shown result, or finish the game after the last one."""
        state = self._require_playing("advance to the next question")
        if not state.show_result:
            logger.debug("Next question ignored before result is shown")
            return

        if state.has_next_question:
            self._require_tick_loop("advance to the next question")

        self._timer.stop()
        if state.has_next_question:
            state.current_question_index += 1
            state.reset_question()
            logger.debug(
                "Question advanced",
                extra={"question_index": state.current_question_index},
            )
            self._start_timer()
            return

        result = GameResult(
            score=state.score,
            correct_answers=state.correct_answers,
            wrong_answers=state.wrong_answers,
            total_time=state.total_time,
            max_streak=state.max_streak,
            total_questions=len(state.questions),
            is_solo_mode=state.is_solo_mode,
            players=state.players,
        )
        self._state = ResultState(result=result)
        logger.info(
            "Game finished",
            extra={
                "score": result.score,
                "correct_answers": result.correct_answers,
                "wrong_answers": result.wrong_answers,
                "max_streak": result.max_streak,
            },
        )

    def reset_game(self) -> None:
        """Discard the current game and return to setup."""
        self._timer.stop()
        previous = self._state.phase
        self._state = SetupState()
        logger.info("Game reset", extra={"previous_phase": previous})

    def result(self) -> GameResult:
        """Return the final aggregate of a finished game."""
        if not isinstance(self._state, ResultState):
            raise PhaseError("read the result", self._state.phase, "result")
        return self._state.result

    # Player actions

    def select_letter(self, index: int) -> None:
        """Place scrambled letter ``index`` in the first empty slot, or take it back."""
        state = self._require_playing("select a letter")
        if not 0 <= index < len(state.current_question):
            raise IndexError(f"Letter index {index} out of range")
        if state.show_result:
            return

        slots = state.selected_letters
        if index in slots:
            position = slots.index(index)
            if position in state.auto_filled_positions:
                return
            slots[position] = None
            return

        if None not in slots:
            return
        slots[slots.index(None)] = index

    def clear_slot(self, position: int) -> None:
        """Remove the letter a player placed in answer slot ``position``."""
        state = self._require_playing("clear a slot")
        if not 0 <= position < len(state.selected_letters):
            raise IndexError(f"Slot {position} out of range")
        if state.show_result or position in state.auto_filled_positions:
            return
        state.selected_letters[position] = None

    def request_auto_fill(self) -> Optional[int]:
        """
        Place one correct letter in a random empty slot.

        Returns:
            The filled slot position, or None when the request was ignored
            (assists exhausted, result shown, or no legal target)
        """
        state = self._require_playing("auto-fill a letter")
        if state.auto_fill_used >= MAX_AUTO_FILLS or state.show_result:
            return None

        empty = [pos for pos, index in enumerate(state.selected_letters) if index is None]
        if not empty:
            return None

        question = state.current_question
        position = self.rng.choice(empty)
        correct_letter = question.answer[position]
        used = set(state.placed_indices)
        scrambled_index = next(
            (
                i
                for i, letter in enumerate(question.scrambled_letters)
                if letter == correct_letter and i not in used
            ),
            None,
        )
        if scrambled_index is None:
            return None

        state.selected_letters[position] = scrambled_index
        state.auto_filled_positions.add(position)
        state.auto_fill_used += 1
        self._telemetry.record_auto_fill(use=state.auto_fill_used)
        logger.debug(
            "Auto-filled letter",
            extra={"position": position, "uses": state.auto_fill_used},
        )
        return position

    def current_penalty(self) -> float:
        """Cumulative auto-fill penalty fraction for the current question."""
        if not isinstance(self._state, PlayingState):
            return 0.0
        return auto_fill_penalty(self._state.auto_fill_used)

    def submit_answer(self) -> Optional[AnswerOutcome]:
        """
        Check the assembled word and score it.

        Returns:
            The outcome, or None if a slot is still empty or the result is
            already shown
        """
        state = self._require_playing("submit an answer")
        if state.show_result or not state.is_answer_complete:
            return None

        with self._telemetry.start_span("word_scramble.submit_answer") as span:
            try:
                question = state.current_question
                candidate = state.candidate_word
                is_correct = candidate == question.answer
                elapsed = state.time_per_question - state.time_remaining
                prior_streak = state.streak
                penalty = auto_fill_penalty(state.auto_fill_used)
                score_gained = (
                    calculate_score(
                        state.time_remaining,
                        state.time_per_question,
                        prior_streak,
                        penalty,
                    )
                    if is_correct
                    else 0
                )

                state.is_correct = is_correct
                state.show_result = True
                state.last_score_gained = score_gained
                state.score += score_gained
                state.total_time += elapsed
                if is_correct:
                    state.correct_answers += 1
                    state.streak = prior_streak + 1
                else:
                    state.wrong_answers += 1
                    state.streak = 0
                state.max_streak = max(state.max_streak, state.streak)

                human = state.human_player
                human.score += score_gained
                if is_correct:
                    human.correct_answers += 1
                if not state.is_solo_mode:
                    self.opponents.simulate_round(state.players)
                state.players.sort(key=lambda player: player.score, reverse=True)

                span.set_attribute("correct", is_correct)
                span.set_attribute("score_gained", score_gained)
            except Exception as exc:
                span.record_exception(exc)
                raise

        self._timer.stop()
        self._telemetry.record_answer(correct=is_correct, score_gained=score_gained)
        logger.info(
            "Answer submitted",
            extra={
                "question_index": state.current_question_index,
                "correct": is_correct,
                "score_gained": score_gained,
                "streak": state.streak,
                "penalty": penalty,
            },
        )
        return AnswerOutcome(
            is_correct=is_correct,
            candidate=candidate,
            answer=question.answer,
            score_gained=score_gained,
            penalty_fraction=penalty,
            streak=state.streak,
        )

    # Countdown

    def tick(self) -> bool:
        """
        Advance the question clock by one second.

        Reveals hints whose elapsed-time threshold has been reached and
        times the question out at zero.

        Returns:
            Whether the countdown should keep running
        """
        state = self._state
        if not isinstance(state, PlayingState) or state.show_result:
            return False

        state.time_remaining = max(0, state.time_remaining - 1)
        elapsed = state.time_per_question - state.time_remaining
        revealed = reveal_due_hints(
            state.hints, state.current_question, elapsed, state.time_per_question
        )
        if revealed:
            logger.debug(
                "Hints revealed",
                extra={"hints": [index + 1 for index in revealed], "elapsed": elapsed},
            )

        if state.time_remaining > 0:
            return True

        state.show_result = True
        state.is_correct = False
        state.wrong_answers += 1
        state.total_time += state.time_per_question
        state.streak = 0
        self._timer.stop()
        self._telemetry.record_timeout()
        logger.info(
            "Question timed out",
            extra={"question_index": state.current_question_index},
        )
        return False

    def _start_timer(self) -> None:
        if self._auto_tick:
            self._timer.start()

    def _require_tick_loop(self, action: str) -> None:
        """Fail before any state change when the countdown has no loop to run on."""
        if not self._auto_tick:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError(
                f"Cannot {action} without a running event loop "
                "(use auto_tick=False to drive tick() manually)"
            ) from e

    # Guards

    def _require_setup(self, action: str) -> SetupState:
        if not isinstance(self._state, SetupState):
            raise PhaseError(action, self._state.phase, "setup")
        return self._state

    def _require_playing(self, action: str) -> PlayingState:
        if not isinstance(self._state, PlayingState):
            raise PhaseError(action, self._state.phase, "playing")
        return self._state

    # Teardown

    async def aclose(self) -> None:
        """Stop the countdown and wait for it to finish."""
        await self._timer.aclose()

    async def __aenter__(self) -> "GameEngine":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
