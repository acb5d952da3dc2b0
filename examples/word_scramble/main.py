"""Headless word scramble demo: an autoplayer works through one game."""

import asyncio
import logging
import os
import random

from word_scramble import GameEngine, Level, ResultState, load_sample_words, load_settings
from word_scramble.config import configure_logging
from word_scramble.telemetry import configure_telemetry

logger = logging.getLogger(__name__)


def solve_step(engine: GameEngine, rng: random.Random) -> None:
    """Place the next correct letter, occasionally asking for auto-fill."""
    state = engine.state
    if rng.random() < 0.1 and engine.request_auto_fill() is not None:
        return

    question = state.current_question
    position = state.selected_letters.index(None)
    used = set(state.placed_indices)
    for index, letter in enumerate(question.scrambled_letters):
        if letter == question.answer[position] and index not in used:
            engine.select_letter(index)
            return


async def play(engine: GameEngine, rng: random.Random, think_time: float) -> None:
    """Drive the engine until the game reaches the result screen."""
    while not isinstance(engine.state, ResultState):
        state = engine.state
        if state.show_result:
            verdict = "✓" if state.is_correct else "✗"
            print(
                f"  {verdict} {state.current_question.answer} "
                f"(+{state.last_score_gained}, streak {state.streak})"
            )
            engine.next_question()
            continue

        await asyncio.sleep(think_time)
        if engine.state is not state or state.show_result:
            continue
        if state.is_answer_complete:
            engine.submit_answer()
        else:
            solve_step(engine, rng)


async def main():
    """Run one multiplayer game on the bundled word list."""
    settings = load_settings(tick_interval_seconds=0.1)
    configure_logging(settings.log_level)
    telemetry = configure_telemetry(settings.telemetry.to_config())

    print("=" * 60)
    print("Word Scramble")
    print("=" * 60)
    print(settings.summary())

    words = load_sample_words()
    rng = random.Random(int(os.getenv("SEED", "7")))
    async with GameEngine(words, settings=settings, rng=rng) as engine:
        engine.toggle_level(Level.N4)
        engine.set_total_questions(5)
        engine.set_time_per_question(15)

        started = engine.start_multiplayer_game()
        if not started.success:
            print(f"\nCould not start: {started.message}")
            return
        print(f"\nPlaying {started.question_count} questions...\n")

        await play(engine, rng, think_time=0.1)

    result = engine.result()
    print("\nResults")
    print(f"  Score: {result.score}")
    print(f"  Accuracy: {result.accuracy}%")
    print(f"  Average time: {result.average_time}s")
    print(f"  Best streak: {result.max_streak}")
    print(f"  Rank: {result.user_rank}/{len(result.players)}")
    for position, player in enumerate(result.players, start=1):
        print(f"    {position}. {player.avatar} {player.name}: {player.score}")

    telemetry.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
