"""Helpers for driving the engine through answers in tests."""

from __future__ import annotations

from word_scramble import AnswerOutcome, GameEngine


def solve_indices(engine: GameEngine) -> list[int]:
    """Return scrambled-letter indices spelling the answer, in slot order."""
    question = engine.state.current_question
    used: set[int] = set()
    indices = []
    for letter in question.answer:
        index = next(
            i
            for i, candidate in enumerate(question.scrambled_letters)
            if candidate == letter and i not in used
        )
        used.add(index)
        indices.append(index)
    return indices


def answer_correctly(engine: GameEngine) -> AnswerOutcome | None:
    """Place the correct letters in order and submit."""
    for index in solve_indices(engine):
        engine.select_letter(index)
    return engine.submit_answer()


def answer_wrongly(engine: GameEngine) -> AnswerOutcome | None:
    """Place the answer's letters in reverse order and submit."""
    indices = solve_indices(engine)
    question = engine.state.current_question
    reversed_word = question.answer[::-1]
    assert reversed_word != question.answer
    for index in reversed(indices):
        engine.select_letter(index)
    return engine.submit_answer()


def complete_answer(engine: GameEngine) -> None:
    """Fill every empty slot with its correct letter, keeping placed ones."""
    state = engine.state
    question = state.current_question
    for position, current in enumerate(state.selected_letters):
        if current is not None:
            continue
        used = set(state.placed_indices)
        index = next(
            i
            for i, letter in enumerate(question.scrambled_letters)
            if letter == question.answer[position] and i not in used
        )
        engine.select_letter(index)
