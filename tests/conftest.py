"""Shared pytest fixtures and configuration for all tests."""

from __future__ import annotations

import os
import random

import pytest

from word_scramble import GameEngine, Level, WordEntry, WordScrambleSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Keep WORD_SCRAMBLE_* variables from the host out of every test.

    Tests that exercise environment loading set their own values.
    """
    for key in list(os.environ):
        if key.startswith("WORD_SCRAMBLE_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic shuffles and bots."""
    return random.Random(1234)


@pytest.fixture
def settings() -> WordScrambleSettings:
    """Default settings, isolated from any .env file."""
    return WordScrambleSettings(_env_file=None)


@pytest.fixture
def n5_words() -> list[WordEntry]:
    return [
        WordEntry(word="わたし", level=Level.N5, meaning="I, me"),
        WordEntry(word="ともだち", level=Level.N5, meaning="friend"),
        WordEntry(
            word="がっこう",
            level=Level.N5,
            reading_hint="HỌC HIỆU",
            meaning="school",
        ),
        WordEntry(word="せんせい", level=Level.N5, meaning="teacher, master"),
    ]


@pytest.fixture
def mixed_words(n5_words) -> list[WordEntry]:
    return [
        *n5_words,
        WordEntry(word="しゅくだい", level=Level.N4, meaning="homework"),
        WordEntry(word="うんどう", level=Level.N4, meaning="exercise"),
        WordEntry(word="け", level=Level.N3, meaning="hair"),
    ]


@pytest.fixture
def engine(n5_words, settings, rng) -> GameEngine:
    """Engine with manual ticking, ready in the setup phase."""
    return GameEngine(n5_words, settings=settings, rng=rng, auto_tick=False)
