"""Word catalog: loading and filtering vocabulary entries."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from .constants import MIN_WORD_LENGTH
from .errors import WordListError
from .models import Level, WordEntry

logger = logging.getLogger(__name__)

WordSource = Union[WordEntry, Mapping[str, Any]]

SAMPLE_WORDS_PATH = Path(__file__).parent / "data" / "sample_words.yaml"


def coerce_entries(words: Iterable[WordSource]) -> list[WordEntry]:
    """Validate raw mappings into ``WordEntry`` objects."""
    return [
        word if isinstance(word, WordEntry) else WordEntry.model_validate(word)
        for word in words
    ]


def load_word_entries(file_path: Union[str, Path]) -> list[WordEntry]:
    """
    Load word entries from a YAML or JSON file.

    The file holds either a list of entries or a mapping with a ``words``
    list. Each entry needs at least ``word`` and ``level``.

    Raises:
        WordListError: If the file is missing, malformed or has invalid entries
    """
    path = Path(file_path)
    if not path.exists():
        raise WordListError(str(path), "word list file not found")

    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise WordListError(str(path), f"invalid file contents: {e}") from e

    if isinstance(data, dict):
        data = data.get("words")
    if not isinstance(data, list):
        raise WordListError(str(path), "expected a list of word entries")

    try:
        entries = coerce_entries(data)
    except ValidationError as e:
        raise WordListError(str(path), f"invalid word entry: {e}") from e

    logger.info("Loaded word list", extra={"path": str(path), "count": len(entries)})
    return entries


def load_sample_words() -> list[WordEntry]:
    """Load the bundled sample vocabulary."""
    return load_word_entries(SAMPLE_WORDS_PATH)


def filter_eligible(
    words: Iterable[WordEntry],
    levels: Iterable[Level],
    min_word_length: int = MIN_WORD_LENGTH,
) -> list[WordEntry]:
    """Return words that are long enough and belong to one of ``levels``."""
    selected = set(levels)
    return [
        word
        for word in words
        if len(word.word) >= min_word_length and word.level in selected
    ]


def count_by_level(
    words: Iterable[WordEntry], min_word_length: int = MIN_WORD_LENGTH
) -> dict[Level, int]:
    """Count words of playable length for every level, including empty ones."""
    counts = {level: 0 for level in Level}
    for word in words:
        if len(word.word) >= min_word_length:
            counts[word.level] += 1
    return counts
