"""Engine Configuration Module."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    BOT_CORRECT_PROBABILITY,
    BOT_MAX_SCORE,
    BOT_MIN_SCORE,
    DEFAULT_BOT_COUNT,
    DEFAULT_TIME_PER_QUESTION,
    DEFAULT_TOTAL_QUESTIONS,
    MIN_ELIGIBLE_WORDS,
    MIN_WORD_LENGTH,
    QUESTION_PRESETS,
    TIME_PRESETS,
)
from .models import Level
from .telemetry import TelemetryConfig


class BotSettings(BaseSettings):
    """Simulated opponent settings."""

    count: int = Field(default=DEFAULT_BOT_COUNT, ge=0, description="Bots per game")
    correct_probability: float = Field(
        default=BOT_CORRECT_PROBABILITY,
        ge=0.0,
        le=1.0,
        description="Chance a bot answers correctly",
    )
    min_score: int = Field(default=BOT_MIN_SCORE, ge=0, description="Lowest bot score")
    max_score: int = Field(
        default=BOT_MAX_SCORE, gt=0, description="Exclusive highest bot score"
    )

    model_config = SettingsConfigDict(env_prefix="WORD_SCRAMBLE_BOTS_")

    @model_validator(mode="after")
    def _check_score_range(self) -> "BotSettings":
        if self.max_score <= self.min_score:
            raise ValueError("max_score must be greater than min_score")
        return self


class TelemetrySettings(BaseSettings):
    """OpenTelemetry settings (disabled by default)."""

    enabled: bool = Field(default=False, description="Enable OpenTelemetry")
    service_name: str = Field(default="word-scramble", description="Service name")
    environment: str = Field(default="dev", description="Deployment environment")
    otlp_endpoint: Optional[str] = Field(
        default=None, description="OTLP HTTP endpoint, e.g. http://localhost:4318"
    )
    sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)
    export_metrics: bool = Field(default=True)
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra OTLP exporter headers"
    )

    model_config = SettingsConfigDict(env_prefix="WORD_SCRAMBLE_TELEMETRY_")

    def to_config(self) -> TelemetryConfig:
        return TelemetryConfig(
            enabled=self.enabled,
            service_name=self.service_name,
            environment=self.environment,
            otlp_endpoint=self.otlp_endpoint,
            sample_ratio=self.sample_ratio,
            export_metrics=self.export_metrics,
            headers=dict(self.headers),
        )


class WordScrambleSettings(BaseSettings):
    """
    Engine configuration.

    Configuration can be loaded from:
    1. Environment variables (WORD_SCRAMBLE_*)
    2. .env file
    3. YAML config file (via config_file or WORD_SCRAMBLE_CONFIG_FILE)
    4. Direct instantiation with parameters

    Priority (highest to lowest):
    1. Explicitly passed parameters
    2. Environment variables
    3. Config file
    4. Defaults

    Example usage:

        # From environment variables
        settings = WordScrambleSettings()

        # From config file
        settings = WordScrambleSettings(config_file="word_scramble.yaml")

        # Direct configuration
        settings = WordScrambleSettings(bots=BotSettings(count=2))
    """

    config_file: Optional[str] = Field(
        default=None,
        description="Path to YAML config file",
    )

    default_time_per_question: int = Field(
        default=DEFAULT_TIME_PER_QUESTION, description="Initial seconds per question"
    )
    default_total_questions: int = Field(
        default=DEFAULT_TOTAL_QUESTIONS, description="Initial questions per game"
    )
    default_levels: list[Level] = Field(
        default_factory=lambda: [Level.N5], description="Initially selected levels"
    )
    min_word_length: int = Field(
        default=MIN_WORD_LENGTH, ge=1, description="Shortest playable word"
    )
    min_eligible_words: int = Field(
        default=MIN_ELIGIBLE_WORDS, ge=1, description="Words required to start"
    )
    tick_interval_seconds: float = Field(
        default=1.0, gt=0, description="Wall-clock seconds per countdown tick"
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    bots: BotSettings = Field(default_factory=BotSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_prefix="WORD_SCRAMBLE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **data: Any):
        """
        Initialize settings.

        If config_file is provided or WORD_SCRAMBLE_CONFIG_FILE env var is
        set, load configuration from YAML file and merge with other sources.
        """
        merged = data.pop("_merged", False)
        if merged:
            super().__init__(**data)
            return

        config_file = self._resolve_config_file(data)
        if config_file:
            super().__init__(**self._merge_yaml(config_file, data))
        else:
            super().__init__(**data)

    @field_validator("default_time_per_question")
    @classmethod
    def _time_is_preset(cls, value: int) -> int:
        if value not in TIME_PRESETS:
            raise ValueError(f"must be one of {TIME_PRESETS}")
        return value

    @field_validator("default_total_questions")
    @classmethod
    def _count_is_preset(cls, value: int) -> int:
        if value not in QUESTION_PRESETS:
            raise ValueError(f"must be one of {QUESTION_PRESETS}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def _resolve_config_file(cls, data: dict[str, Any]) -> Optional[str]:
        """Resolve config file from parameters or environment."""
        return data.get("config_file") or os.getenv("WORD_SCRAMBLE_CONFIG_FILE")

    @classmethod
    def _merge_yaml(cls, config_file: str, data: dict[str, Any]) -> dict[str, Any]:
        """Load YAML config and merge with explicit parameters."""
        merged_data = {**cls._load_yaml(config_file), **data}
        merged_data.setdefault("config_file", config_file)
        return merged_data

    @staticmethod
    def _load_yaml(file_path: str) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with path.open("r") as f:
            data = yaml.safe_load(f)

        return data or {}

    @classmethod
    def from_yaml(cls, file_path: str) -> "WordScrambleSettings":
        """Create settings from YAML file."""
        merged = cls._merge_yaml(file_path, {})
        return cls(_merged=True, **merged)

    def to_yaml(self, file_path: str) -> None:
        """Export settings to YAML file."""
        data = self.model_dump(mode="json", exclude_none=True, exclude={"config_file"})

        path = Path(file_path)
        with path.open("w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def summary(self) -> str:
        """Get human-readable configuration summary."""
        levels = ", ".join(level.value for level in self.default_levels) or "-"
        lines = [
            "Word Scramble Configuration:",
            f"  Time per question: {self.default_time_per_question}s",
            f"  Questions per game: {self.default_total_questions}",
            f"  Levels: {levels}",
            f"  Tick interval: {self.tick_interval_seconds}s",
            "",
            "Bots:",
            f"  Count: {self.bots.count}",
            f"  Correct probability: {self.bots.correct_probability:.0%}",
            f"  Score range: {self.bots.min_score}-{self.bots.max_score - 1}",
            "",
            f"Telemetry: {'✓' if self.telemetry.enabled else '✗'}",
        ]
        return "\n".join(lines)


def load_settings(
    config_file: Optional[str] = None, **overrides: Any
) -> WordScrambleSettings:
    """
    Load engine settings with optional overrides.

    Example:
        settings = load_settings()
        settings = load_settings(config_file="word_scramble.yaml")
        settings = load_settings(bots={"count": 2})
    """
    if config_file:
        overrides["config_file"] = config_file

    return WordScrambleSettings(**overrides)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic console handler for host applications and scripts."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
