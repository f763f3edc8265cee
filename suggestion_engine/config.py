"""Keyword tables and thresholds loaded from YAML."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, Mapping

import yaml
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

BUNDLED_CONFIG = Path(__file__).with_name("keywords.yml")
CONFIG_ENV_VAR = "SUGGESTION_ENGINE_CONFIG"


def _lowercase(value: str) -> str:
    return value.strip().lower()


Keyword = Annotated[str, AfterValidator(_lowercase)]


def _read_only(value: Mapping) -> Mapping:
    return MappingProxyType(dict(value))


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CategoryRule(_Section):
    name: str
    keywords: tuple[Keyword, ...]


class DurationRule(_Section):
    keywords: tuple[Keyword, ...]
    minutes: int = Field(gt=0)
    reason: str


class WordCountTier(_Section):
    min_words: int = Field(ge=0)
    minutes: int = Field(gt=0)
    reason: str


class PriorityConfig(_Section):
    """Urgency/flexibility keywords and due-date offsets per priority."""
    high_keywords: tuple[Keyword, ...] = ()
    low_keywords: tuple[Keyword, ...] = ()
    due_in_days: Mapping[str, int]

    @field_validator("due_in_days")
    @classmethod
    def _freeze_due(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return _read_only(value)


class AssigneeConfig(_Section):
    """Skill keywords per member and workload limits."""
    skills: Mapping[str, tuple[Keyword, ...]] = Field(default_factory=dict)
    overload_threshold: int = Field(ge=0)
    max_suggestions: int = Field(ge=0)

    @field_validator("skills", mode="before")
    @classmethod
    def _missing_skills(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("skills")
    @classmethod
    def _freeze_skills(cls, value: Mapping) -> Mapping:
        return _read_only(value)


class ScheduleConfig(_Section):
    default_hour: int = Field(ge=0, le=23)
    hour_offsets: Mapping[str, int]

    @field_validator("hour_offsets")
    @classmethod
    def _freeze_offsets(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return _read_only(value)


class NotificationConfig(_Section):
    approaching_hours: float = Field(gt=0)
    procrastination_threshold: float
    completed_today_goal: int = Field(ge=1)
    reminder_lead_minutes: int = Field(ge=0)


class EngineConfig(_Section):
    """Immutable view of the heuristic tables used by the engine."""

    priority: PriorityConfig
    categories: tuple[CategoryRule, ...]
    durations: tuple[DurationRule, ...]
    # kept sorted by min_words, largest first
    word_count_tiers: tuple[WordCountTier, ...] = Field(min_length=1)
    assignees: AssigneeConfig
    schedule: ScheduleConfig
    notifications: NotificationConfig

    @field_validator("word_count_tiers")
    @classmethod
    def _largest_tier_first(cls, tiers: tuple[WordCountTier, ...]) -> tuple[WordCountTier, ...]:
        return tuple(sorted(tiers, key=lambda tier: tier.min_words, reverse=True))


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: configuration must be a mapping")
    logger.info(f"Loaded engine configuration from {path}")
    return payload


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load bundled tables, merged with an override file when one is given.

    The override comes from ``path`` or, failing that, the
    ``SUGGESTION_ENGINE_CONFIG`` environment variable.
    """

    raw = _read_yaml(BUNDLED_CONFIG)
    override = path or os.getenv(CONFIG_ENV_VAR)
    if override:
        override_path = Path(override)
        if not override_path.exists():
            raise FileNotFoundError(f"Engine configuration not found: {override_path}")
        raw = _merge(raw, _read_yaml(override_path))
    try:
        return EngineConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Malformed engine configuration: {exc}") from exc


@lru_cache(maxsize=1)
def default_config() -> EngineConfig:
    return load_config()
