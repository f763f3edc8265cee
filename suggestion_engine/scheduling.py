"""Suggested work times based on when tasks usually get finished."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta

from suggestion_engine.config import EngineConfig, default_config
from suggestion_engine.schema import ScheduleSuggestion, Task

logger = logging.getLogger(__name__)


def most_productive_hour(tasks: list[Task], default: int = 9) -> int:
    """Most frequent completion hour, earliest hour on ties."""

    hours = Counter(task.completed_at.hour for task in tasks if task.is_completed and task.completed_at)
    if not hours:
        return default
    return max(hours.items(), key=lambda item: (item[1], -item[0]))[0]


def _next_slot(hour: int, now: datetime) -> datetime:
    # hours past 23 roll into the following day
    slot = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(hours=hour)
    if slot <= now:
        slot += timedelta(days=1)
    return slot


def suggest_schedule(
    tasks: list[Task], now: datetime | None = None, config: EngineConfig | None = None
) -> list[ScheduleSuggestion]:
    """Suggest one work time per open task, offset from the most productive hour by priority."""

    config = config or default_config()
    now = now or datetime.now()
    best_hour = most_productive_hour(tasks, default=config.schedule.default_hour)

    suggestions = []
    for task in tasks:
        if task.is_completed:
            continue
        offset = config.schedule.hour_offsets.get(task.priority, config.schedule.hour_offsets.get("low", 4))
        hour = best_hour + offset
        if task.priority == "high":
            reasoning = f"High priority task scheduled for your most productive hour ({hour}:00)"
        else:
            reasoning = f"{task.priority.capitalize()} priority task scheduled for {hour}:00"
        suggestions.append(ScheduleSuggestion(task_id=task.id, suggested_time=_next_slot(hour, now), reasoning=reasoning))

    logger.debug(f"Most productive hour {best_hour}, {len(suggestions)} schedule suggestions")
    return suggestions
