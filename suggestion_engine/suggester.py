"""Keyword-based suggestions for tasks being authored."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from suggestion_engine.config import EngineConfig, default_config
from suggestion_engine.schema import Suggestion, Task

logger = logging.getLogger(__name__)


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _suggest_priority(text: str, config: EngineConfig) -> tuple[str, str]:
    if _mentions(text, config.priority.high_keywords):
        return "high", "Detected urgent keywords."
    if _mentions(text, config.priority.low_keywords):
        return "low", "Detected flexible timing keywords."
    return "medium", ""


def _suggest_category(text: str, config: EngineConfig) -> str | None:
    for rule in config.categories:
        if _mentions(text, rule.keywords):
            return rule.name
    return None


def _estimate_minutes(title: str, description: str, config: EngineConfig) -> tuple[int, str]:
    title_lower = title.lower()
    for rule in config.durations:
        if _mentions(title_lower, rule.keywords):
            return rule.minutes, rule.reason

    word_count = len(f"{title} {description}".split())
    for tier in config.word_count_tiers:
        if word_count > tier.min_words:
            return tier.minutes, tier.reason
    fallback = config.word_count_tiers[-1]
    return fallback.minutes, fallback.reason


_DUE_REASONS = {
    "high": "High priority tasks should be completed within {days} days.",
    "medium": "Medium priority tasks can be completed within a week.",
    "low": "Low priority tasks can be scheduled for next week.",
}


def suggest_task_properties(
    title: str,
    description: str,
    existing_tasks: list[Task],
    members: list[str] | None = None,
    now: datetime | None = None,
    config: EngineConfig | None = None,
) -> Suggestion:
    """Guess priority, category, duration and due date from free text."""

    config = config or default_config()
    now = now or datetime.now()
    description = description or ""
    text = f"{title} {description}".lower()

    clauses = ["Based on task content analysis:"]

    priority, reason = _suggest_priority(text, config)
    if reason:
        clauses.append(reason)

    category = _suggest_category(text, config)
    if category:
        clauses.append(f"Suggested category: {category}.")

    estimated_time, reason = _estimate_minutes(title, description, config)
    clauses.append(reason)

    days = config.priority.due_in_days.get(priority, config.priority.due_in_days.get("medium", 5))
    due_date = now + timedelta(days=days)
    clauses.append(_DUE_REASONS[priority].format(days=days))

    assignees: tuple[str, ...] = ()
    if members:
        assignees = tuple(suggest_assignees(title, description, members, existing_tasks, config=config))
        if assignees:
            clauses.append(f"Suggested assignees: {', '.join(assignees)}.")

    logger.debug(f"Suggested priority={priority} category={category} estimate={estimated_time} for {title!r}")
    return Suggestion(
        reasoning=" ".join(clauses),
        priority=priority,
        due_date=due_date,
        estimated_time=estimated_time,
        category=category,
        assignees=assignees,
    )


def suggest_assignees(
    title: str,
    description: str,
    members: list[str],
    existing_tasks: list[Task],
    config: EngineConfig | None = None,
) -> list[str]:
    """Pick members whose skills match the text, else the least busy one."""

    if not members:
        return []

    config = config or default_config()
    text = f"{title} {description or ''}".lower()

    matches = [
        member
        for member, skills in config.assignees.skills.items()
        if member in members and _mentions(text, skills)
    ]

    if not matches:
        workloads = [
            (member, sum(1 for task in existing_tasks if member in task.assigned_to and not task.is_completed))
            for member in members
        ]
        least_busy, count = min(workloads, key=lambda item: item[1])
        if count < config.assignees.overload_threshold:
            matches.append(least_busy)

    return matches[: config.assignees.max_suggestions]
