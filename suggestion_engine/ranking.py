"""Composite-score prioritization of open tasks."""

from __future__ import annotations

import logging
from datetime import datetime

from suggestion_engine.schema import PRIORITY_WEIGHT, Task, days_until

logger = logging.getLogger(__name__)

URGENCY_HORIZON_DAYS = 7


def priority_score(task: Task, now: datetime) -> float:
    """Score a task by priority, due-date urgency and past procrastination."""

    weight = PRIORITY_WEIGHT.get(task.priority, 0)
    urgency = max(0, URGENCY_HORIZON_DAYS - days_until(task.due_date, now)) if task.due_date else 0
    procrastination = task.procrastination_factor or 1.0
    return weight * 10 + urgency * 5 + procrastination * 2


def prioritize_tasks(tasks: list[Task], now: datetime | None = None) -> list[Task]:
    """Return incomplete tasks, highest score first; ties keep input order."""

    now = now or datetime.now()
    active = [task for task in tasks if not task.is_completed]
    ranked = sorted(active, key=lambda task: priority_score(task, now), reverse=True)
    logger.debug(f"Ranked {len(ranked)} of {len(tasks)} tasks")
    return ranked
