"""Notification and reminder content derived from task state.

Nothing here shows or schedules anything: callers own timers and
permission handling and decide what to do with the returned payloads.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

from suggestion_engine.config import EngineConfig, default_config
from suggestion_engine.schema import Notification, Reminder, Task, is_overdue

logger = logging.getLogger(__name__)


def _due_soon(task: Task, now: datetime, window: timedelta) -> bool:
    return (
        task.due_date is not None
        and now < task.due_date <= now + window
        and not task.is_completed
    )


def smart_notifications(
    tasks: list[Task], now: datetime | None = None, config: EngineConfig | None = None
) -> list[Notification]:
    config = config or default_config()
    now = now or datetime.now()
    window = timedelta(hours=config.notifications.approaching_hours)
    notifications: list[Notification] = []

    overdue = [task for task in tasks if is_overdue(task, now)]
    if overdue:
        plural = "s" if len(overdue) > 1 else ""
        notifications.append(
            Notification(
                kind="warning",
                message=f"You have {len(overdue)} overdue task{plural}. Consider prioritizing these.",
                task_id=overdue[0].id,
            )
        )

    upcoming = next((task for task in tasks if _due_soon(task, now, window)), None)
    if upcoming is not None:
        notifications.append(
            Notification(
                kind="info",
                message=f"{upcoming.title} is due in less than {config.notifications.approaching_hours:g} hours.",
                task_id=upcoming.id,
            )
        )

    completed_today = sum(
        1 for task in tasks if task.is_completed and task.completed_at and task.completed_at.date() == now.date()
    )
    if completed_today >= config.notifications.completed_today_goal:
        notifications.append(
            Notification(
                kind="success",
                message=f"Great job! You've completed {completed_today} tasks today. Keep up the momentum!",
            )
        )

    if any((task.procrastination_factor or 0) > config.notifications.procrastination_threshold for task in tasks):
        notifications.append(
            Notification(
                kind="warning",
                message="You tend to take longer than estimated. Consider adding buffer time to your estimates.",
            )
        )

    logger.debug(f"Generated {len(notifications)} notifications")
    return notifications


def plan_reminders(
    tasks: list[Task], now: datetime | None = None, config: EngineConfig | None = None
) -> list[Reminder]:
    """Reminder payloads for open tasks with a due date, each with when to show it.

    A lead-time reminder is planned while it is still in the future; overdue
    and approaching-deadline reminders are due immediately.
    """

    config = config or default_config()
    now = now or datetime.now()
    lead = timedelta(minutes=config.notifications.reminder_lead_minutes)
    window = timedelta(hours=config.notifications.approaching_hours)
    reminders: list[Reminder] = []

    for task in tasks:
        if task.due_date is None or task.is_completed:
            continue

        remind_at = task.due_date - lead
        if remind_at > now:
            reminders.append(
                Reminder(
                    kind="task_reminder",
                    title="Task reminder",
                    body=f'"{task.title}" is due in {config.notifications.reminder_lead_minutes} minutes!',
                    task_id=task.id,
                    scheduled_for=remind_at,
                )
            )

        if task.due_date < now:
            reminders.append(
                Reminder(
                    kind="overdue",
                    title="Task overdue",
                    body=f'"{task.title}" is overdue! Prioritize finishing it.',
                    task_id=task.id,
                    scheduled_for=now,
                )
            )
        elif _due_soon(task, now, window):
            hours_left = math.ceil((task.due_date - now).total_seconds() / 3600)
            reminders.append(
                Reminder(
                    kind="deadline_approaching",
                    title="Deadline approaching",
                    body=f'"{task.title}" is due in {hours_left} hour{"s" if hours_left > 1 else ""}!',
                    task_id=task.id,
                    scheduled_for=now,
                )
            )

    logger.debug(f"Planned {len(reminders)} reminders for {len(tasks)} tasks")
    return reminders
