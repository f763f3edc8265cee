"""Insight and tip generation over a task collection."""

from __future__ import annotations

import logging
from datetime import datetime

from suggestion_engine.schema import Insight, InsightAction, Task, days_until, is_overdue

logger = logging.getLogger(__name__)

ACHIEVEMENT_RATE = 80.0
LOW_COMPLETION_RATE = 50.0
UPCOMING_DAYS = 3
HIGH_PRIORITY_SHARE = 0.6
LARGE_TASK_MINUTES = 120


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def analyze_tasks(tasks: list[Task], now: datetime | None = None) -> list[Insight]:
    """Summarize the collection as warnings, tips, suggestions and achievements.

    Every rule is evaluated independently, so several insights can be
    returned for one collection. An empty collection yields no insights.
    """

    now = now or datetime.now()
    insights: list[Insight] = []

    overdue = [task for task in tasks if is_overdue(task, now)]
    if overdue:
        insights.append(
            Insight(
                id="overdue-warning",
                kind="warning",
                title=f"{len(overdue)} Overdue Task{_plural(len(overdue))}",
                description=(
                    "You have tasks that are past their due date. "
                    "Consider prioritizing these or adjusting their deadlines."
                ),
                action=InsightAction(label="Review Overdue Tasks", task_id=overdue[0].id),
            )
        )

    completed = [task for task in tasks if task.is_completed]
    completion_rate = len(completed) / len(tasks) * 100.0 if tasks else 0.0
    if tasks and completion_rate >= ACHIEVEMENT_RATE:
        insights.append(
            Insight(
                id="high-productivity",
                kind="achievement",
                title="Excellent Productivity!",
                description=f"You've completed {round(completion_rate)}% of your tasks. Keep up the great work!",
            )
        )
    elif completion_rate < LOW_COMPLETION_RATE and len(tasks) > 3:
        insights.append(
            Insight(
                id="low-productivity",
                kind="tip",
                title="Boost Your Productivity",
                description=(
                    "Try breaking large tasks into smaller, manageable chunks. "
                    "Focus on completing 2-3 tasks per day."
                ),
            )
        )

    upcoming = [
        task
        for task in tasks
        if task.due_date is not None
        and task.due_date > now
        and days_until(task.due_date, now) <= UPCOMING_DAYS
        and not task.is_completed
    ]
    if upcoming:
        insights.append(
            Insight(
                id="upcoming-deadlines",
                kind="suggestion",
                title="Upcoming Deadlines",
                description=(
                    f"You have {len(upcoming)} task{_plural(len(upcoming))} due within "
                    f"{UPCOMING_DAYS} days. Consider prioritizing these."
                ),
                action=InsightAction(label="View Tasks"),
            )
        )

    active = [task for task in tasks if not task.is_completed]
    high_priority = [task for task in active if task.priority == "high"]
    if len(high_priority) > len(active) * HIGH_PRIORITY_SHARE:
        insights.append(
            Insight(
                id="priority-balance",
                kind="tip",
                title="Priority Balance",
                description=(
                    "You have many high-priority tasks. "
                    "Consider if some could be medium priority to reduce stress."
                ),
            )
        )

    estimates = [task.estimated_time for task in tasks if task.estimated_time]
    if estimates and sum(estimates) / len(estimates) > LARGE_TASK_MINUTES:
        insights.append(
            Insight(
                id="large-tasks",
                kind="tip",
                title="Break Down Large Tasks",
                description=(
                    "Your tasks average over 2 hours. "
                    "Breaking them into smaller chunks can improve completion rates."
                ),
            )
        )

    logger.debug(f"Generated {len(insights)} insights for {len(tasks)} tasks")
    return insights


def project_insights(project_id: str, tasks: list[Task], now: datetime | None = None) -> list[str]:
    """Plain-text observations about one project's tasks."""

    now = now or datetime.now()
    project_tasks = [task for task in tasks if task.project_id == project_id]
    if not project_tasks:
        return ["This project is just getting started. Consider adding some initial tasks to define the scope."]

    notes: list[str] = []
    completed = sum(1 for task in project_tasks if task.is_completed)
    completion_rate = completed / len(project_tasks) * 100.0

    if completion_rate >= 80:
        notes.append("Excellent progress! This project is nearly complete. Great job!")
    elif completion_rate >= 50:
        notes.append("Good progress on this project. You're about halfway there!")
    elif completion_rate < 20:
        notes.append(
            "This project is in early stages. Consider breaking down large tasks into smaller, manageable pieces."
        )

    overdue = sum(1 for task in project_tasks if is_overdue(task, now))
    if overdue:
        notes.append(
            f"You have {overdue} overdue task(s) in this project. Consider reprioritizing or adjusting deadlines."
        )

    unassigned = sum(1 for task in project_tasks if not task.assigned_to)
    if unassigned > len(project_tasks) * 0.3:
        notes.append(
            "Many tasks in this project are unassigned. "
            "Consider assigning tasks to team members for better accountability."
        )

    return notes


def productivity_tips(tasks: list[Task]) -> list[str]:
    """General advice derived from workload size and estimate habits."""

    tips: list[str] = []

    active = [task for task in tasks if not task.is_completed]
    if len(active) > 10:
        tips.append(
            "Consider focusing on fewer tasks at once. Research shows 3-5 active tasks is optimal for productivity."
        )

    completed_estimates = [task.estimated_time for task in tasks if task.is_completed and task.estimated_time]
    if completed_estimates and sum(completed_estimates) / len(completed_estimates) > LARGE_TASK_MINUTES:
        tips.append("Try the Pomodoro Technique: work for 25 minutes, then take a 5-minute break.")

    categories = {task.category for task in tasks if task.category}
    if len(categories) > 5:
        tips.append("You have many categories. Consider consolidating similar ones for better organization.")

    tips.append("Set specific times for checking and updating your tasks to maintain momentum.")
    tips.append("Celebrate small wins! Completing tasks releases dopamine and motivates continued progress.")
    return tips
