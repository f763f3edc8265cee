"""Aggregate task statistics."""

from __future__ import annotations

from datetime import datetime

from suggestion_engine.schema import Task, TaskStats, is_overdue


def task_stats(tasks: list[Task], now: datetime | None = None) -> TaskStats:
    """Compute counts, completion rate, average procrastination and time totals."""

    now = now or datetime.now()
    total = len(tasks)
    completed = sum(1 for task in tasks if task.is_completed)

    timed = [task for task in tasks if task.estimated_time and task.actual_time]
    factor = sum(task.actual_time / task.estimated_time for task in timed) / len(timed) if timed else 1.0

    return TaskStats(
        total=total,
        completed=completed,
        in_progress=sum(1 for task in tasks if task.status == "in-progress"),
        overdue=sum(1 for task in tasks if is_overdue(task, now)),
        completion_rate=int(completed / total * 100 + 0.5) if total else 0,
        average_procrastination_factor=int(factor * 100 + 0.5) / 100,
        total_estimated_time=sum(task.estimated_time or 0 for task in tasks),
        total_actual_time=sum(task.actual_time or 0 for task in tasks),
    )
