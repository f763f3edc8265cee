"""Core data schema for tasks and engine outputs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

PRIORITIES = ("low", "medium", "high")
STATUSES = ("todo", "in-progress", "completed")
PRIORITY_WEIGHT = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class Task:
    """Snapshot of a task as handed over by the task store."""

    id: str
    title: str
    priority: str = "medium"
    status: str = "todo"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    category: Optional[str] = None
    tags: tuple[str, ...] = ()
    estimated_time: Optional[float] = None
    actual_time: Optional[float] = None
    procrastination_factor: Optional[float] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    project_id: Optional[str] = None
    assigned_to: tuple[str, ...] = ()

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"


@dataclass(frozen=True)
class InsightAction:
    label: str
    task_id: Optional[str] = None


@dataclass(frozen=True)
class Insight:
    """Derived observation about a task collection."""

    id: str
    kind: str
    title: str
    description: str
    action: Optional[InsightAction] = None


@dataclass(frozen=True)
class Suggestion:
    """Proposed field values for a task being authored."""

    reasoning: str
    priority: Optional[str] = None
    due_date: Optional[datetime] = None
    estimated_time: Optional[int] = None
    category: Optional[str] = None
    assignees: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScheduleSuggestion:
    task_id: str
    suggested_time: datetime
    reasoning: str


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str
    task_id: Optional[str] = None


@dataclass(frozen=True)
class Reminder:
    """Notification content with the moment it should be shown."""

    kind: str
    title: str
    body: str
    task_id: str
    scheduled_for: datetime


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    in_progress: int
    overdue: int
    completion_rate: int
    average_procrastination_factor: float
    total_estimated_time: float
    total_actual_time: float


def calculate_procrastination_factor(task: Task) -> float:
    """Return actual/estimated time, or 1 when either is missing."""

    if not task.estimated_time or not task.actual_time:
        return 1.0
    return task.actual_time / task.estimated_time


def advance_status(task: Task, now: datetime | None = None) -> Task:
    """Return a copy of ``task`` moved one step along todo -> in-progress -> completed -> todo."""

    now = now or datetime.now()
    if task.status == "todo":
        return replace(task, status="in-progress", started_at=now, updated_at=now)
    if task.status == "in-progress":
        actual = task.actual_time or task.estimated_time or 0
        moved = replace(task, status="completed", completed_at=now, actual_time=actual, updated_at=now)
        return replace(moved, procrastination_factor=calculate_procrastination_factor(moved))
    return replace(task, status="todo", started_at=None, completed_at=None, updated_at=now)


def days_until(moment: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``moment``, truncated toward zero."""

    return int((moment - now).total_seconds() / 86400)


def is_overdue(task: Task, now: datetime) -> bool:
    return task.due_date is not None and task.due_date < now and not task.is_completed
