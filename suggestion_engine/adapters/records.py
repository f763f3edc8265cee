"""Shared field parsing for task snapshot adapters."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from suggestion_engine.schema import PRIORITIES, STATUSES, Task

_REQUIRED_FIELDS = ("id", "title")

# snapshot key -> Task attribute; exports use camelCase, hand-written files snake_case
_ALIASES = {
    "dueDate": "due_date",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "estimatedTime": "estimated_time",
    "actualTime": "actual_time",
    "procrastinationFactor": "procrastination_factor",
    "startedAt": "started_at",
    "completedAt": "completed_at",
    "projectId": "project_id",
    "assignedTo": "assigned_to",
}
_DATETIME_FIELDS = ("due_date", "created_at", "updated_at", "started_at", "completed_at")
_NUMBER_FIELDS = ("estimated_time", "actual_time", "procrastination_factor")
_TEXT_FIELDS = ("description", "category", "project_id")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_datetime(value: Any, label: str, name: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"{label}: malformed {name}") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_number(value: Any, label: str, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: invalid {name}") from exc
    if not math.isfinite(number):
        raise ValueError(f"{label}: invalid {name}")
    if number < 0:
        raise ValueError(f"{label}: {name} must not be negative")
    return number


def _parse_names(value: Any, label: str, name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(";")
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{label}: {name} must be a list")
    return tuple(str(item).strip() for item in value if str(item).strip())


def build_task(record: dict, label: str, now: datetime) -> Task:
    """Build a Task from one snapshot record; ``label`` prefixes error messages."""

    fields = {_ALIASES.get(key, key): value for key, value in record.items()}

    missing = [name for name in _REQUIRED_FIELDS if _blank(fields.get(name))]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    priority = "medium" if _blank(fields.get("priority")) else str(fields["priority"]).strip().lower()
    if priority not in PRIORITIES:
        raise ValueError(f"{label}: invalid priority '{priority}'")

    status = "todo" if _blank(fields.get("status")) else str(fields["status"]).strip().lower()
    if status not in STATUSES:
        raise ValueError(f"{label}: invalid status '{status}'")

    values: dict[str, Any] = {
        "id": str(fields["id"]).strip(),
        "title": str(fields["title"]).strip(),
        "priority": priority,
        "status": status,
    }
    for name in _DATETIME_FIELDS:
        if not _blank(fields.get(name)):
            values[name] = _parse_datetime(fields[name], label, name)
    for name in _NUMBER_FIELDS:
        if not _blank(fields.get(name)):
            values[name] = _parse_number(fields[name], label, name)
    for name in _TEXT_FIELDS:
        if not _blank(fields.get(name)):
            values[name] = str(fields[name]).strip()
    for name in ("tags", "assigned_to"):
        if not _blank(fields.get(name)):
            values[name] = _parse_names(fields[name], label, name)

    values.setdefault("created_at", now)
    values.setdefault("updated_at", values["created_at"])
    return Task(**values)
