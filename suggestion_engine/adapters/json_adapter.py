"""JSON adapter for task snapshots."""

from __future__ import annotations

import json
from datetime import datetime

from suggestion_engine.adapters.records import build_task
from suggestion_engine.schema import Task


def parse(file_path: str, now: datetime | None = None) -> list[Task]:
    """Parse a JSON list of task objects (camelCase or snake_case keys)."""

    with open(file_path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {file_path}") from exc

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    now = now or datetime.now()
    tasks = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        tasks.append(build_task(item, f"Item {index}", now))
    return tasks
