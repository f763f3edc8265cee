"""CSV adapter for task snapshots."""

from __future__ import annotations

import csv
from datetime import datetime

from suggestion_engine.adapters.records import build_task
from suggestion_engine.schema import Task


def parse(file_path: str, now: datetime | None = None) -> list[Task]:
    """Parse a CSV file with one task per row; ``tags`` and ``assigned_to`` are ``;``-separated."""

    now = now or datetime.now()
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[Task] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(build_task(row, f"Row {row_number}", now))
        return tasks
