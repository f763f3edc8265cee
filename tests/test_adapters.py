import json
from datetime import datetime

import pytest

from suggestion_engine.adapters.csv_adapter import parse as parse_csv
from suggestion_engine.adapters.json_adapter import parse as parse_json

NOW = datetime.fromisoformat("2025-01-15T10:00:00")


def test_csv_parse_success(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text(
        "id,title,priority,status,due_date,estimated_time,tags,assigned_to\n"
        "a,Write essay,high,todo,2025-01-20T09:00:00,240,school;writing,\n"
        "b,Call mom,,completed,,,,alice; bob\n",
        encoding="utf-8",
    )
    tasks = parse_csv(str(path), now=NOW)
    assert len(tasks) == 2
    assert tasks[0].due_date == datetime.fromisoformat("2025-01-20T09:00:00")
    assert tasks[0].estimated_time == 240
    assert tasks[0].tags == ("school", "writing")
    assert tasks[1].priority == "medium"
    assert tasks[1].assigned_to == ("alice", "bob")
    assert tasks[1].created_at == NOW


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,title,due_date\na,Essay,bad\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_csv(str(path))


def test_csv_parse_empty_file(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("", encoding="utf-8")
    assert parse_csv(str(path)) == []


def test_json_parse_camel_case(tmp_path):
    path = tmp_path / "tasks.json"
    payload = [
        {
            "id": "a",
            "title": "Exam prep",
            "priority": "high",
            "status": "in-progress",
            "dueDate": "2025-01-20T09:00:00",
            "createdAt": "2025-01-01T09:00:00",
            "estimatedTime": 180,
            "assignedTo": ["jane_smith"],
            "comments": [],
        },
        {"id": "b", "title": "Groceries", "completedAt": "2025-01-02T18:00:00", "status": "completed"},
    ]
    path.write_text(json.dumps(payload), encoding="utf-8")
    tasks = parse_json(str(path), now=NOW)
    assert len(tasks) == 2
    assert tasks[0].status == "in-progress"
    assert tasks[0].assigned_to == ("jane_smith",)
    assert tasks[0].updated_at == datetime.fromisoformat("2025-01-01T09:00:00")
    assert tasks[1].completed_at.hour == 18


def test_json_parse_aware_timestamps_become_naive(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": "a", "title": "A", "dueDate": "2025-01-20T09:00:00Z"}]), encoding="utf-8")
    (task,) = parse_json(str(path), now=NOW)
    assert task.due_date.tzinfo is None


@pytest.mark.parametrize(
    "item",
    [
        {"title": "no id"},
        {"id": "a", "title": "A", "priority": "critical"},
        {"id": "a", "title": "A", "status": "done"},
        {"id": "a", "title": "A", "estimatedTime": "long"},
        {"id": "a", "title": "A", "estimatedTime": "nan"},
        {"id": "a", "title": "A", "actualTime": "inf"},
        {"id": "a", "title": "A", "procrastinationFactor": "-Infinity"},
        {"id": "a", "title": "A", "dueDate": "bad"},
    ],
)
def test_json_parse_malformed(tmp_path, item):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([item]), encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1"):
        parse_json(str(path))


def test_json_payload_must_be_list(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"id": "a"}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_json(str(path))
