from datetime import datetime, timedelta

from suggestion_engine.schema import Task, advance_status, calculate_procrastination_factor, days_until

NOW = datetime.fromisoformat("2025-01-15T10:00:00")


def test_days_until_truncates_toward_zero():
    assert days_until(NOW + timedelta(days=2, hours=23), NOW) == 2
    assert days_until(NOW - timedelta(hours=23), NOW) == 0
    assert days_until(NOW - timedelta(days=1, hours=1), NOW) == -1


def test_procrastination_factor():
    assert calculate_procrastination_factor(Task("t", "T", estimated_time=60, actual_time=90)) == 1.5
    assert calculate_procrastination_factor(Task("t", "T", estimated_time=60)) == 1.0


def test_advance_status_cycles_without_mutating():
    task = Task("t", "T", estimated_time=30)
    started = advance_status(task, now=NOW)
    assert task.status == "todo"
    assert (started.status, started.started_at) == ("in-progress", NOW)

    finished = advance_status(started, now=NOW + timedelta(hours=1))
    assert finished.status == "completed"
    assert finished.completed_at == NOW + timedelta(hours=1)
    assert finished.actual_time == 30
    assert finished.procrastination_factor == 1.0

    reopened = advance_status(finished, now=NOW)
    assert reopened.status == "todo"
    assert reopened.started_at is None and reopened.completed_at is None
