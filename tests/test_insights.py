from datetime import datetime, timedelta

from suggestion_engine.insights import analyze_tasks, productivity_tips, project_insights
from suggestion_engine.schema import Task

NOW = datetime.fromisoformat("2025-01-15T10:00:00")


def test_empty_collection_has_no_insights():
    assert analyze_tasks([], now=NOW) == []


def test_single_overdue_task_gives_one_warning():
    tasks = [Task("t1", "Pay rent", due_date=NOW - timedelta(days=1))]
    warnings = [insight for insight in analyze_tasks(tasks, now=NOW) if insight.kind == "warning"]
    assert len(warnings) == 1
    assert warnings[0].title == "1 Overdue Task"
    assert warnings[0].action.task_id == "t1"


def test_no_overdue_warning_without_past_due_open_tasks():
    tasks = [
        Task("t1", "Done late", status="completed", due_date=NOW - timedelta(days=2)),
        Task("t2", "Future", due_date=NOW + timedelta(days=10)),
        Task("t3", "Undated"),
    ]
    assert all(insight.kind != "warning" for insight in analyze_tasks(tasks, now=NOW))


def test_high_completion_rate_is_an_achievement():
    tasks = [Task(f"t{i}", "Task", status="completed") for i in range(8)]
    tasks += [Task("t8", "Open"), Task("t9", "Open")]
    insights = analyze_tasks(tasks, now=NOW)
    achievement = [insight for insight in insights if insight.kind == "achievement"]
    assert len(achievement) == 1
    assert "80%" in achievement[0].description


def test_low_completion_rate_tip_needs_more_than_three_tasks():
    three = [Task(f"t{i}", "Task", priority="low") for i in range(3)]
    assert not any(insight.id == "low-productivity" for insight in analyze_tasks(three, now=NOW))

    four = three + [Task("t3", "Task", priority="low")]
    assert any(insight.id == "low-productivity" for insight in analyze_tasks(four, now=NOW))


def test_upcoming_deadlines_and_priority_balance():
    tasks = [
        Task("t1", "Soon", priority="high", due_date=NOW + timedelta(days=2)),
        Task("t2", "Also soon", priority="high", due_date=NOW + timedelta(hours=5)),
        Task("t3", "Later", priority="low", due_date=NOW + timedelta(days=9)),
    ]
    ids = [insight.id for insight in analyze_tasks(tasks, now=NOW)]
    assert "upcoming-deadlines" in ids
    assert "priority-balance" in ids


def test_large_estimates_suggest_decomposition():
    tasks = [Task("t1", "Thesis", estimated_time=240), Task("t2", "Slides", estimated_time=60), Task("t3", "No estimate")]
    large = [insight for insight in analyze_tasks(tasks, now=NOW) if insight.id == "large-tasks"]
    assert len(large) == 1
    assert large[0].kind == "tip"


def test_project_insights():
    assert project_insights("p1", [], now=NOW)[0].startswith("This project is just getting started")

    tasks = [
        Task("t1", "A", project_id="p1", due_date=NOW - timedelta(days=1)),
        Task("t2", "B", project_id="p1", assigned_to=("admin",)),
        Task("t3", "C", project_id="p2"),
    ]
    notes = project_insights("p1", tasks, now=NOW)
    assert any("early stages" in note for note in notes)
    assert any("1 overdue task(s)" in note for note in notes)
    assert any("unassigned" in note for note in notes)


def test_productivity_tips_always_include_general_advice():
    assert len(productivity_tips([])) == 2

    busy = [Task(f"t{i}", "Open", category=f"c{i}") for i in range(11)]
    tips = productivity_tips(busy)
    assert any("fewer tasks" in tip for tip in tips)
    assert any("categories" in tip for tip in tips)
