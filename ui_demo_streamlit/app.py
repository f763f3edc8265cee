"""Streamlit demo UI for suggestion-engine."""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from suggestion_engine.adapters import csv_adapter, json_adapter
from suggestion_engine.config import EngineConfig, default_config
from suggestion_engine.insights import analyze_tasks, productivity_tips
from suggestion_engine.metrics import task_stats
from suggestion_engine.notifications import plan_reminders, smart_notifications
from suggestion_engine.ranking import prioritize_tasks, priority_score
from suggestion_engine.scheduling import most_productive_hour, suggest_schedule
from suggestion_engine.suggester import suggest_task_properties

logger = logging.getLogger(__name__)

DEMO_DATASET = "examples/sample_tasks.json"


def _parse_tasks_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_tasks_from_path(temp_path)


def _fmt_time(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M")


def run_engine(tasks: list, draft: dict, now: datetime, config: EngineConfig | None = None) -> dict[str, Any]:
    """Run every engine step and return a UI-friendly payload."""

    config = config or default_config()
    suggestion = suggest_task_properties(
        draft["title"], draft["description"], tasks, members=draft["members"], now=now, config=config
    )
    return {
        "stats": task_stats(tasks, now=now),
        "insights": analyze_tasks(tasks, now=now),
        "tips": productivity_tips(tasks),
        "ranking": [
            {"task": task.title, "priority": task.priority, "score": priority_score(task, now)}
            for task in prioritize_tasks(tasks, now=now)
        ],
        "best_hour": most_productive_hour(tasks, default=config.schedule.default_hour),
        "schedule": [
            {"task_id": item.task_id, "when": _fmt_time(item.suggested_time), "why": item.reasoning}
            for item in suggest_schedule(tasks, now=now, config=config)
        ],
        "notifications": smart_notifications(tasks, now=now, config=config),
        "reminders": [
            {"task_id": item.task_id, "kind": item.kind, "at": _fmt_time(item.scheduled_for), "body": item.body}
            for item in plan_reminders(tasks, now=now, config=config)
        ],
        "suggestion": suggestion,
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Suggestion Engine Demo", layout="wide")
    st.title("Suggestion Engine — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload task snapshot", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        st.subheader("Draft task")
        title = st.text_input("Title", value="Urgent: submit report ASAP")
        description = st.text_area("Description", value="")
        members_raw = st.text_input("Candidate assignees (comma separated)", value="john_doe, jane_smith, admin")
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks = json_adapter.parse(DEMO_DATASET)
            data_source = f"demo dataset ({DEMO_DATASET})"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        draft = {
            "title": title,
            "description": description,
            "members": [name.strip() for name in members_raw.split(",") if name.strip()],
        }
        result = run_engine(tasks, draft, now=datetime.now())

        st.success(f"Loaded {len(tasks)} tasks from {data_source}.")

        st.subheader("A) Overview")
        stats = result["stats"]
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total", stats.total)
        c2.metric("Completed", stats.completed)
        c3.metric("Overdue", stats.overdue)
        c4.metric("Completion rate", f"{stats.completion_rate}%")

        st.subheader("B) Insights")
        for insight in result["insights"]:
            st.write(f"**[{insight.kind}] {insight.title}** — {insight.description}")
        for tip in result["tips"]:
            st.caption(tip)

        st.subheader("C) Priorities")
        st.table(result["ranking"])

        st.subheader("D) Suggested Schedule")
        st.write(f"Most productive hour: {result['best_hour']}:00")
        st.table(result["schedule"])

        st.subheader("E) Notifications")
        for notification in result["notifications"]:
            st.write(f"{notification.kind}: {notification.message}")
        st.table(result["reminders"])

        st.subheader("F) Draft Suggestion")
        suggestion = result["suggestion"]
        st.json(
            {
                "priority": suggestion.priority,
                "category": suggestion.category,
                "estimated_time": suggestion.estimated_time,
                "due_date": _fmt_time(suggestion.due_date),
                "assignees": list(suggestion.assignees),
                "reasoning": suggestion.reasoning,
            }
        )

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        logger.exception("Demo run failed")
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
