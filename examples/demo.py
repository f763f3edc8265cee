"""Demo script for suggestion-engine."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from suggestion_engine.adapters.json_adapter import parse
from suggestion_engine.insights import analyze_tasks
from suggestion_engine.notifications import smart_notifications
from suggestion_engine.ranking import prioritize_tasks
from suggestion_engine.scheduling import suggest_schedule
from suggestion_engine.suggester import suggest_task_properties


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    tasks = parse("examples/sample_tasks.json")

    for insight in analyze_tasks(tasks):
        print(f"[{insight.kind}] {insight.title}: {insight.description}")
    print("Ranking:", [task.title for task in prioritize_tasks(tasks)])
    for item in suggest_schedule(tasks):
        print("Schedule:", item.task_id, item.suggested_time.isoformat(timespec="minutes"), "-", item.reasoning)
    for notification in smart_notifications(tasks):
        print(f"Notification ({notification.kind}): {notification.message}")

    suggestion = suggest_task_properties(
        "Prepare midterm presentation", "slides and notes", tasks, members=["john_doe", "jane_smith"]
    )
    print("Suggestion:", suggestion)


if __name__ == "__main__":
    main()
