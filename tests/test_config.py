import pytest
from pydantic import ValidationError

from suggestion_engine.config import default_config, load_config


def test_bundled_config():
    config = default_config()
    assert [rule.name for rule in config.categories] == ["Study", "Assignment", "Exam", "Meeting", "Personal"]
    assert dict(config.priority.due_in_days) == {"high": 2, "medium": 5, "low": 10}
    assert config.assignees.overload_threshold == 5
    assert config.schedule.default_hour == 9
    assert [tier.minutes for tier in config.word_count_tiers] == [120, 60, 30]


def test_override_file_merges(tmp_path):
    path = tmp_path / "override.yml"
    path.write_text(
        "priority:\n  high_keywords: [khẩn cấp, gấp]\nschedule:\n  default_hour: 7\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.priority.high_keywords == ("khẩn cấp", "gấp")
    assert config.priority.low_keywords[0] == "research"
    assert config.schedule.default_hour == 7
    assert config.schedule.hour_offsets["low"] == 4


def test_keywords_are_lowercased(tmp_path):
    path = tmp_path / "override.yml"
    path.write_text("priority:\n  high_keywords: [URGENT, Asap]\n", encoding="utf-8")
    assert load_config(path).priority.high_keywords == ("urgent", "asap")


def test_override_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "override.yml"
    path.write_text("assignees:\n  overload_threshold: 2\n", encoding="utf-8")
    monkeypatch.setenv("SUGGESTION_ENGINE_CONFIG", str(path))
    assert load_config().assignees.overload_threshold == 2


def test_invalid_override(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("schedule:\n  default_hour: nine\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)

    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)

    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


@pytest.mark.parametrize(
    "body",
    [
        "schedule:\n  default_hour: 24\n",
        "schedule:\n  default_hours: 9\n",
        "word_count_tiers: []\n",
        "durations:\n  - keywords: [call]\n    minutes: 0\n    reason: Calls are short.\n",
        "notifications:\n  completed_today_goal: 0\n",
    ],
)
def test_malformed_values_are_rejected(tmp_path, body):
    path = tmp_path / "bad.yml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match="Malformed engine configuration"):
        load_config(path)


def test_cached_config_cannot_be_mutated():
    config = default_config()
    with pytest.raises(TypeError):
        config.priority.due_in_days["high"] = 99
    with pytest.raises(TypeError):
        config.schedule.hour_offsets["low"] = 0
    with pytest.raises(TypeError):
        config.assignees.skills["intruder"] = ("everything",)
    with pytest.raises(ValidationError):
        config.schedule.default_hour = 3
    assert default_config().priority.due_in_days["high"] == 2
