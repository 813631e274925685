from lab_scheduler.domain.availability import DAYS, SLOTS
from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet
from lab_scheduler.engine.greedy import generate_schedule
from lab_scheduler.io.config import SchedulerConfig
from lab_scheduler.services.views import (
    UNASSIGNED,
    SlotMeta,
    assignment_counts,
    group_by_day,
    resolve_names,
    sessions_to_frame,
    slot_meta,
    summarize_schedule,
)


def _week():
    roster = [
        AssistantSnapshot(id=1, name="Ada", availability={"Mon": frozenset(SLOTS)}),
        AssistantSnapshot(id=2, name="Bo", availability={"Mon": frozenset({"morning"}), "Tue": frozenset({"afternoon"})}),
    ]
    constraints = ConstraintSet(people_per_session=2, sessions_per_assistant=2)
    return roster, constraints, generate_schedule(roster, constraints)


def test_group_by_day_keeps_weekday_order():
    _, _, sessions = _week()
    grouped = group_by_day(sessions)
    assert list(grouped) == list(DAYS)
    assert [s.slot for s in grouped["Wed"]] == ["morning", "afternoon"]


def test_resolve_names():
    roster, _, sessions = _week()
    names = resolve_names(sessions, roster)
    assert names["Mon-morning"] == ["Ada", "Bo"]
    assert names["Mon-afternoon"] == ["Ada"]
    assert names["Wed-morning"] == []
    assert resolve_names(sessions, [])["Mon-morning"] == ["#1", "#2"]


def test_assignment_counts():
    _, _, sessions = _week()
    assert assignment_counts(sessions) == {1: 2, 2: 2}


def test_slot_meta_defaults_and_fallback():
    cfg = SchedulerConfig()
    meta = slot_meta("Mon", "morning", cfg)
    assert meta.time_range == "9:15-10:45"
    assert meta.label == "Choice Male Rats Group 1"
    assert slot_meta("Mon", "morning") == SlotMeta()


def test_sessions_to_frame_marks_unassigned():
    roster, _, sessions = _week()
    df = sessions_to_frame(sessions, roster)

    assert list(df.columns) == [
        "position", "session_id", "day", "slot", "time_range", "label", "assistant_id", "assistant_name",
    ]
    mon_morning = df[df["session_id"] == "Mon-morning"]
    assert list(mon_morning["assistant_name"]) == ["Ada", "Bo"]
    wed = df[df["session_id"] == "Wed-morning"]
    assert len(wed) == 1
    assert wed.iloc[0]["assistant_name"] == UNASSIGNED
    assert df["session_id"].nunique() == 10


def test_summarize_schedule():
    roster, constraints, sessions = _week()
    text = summarize_schedule(sessions, roster, constraints.people_per_session)
    assert "Assistants per session:" in text
    assert "Understaffed sessions (< 2):" in text
    assert "Wed-morning: 0" in text
    assert "Ada" in text and "Bo" in text
    assert summarize_schedule([], roster) == "No sessions."
