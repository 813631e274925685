import pytest

from lab_scheduler.domain.availability import DAYS, SLOTS, is_available, normalize_availability, parse_availability_tokens
from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet, LabSession
from lab_scheduler.engine.greedy import generate_schedule
from lab_scheduler.services.constraints import (
    can_assign_assistant,
    effective_cap,
    understaffed_sessions,
    validate_schedule,
)

EVERY_SLOT = {day: frozenset(SLOTS) for day in DAYS}


def _roster():
    return [
        AssistantSnapshot(id=1, name="Ada", availability=EVERY_SLOT),
        AssistantSnapshot(id=2, name="Bo", max_sessions_per_week=1, availability={"Mon": frozenset({"morning"})}),
    ]


def test_is_available_tolerates_missing_data():
    assert is_available({"Mon": {"morning"}}, "Mon", "morning") is True
    assert is_available({"Mon": {"morning"}}, "Mon", "afternoon") is False
    assert is_available({"Mon": {"morning"}}, "Tue", "morning") is False
    assert is_available({}, "Mon", "morning") is False
    assert is_available(None, "Mon", "morning") is False


def test_normalize_availability_rejects_unknown_values():
    assert normalize_availability({"Mon": ["morning", "morning"]}) == {"Mon": frozenset({"morning"})}
    with pytest.raises(ValueError):
        normalize_availability({"Sat": ["morning"]})
    with pytest.raises(ValueError):
        normalize_availability({"Mon": ["evening"]})


def test_parse_availability_tokens():
    parsed = parse_availability_tokens(["Mon:morning", "Tue:*"])
    assert parsed == {"Mon": frozenset({"morning"}), "Tue": frozenset({"morning", "afternoon"})}
    with pytest.raises(ValueError):
        parse_availability_tokens(["Monmorning"])


def test_effective_cap():
    constraints = ConstraintSet(sessions_per_assistant=4)
    ada, bo = _roster()
    assert effective_cap(ada, constraints) == 4
    assert effective_cap(bo, constraints) == 1
    zero = AssistantSnapshot(id=3, name="Zed", max_sessions_per_week=0)
    assert effective_cap(zero, constraints) == 0


def test_can_assign_assistant():
    constraints = ConstraintSet(sessions_per_assistant=2)
    ada, bo = _roster()
    assert can_assign_assistant(ada, "Fri", "afternoon", 1, constraints) is True
    assert can_assign_assistant(ada, "Fri", "afternoon", 2, constraints) is False
    assert can_assign_assistant(bo, "Mon", "morning", 0, constraints) is True
    assert can_assign_assistant(bo, "Mon", "afternoon", 0, constraints) is False


def test_validate_schedule_accepts_generated_week():
    constraints = ConstraintSet(people_per_session=2, sessions_per_assistant=3)
    roster = _roster()
    validate_schedule(generate_schedule(roster, constraints), roster, constraints)


def _empty_week():
    return generate_schedule([], ConstraintSet())


def test_validate_schedule_rejects_wrong_grid():
    constraints = ConstraintSet()
    sessions = _empty_week()
    with pytest.raises(ValueError, match="grid"):
        validate_schedule(sessions[:-1], _roster(), constraints)
    with pytest.raises(ValueError, match="grid"):
        validate_schedule(list(reversed(sessions)), _roster(), constraints)


def test_validate_schedule_rejects_over_capacity():
    constraints = ConstraintSet(people_per_session=1, sessions_per_assistant=5)
    sessions = _empty_week()
    sessions[0].assistants = [1, 2]
    with pytest.raises(ValueError, match="people_per_session"):
        validate_schedule(sessions, _roster(), constraints)


def test_validate_schedule_rejects_unavailable_assistant():
    constraints = ConstraintSet(people_per_session=2, sessions_per_assistant=5)
    sessions = _empty_week()
    sessions[1].assistants = [2]  # Bo only works Mon morning
    with pytest.raises(ValueError, match="not available"):
        validate_schedule(sessions, _roster(), constraints)


def test_validate_schedule_rejects_cap_overflow():
    constraints = ConstraintSet(people_per_session=2, sessions_per_assistant=1)
    sessions = _empty_week()
    sessions[0].assistants = [1]
    sessions[1].assistants = [1]
    with pytest.raises(ValueError, match="weekly cap"):
        validate_schedule(sessions, _roster(), constraints)


def test_validate_schedule_rejects_unknown_ids_and_bad_session_ids():
    constraints = ConstraintSet()
    sessions = _empty_week()
    sessions[0].assistants = [99]
    with pytest.raises(ValueError, match="unknown assistant"):
        validate_schedule(sessions, _roster(), constraints)

    sessions = _empty_week()
    sessions[0] = LabSession(id="Mon-am", day="Mon", slot="morning")
    with pytest.raises(ValueError, match="unexpected id"):
        validate_schedule(sessions, _roster(), constraints)


def test_understaffed_sessions():
    constraints = ConstraintSet(people_per_session=2, sessions_per_assistant=10)
    sessions = generate_schedule(_roster(), constraints)
    short = understaffed_sessions(sessions, constraints)
    assert "Mon-morning" not in [s.id for s in short]
    assert len(short) == 9
