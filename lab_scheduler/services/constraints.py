"""Constraint checking and validation for scheduling."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence

from lab_scheduler.domain.availability import GRID, is_available, session_id
from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet, LabSession


def effective_cap(assistant: AssistantSnapshot, constraints: ConstraintSet) -> int:
    """Personal weekly cap if set, else the global sessions_per_assistant."""
    if assistant.max_sessions_per_week is not None:
        return assistant.max_sessions_per_week
    return constraints.sessions_per_assistant


def can_assign_assistant(
    assistant: AssistantSnapshot,
    day: str,
    slot: str,
    assigned_count: int,
    constraints: ConstraintSet,
) -> bool:
    """
    Check if an assistant can take one more session on day/slot.

    Args:
        assistant: Assistant to check
        day: Weekday (Mon..Fri)
        slot: morning or afternoon
        assigned_count: Sessions already given to this assistant this week
        constraints: Active constraint set

    Returns:
        True if the assistant is available and still under their effective cap
    """
    if not is_available(assistant.availability, day, slot):
        return False
    return assigned_count < effective_cap(assistant, constraints)


def validate_schedule(
    sessions: Sequence[LabSession],
    assistants: Iterable[AssistantSnapshot],
    constraints: ConstraintSet,
) -> None:
    """
    Validate a generated week against the schedule invariants.

    Args:
        sessions: Generated sessions in output order
        assistants: Roster the schedule was generated from
        constraints: Constraint set used for generation

    Raises:
        ValueError: If any invariant is violated
    """
    roster: Dict[int, AssistantSnapshot] = {a.id: a for a in assistants}

    # 1. One session per grid cell, in grid order
    got = [(s.day, s.slot) for s in sessions]
    if got != list(GRID):
        raise ValueError(f"Schedule does not follow the weekly grid: expected {len(GRID)} sessions, got {got}")

    counts: Counter = Counter()
    for s in sessions:
        if s.id != session_id(s.day, s.slot):
            raise ValueError(f"Session {s.id!r} has unexpected id for {s.day}/{s.slot}")

        # 2. Capacity
        if len(s.assistants) > max(constraints.people_per_session, 0):
            raise ValueError(
                f"Session {s.id} has {len(s.assistants)} assistants, "
                f"more than people_per_session={constraints.people_per_session}"
            )
        if len(set(s.assistants)) != len(s.assistants):
            raise ValueError(f"Session {s.id} lists an assistant more than once")

        # 3. Availability
        for assistant_id in s.assistants:
            assistant = roster.get(assistant_id)
            if assistant is None:
                raise ValueError(f"Session {s.id} references unknown assistant id {assistant_id}")
            if not is_available(assistant.availability, s.day, s.slot):
                raise ValueError(f"Assistant {assistant_id} ({assistant.name}) is not available for {s.id}")
            counts[assistant_id] += 1

    # 4. Weekly caps
    for assistant_id, total in counts.items():
        assistant = roster[assistant_id]
        cap = effective_cap(assistant, constraints)
        if total > cap:
            raise ValueError(
                f"Assistant {assistant_id} ({assistant.name}) exceeds weekly cap: {total} > {cap}"
            )


def understaffed_sessions(sessions: Sequence[LabSession], constraints: ConstraintSet) -> List[LabSession]:
    """Sessions holding fewer assistants than people_per_session."""
    return [s for s in sessions if len(s.assistants) < constraints.people_per_session]
