"""Greedy single-pass weekly assignment engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from lab_scheduler.domain.availability import GRID, is_available, session_id
from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet, LabSession
from lab_scheduler.services.constraints import can_assign_assistant

from .base import BaseScheduler


@dataclass
class AssignmentState:
    """Running per-assistant session counts, threaded through one generation."""

    counts: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def for_roster(cls, assistants: Sequence[AssistantSnapshot]) -> "AssignmentState":
        return cls(counts={a.id: 0 for a in assistants})

    def count(self, assistant_id: int) -> int:
        return self.counts.get(assistant_id, 0)

    def record(self, assistant_id: int) -> None:
        self.counts[assistant_id] = self.count(assistant_id) + 1


def fill_session(
    day: str,
    slot: str,
    assistants: Sequence[AssistantSnapshot],
    constraints: ConstraintSet,
    state: AssignmentState,
) -> LabSession:
    """
    Pick assistants for one day/slot and record them in ``state``.

    Candidates are the assistants available for the slot, ordered by how
    many sessions they already hold (fewest first). ``sorted`` is stable, so
    equal counts keep roster order.
    """
    candidates = [a for a in assistants if is_available(a.availability, day, slot)]
    candidates = sorted(candidates, key=lambda a: state.count(a.id))

    chosen: List[int] = []
    for assistant in candidates:
        # Checked before admitting so zero or negative capacity admits nobody.
        if len(chosen) >= constraints.people_per_session:
            break
        if can_assign_assistant(assistant, day, slot, state.count(assistant.id), constraints):
            chosen.append(assistant.id)
            state.record(assistant.id)

    return LabSession(id=session_id(day, slot), day=day, slot=slot, assistants=chosen)


def generate_schedule(
    assistants: Sequence[AssistantSnapshot],
    constraints: ConstraintSet,
) -> List[LabSession]:
    """
    Assign assistants to every session of the week.

    Walks the grid once, in order, and fills each session greedily. Never
    backtracks, so later sessions may end up understaffed once eligible
    assistants have hit their caps. Never raises for well-typed input: an
    empty roster or zero bounds produce empty sessions.

    Args:
        assistants: Roster snapshot (ids must be unique)
        constraints: Active constraint set

    Returns:
        Exactly one LabSession per grid cell, in grid order
    """
    state = AssignmentState.for_roster(assistants)
    return [fill_session(day, slot, assistants, constraints, state) for day, slot in GRID]


class GreedyScheduler(BaseScheduler):
    """BaseScheduler wrapper around generate_schedule."""

    name = "greedy"

    def make_schedule(
        self,
        assistants: Sequence[AssistantSnapshot],
        constraints: ConstraintSet,
    ) -> List[LabSession]:
        return generate_schedule(assistants, constraints)
