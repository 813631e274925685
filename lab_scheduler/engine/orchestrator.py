"""Orchestrator - loads a roster snapshot, runs a scheduler and validates the week."""

from __future__ import annotations

from typing import List, Sequence

from sqlalchemy.orm import Session

from lab_scheduler.domain.availability import is_available
from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet, LabSession
from lab_scheduler.domain.repositories import AssistantRepository, ConstraintRepository
from lab_scheduler.services.constraints import effective_cap, understaffed_sessions, validate_schedule
from lab_scheduler.services.views import assignment_counts

from .base import BaseScheduler
from .greedy import GreedyScheduler


class Orchestrator:
    """
    Orchestrator runs one scheduler over an in-memory snapshot.

    The snapshot is read in a single pass from the database session before
    the scheduler starts; the scheduler never reads on its own.
    """

    def __init__(self, scheduler: BaseScheduler | None = None):
        """
        Initialize orchestrator.

        Args:
            scheduler: Scheduler to run (default: GreedyScheduler)
        """
        self.scheduler = scheduler or GreedyScheduler()

    def load_snapshot(self, session: Session, cfg=None) -> tuple[List[AssistantSnapshot], ConstraintSet]:
        defaults = getattr(cfg, "default_constraints", None)
        assistants = AssistantRepository.snapshot(session)
        constraints = ConstraintRepository.get(session, defaults)
        return assistants, constraints

    def build_schedule(
        self,
        assistants: Sequence[AssistantSnapshot],
        constraints: ConstraintSet,
        validate: bool = True,
    ) -> List[LabSession]:
        """
        Build the week's sessions from a snapshot.

        Args:
            assistants: Roster snapshot
            constraints: Active constraint set
            validate: Run validate_schedule on the result

        Returns:
            Sessions in grid order

        Raises:
            ValueError: If validation is enabled and the result breaks an invariant
        """
        print(f"[INFO] Orchestrator: scheduling {len(assistants)} assistants with {constraints.to_dict()}")
        sessions = self.scheduler.make_schedule(assistants, constraints)

        if validate:
            validate_schedule(sessions, assistants, constraints)

        short = understaffed_sessions(sessions, constraints)
        if short:
            print(f"[WARN] {len(short)} of {len(sessions)} sessions are understaffed")
            _emit_debug(short, sessions, assistants, constraints)

        filled = sum(len(s.assistants) for s in sessions)
        print(f"[OK] Orchestrator: generated {len(sessions)} sessions with {filled} assignments")
        return sessions


def build_week_schedule(
    session: Session,
    cfg=None,
    scheduler: BaseScheduler | None = None,
    validate: bool = True,
) -> List[LabSession]:
    """
    Convenience function to load the current snapshot and build the week.

    Args:
        session: Database session
        cfg: Optional SchedulerConfig (supplies default constraints)
        scheduler: Optional scheduler (default: GreedyScheduler)
        validate: Run validate_schedule on the result

    Returns:
        Sessions in grid order; nothing is persisted
    """
    orchestrator = Orchestrator(scheduler)
    assistants, constraints = orchestrator.load_snapshot(session, cfg)
    return orchestrator.build_schedule(assistants, constraints, validate=validate)


def _emit_debug(short, sessions, assistants, constraints):
    counts = assignment_counts(sessions)
    for s in short:
        print(f"[DEBUG] {s.id} has {len(s.assistants)}/{constraints.people_per_session}. Candidate analysis:")
        for a in assistants:
            if a.id in s.assistants:
                continue
            if not is_available(a.availability, s.day, s.slot):
                reason = "not_available"
            elif counts.get(a.id, 0) >= effective_cap(a, constraints):
                reason = "at_weekly_cap"
            else:
                reason = "OK_or_other_constraint"
            print("  -", a.id, reason)
