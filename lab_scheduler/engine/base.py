"""Base scheduler interface that all schedulers must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from lab_scheduler.domain.models import AssistantSnapshot, ConstraintSet, LabSession


class BaseScheduler(ABC):
    """
    Abstract base class for weekly lab schedulers.

    A scheduler turns a roster snapshot and a constraint set into one
    LabSession per (day, slot) of the weekly grid. It performs no reads or
    writes of its own; loading the snapshot and persisting the result are
    the caller's job.
    """

    name: str | None = None  # Override in subclasses (e.g., "greedy")

    @abstractmethod
    def make_schedule(
        self,
        assistants: Sequence[AssistantSnapshot],
        constraints: ConstraintSet,
    ) -> List[LabSession]:
        """
        Generate the week's sessions.

        Args:
            assistants: Roster snapshot; order is the tie-break order
            constraints: Active constraint set

        Returns:
            Sessions in grid order (Mon..Fri, morning then afternoon)
        """
        pass

    def get_name(self) -> str:
        """Get the scheduler's name."""
        return self.name or "UNKNOWN"
