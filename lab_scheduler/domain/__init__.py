"""Domain models, availability grid and data access layer."""

from .availability import DAYS, GRID, SLOTS, is_available, session_id
from .models import Assistant, AssistantSnapshot, Availability, Base, ConstraintRow, ConstraintSet, LabSession
from .repositories import AssistantRepository, ConstraintRepository, DuplicateEmailError

__all__ = [
    "DAYS",
    "SLOTS",
    "GRID",
    "is_available",
    "session_id",
    "Assistant",
    "Availability",
    "ConstraintRow",
    "Base",
    "AssistantSnapshot",
    "ConstraintSet",
    "LabSession",
    "AssistantRepository",
    "ConstraintRepository",
    "DuplicateEmailError",
]
