"""Services for scheduling logic."""

from .constraints import can_assign_assistant, effective_cap, understaffed_sessions, validate_schedule
from .views import (
    SlotMeta,
    assignment_counts,
    group_by_day,
    resolve_names,
    sessions_to_frame,
    slot_meta,
    summarize_schedule,
)

__all__ = [
    "can_assign_assistant",
    "effective_cap",
    "understaffed_sessions",
    "validate_schedule",
    "SlotMeta",
    "assignment_counts",
    "group_by_day",
    "resolve_names",
    "sessions_to_frame",
    "slot_meta",
    "summarize_schedule",
]
