"""Scheduling engine."""

from .base import BaseScheduler
from .greedy import AssignmentState, GreedyScheduler, fill_session, generate_schedule
from .orchestrator import Orchestrator, build_week_schedule

__all__ = [
    "BaseScheduler",
    "AssignmentState",
    "GreedyScheduler",
    "fill_session",
    "generate_schedule",
    "Orchestrator",
    "build_week_schedule",
]
