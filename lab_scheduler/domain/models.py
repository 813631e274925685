"""SQLAlchemy models and in-memory snapshots for lab scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship

from .availability import DAYS


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Assistant(Base):
    """Lab assistant with an optional personal weekly session cap."""

    __tablename__ = "assistants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    max_sessions_per_week = Column(Integer, nullable=True)  # NULL -> global sessions_per_assistant

    # Relationships
    availability = relationship(
        "Availability",
        back_populates="assistant",
        cascade="all, delete-orphan",
        order_by="Availability.id",
    )

    def availability_map(self) -> Dict[str, FrozenSet[str]]:
        slots: Dict[str, set] = {day: set() for day in DAYS}
        for row in self.availability:
            slots.setdefault(row.day_of_week, set()).add(row.slot)
        return {day: frozenset(values) for day, values in slots.items()}

    def to_snapshot(self) -> "AssistantSnapshot":
        return AssistantSnapshot(
            id=self.id,
            name=self.name,
            email=self.email,
            max_sessions_per_week=self.max_sessions_per_week,
            availability=self.availability_map(),
        )

    def __repr__(self) -> str:
        return f"<Assistant(id={self.id}, name='{self.name}', max={self.max_sessions_per_week})>"


class Availability(Base):
    """One (day, slot) an assistant can work."""

    __tablename__ = "availability"
    __table_args__ = (UniqueConstraint("assistant_id", "day_of_week", "slot", name="uq_availability_slot"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    assistant_id = Column(Integer, ForeignKey("assistants.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(String(3), nullable=False)  # Mon..Fri
    slot = Column(String(20), nullable=False)  # morning, afternoon

    assistant = relationship("Assistant", back_populates="availability")

    def __repr__(self) -> str:
        return f"<Availability(assistant={self.assistant_id}, {self.day_of_week}-{self.slot})>"


class ConstraintRow(Base):
    """The single active constraint configuration (id = 1)."""

    __tablename__ = "constraints"

    id = Column(Integer, primary_key=True)
    sessions_per_day = Column(Integer, nullable=False)
    people_per_session = Column(Integer, nullable=False)
    sessions_per_assistant = Column(Integer, nullable=False)

    def to_constraint_set(self) -> "ConstraintSet":
        return ConstraintSet(
            sessions_per_day=self.sessions_per_day,
            people_per_session=self.people_per_session,
            sessions_per_assistant=self.sessions_per_assistant,
        )

    def __repr__(self) -> str:
        return (
            f"<ConstraintRow(per_day={self.sessions_per_day}, per_session={self.people_per_session}, "
            f"per_assistant={self.sessions_per_assistant})>"
        )


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class AssistantSnapshot:
    """Read-only view of an assistant handed to the engine."""

    id: int
    name: str
    email: Optional[str] = None
    max_sessions_per_week: Optional[int] = None
    availability: Mapping[str, FrozenSet[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssistantSnapshot":
        """Build from the camelCase wire shape or the snake_case shape."""
        raw = data.get("availability") or {}
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data.get("email"),
            max_sessions_per_week=_pick(data, "maxSessionsPerWeek", "max_sessions_per_week"),
            availability={
                day: frozenset([slots] if isinstance(slots, str) else slots or ())
                for day, slots in raw.items()
            },
        )


@dataclass(frozen=True)
class ConstraintSet:
    """Global scheduling bounds. ``sessions_per_day`` is informational only."""

    sessions_per_day: int = 2
    people_per_session: int = 2
    sessions_per_assistant: int = 2

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConstraintSet":
        defaults = cls()
        return cls(
            sessions_per_day=_pick(data, "sessionsPerDay", "sessions_per_day", default=defaults.sessions_per_day),
            people_per_session=_pick(
                data, "peoplePerSession", "people_per_session", default=defaults.people_per_session
            ),
            sessions_per_assistant=_pick(
                data, "sessionsPerAssistant", "sessions_per_assistant", default=defaults.sessions_per_assistant
            ),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "sessionsPerDay": self.sessions_per_day,
            "peoplePerSession": self.people_per_session,
            "sessionsPerAssistant": self.sessions_per_assistant,
        }


@dataclass
class LabSession:
    """One generated (day, slot) session with its assigned assistant ids."""

    id: str
    day: str
    slot: str
    assistants: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "day": self.day,
            "slot": self.slot,
            "assistants": list(self.assistants),
        }
