"""Repository classes for data access."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .availability import DAYS, SLOTS, normalize_availability
from .models import Assistant, AssistantSnapshot, Availability, ConstraintRow, ConstraintSet

CONSTRAINT_ROW_ID = 1


class DuplicateEmailError(ValueError):
    """Raised when an assistant email collides with an existing one."""


def _positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class AssistantRepository:
    """Repository for assistant data access (the roster provider)."""

    @staticmethod
    def get_all(session: Session) -> List[Assistant]:
        """Get all assistants in id order."""
        return session.query(Assistant).order_by(Assistant.id).all()

    @staticmethod
    def get_by_id(session: Session, assistant_id: int) -> Optional[Assistant]:
        """Get assistant by ID."""
        return session.query(Assistant).filter(Assistant.id == assistant_id).first()

    @staticmethod
    def build(
        name: str,
        email: Optional[str] = None,
        max_sessions_per_week: Optional[int] = None,
        availability: Optional[Mapping[str, Iterable[str]]] = None,
        assistant_id: Optional[int] = None,
    ) -> Assistant:
        """
        Validate input and build an unsaved Assistant with its availability rows.

        Raises:
            ValueError: On an empty name, a non-positive cap, or an unknown day/slot
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Assistant name must not be empty")
        if max_sessions_per_week is not None:
            max_sessions_per_week = _positive_int("max_sessions_per_week", max_sessions_per_week)
        email = (email or "").strip() or None

        slots = normalize_availability(availability)
        assistant = Assistant(name=name, email=email, max_sessions_per_week=max_sessions_per_week)
        if assistant_id is not None:
            assistant.id = assistant_id
        for day in DAYS:
            for slot in SLOTS:
                if slot in slots.get(day, ()):
                    assistant.availability.append(Availability(day_of_week=day, slot=slot))
        return assistant

    @staticmethod
    def create(
        session: Session,
        name: str,
        email: Optional[str] = None,
        max_sessions_per_week: Optional[int] = None,
        availability: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> Assistant:
        """
        Create a new assistant with availability.

        Raises:
            ValueError: On invalid input
            DuplicateEmailError: If another assistant already uses the email
        """
        assistant = AssistantRepository.build(name, email, max_sessions_per_week, availability)
        AssistantRepository.bulk_create(session, [assistant])
        session.refresh(assistant)
        return assistant

    @staticmethod
    def bulk_create(session: Session, assistants: List[Assistant]) -> None:
        """Create multiple assistants in one transaction."""
        session.add_all(assistants)
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            if "email" in str(e.orig).lower():
                raise DuplicateEmailError("An assistant with this email already exists.") from e
            raise

    @staticmethod
    def delete(session: Session, assistant_id: int) -> bool:
        """Delete an assistant and its availability. Returns False if it did not exist."""
        assistant = AssistantRepository.get_by_id(session, assistant_id)
        if assistant is None:
            return False
        session.delete(assistant)
        session.commit()
        return True

    @staticmethod
    def snapshot(session: Session) -> List[AssistantSnapshot]:
        """Read-only roster snapshot for the engine."""
        return [a.to_snapshot() for a in AssistantRepository.get_all(session)]


class ConstraintRepository:
    """Repository for the single active constraint row (the constraint provider)."""

    @staticmethod
    def get_row(session: Session, defaults: Optional[ConstraintSet] = None) -> ConstraintRow:
        """Get constraint row 1, creating it from defaults when missing."""
        row = session.get(ConstraintRow, CONSTRAINT_ROW_ID)
        if row is None:
            defaults = defaults or ConstraintSet()
            row = ConstraintRow(
                id=CONSTRAINT_ROW_ID,
                sessions_per_day=defaults.sessions_per_day,
                people_per_session=defaults.people_per_session,
                sessions_per_assistant=defaults.sessions_per_assistant,
            )
            session.add(row)
            session.commit()
            print(f"[INFO] Created default constraints: {defaults.to_dict()}")
        return row

    @staticmethod
    def get(session: Session, defaults: Optional[ConstraintSet] = None) -> ConstraintSet:
        """Get the active constraint set."""
        return ConstraintRepository.get_row(session, defaults).to_constraint_set()

    @staticmethod
    def update(session: Session, constraints: ConstraintSet) -> ConstraintSet:
        """
        Replace the active constraint set.

        Raises:
            ValueError: If any bound is not a positive integer
        """
        _positive_int("sessions_per_day", constraints.sessions_per_day)
        _positive_int("people_per_session", constraints.people_per_session)
        _positive_int("sessions_per_assistant", constraints.sessions_per_assistant)

        row = ConstraintRepository.get_row(session, constraints)
        row.sessions_per_day = constraints.sessions_per_day
        row.people_per_session = constraints.people_per_session
        row.sessions_per_assistant = constraints.sessions_per_assistant
        session.commit()
        return row.to_constraint_set()
