"""CSV import utilities to load assistants into the database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from lab_scheduler.domain.availability import DAYS
from lab_scheduler.domain.repositories import AssistantRepository


def _split_slots(value) -> list:
    if pd.isna(value):
        return []
    return [part.strip().lower() for part in str(value).split(";") if part.strip()]


def import_assistants_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import assistants from CSV into database.

    Expected columns: ``name`` plus optional ``id``, ``email``,
    ``max_sessions_per_week`` and one column per weekday (Mon..Fri) holding
    semicolon-separated slots, e.g. ``morning;afternoon``.

    Args:
        session: Database session
        csv_path: Path to assistants CSV

    Returns:
        Number of assistants imported

    Raises:
        ValueError: On a missing name column or invalid row
        DuplicateEmailError: If an email is already taken (nothing is imported)
    """
    df = pd.read_csv(csv_path)

    # Normalize column names; weekday columns keep their Mon..Fri casing
    day_lookup = {d.lower(): d for d in DAYS}
    df.columns = [day_lookup.get(str(c).strip().lower(), str(c).strip().lower()) for c in df.columns]
    if "name" not in df.columns:
        raise ValueError(f"{csv_path}: missing required column 'name'")

    assistants = []
    for line_no, row in enumerate(df.to_dict("records"), start=2):
        availability = {day: _split_slots(row.get(day)) for day in DAYS if day in df.columns}
        max_sessions = row.get("max_sessions_per_week")
        try:
            assistant = AssistantRepository.build(
                name=str(row["name"]) if pd.notna(row["name"]) else "",
                email=str(row["email"]) if pd.notna(row.get("email")) else None,
                max_sessions_per_week=int(max_sessions) if pd.notna(max_sessions) else None,
                availability=availability,
                assistant_id=int(row["id"]) if pd.notna(row.get("id")) else None,
            )
        except ValueError as e:
            raise ValueError(f"{csv_path}, line {line_no}: {e}") from e
        assistants.append(assistant)

    AssistantRepository.bulk_create(session, assistants)

    print(f"[INFO] Imported {len(assistants)} assistants from {csv_path}")
    return len(assistants)
