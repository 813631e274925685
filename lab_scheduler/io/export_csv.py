"""CSV export utilities for generated sessions and the roster."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd
from sqlalchemy.orm import Session

from lab_scheduler.domain.availability import DAYS, SLOTS
from lab_scheduler.domain.models import AssistantSnapshot, LabSession
from lab_scheduler.domain.repositories import AssistantRepository
from lab_scheduler.services.views import sessions_to_frame


def export_sessions_csv(
    sessions: Sequence[LabSession],
    output_path: str | Path,
    assistants: Iterable[AssistantSnapshot] | None = None,
    cfg=None,
) -> int:
    """
    Export generated sessions to CSV, one row per (session, assistant).

    Args:
        sessions: Generated sessions in grid order
        output_path: Path to output CSV
        assistants: Optional roster used to resolve display names
        cfg: Optional SchedulerConfig for slot time ranges and labels

    Returns:
        Number of rows written
    """
    df = sessions_to_frame(sessions, assistants, cfg).drop(columns=["position"])
    df.to_csv(output_path, index=False)

    print(f"[INFO] Exported {len(df)} session rows to {output_path}")
    return len(df)


def export_assistants_csv(session: Session, output_path: str | Path) -> int:
    """
    Export the roster to CSV in the format import_assistants_csv reads.

    Args:
        session: Database session
        output_path: Path to output CSV

    Returns:
        Number of assistants exported
    """
    rows = []
    for a in AssistantRepository.snapshot(session):
        row = {
            "id": a.id,
            "name": a.name,
            "email": a.email,
            "max_sessions_per_week": a.max_sessions_per_week,
        }
        for day in DAYS:
            row[day] = ";".join(slot for slot in SLOTS if slot in a.availability.get(day, ()))
        rows.append(row)

    df = pd.DataFrame(rows, columns=["id", "name", "email", "max_sessions_per_week", *DAYS])
    df["max_sessions_per_week"] = df["max_sessions_per_week"].astype("Int64")
    df.to_csv(output_path, index=False)

    print(f"[INFO] Exported {len(df)} assistants to {output_path}")
    return len(df)
