"""Read-only projections of a generated week (grouping, names, summaries)."""

from __future__ import annotations

from collections import Counter, OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from lab_scheduler.domain.availability import DAYS, SLOTS
from lab_scheduler.domain.models import AssistantSnapshot, LabSession

UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class SlotMeta:
    time_range: str = ""
    label: str = ""


def slot_meta(day: str, slot: str, cfg=None) -> SlotMeta:
    """Display metadata for a day/slot; empty when not configured."""
    table = getattr(cfg, "slot_meta", None) or {}
    meta = table.get(day, {}).get(slot)
    if not meta:
        return SlotMeta()
    return SlotMeta(time_range=meta.get("time_range", ""), label=meta.get("label", ""))


def group_by_day(sessions: Iterable[LabSession]) -> "OrderedDict[str, List[LabSession]]":
    grouped: "OrderedDict[str, List[LabSession]]" = OrderedDict((day, []) for day in DAYS)
    for s in sessions:
        grouped.setdefault(s.day, []).append(s)
    return grouped


def resolve_names(
    sessions: Iterable[LabSession],
    assistants: Iterable[AssistantSnapshot],
) -> Dict[str, List[str]]:
    """Map session id -> assistant display names; unknown ids render as '#<id>'."""
    names = {a.id: a.name for a in assistants}
    return {s.id: [names.get(i, f"#{i}") for i in s.assistants] for s in sessions}


def assignment_counts(sessions: Iterable[LabSession]) -> Dict[int, int]:
    counts: Counter = Counter()
    for s in sessions:
        counts.update(s.assistants)
    return dict(counts)


def sessions_to_frame(
    sessions: Sequence[LabSession],
    assistants: Optional[Iterable[AssistantSnapshot]] = None,
    cfg=None,
) -> pd.DataFrame:
    """
    Flatten sessions into one row per (session, assistant).

    Empty sessions keep a single row with a null assistant_id and the name
    "Unassigned" so they stay visible in exports.
    """
    names = {a.id: a.name for a in (assistants or [])}
    rows = []
    for position, s in enumerate(sessions):
        meta = slot_meta(s.day, s.slot, cfg)
        base = {
            "position": position,
            "session_id": s.id,
            "day": s.day,
            "slot": s.slot,
            "time_range": meta.time_range,
            "label": meta.label,
        }
        if not s.assistants:
            rows.append({**base, "assistant_id": None, "assistant_name": UNASSIGNED})
            continue
        for assistant_id in s.assistants:
            rows.append({**base, "assistant_id": assistant_id, "assistant_name": names.get(assistant_id, f"#{assistant_id}")})

    columns = ["position", "session_id", "day", "slot", "time_range", "label", "assistant_id", "assistant_name"]
    df = pd.DataFrame(rows, columns=columns)
    df["assistant_id"] = df["assistant_id"].astype("Int64")
    return df


def summarize_schedule(
    sessions: Sequence[LabSession],
    assistants: Sequence[AssistantSnapshot],
    people_per_session: Optional[int] = None,
) -> str:
    if not sessions:
        return "No sessions."

    coverage = pd.DataFrame(
        [{"day": s.day, "slot": s.slot, "assigned": len(s.assistants)} for s in sessions]
    )
    coverage_table = coverage.pivot(index="day", columns="slot", values="assigned")
    coverage_table = coverage_table.reindex(
        index=[d for d in DAYS if d in coverage_table.index],
        columns=[s for s in SLOTS if s in coverage_table.columns],
    )

    counts = assignment_counts(sessions)
    per_assistant = pd.Series(
        {f"{a.name} (#{a.id})": counts.get(a.id, 0) for a in assistants},
        dtype="int64",
        name="sessions",
    ).sort_values(ascending=False, kind="stable")

    lines = ["Assistants per session:"]
    lines.append(coverage_table.to_string())
    lines.append("")

    if people_per_session is not None:
        short = [s for s in sessions if len(s.assistants) < people_per_session]
        if short:
            lines.append(f"Understaffed sessions (< {people_per_session}):")
            for s in short:
                lines.append(f"  {s.id}: {len(s.assistants)}")
        else:
            lines.append("All sessions fully staffed.")
        lines.append("")

    lines.append("Sessions per assistant (week):")
    lines.append(per_assistant.to_string() if not per_assistant.empty else "No assistants.")
    return "\n".join(lines)
