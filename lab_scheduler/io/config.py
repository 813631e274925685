"""Configuration loading (YAML or JSON)."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict

import yaml

from lab_scheduler.domain.availability import DAYS, SLOTS
from lab_scheduler.domain.db import DEFAULT_DB_URL
from lab_scheduler.domain.models import ConstraintSet

DB_URL_ENV = "LAB_SCHEDULER_DB_URL"


def _default_slot_meta() -> Dict[str, Dict[str, Dict[str, str]]]:
    group_1 = "Choice Male Rats Group 1"
    group_2 = "Choice Female Rats Group 2"
    ranges = {
        "Mon": ("9:15-10:45", "11:00-12:30"),
        "Tue": ("12:30-2:00", "2:00-3:30"),
        "Wed": ("11:00-12:30", "2:00-3:30"),
        "Thu": ("11:00-12:30", "2:00-3:30"),
        "Fri": ("9:30-11:00", "11:00-12:30"),
    }
    return {
        day: {
            "morning": {"time_range": morning, "label": group_1},
            "afternoon": {"time_range": afternoon, "label": group_2},
        }
        for day, (morning, afternoon) in ranges.items()
    }


@dataclass
class SchedulerConfig:
    db_url: str = DEFAULT_DB_URL
    default_constraints: ConstraintSet = field(default_factory=ConstraintSet)
    slot_meta: Dict[str, Dict[str, Dict[str, str]]] = field(default_factory=_default_slot_meta)


def _read_raw(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must contain a mapping at the top level")
    return data


def _check_slot_meta(slot_meta: dict) -> None:
    for day, per_slot in slot_meta.items():
        if day not in DAYS:
            raise ValueError(f"slot_meta: unknown day {day!r}")
        for slot in per_slot or {}:
            if slot not in SLOTS:
                raise ValueError(f"slot_meta: unknown slot {slot!r} on {day}")


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load scheduler configuration.

    Args:
        path: YAML or JSON file; None returns the defaults

    Returns:
        SchedulerConfig, with ``db_url`` overridden by LAB_SCHEDULER_DB_URL when set

    Raises:
        ValueError: On unknown keys or slot_meta entries outside the weekly grid
    """
    cfg = SchedulerConfig()
    if path is not None:
        raw = _read_raw(Path(path))
        known = {f.name for f in fields(SchedulerConfig)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        if "db_url" in raw:
            cfg.db_url = str(raw["db_url"])
        if "default_constraints" in raw:
            cfg.default_constraints = ConstraintSet.from_dict(raw["default_constraints"] or {})
        if "slot_meta" in raw:
            slot_meta = raw["slot_meta"] or {}
            _check_slot_meta(slot_meta)
            # Partial tables extend the defaults instead of replacing them.
            merged = _default_slot_meta()
            for day, per_slot in slot_meta.items():
                for slot, meta in (per_slot or {}).items():
                    merged[day][slot] = {
                        "time_range": str((meta or {}).get("time_range", "")),
                        "label": str((meta or {}).get("label", "")),
                    }
            cfg.slot_meta = merged

    env_url = os.environ.get(DB_URL_ENV)
    if env_url:
        cfg.db_url = env_url
    return cfg
