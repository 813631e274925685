"""Weekly grid and availability lookups."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Tuple

DAYS: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri")
SLOTS: Tuple[str, ...] = ("morning", "afternoon")

# Output order of generated sessions; consumers group and render in this order.
GRID: Tuple[Tuple[str, str], ...] = tuple((day, slot) for day in DAYS for slot in SLOTS)


def session_id(day: str, slot: str) -> str:
    return f"{day}-{slot}"


def is_available(availability: Optional[Mapping[str, Iterable[str]]], day: str, slot: str) -> bool:
    """
    Check whether an availability mapping includes a day/slot pair.

    A missing mapping or a missing day key means "not available"; it is
    never an error.
    """
    if not availability:
        return False
    slots = availability.get(day)
    if not slots:
        return False
    return slot in slots


def normalize_availability(raw: Optional[Mapping[str, Iterable[str]]]) -> dict:
    """
    Validate a raw availability mapping and return ``{day: frozenset(slots)}``.

    Used at the storage boundary; the engine itself never validates.

    Raises:
        ValueError: If a day or slot is outside the weekly grid
    """
    result = {}
    for day, slots in (raw or {}).items():
        if day not in DAYS:
            raise ValueError(f"Unknown day {day!r}; expected one of {', '.join(DAYS)}")
        if isinstance(slots, str):
            slots = [slots]
        chosen = set()
        for slot in slots or []:
            if slot not in SLOTS:
                raise ValueError(f"Unknown slot {slot!r} on {day}; expected one of {', '.join(SLOTS)}")
            chosen.add(slot)
        result[day] = frozenset(chosen)
    return result


def parse_availability_tokens(tokens: Iterable[str]) -> dict:
    """Parse ``Mon:morning`` style tokens (``Mon:*`` means both slots)."""
    collected: dict = {}
    for token in tokens:
        day, sep, slot = token.partition(":")
        if not sep:
            raise ValueError(f"Availability must look like Day:slot, got {token!r}")
        wanted: List[str] = list(SLOTS) if slot == "*" else [slot]
        collected.setdefault(day, []).extend(wanted)
    return normalize_availability(collected)
