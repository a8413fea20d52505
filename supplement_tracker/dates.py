# -*- coding: utf-8 -*-
"""Calendar-date helpers shared by the record store and the adherence engine."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import List, Optional


def today() -> date:
    return date.today()


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def iso_day(day: date) -> str:
    return day.isoformat()


def parse_day(value: str) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` string; return None when malformed."""
    try:
        return date.fromisoformat((value or "").strip())
    except ValueError:
        return None


def parse_iso(iso8601: Optional[str]) -> Optional[datetime]:
    if not iso8601:
        return None
    # Handle trailing Z.
    value = iso8601.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def days_back(days: int, end: Optional[date] = None) -> List[date]:
    """Return ``days`` consecutive dates, oldest first, ending on ``end`` (inclusive)."""
    end = end or today()
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def round_half_up(value: float) -> int:
    # Halves round toward +inf, so 12.5 -> 13 (Python's round() would give 12).
    return int(math.floor(value + 0.5))
