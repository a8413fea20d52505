# -*- coding: utf-8 -*-
"""Consecutive days on which every active supplement was taken."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..dates import iso_day, parse_iso, today as _today
from ..records.models import Supplement
from ..records.storage import get_consumption_logs, get_supplements

logger = logging.getLogger(__name__)

MAX_STREAK_DAYS = 365


def _added_on(supplement: Supplement) -> Optional[date]:
    added = parse_iso(supplement.added_at)
    if added is None:
        return None
    if added.tzinfo is not None:
        added = added.astimezone()
    return added.date()


def active_on(roster: Iterable[Supplement], day: date) -> List[Supplement]:
    """Supplements registered on or before ``day``.

    Entries without a usable ``added_at`` predate registration tracking and
    count as active on every day.
    """
    active: List[Supplement] = []
    for supplement in roster:
        added = _added_on(supplement)
        if added is None or added <= day:
            active.append(supplement)
    return active


def streak_from_records(
    roster: Sequence[Supplement],
    logs: Dict[str, List[str]],
    today: date,
) -> int:
    if not roster:
        return 0

    streak = 0
    for offset in range(MAX_STREAK_DAYS):
        day = today - timedelta(days=offset)
        active = active_on(roster, day)

        # Nothing registered yet today keeps yesterday's streak alive.
        if not active:
            if offset > 0:
                break
            continue

        taken = set(logs.get(iso_day(day)) or [])
        if all(s.id in taken for s in active):
            streak += 1
        elif offset > 0:
            break
        # An unfinished today just doesn't count yet.
    return streak


def compute_streak(user_id: str, today: Optional[date] = None) -> int:
    try:
        roster = get_supplements(user_id)
        if not roster:
            return 0
        logs = get_consumption_logs(user_id)
        return streak_from_records(roster, logs, today or _today())
    except Exception:
        logger.exception("Failed to compute streak for user %s", user_id)
        return 0
