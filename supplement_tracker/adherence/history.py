# -*- coding: utf-8 -*-
"""Fixed-length day-by-day water and supplement summaries.

Every series is ordered oldest to newest and ends today (inclusive). Missing
days are zero-filled, so ``len(history) == days``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..dates import days_back, iso_day, parse_iso, round_half_up, today as _today
from ..dosage.heuristics import effective_water_goal
from ..records.storage import get_consumption_log, get_profile, get_supplements, get_water_log
from .models import ConsumptionHistoryDay, HourlyWaterResponse, StatsSummary, WaterHistoryDay
from .streak import compute_streak

logger = logging.getLogger(__name__)


def adherence_percentage(taken: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(taken / total * 100)


def water_history(user_id: str, days: int, today: Optional[date] = None) -> List[WaterHistoryDay]:
    if days <= 0:
        return []
    calendar = days_back(days, today or _today())
    try:
        return [
            WaterHistoryDay(date=iso_day(day), amount=get_water_log(user_id, iso_day(day)).amount)
            for day in calendar
        ]
    except Exception:
        logger.exception("Failed to build water history for user %s", user_id)
        return [WaterHistoryDay(date=iso_day(day)) for day in calendar]


def consumption_history(user_id: str, days: int, today: Optional[date] = None) -> List[ConsumptionHistoryDay]:
    """Per-day adherence; ``total`` is today's roster size, even for past days."""
    if days <= 0:
        return []
    calendar = days_back(days, today or _today())
    try:
        total = len(get_supplements(user_id))
        history: List[ConsumptionHistoryDay] = []
        for day in calendar:
            taken = len(get_consumption_log(user_id, iso_day(day)))
            history.append(
                ConsumptionHistoryDay(
                    date=iso_day(day),
                    taken=taken,
                    total=total,
                    percentage=adherence_percentage(taken, total),
                )
            )
        return history
    except Exception:
        logger.exception("Failed to build consumption history for user %s", user_id)
        return [ConsumptionHistoryDay(date=iso_day(day)) for day in calendar]


def hourly_water(user_id: str, day: str) -> HourlyWaterResponse:
    hours = [0] * 24
    for entry in get_water_log(user_id, day).entries:
        logged_at = parse_iso(entry.time)
        if logged_at is None:
            continue
        if logged_at.tzinfo is not None:
            logged_at = logged_at.astimezone()
        hours[logged_at.hour] += entry.amount

    total = sum(hours)
    peak = max(hours)
    return HourlyWaterResponse(
        date=day,
        hours=hours,
        total=total,
        peak_hour=hours.index(peak) if peak > 0 else None,
    )


def stats_summary(
    user_id: str,
    days: int = 7,
    water_goal: Optional[int] = None,
    today: Optional[date] = None,
) -> StatsSummary:
    today = today or _today()
    goal = water_goal or effective_water_goal(get_profile(user_id))
    supplements = consumption_history(user_id, days, today=today)
    water = water_history(user_id, days, today=today)

    total_water = sum(d.amount for d in water)
    return StatsSummary(
        days=days,
        streak=compute_streak(user_id, today=today),
        water_goal=goal,
        avg_adherence=round_half_up(sum(d.percentage for d in supplements) / len(supplements)) if supplements else 0,
        perfect_days=sum(1 for d in supplements if d.percentage == 100),
        avg_water=round_half_up(total_water / len(water)) if water else 0,
        total_water=total_water,
        days_on_water_goal=sum(1 for d in water if d.amount >= goal),
    )
