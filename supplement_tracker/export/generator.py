# -*- coding: utf-8 -*-
"""
Data export

CSV series for water / supplements and a plain-text full report built from the
same history the charts use.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import List, Optional

from ..adherence.history import consumption_history, stats_summary, water_history
from ..dates import iso_day, round_half_up, today as _today
from ..dosage.heuristics import effective_water_goal
from ..records.storage import get_profile, get_supplements

EXPORT_KINDS = ("water", "supplements", "full")


def export_filename(kind: str, days: int, today: Optional[date] = None) -> str:
    ext = "txt" if kind == "full" else "csv"
    return f"{kind}_{days}d_{iso_day(today or _today())}.{ext}"


def _goal_percentage(amount: int, goal: int) -> int:
    return round_half_up(amount / goal * 100) if goal > 0 else 0


def _to_csv(header: List[str], rows: List[List[object]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def water_csv(user_id: str, days: int, today: Optional[date] = None) -> str:
    goal = effective_water_goal(get_profile(user_id))
    rows = [
        [d.date, d.amount, goal, _goal_percentage(d.amount, goal)]
        for d in water_history(user_id, days, today=today)
    ]
    return _to_csv(["date", "amount_ml", "goal_ml", "goal_percentage"], rows)


def supplements_csv(user_id: str, days: int, today: Optional[date] = None) -> str:
    rows = [
        [d.date, d.taken, d.total, d.percentage]
        for d in consumption_history(user_id, days, today=today)
    ]
    return _to_csv(["date", "taken", "total", "adherence_percentage"], rows)


def full_report(user_id: str, days: int, today: Optional[date] = None) -> str:
    today = today or _today()
    profile = get_profile(user_id)
    supplements = get_supplements(user_id)
    goal = effective_water_goal(profile)
    stats = stats_summary(user_id, days, water_goal=goal, today=today)
    water = water_history(user_id, days, today=today)
    consumption = consumption_history(user_id, days, today=today)

    lines: List[str] = [
        "=== SUPPLEMENT TRACKER REPORT ===",
        "",
        f"Generated: {iso_day(today)}",
        f"Period: {days} days",
        f"Current streak: {stats.streak} days",
        "",
    ]

    if profile is not None:
        weight = f"{profile.weight:g}kg" if profile.weight else "Not provided"
        lines += [
            "--- PROFILE ---",
            f"Name: {profile.name or 'Not provided'}",
            f"Weight: {weight}",
            f"Water goal: {goal}ml",
            "",
        ]

    lines.append("--- REGISTERED SUPPLEMENTS ---")
    if supplements:
        for index, supp in enumerate(supplements, start=1):
            lines.append(f"{index}. {supp.name} - {supp.dosage:g}{supp.unit}")
    else:
        lines.append("No supplements registered")
    lines.append("")

    lines += [
        "--- WATER ---",
        f"Total: {stats.total_water / 1000:.1f}L",
        f"Daily average: {stats.avg_water}ml",
        f"Days on goal: {stats.days_on_water_goal}/{days}",
        "",
        "--- SUPPLEMENTS ---",
        f"Average adherence: {stats.avg_adherence}%",
        f"Perfect days: {stats.perfect_days}/{days}",
        "",
        "--- DAILY HISTORY ---",
        "date,water_ml,goal_percentage,supplements,adherence_percentage",
    ]
    for w, c in zip(water, consumption):
        lines.append(
            f"{w.date},{w.amount},{_goal_percentage(w.amount, goal)}%,"
            f"{c.taken}/{c.total},{c.percentage}%"
        )
    return "\n".join(lines) + "\n"
