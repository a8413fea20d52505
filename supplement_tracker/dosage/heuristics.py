# -*- coding: utf-8 -*-
"""
Dosage and hydration heuristics

Pure functions mapping a user profile to a suggested supplement dosage or a
daily water goal. Missing inputs fall back to fixed defaults instead of
raising.
"""

from __future__ import annotations

from typing import Optional

from ..config import settings
from ..dates import round_half_up
from ..records.models import Gender, Profile
from .catalog import CatalogEntry

ML_PER_KG = {Gender.male: 35, Gender.female: 30}
FALLBACK_WATER_GOAL = {Gender.male: 2500, Gender.female: 2000}


def _as_gender(gender: Optional[str]) -> Gender:
    return Gender.female if str(getattr(gender, "value", gender) or "").lower() == "female" else Gender.male


def water_goal(weight_kg: Optional[float], gender: Optional[str] = "male") -> int:
    """
    Daily water goal in ml

    Args:
        weight_kg: body weight; falsy values use the per-gender fallback
        gender: 'male' | 'female' (anything else is treated as male)

    Returns:
        int: 35 ml/kg for men, 30 ml/kg for women
    """
    g = _as_gender(gender)
    if not weight_kg:
        return FALLBACK_WATER_GOAL[g]
    return round_half_up(weight_kg * ML_PER_KG[g])


def effective_water_goal(profile: Optional[Profile]) -> int:
    """A user-set goal wins over the weight-based one."""
    if profile is None:
        return settings.default_water_goal_ml
    if profile.custom_water_goal:
        return int(profile.custom_water_goal)
    return water_goal(profile.weight, profile.gender)


def _clamp(value: float, entry: CatalogEntry) -> float:
    return max(entry.min_dosage, min(entry.max_dosage, value))


def suggested_dosage(entry: CatalogEntry, profile: Optional[Profile]) -> float:
    """
    Suggested dosage for a catalog supplement

    Order: per-kg base -> gender multiplier -> goal multiplier -> clamp to
    [min_dosage, max_dosage]. Without a weight the catalog default is used
    as-is (still clamped).
    """
    if profile is None or not profile.weight:
        return _clamp(entry.default_dosage, entry)

    suggested: float = entry.default_dosage
    if entry.dosage_per_kg is not None:
        suggested = round_half_up(profile.weight * entry.dosage_per_kg)

    gender_factor = entry.gender_multipliers.get(profile.gender)
    if gender_factor is not None:
        suggested = round_half_up(suggested * gender_factor)

    goal_factor = entry.goal_multipliers.get(profile.goal)
    if goal_factor is not None:
        suggested = round_half_up(suggested * goal_factor)

    return _clamp(suggested, entry)
