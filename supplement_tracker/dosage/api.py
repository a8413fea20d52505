# -*- coding: utf-8 -*-
"""Dosage — API endpoints (catalog, dosage suggestion, water goal)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..identity import get_current_user
from ..records.storage import get_profile
from .catalog import SUPPLEMENT_CATALOG, get_catalog_entry
from .heuristics import effective_water_goal, suggested_dosage
from .models import CatalogResponse, DosageSuggestionResponse, WaterGoalResponse

router = APIRouter(prefix="/api", tags=["Dosage"])


@router.get("/catalog", response_model=CatalogResponse, summary="Supplement catalog")
def catalog():
    return CatalogResponse(count=len(SUPPLEMENT_CATALOG), entries=SUPPLEMENT_CATALOG)


@router.get(
    "/catalog/{entry_id}/suggestion",
    response_model=DosageSuggestionResponse,
    summary="Suggested dosage for the current profile",
)
def suggestion(entry_id: str, user: dict = Depends(get_current_user)):
    entry = get_catalog_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown catalog entry: {entry_id}")
    profile = get_profile(user["id"])
    return DosageSuggestionResponse(
        catalog_id=entry.id,
        suggested_dosage=suggested_dosage(entry, profile),
        unit=entry.unit,
        min_dosage=entry.min_dosage,
        max_dosage=entry.max_dosage,
        profile_based=bool(profile and profile.weight),
    )


@router.get("/water-goal", response_model=WaterGoalResponse, summary="Daily water goal for the current profile")
def water_goal_for_user(user: dict = Depends(get_current_user)):
    profile = get_profile(user["id"])
    if profile is None:
        source = "default"
    elif profile.custom_water_goal:
        source = "custom"
    else:
        source = "weight" if profile.weight else "default"
    return WaterGoalResponse(
        goal_ml=effective_water_goal(profile),
        source=source,
        weight=profile.weight if profile else None,
        gender=profile.gender.value if profile else None,
    )
