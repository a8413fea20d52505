# -*- coding: utf-8 -*-
"""Records — API endpoints (profile, roster, water, consumption)."""

from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException

from ..achievements.evaluator import check_and_notify
from ..dates import iso_day, parse_day, today
from ..dosage.catalog import get_catalog_entry
from ..dosage.heuristics import suggested_dosage
from ..identity import get_current_user
from .models import (
    CelebrationResponse,
    ConsumptionLogResponse,
    ConsumptionUpdateResponse,
    Profile,
    Supplement,
    SupplementCreateRequest,
    SupplementsResponse,
    SupplementUpdateRequest,
    WaterEntryRequest,
    WaterLogResponse,
    WaterRemindersPayload,
)
from .storage import (
    add_supplement,
    add_water_entry,
    get_consumption_log,
    get_profile,
    get_supplements,
    get_water_log,
    get_water_reminders,
    has_shown_celebration_today,
    log_consumption,
    mark_celebration_shown,
    remove_consumption,
    remove_supplement,
    remove_water_entry,
    save_profile,
    save_water_reminders,
    update_supplement,
)

router = APIRouter(prefix="/api", tags=["Records"])


def _day_or_400(value: str) -> str:
    parsed = parse_day(value)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid date (expected YYYY-MM-DD): {value}")
    return iso_day(parsed)


# ─── Profile ──────────────────────────────────────────────────────────────────


@router.get("/profile", response_model=Profile, summary="Current profile")
def read_profile(user: dict = Depends(get_current_user)):
    profile = get_profile(user["id"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("/profile", response_model=Profile, summary="Create or replace the profile")
def write_profile(profile: Profile, user: dict = Depends(get_current_user)):
    if not save_profile(user["id"], profile):
        raise HTTPException(status_code=500, detail="Failed to save profile")
    return get_profile(user["id"]) or profile


# ─── Supplements ──────────────────────────────────────────────────────────────


@router.get("/supplements", response_model=SupplementsResponse, summary="Registered supplements")
def list_supplements(user: dict = Depends(get_current_user)):
    roster = get_supplements(user["id"])
    return SupplementsResponse(count=len(roster), supplements=roster)


@router.post("/supplements", response_model=Supplement, summary="Register a supplement")
def create_supplement(request: SupplementCreateRequest, user: dict = Depends(get_current_user)):
    data = request.model_dump()
    entry = get_catalog_entry(request.catalog_id) if request.catalog_id else None
    if request.catalog_id and entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown catalog entry: {request.catalog_id}")

    if entry is not None:
        if not request.dosage:
            data["dosage"] = suggested_dosage(entry, get_profile(user["id"]))
        data["unit"] = request.unit or entry.unit
        data["is_custom"] = False
    data["id"] = request.id or request.catalog_id or uuid4().hex

    created = add_supplement(user["id"], Supplement.model_validate(data))
    if created is None:
        raise HTTPException(status_code=409, detail=f"Supplement already registered or not saved: {data['id']}")
    return created


@router.put("/supplements/{supplement_id}", response_model=Supplement, summary="Edit a supplement")
def edit_supplement(supplement_id: str, request: SupplementUpdateRequest, user: dict = Depends(get_current_user)):
    updated = update_supplement(user["id"], supplement_id, request.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="Supplement not found")
    return updated


@router.delete("/supplements/{supplement_id}", summary="Remove a supplement")
def delete_supplement(supplement_id: str, user: dict = Depends(get_current_user)):
    if not remove_supplement(user["id"], supplement_id):
        raise HTTPException(status_code=404, detail="Supplement not found")
    return {"ok": True}


# ─── Water ────────────────────────────────────────────────────────────────────


@router.get("/water/reminders", response_model=WaterRemindersPayload, summary="Water reminder times")
def list_water_reminders(user: dict = Depends(get_current_user)):
    return WaterRemindersPayload(reminders=get_water_reminders(user["id"]))


@router.put("/water/reminders", response_model=WaterRemindersPayload, summary="Replace water reminder times")
def replace_water_reminders(payload: WaterRemindersPayload, user: dict = Depends(get_current_user)):
    if not save_water_reminders(user["id"], payload.reminders):
        raise HTTPException(status_code=500, detail="Failed to save reminders")
    return payload


@router.get("/water/celebration", response_model=CelebrationResponse, summary="Goal celebration already shown today?")
def celebration_status(user: dict = Depends(get_current_user)):
    return CelebrationResponse(date=iso_day(today()), shown_today=has_shown_celebration_today(user["id"]))


@router.post("/water/celebration", response_model=CelebrationResponse, summary="Mark today's celebration as shown")
def celebration_shown(user: dict = Depends(get_current_user)):
    if not mark_celebration_shown(user["id"]):
        raise HTTPException(status_code=500, detail="Failed to save celebration marker")
    return CelebrationResponse(date=iso_day(today()), shown_today=True)


@router.get("/water/{day}", response_model=WaterLogResponse, summary="Water log for a date")
def read_water_log(day: str, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    return WaterLogResponse(date=day, log=get_water_log(user["id"], day))


@router.post("/water/{day}/entries", response_model=WaterLogResponse, summary="Add a water entry")
def create_water_entry(day: str, request: WaterEntryRequest, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    updated = add_water_entry(user["id"], day, request.amount)
    if updated is None:
        raise HTTPException(status_code=500, detail="Failed to save water entry")
    return WaterLogResponse(date=day, log=updated, newly_unlocked=check_and_notify(user["id"]))


@router.delete("/water/{day}/entries/{index}", response_model=WaterLogResponse, summary="Remove a water entry")
def delete_water_entry(day: str, index: int, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    updated = remove_water_entry(user["id"], day, index)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Water entry {index} not found for {day}")
    return WaterLogResponse(date=day, log=updated)


# ─── Consumption ──────────────────────────────────────────────────────────────


@router.get("/consumption/{day}", response_model=ConsumptionLogResponse, summary="Supplements taken on a date")
def read_consumption(day: str, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    return ConsumptionLogResponse(date=day, taken=get_consumption_log(user["id"], day))


@router.post(
    "/consumption/{day}/{supplement_id}",
    response_model=ConsumptionUpdateResponse,
    summary="Mark a supplement as taken (idempotent)",
)
def mark_taken(day: str, supplement_id: str, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    if not log_consumption(user["id"], supplement_id, day):
        raise HTTPException(status_code=500, detail="Failed to save consumption")
    return ConsumptionUpdateResponse(
        date=day,
        taken=get_consumption_log(user["id"], day),
        newly_unlocked=check_and_notify(user["id"]),
    )


@router.delete(
    "/consumption/{day}/{supplement_id}",
    response_model=ConsumptionUpdateResponse,
    summary="Unmark a supplement",
)
def unmark_taken(day: str, supplement_id: str, user: dict = Depends(get_current_user)):
    day = _day_or_400(day)
    changed = remove_consumption(user["id"], supplement_id, day)
    return ConsumptionUpdateResponse(date=day, taken=get_consumption_log(user["id"], day), changed=changed)
