# -*- coding: utf-8 -*-
"""Adherence — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dates import iso_day, parse_day
from ..identity import get_current_user
from .history import consumption_history, hourly_water, stats_summary, water_history
from .models import (
    ConsumptionHistoryResponse,
    HourlyWaterResponse,
    StatsSummary,
    StreakResponse,
    WaterHistoryResponse,
)
from .streak import compute_streak

router = APIRouter(prefix="/api/adherence", tags=["Adherence"])


@router.get("/streak", response_model=StreakResponse, summary="Current supplement streak")
def streak(user: dict = Depends(get_current_user)):
    return StreakResponse(streak=compute_streak(user["id"]))


@router.get("/water", response_model=WaterHistoryResponse, summary="Daily water totals, oldest first")
def water(
    days: int = Query(default=7, ge=1, le=365),
    user: dict = Depends(get_current_user),
):
    return WaterHistoryResponse(days=days, history=water_history(user["id"], days))


@router.get("/consumption", response_model=ConsumptionHistoryResponse, summary="Daily supplement adherence, oldest first")
def consumption(
    days: int = Query(default=7, ge=1, le=365),
    user: dict = Depends(get_current_user),
):
    return ConsumptionHistoryResponse(days=days, history=consumption_history(user["id"], days))


@router.get("/water/{day}/hourly", response_model=HourlyWaterResponse, summary="Water per hour for a date")
def water_hourly(day: str, user: dict = Depends(get_current_user)):
    parsed = parse_day(day)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid date (expected YYYY-MM-DD): {day}")
    return hourly_water(user["id"], iso_day(parsed))


@router.get("/stats", response_model=StatsSummary, summary="Adherence statistics for a period")
def stats(
    days: int = Query(default=7, ge=1, le=365),
    water_goal: Optional[int] = Query(default=None, gt=0, le=10000),
    user: dict = Depends(get_current_user),
):
    return stats_summary(user["id"], days, water_goal=water_goal)
