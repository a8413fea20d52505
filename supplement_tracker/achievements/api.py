# -*- coding: utf-8 -*-
"""Achievements — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..identity import get_current_user
from .evaluator import achievement_stats, check_and_notify, evaluate_achievements, resolve_water_goal
from .models import AchievementsResponse, AchievementStats, CheckResponse

router = APIRouter(prefix="/api/achievements", tags=["Achievements"])


@router.get("", response_model=AchievementsResponse, summary="All achievements with unlock state")
def list_achievements(
    water_goal: Optional[int] = Query(default=None, gt=0, le=10000),
    user: dict = Depends(get_current_user),
):
    goal = resolve_water_goal(user["id"], water_goal)
    return AchievementsResponse(water_goal=goal, achievements=evaluate_achievements(user["id"], water_goal=goal))


@router.post("/check", response_model=CheckResponse, summary="Detect and persist newly unlocked achievements")
def check(
    water_goal: Optional[int] = Query(default=None, gt=0, le=10000),
    user: dict = Depends(get_current_user),
):
    return CheckResponse(newly_unlocked=check_and_notify(user["id"], water_goal=water_goal))


@router.get("/stats", response_model=AchievementStats, summary="Unlock counts by category")
def stats(
    water_goal: Optional[int] = Query(default=None, gt=0, le=10000),
    user: dict = Depends(get_current_user),
):
    return achievement_stats(user["id"], water_goal=water_goal)
