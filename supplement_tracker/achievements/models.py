# -*- coding: utf-8 -*-
"""Achievements — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field


class AchievementCategory(str, Enum):
    water = "water"
    supplements = "supplements"
    general = "general"


class AchievementStatus(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    category: AchievementCategory
    unlocked: bool = False


class AchievementsResponse(BaseModel):
    water_goal: int
    achievements: List[AchievementStatus]


class CheckResponse(BaseModel):
    newly_unlocked: List[str] = Field(default_factory=list)


class CategoryCount(BaseModel):
    total: int = 0
    unlocked: int = 0


class AchievementStats(BaseModel):
    total: int
    unlocked: int
    percentage: int
    by_category: Dict[AchievementCategory, CategoryCount]
