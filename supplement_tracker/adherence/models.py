# -*- coding: utf-8 -*-
"""Adherence — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class WaterHistoryDay(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    amount: int = Field(0, ge=0, description="ml")


class ConsumptionHistoryDay(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    taken: int = Field(0, ge=0)
    total: int = Field(0, ge=0, description="Current roster size")
    percentage: int = Field(0, ge=0)


class StreakResponse(BaseModel):
    streak: int = Field(0, ge=0)


class WaterHistoryResponse(BaseModel):
    days: int
    history: List[WaterHistoryDay]


class ConsumptionHistoryResponse(BaseModel):
    days: int
    history: List[ConsumptionHistoryDay]


class HourlyWaterResponse(BaseModel):
    date: str
    hours: List[int] = Field(default_factory=lambda: [0] * 24, description="ml per local hour, index 0-23")
    total: int = 0
    peak_hour: Optional[int] = Field(None, ge=0, le=23)


class StatsSummary(BaseModel):
    days: int
    streak: int = 0
    water_goal: int
    avg_adherence: int = 0
    perfect_days: int = 0
    avg_water: int = 0
    total_water: int = 0
    days_on_water_goal: int = 0
