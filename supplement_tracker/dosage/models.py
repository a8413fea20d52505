# -*- coding: utf-8 -*-
"""Dosage — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .catalog import CatalogEntry


class CatalogResponse(BaseModel):
    count: int
    entries: List[CatalogEntry]


class DosageSuggestionResponse(BaseModel):
    catalog_id: str
    suggested_dosage: float
    unit: str
    min_dosage: float
    max_dosage: float
    profile_based: bool


class WaterGoalResponse(BaseModel):
    goal_ml: int
    source: str  # custom | weight | default
    weight: Optional[float] = None
    gender: Optional[str] = None
