# -*- coding: utf-8 -*-
"""Records — Pydantic models for the per-user record store."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Gender(str, Enum):
    male = "male"
    female = "female"


class Goal(str, Enum):
    manutencao = "manutencao"
    hipertrofia = "hipertrofia"
    emagrecimento = "emagrecimento"


_HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Supplement(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    icon: str = "💊"
    dosage: float = Field(0.0, ge=0)
    unit: str = ""
    reminder_time: Optional[str] = Field(None, pattern=_HHMM_PATTERN, description="HH:MM")
    added_at: Optional[str] = Field(None, description="ISO8601 timestamp; adherence counts from this day")
    is_custom: bool = False
    catalog_id: Optional[str] = None


class SupplementCreateRequest(BaseModel):
    id: Optional[str] = Field(None, description="Defaults to catalog_id or a generated id")
    name: str = Field(..., min_length=1, max_length=120)
    icon: str = "💊"
    dosage: float = Field(0.0, ge=0)
    unit: str = ""
    reminder_time: Optional[str] = Field(None, pattern=_HHMM_PATTERN)
    is_custom: bool = False
    catalog_id: Optional[str] = None


class SupplementUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    icon: Optional[str] = None
    dosage: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    reminder_time: Optional[str] = Field(None, pattern=_HHMM_PATTERN)


class WaterEntry(BaseModel):
    amount: int = Field(..., ge=0, description="ml")
    time: str = Field(..., description="ISO8601 timestamp")


class WaterLog(BaseModel):
    amount: int = Field(0, ge=0, description="ml")
    entries: List[WaterEntry] = Field(default_factory=list)


class WaterEntryRequest(BaseModel):
    amount: int = Field(..., gt=0, le=10000, description="ml")


class WaterReminder(BaseModel):
    id: str = Field(..., min_length=1)
    time: str = Field(..., pattern=_HHMM_PATTERN)
    enabled: bool = True


class ConsumptionLogResponse(BaseModel):
    date: str
    taken: List[str] = Field(default_factory=list)


def calculate_age(birth_date: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Age in whole years from a ``DD/MM/YYYY`` birth date, or None if unparseable."""
    if not birth_date or len(birth_date) != 10:
        return None
    try:
        day, month, year = (int(p) for p in birth_date.split("/"))
        birth = date(year, month, day)
    except ValueError:
        return None
    today = today or date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


class Profile(BaseModel):
    name: Optional[str] = Field(None, max_length=120)
    weight: Optional[float] = Field(None, gt=0, le=400, description="kg")
    height: Optional[float] = Field(None, gt=0, le=300, description="cm")
    gender: Gender = Gender.male
    goal: Goal = Goal.manutencao
    custom_water_goal: Optional[int] = Field(None, gt=0, le=10000, description="ml")
    birth_date: Optional[str] = Field(None, description="DD/MM/YYYY")
    age: Optional[int] = Field(None, ge=0, le=130)
    updated_at: Optional[str] = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def _blank_birth_date(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _derive_age(self) -> "Profile":
        if self.age is None and self.birth_date:
            self.age = calculate_age(self.birth_date)
        return self


class SupplementsResponse(BaseModel):
    count: int
    supplements: List[Supplement]


class WaterLogResponse(BaseModel):
    date: str
    log: WaterLog
    newly_unlocked: List[str] = Field(default_factory=list)


class ConsumptionUpdateResponse(BaseModel):
    date: str
    taken: List[str] = Field(default_factory=list)
    changed: bool = True
    newly_unlocked: List[str] = Field(default_factory=list)


class WaterRemindersPayload(BaseModel):
    reminders: List[WaterReminder] = Field(default_factory=list)


class CelebrationResponse(BaseModel):
    date: str
    shown_today: bool
