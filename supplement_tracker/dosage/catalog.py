# -*- coding: utf-8 -*-
"""
Supplement catalog

Reference dosages for the supplements users can pick from. Weight-scaled
entries carry ``dosage_per_kg``; profile adjustments are declared per entry
as multiplier tables keyed by gender and goal.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..records.models import Gender, Goal


class CatalogEntry(BaseModel):
    id: str
    name: str
    icon: str
    category: str
    default_dosage: float = Field(..., ge=0)
    unit: str
    min_dosage: float = Field(..., ge=0)
    max_dosage: float = Field(..., ge=0)
    dosage_per_kg: Optional[float] = Field(None, gt=0)
    description: str = ""
    timing: str = ""
    gender_multipliers: Dict[Gender, float] = Field(default_factory=dict)
    goal_multipliers: Dict[Goal, float] = Field(default_factory=dict)


# Women: roughly 15% lower for body-weight driven supplements.
_FEMALE_REDUCED = {Gender.female: 0.85}

SUPPLEMENT_CATALOG: List[CatalogEntry] = [
    CatalogEntry(
        id="whey",
        name="Whey Protein",
        icon="🥛",
        category="Proteína",
        default_dosage=30,
        unit="g",
        min_dosage=20,
        max_dosage=50,
        dosage_per_kg=0.4,
        description="Proteína de rápida absorção para recuperação muscular",
        timing="Pós-treino ou entre refeições",
        gender_multipliers=_FEMALE_REDUCED,
        goal_multipliers={Goal.hipertrofia: 1.1, Goal.emagrecimento: 0.9},
    ),
    CatalogEntry(
        id="creatine",
        name="Creatina",
        icon="💪",
        category="Performance",
        default_dosage=5,
        unit="g",
        min_dosage=3,
        max_dosage=5,
        dosage_per_kg=0.05,
        description="Melhora força e performance em exercícios de alta intensidade",
        timing="Qualquer horário, diariamente",
        gender_multipliers=_FEMALE_REDUCED,
        goal_multipliers={Goal.hipertrofia: 1.1},
    ),
    CatalogEntry(
        id="vitamin-c",
        name="Vitamina C",
        icon="🍊",
        category="Vitaminas",
        default_dosage=1000,
        unit="mg",
        min_dosage=500,
        max_dosage=2000,
        description="Fortalece o sistema imunológico e é antioxidante",
        timing="Pela manhã com alimentação",
    ),
    CatalogEntry(
        id="vitamin-d",
        name="Vitamina D",
        icon="☀️",
        category="Vitaminas",
        default_dosage=2000,
        unit="UI",
        min_dosage=1000,
        max_dosage=4000,
        description="Essencial para saúde óssea e imunidade",
        timing="Pela manhã com gorduras",
    ),
    CatalogEntry(
        id="omega3",
        name="Ômega 3",
        icon="🐟",
        category="Ácidos Graxos",
        default_dosage=2,
        unit="g",
        min_dosage=1,
        max_dosage=3,
        description="Anti-inflamatório, saúde cardiovascular e cerebral",
        timing="Com refeições",
    ),
    CatalogEntry(
        id="multivitamin",
        name="Multivitamínico",
        icon="💊",
        category="Vitaminas",
        default_dosage=1,
        unit="cápsula",
        min_dosage=1,
        max_dosage=1,
        description="Complemento de vitaminas e minerais essenciais",
        timing="Pela manhã com alimentação",
    ),
    CatalogEntry(
        id="bcaa",
        name="BCAA",
        icon="⚡",
        category="Aminoácidos",
        default_dosage=10,
        unit="g",
        min_dosage=5,
        max_dosage=15,
        dosage_per_kg=0.1,
        description="Aminoácidos de cadeia ramificada para recuperação",
        timing="Durante ou pós-treino",
        gender_multipliers=_FEMALE_REDUCED,
        goal_multipliers={Goal.hipertrofia: 1.1},
    ),
    CatalogEntry(
        id="caffeine",
        name="Cafeína",
        icon="☕",
        category="Estimulantes",
        default_dosage=200,
        unit="mg",
        min_dosage=100,
        max_dosage=400,
        dosage_per_kg=3,
        description="Aumenta foco e energia para treinos",
        timing="30-60min antes do treino",
        gender_multipliers=_FEMALE_REDUCED,
    ),
    CatalogEntry(
        id="zma",
        name="ZMA",
        icon="😴",
        category="Minerais",
        default_dosage=1,
        unit="dose",
        min_dosage=1,
        max_dosage=1,
        description="Zinco, magnésio e vitamina B6 para sono e recuperação",
        timing="Antes de dormir, estômago vazio",
    ),
]

_CATALOG_BY_ID: Dict[str, CatalogEntry] = {entry.id: entry for entry in SUPPLEMENT_CATALOG}


def get_catalog_entry(entry_id: str) -> Optional[CatalogEntry]:
    return _CATALOG_BY_ID.get(entry_id)
