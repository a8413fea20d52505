# -*- coding: utf-8 -*-
"""Independent achievement predicates over aggregated history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional

from ..adherence.history import consumption_history, water_history
from ..adherence.models import ConsumptionHistoryDay, WaterHistoryDay
from ..adherence.streak import compute_streak
from ..dates import iso_day, parse_iso
from ..records.storage import get_supplements, get_water_log
from .models import AchievementCategory

OCEAN_TOTAL_ML = 100_000
EARLY_BIRD_HOUR = 7


@dataclass
class AchievementContext:
    """Memoized reads for a single evaluation pass."""

    user_id: str
    water_goal: int
    today: date
    _water: Dict[int, List[WaterHistoryDay]] = field(default_factory=dict, repr=False)
    _consumption: Dict[int, List[ConsumptionHistoryDay]] = field(default_factory=dict, repr=False)
    _streak: Optional[int] = field(default=None, repr=False)

    def water_history(self, days: int) -> List[WaterHistoryDay]:
        if days not in self._water:
            self._water[days] = water_history(self.user_id, days, today=self.today)
        return self._water[days]

    def consumption_history(self, days: int) -> List[ConsumptionHistoryDay]:
        if days not in self._consumption:
            self._consumption[days] = consumption_history(self.user_id, days, today=self.today)
        return self._consumption[days]

    def streak(self) -> int:
        if self._streak is None:
            self._streak = compute_streak(self.user_id, today=self.today)
        return self._streak

    def roster_size(self) -> int:
        return len(get_supplements(self.user_id))


@dataclass(frozen=True)
class AchievementRule:
    id: str
    title: str
    description: str
    icon: str
    category: AchievementCategory
    check: Callable[[AchievementContext], bool]


def _goal_met_every_day(ctx: AchievementContext, days: int) -> bool:
    history = ctx.water_history(days)
    return len(history) >= days and all(d.amount >= ctx.water_goal for d in history)


def _early_bird(ctx: AchievementContext) -> bool:
    for offset in range(30):
        day = iso_day(ctx.today - timedelta(days=offset))
        for entry in get_water_log(ctx.user_id, day).entries:
            logged_at = parse_iso(entry.time)
            if logged_at is None:
                continue
            if logged_at.tzinfo is not None:
                logged_at = logged_at.astimezone()
            if logged_at.hour < EARLY_BIRD_HOUR:
                return True
    return False


def _consistent_user(ctx: AchievementContext) -> bool:
    consumption = ctx.consumption_history(14)
    water = ctx.water_history(14)
    days_active = sum(1 for c, w in zip(consumption, water) if c.taken > 0 or w.amount > 0)
    return days_active >= 14


ACHIEVEMENT_RULES: List[AchievementRule] = [
    # Hydration
    AchievementRule(
        id="FIRST_WATER",
        title="Primeira Gota",
        description="Registrou água pela primeira vez",
        icon="💧",
        category=AchievementCategory.water,
        check=lambda ctx: any(d.amount > 0 for d in ctx.water_history(30)),
    ),
    AchievementRule(
        id="HYDRATION_MASTER",
        title="Mestre da Hidratação",
        description="Atingiu a meta de água 7 dias seguidos",
        icon="🏆",
        category=AchievementCategory.water,
        check=lambda ctx: _goal_met_every_day(ctx, 7),
    ),
    AchievementRule(
        id="HYDRATION_LEGEND",
        title="Lenda da Hidratação",
        description="Atingiu a meta de água 30 dias seguidos",
        icon="👑",
        category=AchievementCategory.water,
        check=lambda ctx: _goal_met_every_day(ctx, 30),
    ),
    AchievementRule(
        id="OCEAN_DRINKER",
        title="Bebedor de Oceanos",
        description="Bebeu mais de 100 litros no total",
        icon="🌊",
        category=AchievementCategory.water,
        check=lambda ctx: sum(d.amount for d in ctx.water_history(365)) >= OCEAN_TOTAL_ML,
    ),
    # Supplements
    AchievementRule(
        id="FIRST_SUPPLEMENT",
        title="Primeiro Passo",
        description="Tomou um suplemento pela primeira vez",
        icon="💊",
        category=AchievementCategory.supplements,
        check=lambda ctx: any(d.taken > 0 for d in ctx.consumption_history(30)),
    ),
    AchievementRule(
        id="WEEK_STREAK",
        title="Semana Perfeita",
        description="Manteve streak de 7 dias",
        icon="🔥",
        category=AchievementCategory.supplements,
        check=lambda ctx: ctx.streak() >= 7,
    ),
    AchievementRule(
        id="MONTH_STREAK",
        title="Mês de Ouro",
        description="Manteve streak de 30 dias",
        icon="⭐",
        category=AchievementCategory.supplements,
        check=lambda ctx: ctx.streak() >= 30,
    ),
    AchievementRule(
        id="CENTURY_STREAK",
        title="Centurião",
        description="Manteve streak de 100 dias",
        icon="💎",
        category=AchievementCategory.supplements,
        check=lambda ctx: ctx.streak() >= 100,
    ),
    AchievementRule(
        id="SUPPLEMENT_MASTER",
        title="Mestre dos Suplementos",
        description="Cadastrou 5 suplementos",
        icon="🧪",
        category=AchievementCategory.supplements,
        check=lambda ctx: ctx.roster_size() >= 5,
    ),
    # General
    AchievementRule(
        id="EARLY_BIRD",
        title="Madrugador",
        description="Registrou atividade antes das 7h",
        icon="🌅",
        category=AchievementCategory.general,
        check=_early_bird,
    ),
    AchievementRule(
        id="CONSISTENT_USER",
        title="Usuário Dedicado",
        description="Usou o app 14 dias seguidos",
        icon="📱",
        category=AchievementCategory.general,
        check=_consistent_user,
    ),
]
