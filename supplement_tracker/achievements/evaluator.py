# -*- coding: utf-8 -*-
"""Achievement evaluation and monotonic unlock persistence.

The stored unlock set only ever grows: an achievement stays unlocked even when
its underlying condition later stops holding (e.g. a broken streak).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..dates import round_half_up, today as _today
from ..dosage.heuristics import effective_water_goal
from ..records.storage import (
    get_profile,
    get_stored_achievements,
    load_stored_achievements,
    save_stored_achievements,
)
from .models import AchievementCategory, AchievementStats, AchievementStatus, CategoryCount
from .rules import ACHIEVEMENT_RULES, AchievementContext, AchievementRule

logger = logging.getLogger(__name__)

Notifier = Callable[[AchievementStatus], None]


def resolve_water_goal(user_id: str, water_goal: Optional[int] = None) -> int:
    if water_goal:
        return int(water_goal)
    return effective_water_goal(get_profile(user_id))


def _status(rule: AchievementRule, unlocked: bool) -> AchievementStatus:
    return AchievementStatus(
        id=rule.id,
        title=rule.title,
        description=rule.description,
        icon=rule.icon,
        category=rule.category,
        unlocked=unlocked,
    )


def _run_checks(
    user_id: str,
    water_goal: Optional[int],
    today: Optional[date],
    rules: Sequence[AchievementRule],
) -> List[Tuple[AchievementRule, bool]]:
    ctx = AchievementContext(
        user_id=user_id,
        water_goal=resolve_water_goal(user_id, water_goal),
        today=today or _today(),
    )
    results: List[Tuple[AchievementRule, bool]] = []
    for rule in rules:
        try:
            passed = bool(rule.check(ctx))
        except Exception:
            logger.exception("Achievement check %s failed for user %s", rule.id, user_id)
            passed = False
        results.append((rule, passed))
    return results


def evaluate_achievements(
    user_id: str,
    water_goal: Optional[int] = None,
    today: Optional[date] = None,
    rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES,
) -> List[AchievementStatus]:
    """Every rule with its unlock state; previously stored unlocks always report True."""
    stored = set(get_stored_achievements(user_id))
    return [
        _status(rule, passed or rule.id in stored)
        for rule, passed in _run_checks(user_id, water_goal, today, rules)
    ]


def _log_unlock(achievement: AchievementStatus) -> None:
    logger.info("Achievement unlocked: %s (%s)", achievement.id, achievement.title)


def check_and_notify(
    user_id: str,
    water_goal: Optional[int] = None,
    today: Optional[date] = None,
    notify: Optional[Notifier] = None,
    rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES,
) -> List[str]:
    """
    Detect achievements unlocked since the last call.

    Persists ``stored ∪ current`` and hands each new achievement to ``notify``.
    Returns the newly unlocked ids in rule order; ``[]`` on any failure,
    including an unreadable stored set (which is then left untouched).
    """
    notify = notify or _log_unlock
    try:
        stored = load_stored_achievements(user_id)
        if stored is None:
            # Prior set unknown; leave the file as is.
            logger.warning("Stored achievements unreadable for user %s; skipping unlock check", user_id)
            return []
        results = _run_checks(user_id, water_goal, today, rules)
        stored_set = set(stored)

        current = [rule for rule, passed in results if passed]
        new = [rule for rule in current if rule.id not in stored_set]
        if not new:
            return []

        merged = stored + [rule.id for rule in current if rule.id not in stored_set]
        if not save_stored_achievements(user_id, merged):
            logger.warning("Could not persist unlocked achievements for user %s", user_id)

        for rule in new:
            try:
                notify(_status(rule, True))
            except Exception:
                logger.exception("Achievement notifier failed for %s", rule.id)
        return [rule.id for rule in new]
    except Exception:
        logger.exception("check_and_notify failed for user %s", user_id)
        return []


def achievement_stats(
    user_id: str,
    water_goal: Optional[int] = None,
    today: Optional[date] = None,
) -> AchievementStats:
    achievements = evaluate_achievements(user_id, water_goal=water_goal, today=today)
    by_category: Dict[AchievementCategory, CategoryCount] = {c: CategoryCount() for c in AchievementCategory}
    for a in achievements:
        bucket = by_category[a.category]
        bucket.total += 1
        if a.unlocked:
            bucket.unlocked += 1

    unlocked = sum(1 for a in achievements if a.unlocked)
    total = len(achievements)
    return AchievementStats(
        total=total,
        unlocked=unlocked,
        percentage=round_half_up(unlocked / total * 100) if total else 0,
        by_category=by_category,
    )
