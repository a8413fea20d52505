# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

from supplement_tracker.achievements.evaluator import (
    achievement_stats,
    check_and_notify,
    evaluate_achievements,
    resolve_water_goal,
)
from supplement_tracker.achievements.models import AchievementCategory
from supplement_tracker.achievements.rules import ACHIEVEMENT_RULES, AchievementRule
from supplement_tracker.config import settings
from supplement_tracker.records import storage
from supplement_tracker.records.models import Profile, Supplement

USER = "u1"
TODAY = date(2026, 3, 15)


def _iso(offset: int) -> str:
    return (TODAY - timedelta(days=offset)).isoformat()


class AchievementTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="suptrack-test-"))
        patcher = mock.patch.object(settings, "data_root", self._tmp)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(shutil.rmtree, self._tmp, True)

    def _unlocked(self, water_goal: int = 2000) -> set:
        return {a.id for a in evaluate_achievements(USER, water_goal=water_goal, today=TODAY) if a.unlocked}

    def _write_water(self, day: str, amount: int, time: str) -> None:
        path = self._tmp / "users" / USER / "water" / f"{day}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"amount": amount, "entries": [{"amount": amount, "time": time}]}), encoding="utf-8")


class TestEvaluate(AchievementTestCase):
    def test_nothing_unlocked_for_new_user(self) -> None:
        achievements = evaluate_achievements(USER, water_goal=2000, today=TODAY)
        self.assertEqual(len(achievements), len(ACHIEVEMENT_RULES))
        self.assertFalse(any(a.unlocked for a in achievements))

    def test_first_water_and_supplement(self) -> None:
        self._write_water(_iso(3), 250, f"{_iso(3)}T10:00:00")
        storage.log_consumption(USER, "whey", _iso(5))
        self.assertEqual(self._unlocked(), {"FIRST_WATER", "FIRST_SUPPLEMENT"})

    def test_hydration_master_needs_every_day_on_goal(self) -> None:
        for offset in range(7):
            self._write_water(_iso(offset), 2000, f"{_iso(offset)}T12:00:00")
        self.assertIn("HYDRATION_MASTER", self._unlocked(water_goal=2000))
        self.assertNotIn("HYDRATION_MASTER", self._unlocked(water_goal=2500))
        self.assertNotIn("HYDRATION_LEGEND", self._unlocked(water_goal=2000))

    def test_week_streak(self) -> None:
        storage.save_supplements(USER, [Supplement(id="a", name="A", added_at=f"{_iso(20)}T08:00:00")])
        for offset in range(7):
            storage.log_consumption(USER, "a", _iso(offset))
        unlocked = self._unlocked()
        self.assertIn("WEEK_STREAK", unlocked)
        self.assertNotIn("MONTH_STREAK", unlocked)

    def test_supplement_master(self) -> None:
        storage.save_supplements(USER, [Supplement(id=f"s{i}", name=f"S{i}") for i in range(5)])
        self.assertIn("SUPPLEMENT_MASTER", self._unlocked())

    def test_ocean_drinker(self) -> None:
        for offset in range(40):
            self._write_water(_iso(offset), 2500, f"{_iso(offset)}T12:00:00")
        self.assertIn("OCEAN_DRINKER", self._unlocked())

    def test_early_bird(self) -> None:
        self._write_water(_iso(2), 300, f"{_iso(2)}T06:30:00")
        self.assertIn("EARLY_BIRD", self._unlocked())

    def test_early_bird_ignores_later_entries(self) -> None:
        self._write_water(_iso(2), 300, f"{_iso(2)}T07:00:00")
        self.assertNotIn("EARLY_BIRD", self._unlocked())

    def test_consistent_user_mixes_water_and_supplements(self) -> None:
        for offset in range(14):
            if offset % 2:
                storage.log_consumption(USER, "a", _iso(offset))
            else:
                self._write_water(_iso(offset), 100, f"{_iso(offset)}T12:00:00")
        self.assertIn("CONSISTENT_USER", self._unlocked())

    def test_failing_rule_is_isolated(self) -> None:
        def boom(ctx):
            raise RuntimeError("broken rule")

        rules = [
            AchievementRule("BROKEN", "Broken", "", "x", AchievementCategory.general, boom),
            AchievementRule("ALWAYS", "Always", "", "x", AchievementCategory.general, lambda ctx: True),
        ]
        with self.assertLogs("supplement_tracker.achievements.evaluator", level="ERROR"):
            results = evaluate_achievements(USER, water_goal=2000, today=TODAY, rules=rules)
        self.assertEqual([(a.id, a.unlocked) for a in results], [("BROKEN", False), ("ALWAYS", True)])

    def test_water_goal_defaults_to_profile(self) -> None:
        self.assertEqual(resolve_water_goal(USER), 2000)
        storage.save_profile(USER, Profile(weight=80, gender="male"))
        self.assertEqual(resolve_water_goal(USER), 2800)
        storage.save_profile(USER, Profile(weight=80, custom_water_goal=3200))
        self.assertEqual(resolve_water_goal(USER), 3200)
        self.assertEqual(resolve_water_goal(USER, 1500), 1500)


class TestCheckAndNotify(AchievementTestCase):
    def test_second_call_is_empty(self) -> None:
        self._write_water(_iso(0), 300, f"{_iso(0)}T10:00:00")
        self.assertEqual(check_and_notify(USER, water_goal=2000, today=TODAY), ["FIRST_WATER"])
        self.assertEqual(check_and_notify(USER, water_goal=2000, today=TODAY), [])
        self.assertEqual(storage.get_stored_achievements(USER), ["FIRST_WATER"])

    def test_unlock_survives_condition_loss(self) -> None:
        storage.save_supplements(USER, [Supplement(id="a", name="A", added_at=f"{_iso(20)}T08:00:00")])
        for offset in range(7):
            storage.log_consumption(USER, "a", _iso(offset))
        newly = check_and_notify(USER, water_goal=2000, today=TODAY)
        self.assertIn("WEEK_STREAK", newly)

        # Break the streak in the past.
        storage.remove_consumption(USER, "a", _iso(3))
        self.assertIn("WEEK_STREAK", self._unlocked())
        self.assertNotIn("WEEK_STREAK", check_and_notify(USER, water_goal=2000, today=TODAY))
        self.assertIn("WEEK_STREAK", storage.get_stored_achievements(USER))

    def test_stored_set_only_grows(self) -> None:
        storage.save_stored_achievements(USER, ["LEGACY_BADGE"])
        storage.log_consumption(USER, "a", _iso(1))
        self.assertEqual(check_and_notify(USER, water_goal=2000, today=TODAY), ["FIRST_SUPPLEMENT"])
        self.assertEqual(storage.get_stored_achievements(USER), ["LEGACY_BADGE", "FIRST_SUPPLEMENT"])

    def test_notifier_receives_each_new_unlock(self) -> None:
        self._write_water(_iso(0), 300, f"{_iso(0)}T06:00:00")
        seen = []
        newly = check_and_notify(USER, water_goal=2000, today=TODAY, notify=lambda a: seen.append(a.id))
        self.assertEqual(newly, ["FIRST_WATER", "EARLY_BIRD"])
        self.assertEqual(seen, newly)

    def test_notifier_failure_does_not_hide_unlocks(self) -> None:
        self._write_water(_iso(0), 300, f"{_iso(0)}T10:00:00")

        def broken_notifier(achievement):
            raise RuntimeError("push service down")

        with self.assertLogs("supplement_tracker.achievements.evaluator", level="ERROR"):
            newly = check_and_notify(USER, water_goal=2000, today=TODAY, notify=broken_notifier)
        self.assertEqual(newly, ["FIRST_WATER"])

    def test_unreadable_stored_set_is_not_overwritten(self) -> None:
        self._write_water(_iso(0), 300, f"{_iso(0)}T10:00:00")
        path = self._tmp / "users" / USER / "achievements.json"
        path.write_text("{truncated", encoding="utf-8")
        with self.assertLogs("supplement_tracker.achievements.evaluator", level="WARNING"):
            self.assertEqual(check_and_notify(USER, water_goal=2000, today=TODAY), [])
        self.assertEqual(path.read_text(encoding="utf-8"), "{truncated")

    def test_unexpected_failure_returns_empty(self) -> None:
        with mock.patch(
            "supplement_tracker.achievements.evaluator.load_stored_achievements",
            side_effect=RuntimeError("boom"),
        ):
            with self.assertLogs("supplement_tracker.achievements.evaluator", level="ERROR"):
                self.assertEqual(check_and_notify(USER, water_goal=2000, today=TODAY), [])


class TestStats(AchievementTestCase):
    def test_counts_by_category(self) -> None:
        self._write_water(_iso(0), 300, f"{_iso(0)}T10:00:00")
        stats = achievement_stats(USER, water_goal=2000, today=TODAY)
        self.assertEqual(stats.total, len(ACHIEVEMENT_RULES))
        self.assertEqual(stats.unlocked, 1)
        self.assertEqual(stats.by_category[AchievementCategory.water].total, 4)
        self.assertEqual(stats.by_category[AchievementCategory.water].unlocked, 1)
        self.assertEqual(stats.by_category[AchievementCategory.supplements].total, 5)
        self.assertEqual(stats.by_category[AchievementCategory.general].total, 2)
        self.assertEqual(stats.percentage, 9)


if __name__ == "__main__":
    unittest.main()
