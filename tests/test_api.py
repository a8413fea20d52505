# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

from supplement_tracker.api import app
from supplement_tracker.config import settings


class TestApi(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="suptrack-test-"))
        patcher = mock.patch.object(settings, "data_root", self._tmp)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(shutil.rmtree, self._tmp, True)

        self.client = TestClient(app, headers={"x-user-id": "demo-user"})
        self.addCleanup(self.client.close)
        self.today = date.today().isoformat()

    def test_identity_required(self) -> None:
        unauth = TestClient(app)
        self.assertEqual(unauth.get("/api/health").status_code, 200)
        self.assertEqual(unauth.get("/api/supplements").status_code, 401)
        resp = unauth.get("/api/supplements", headers={"x-user-id": "../etc"})
        self.assertEqual(resp.status_code, 400)
        unauth.close()

    def test_profile_and_water_goal(self) -> None:
        self.assertEqual(self.client.get("/api/profile").status_code, 404)
        self.assertEqual(self.client.get("/api/water-goal").json()["source"], "default")

        resp = self.client.put("/api/profile", json={"weight": 70, "gender": "female", "goal": "hipertrofia"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["weight"], 70)

        goal = self.client.get("/api/water-goal").json()
        self.assertEqual((goal["goal_ml"], goal["source"]), (2100, "weight"))

        resp = self.client.put("/api/profile", json={"weight": 70, "gender": "alien"})
        self.assertEqual(resp.status_code, 422)

    def test_supplement_flow_unlocks_achievements_once(self) -> None:
        self.client.put("/api/profile", json={"weight": 70, "gender": "male"})

        resp = self.client.post("/api/supplements", json={"name": "Whey Protein", "catalog_id": "whey"})
        self.assertEqual(resp.status_code, 200)
        created = resp.json()
        self.assertEqual(created["id"], "whey")
        self.assertEqual(created["dosage"], 28)
        self.assertEqual(created["unit"], "g")
        self.assertIsNotNone(created["added_at"])

        self.assertEqual(
            self.client.post("/api/supplements", json={"name": "Whey", "catalog_id": "whey"}).status_code, 409
        )
        self.assertEqual(
            self.client.post("/api/supplements", json={"name": "X", "catalog_id": "nope"}).status_code, 404
        )

        resp = self.client.post(f"/api/consumption/{self.today}/whey")
        self.assertEqual(resp.status_code, 200)
        payload = resp.json()
        self.assertEqual(payload["taken"], ["whey"])
        self.assertIn("FIRST_SUPPLEMENT", payload["newly_unlocked"])

        resp = self.client.post(f"/api/consumption/{self.today}/whey")
        self.assertEqual(resp.json()["taken"], ["whey"])
        self.assertEqual(resp.json()["newly_unlocked"], [])

        self.assertEqual(self.client.get("/api/adherence/streak").json()["streak"], 1)

        achievements = self.client.get("/api/achievements").json()
        self.assertEqual(achievements["water_goal"], 2450)
        unlocked = {a["id"] for a in achievements["achievements"] if a["unlocked"]}
        self.assertIn("FIRST_SUPPLEMENT", unlocked)

        resp = self.client.delete(f"/api/consumption/{self.today}/whey")
        self.assertEqual(resp.json()["taken"], [])
        self.assertEqual(self.client.get("/api/adherence/streak").json()["streak"], 0)
        self.assertEqual(self.client.post("/api/achievements/check").json()["newly_unlocked"], [])

    def test_edit_and_remove_supplement(self) -> None:
        self.client.post("/api/supplements", json={"id": "mag", "name": "Magnésio", "dosage": 400, "unit": "mg"})
        resp = self.client.put("/api/supplements/mag", json={"dosage": 300, "reminder_time": "21:00"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["dosage"], 300)
        self.assertEqual(self.client.put("/api/supplements/mag", json={"reminder_time": "25:00"}).status_code, 422)
        self.assertEqual(self.client.get("/api/supplements").json()["count"], 1)
        self.assertEqual(self.client.delete("/api/supplements/mag").status_code, 200)
        self.assertEqual(self.client.delete("/api/supplements/mag").status_code, 404)

    def test_water_entries(self) -> None:
        resp = self.client.post(f"/api/water/{self.today}/entries", json={"amount": 200})
        self.assertEqual(resp.status_code, 200)
        self.assertIn("FIRST_WATER", resp.json()["newly_unlocked"])
        self.client.post(f"/api/water/{self.today}/entries", json={"amount": 300})

        resp = self.client.delete(f"/api/water/{self.today}/entries/0")
        log = resp.json()["log"]
        self.assertEqual(log["amount"], 300)
        self.assertEqual([e["amount"] for e in log["entries"]], [300])

        self.assertEqual(self.client.delete(f"/api/water/{self.today}/entries/5").status_code, 404)
        self.assertEqual(self.client.post(f"/api/water/{self.today}/entries", json={"amount": 0}).status_code, 422)
        self.assertEqual(self.client.get("/api/water/15-03-2026").status_code, 400)

        hourly = self.client.get(f"/api/adherence/water/{self.today}/hourly").json()
        self.assertEqual(hourly["total"], 300)

    def test_history_endpoints(self) -> None:
        water = self.client.get("/api/adherence/water", params={"days": 14}).json()
        self.assertEqual(len(water["history"]), 14)
        self.assertEqual(water["history"][-1]["date"], self.today)

        consumption = self.client.get("/api/adherence/consumption", params={"days": 7}).json()
        self.assertEqual(len(consumption["history"]), 7)

        self.assertEqual(self.client.get("/api/adherence/water", params={"days": 0}).status_code, 422)
        self.assertEqual(self.client.get("/api/adherence/stats").json()["days"], 7)

    def test_reminders_and_celebration(self) -> None:
        payload = {"reminders": [{"id": "r1", "time": "10:00"}]}
        self.assertEqual(self.client.put("/api/water/reminders", json=payload).status_code, 200)
        self.assertEqual(self.client.get("/api/water/reminders").json()["reminders"][0]["time"], "10:00")

        self.assertFalse(self.client.get("/api/water/celebration").json()["shown_today"])
        self.client.post("/api/water/celebration")
        self.assertTrue(self.client.get("/api/water/celebration").json()["shown_today"])

    def test_catalog_and_suggestion(self) -> None:
        self.assertEqual(self.client.get("/api/catalog").json()["count"], 9)
        resp = self.client.get("/api/catalog/creatine/suggestion").json()
        self.assertEqual(resp["suggested_dosage"], 5)
        self.assertFalse(resp["profile_based"])
        self.assertEqual(self.client.get("/api/catalog/unknown/suggestion").status_code, 404)

    def test_export(self) -> None:
        self.client.post(f"/api/water/{self.today}/entries", json={"amount": 500})
        resp = self.client.get("/api/export/water", params={"days": 7})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.headers["content-type"].startswith("text/csv"))
        self.assertIn("attachment;", resp.headers["content-disposition"])
        self.assertEqual(len(resp.text.splitlines()), 8)

        resp = self.client.get("/api/export/full")
        self.assertTrue(resp.headers["content-type"].startswith("text/plain"))
        self.assertIn("Period: 30 days", resp.text)

        self.assertEqual(self.client.get("/api/export/pdf").status_code, 404)


if __name__ == "__main__":
    unittest.main()
