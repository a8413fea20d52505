# -*- coding: utf-8 -*-
"""Records — per-user JSON file storage.

Layout under ``<data_root>/users/<user_id>/``::

    profile.json  supplements.json  achievements.json
    water_reminders.json  celebration.json
    water/<YYYY-MM-DD>.json  consumption/<YYYY-MM-DD>.json

Reads never raise: a missing or corrupt file yields the empty/zero default.
Writes return ``False``/``None`` on failure so callers can decide how loud to be.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..config import settings
from ..dates import iso_day, now_iso, parse_day, today as _today
from .models import Profile, Supplement, WaterEntry, WaterLog, WaterReminder

logger = logging.getLogger(__name__)


def _user_root(user_id: str) -> Path:
    return settings.data_root / "users" / user_id


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _read_json(path: Path) -> Optional[Any]:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return None


def _write_json(path: Path, payload: Any) -> bool:
    # Unique temp name per write; concurrent writers of the same file must not share one.
    tmp = path.with_name(f"{path.name}.{uuid4().hex}.tmp")
    try:
        _ensure_dir(path.parent)
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)
    except (OSError, TypeError) as exc:
        logger.error("Failed to write %s: %s", path, exc)
        tmp.unlink(missing_ok=True)
        return False
    return True


# ─── Profile ──────────────────────────────────────────────────────────────────


def get_profile(user_id: str) -> Optional[Profile]:
    raw = _read_json(_user_root(user_id) / "profile.json")
    if not isinstance(raw, dict):
        return None
    try:
        return Profile.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Corrupt profile for user %s: %s", user_id, exc)
        return None


def save_profile(user_id: str, profile: Profile) -> bool:
    stored = profile.model_copy(update={"updated_at": now_iso()})
    return _write_json(_user_root(user_id) / "profile.json", stored.model_dump(mode="json"))


# ─── Supplements ──────────────────────────────────────────────────────────────


def get_supplements(user_id: str) -> List[Supplement]:
    raw = _read_json(_user_root(user_id) / "supplements.json")
    if not isinstance(raw, dict):
        return []
    roster: List[Supplement] = []
    for item in raw.get("list") or []:
        try:
            roster.append(Supplement.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping corrupt supplement for user %s: %s", user_id, exc)
    return roster


def save_supplements(user_id: str, supplements: List[Supplement]) -> bool:
    payload = {
        "list": [s.model_dump(mode="json") for s in supplements],
        "updated_at": now_iso(),
    }
    return _write_json(_user_root(user_id) / "supplements.json", payload)


def add_supplement(user_id: str, supplement: Supplement) -> Optional[Supplement]:
    """Append to the roster; returns None if the id is taken or the write fails."""
    roster = get_supplements(user_id)
    if any(s.id == supplement.id for s in roster):
        return None
    if not supplement.added_at:
        supplement = supplement.model_copy(update={"added_at": now_iso()})
    roster.append(supplement)
    if not save_supplements(user_id, roster):
        return None
    return supplement


def update_supplement(user_id: str, supplement_id: str, changes: Dict[str, Any]) -> Optional[Supplement]:
    roster = get_supplements(user_id)
    for index, current in enumerate(roster):
        if current.id != supplement_id:
            continue
        # id and added_at are not editable; added_at anchors adherence history.
        changes = {k: v for k, v in changes.items() if k not in {"id", "added_at"} and v is not None}
        updated = Supplement.model_validate({**current.model_dump(), **changes})
        roster[index] = updated
        if not save_supplements(user_id, roster):
            return None
        return updated
    return None


def remove_supplement(user_id: str, supplement_id: str) -> bool:
    roster = get_supplements(user_id)
    remaining = [s for s in roster if s.id != supplement_id]
    if len(remaining) == len(roster):
        return False
    return save_supplements(user_id, remaining)


# ─── Water Log ────────────────────────────────────────────────────────────────


def _water_path(user_id: str, day: str) -> Path:
    return _user_root(user_id) / "water" / f"{day}.json"


def get_water_log(user_id: str, day: str) -> WaterLog:
    raw = _read_json(_water_path(user_id, day))
    if not isinstance(raw, dict):
        return WaterLog()
    try:
        return WaterLog.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Corrupt water log %s for user %s: %s", day, user_id, exc)
        return WaterLog()


def add_water_entry(user_id: str, day: str, amount: int) -> Optional[WaterLog]:
    current = get_water_log(user_id, day)
    entries = list(current.entries) + [WaterEntry(amount=amount, time=now_iso())]
    updated = WaterLog(amount=sum(e.amount for e in entries), entries=entries)
    if not _write_json(_water_path(user_id, day), updated.model_dump(mode="json")):
        return None
    return updated


def remove_water_entry(user_id: str, day: str, index: int) -> Optional[WaterLog]:
    """Drop entry ``index``; returns None when it does not exist or the write fails."""
    current = get_water_log(user_id, day)
    if index < 0 or index >= len(current.entries):
        return None
    entries = [e for i, e in enumerate(current.entries) if i != index]
    updated = WaterLog(amount=max(0, sum(e.amount for e in entries)), entries=entries)
    if not _write_json(_water_path(user_id, day), updated.model_dump(mode="json")):
        return None
    return updated


# ─── Consumption Log ─────────────────────────────────────────────────────────


def _consumption_dir(user_id: str) -> Path:
    return _user_root(user_id) / "consumption"


def _coerce_taken(raw: Any) -> List[str]:
    if not isinstance(raw, dict):
        return []
    taken: List[str] = []
    for item in raw.get("taken") or []:
        s = str(item)
        if s and s not in taken:
            taken.append(s)
    return taken


def get_consumption_log(user_id: str, day: str) -> List[str]:
    return _coerce_taken(_read_json(_consumption_dir(user_id) / f"{day}.json"))


def get_consumption_logs(user_id: str) -> Dict[str, List[str]]:
    """All consumption records keyed by ISO date."""
    folder = _consumption_dir(user_id)
    if not folder.exists():
        return {}
    logs: Dict[str, List[str]] = {}
    for fp in sorted(folder.glob("*.json")):
        if parse_day(fp.stem) is None:
            continue
        logs[fp.stem] = _coerce_taken(_read_json(fp))
    return logs


def _save_consumption(user_id: str, day: str, taken: List[str]) -> bool:
    payload = {"taken": taken, "updated_at": now_iso()}
    return _write_json(_consumption_dir(user_id) / f"{day}.json", payload)


def log_consumption(user_id: str, supplement_id: str, day: str) -> bool:
    taken = get_consumption_log(user_id, day)
    if supplement_id in taken:
        return True
    taken.append(supplement_id)
    return _save_consumption(user_id, day, taken)


def remove_consumption(user_id: str, supplement_id: str, day: str) -> bool:
    taken = get_consumption_log(user_id, day)
    if supplement_id not in taken:
        return False
    taken.remove(supplement_id)
    return _save_consumption(user_id, day, taken)


# ─── Achievements ─────────────────────────────────────────────────────────────


def load_stored_achievements(user_id: str) -> Optional[List[str]]:
    """Stored unlock ids; None when the file exists but cannot be read."""
    path = _user_root(user_id) / "achievements.json"
    if not path.exists():
        return []
    raw = _read_json(path)
    if not isinstance(raw, dict) or not isinstance(raw.get("unlocked", []), list):
        return None
    return [str(i) for i in raw.get("unlocked") or []]


def get_stored_achievements(user_id: str) -> List[str]:
    return load_stored_achievements(user_id) or []


def save_stored_achievements(user_id: str, achievement_ids: List[str]) -> bool:
    payload = {"unlocked": list(achievement_ids), "updated_at": now_iso()}
    return _write_json(_user_root(user_id) / "achievements.json", payload)


# ─── Water Reminders ──────────────────────────────────────────────────────────


def get_water_reminders(user_id: str) -> List[WaterReminder]:
    raw = _read_json(_user_root(user_id) / "water_reminders.json")
    if not isinstance(raw, list):
        return []
    reminders: List[WaterReminder] = []
    for item in raw:
        try:
            reminders.append(WaterReminder.model_validate(item))
        except ValidationError:
            continue
    return reminders


def save_water_reminders(user_id: str, reminders: List[WaterReminder]) -> bool:
    return _write_json(
        _user_root(user_id) / "water_reminders.json",
        [r.model_dump(mode="json") for r in reminders],
    )


# ─── Celebrations ─────────────────────────────────────────────────────────────


def has_shown_celebration_today(user_id: str, today: Optional[date] = None) -> bool:
    raw = _read_json(_user_root(user_id) / "celebration.json")
    if not isinstance(raw, dict):
        return False
    return raw.get("date") == iso_day(today or _today())


def mark_celebration_shown(user_id: str, today: Optional[date] = None) -> bool:
    payload = {"date": iso_day(today or _today()), "shown_at": datetime.now().isoformat(timespec="seconds")}
    return _write_json(_user_root(user_id) / "celebration.json", payload)
