"""
Local persistence used when Firestore denies permission.

``LocalKeyValueStore`` keeps string values under string keys in a single
JSON file, the way a browser's localStorage does. ``LocalBackend`` lays the
health data out on top of it:

  healthtrackr_metrics          shared array, filtered by embedded userId
  healthtrackr_profile_{uid}    one profile object per user
  healthtrackr_goals            shared array, filtered by embedded userId

Timestamps are ISO-8601 strings. Content that cannot be parsed reads as
empty instead of raising.
"""
from __future__ import annotations

import json
import logging
import os
import random
import string
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from app.core.exceptions import LocalStorageError
from app.models.goal import Goal, GoalIn, GoalUpdate
from app.models.health_data import HealthMetric, HealthMetricIn
from app.models.profile import UserProfile
from app.services import serializers
from app.services.storage import StorageBackend

logger = logging.getLogger(__name__)

STORAGE_KEY = "healthtrackr_metrics"
PROFILE_KEY = "healthtrackr_profile"
GOALS_KEY = "healthtrackr_goals"


def _local_id(prefix: str) -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


class LocalKeyValueStore:
    def __init__(self, path):
        self.path = Path(path)
        # Re-entrant so a transaction can wrap get_item/set_item
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Local store %s unreadable, treating as empty: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise LocalStorageError(f"Cannot write local store {self.path}: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator["LocalKeyValueStore"]:
        """Hold the store lock across a read-modify-write of several calls."""
        with self._lock:
            yield self

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._dump(data)


class LocalBackend(StorageBackend):
    def __init__(self, store: LocalKeyValueStore):
        self.store = store

    # --- raw helpers ---
    def _read(self, key: str) -> Any:
        raw = self.store.get_item(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return None

    def _write(self, key: str, value: Any) -> None:
        self.store.set_item(key, json.dumps(value))

    def _read_list(self, key: str) -> List[Dict[str, Any]]:
        value = self._read(key)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @staticmethod
    def _owned_by(item: Dict[str, Any], user_id: str) -> bool:
        return str(item.get("userId")) == user_id

    # Metrics
    def save_metric(self, user_id: str, metric: HealthMetricIn) -> HealthMetric:
        entry = serializers.metric_to_local(_local_id("local"), user_id, metric)
        with self.store.transaction():
            all_metrics = self._read_list(STORAGE_KEY)
            all_metrics.append(entry)
            self._write(STORAGE_KEY, all_metrics)
        return serializers.metric_from_document(entry["id"], entry, user_id)

    def list_metrics(self, user_id: str) -> List[HealthMetric]:
        out = []
        for item in self._read_list(STORAGE_KEY):
            if not self._owned_by(item, user_id):
                continue
            metric = serializers.metric_from_document(item.get("id"), item, user_id)
            if metric is not None:
                out.append(metric)
        return sorted(out, key=lambda m: m.date, reverse=True)

    def delete_metric(self, user_id: str, metric_id: str) -> None:
        with self.store.transaction():
            kept = [
                m for m in self._read_list(STORAGE_KEY)
                if not (self._owned_by(m, user_id) and str(m.get("id")) == metric_id)
            ]
            self._write(STORAGE_KEY, kept)

    # Profile
    def _profile_key(self, user_id: str) -> str:
        return f"{PROFILE_KEY}_{user_id}"

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        key = self._profile_key(user_id)
        with self.store.transaction():
            existing = self._read(key)
            merged = existing if isinstance(existing, dict) else {}
            merged.update(serializers.profile_to_document(user_id, profile))
            self._write(key, merged)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        data = self._read(self._profile_key(user_id))
        if not isinstance(data, dict):
            return None
        return serializers.profile_from_document(data, user_id)

    # Goals
    def save_goal(self, user_id: str, goal: GoalIn) -> Goal:
        entry = serializers.goal_to_local(
            _local_id("local-goal"), user_id, goal, datetime.now(timezone.utc)
        )
        with self.store.transaction():
            all_goals = self._read_list(GOALS_KEY)
            all_goals.append(entry)
            self._write(GOALS_KEY, all_goals)
        return serializers.goal_from_document(entry["id"], entry, user_id)

    def list_goals(self, user_id: str) -> List[Goal]:
        out = []
        for item in self._read_list(GOALS_KEY):
            if not self._owned_by(item, user_id):
                continue
            goal = serializers.goal_from_document(item.get("id"), item, user_id)
            if goal is not None:
                out.append(goal)
        return out

    def update_goal(self, user_id: str, goal_id: str, updates: GoalUpdate) -> None:
        patch = serializers.goal_update_to_local(updates)
        with self.store.transaction():
            all_goals = self._read_list(GOALS_KEY)
            for item in all_goals:
                if self._owned_by(item, user_id) and str(item.get("id")) == goal_id:
                    item.update(patch)
                    self._write(GOALS_KEY, all_goals)
                    return
        # unknown goal: nothing to patch

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        with self.store.transaction():
            kept = [
                g for g in self._read_list(GOALS_KEY)
                if not (self._owned_by(g, user_id) and str(g.get("id")) == goal_id)
            ]
            self._write(GOALS_KEY, kept)
