from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from google.api_core import exceptions as gexc

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.models.goal import Goal, GoalIn, GoalUpdate
from app.models.health_data import HealthMetric, HealthMetricIn
from app.models.profile import UserProfile
from app.services import serializers
from app.services.storage import StorageBackend


# -------------------------
# Helpers
# -------------------------
def _user_ref(db, uid: str):
    return db.collection("users").document(uid)


def _metrics_ref(db, uid: str):
    return _user_ref(db, uid).collection("metrics")


def _goals_ref(db, uid: str):
    return _user_ref(db, uid).collection("goals")


def _profile_ref(db, uid: str):
    return _user_ref(db, uid).collection("profile").document("data")


@contextmanager
def _remote_call(operation: str):
    """
    Translate Firestore's 403 into PermissionDeniedError.
    Every other error propagates unchanged.
    """
    try:
        yield
    except (gexc.PermissionDenied, gexc.Forbidden) as exc:
        raise PermissionDeniedError(f"{operation}: {exc}") from exc


# -------------------------
# Backend
# -------------------------
class FirestoreBackend(StorageBackend):
    """
    Per-user documents under:
      users/{uid}/metrics/{metric_id}
      users/{uid}/profile/data
      users/{uid}/goals/{goal_id}
    """

    def __init__(self, db=None):
        self._db = db

    @property
    def db(self):
        if self._db is None:
            from app.core.firebase import get_db
            self._db = get_db()
        return self._db

    # Metrics
    def save_metric(self, user_id: str, metric: HealthMetricIn) -> HealthMetric:
        payload = serializers.metric_to_document(user_id, metric)
        with _remote_call("save_metric"):
            _, doc_ref = _metrics_ref(self.db, user_id).add(payload)
        return serializers.metric_from_document(doc_ref.id, payload, user_id)

    def list_metrics(self, user_id: str) -> List[HealthMetric]:
        out = []
        # stream() is lazy, so the iteration has to stay inside the guard
        with _remote_call("list_metrics"):
            for d in _metrics_ref(self.db, user_id).stream():
                metric = serializers.metric_from_document(d.id, d.to_dict() or {}, user_id)
                if metric is not None:
                    out.append(metric)
        return sorted(out, key=lambda m: m.date, reverse=True)

    def delete_metric(self, user_id: str, metric_id: str) -> None:
        with _remote_call("delete_metric"):
            _metrics_ref(self.db, user_id).document(metric_id).delete()

    # Profile
    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        payload = serializers.profile_to_document(user_id, profile)
        with _remote_call("save_profile"):
            _profile_ref(self.db, user_id).set(payload, merge=True)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        with _remote_call("get_profile"):
            snap = _profile_ref(self.db, user_id).get()
        if not snap.exists:
            return None
        return serializers.profile_from_document(snap.to_dict() or {}, user_id)

    # Goals
    def save_goal(self, user_id: str, goal: GoalIn) -> Goal:
        payload = serializers.goal_to_document(user_id, goal, datetime.now(timezone.utc))
        with _remote_call("save_goal"):
            _, doc_ref = _goals_ref(self.db, user_id).add(payload)
        return serializers.goal_from_document(doc_ref.id, payload, user_id)

    def list_goals(self, user_id: str) -> List[Goal]:
        out = []
        with _remote_call("list_goals"):
            for d in _goals_ref(self.db, user_id).stream():
                goal = serializers.goal_from_document(d.id, d.to_dict() or {}, user_id)
                if goal is not None:
                    out.append(goal)
        return out

    def update_goal(self, user_id: str, goal_id: str, updates: GoalUpdate) -> None:
        payload = serializers.goal_update_to_document(updates)
        if not payload:
            return
        try:
            with _remote_call("update_goal"):
                _goals_ref(self.db, user_id).document(goal_id).update(payload)
        except gexc.NotFound as exc:
            raise NotFoundError(f"Goal {goal_id} not found") from exc

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        with _remote_call("delete_goal"):
            _goals_ref(self.db, user_id).document(goal_id).delete()
