"""Storage contract shared by the Firestore and local backends.

``FallbackStorage`` wraps a primary (remote) and a fallback (local) backend.
Each operation goes to the primary first; only a ``PermissionDeniedError``
reroutes that single call to the fallback. Nothing is synced between the
two backends afterwards.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from app.core.exceptions import PermissionDeniedError
from app.models.goal import Goal, GoalIn, GoalUpdate
from app.models.health_data import HealthMetric, HealthMetricIn
from app.models.profile import UserProfile

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    # Metrics
    @abstractmethod
    def save_metric(self, user_id: str, metric: HealthMetricIn) -> HealthMetric: ...

    @abstractmethod
    def list_metrics(self, user_id: str) -> List[HealthMetric]:
        """Most recent first."""

    @abstractmethod
    def delete_metric(self, user_id: str, metric_id: str) -> None: ...

    # Profile
    @abstractmethod
    def save_profile(self, user_id: str, profile: UserProfile) -> None: ...

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]: ...

    # Goals
    @abstractmethod
    def save_goal(self, user_id: str, goal: GoalIn) -> Goal: ...

    @abstractmethod
    def list_goals(self, user_id: str) -> List[Goal]: ...

    @abstractmethod
    def update_goal(self, user_id: str, goal_id: str, updates: GoalUpdate) -> None: ...

    @abstractmethod
    def delete_goal(self, user_id: str, goal_id: str) -> None: ...


class FallbackStorage(StorageBackend):
    def __init__(self, primary: StorageBackend, fallback: StorageBackend):
        self.primary = primary
        self.fallback = fallback

    def _call(self, operation: str, user_id: str, *args):
        try:
            return getattr(self.primary, operation)(user_id, *args)
        except PermissionDeniedError as exc:
            logger.warning(
                "%s for user %s denied by remote store, using local storage: %s",
                operation, user_id, exc,
            )
            return getattr(self.fallback, operation)(user_id, *args)

    def save_metric(self, user_id, metric):
        return self._call("save_metric", user_id, metric)

    def list_metrics(self, user_id):
        return self._call("list_metrics", user_id)

    def delete_metric(self, user_id, metric_id):
        return self._call("delete_metric", user_id, metric_id)

    def save_profile(self, user_id, profile):
        return self._call("save_profile", user_id, profile)

    def get_profile(self, user_id):
        return self._call("get_profile", user_id)

    def save_goal(self, user_id, goal):
        return self._call("save_goal", user_id, goal)

    def list_goals(self, user_id):
        return self._call("list_goals", user_id)

    def update_goal(self, user_id, goal_id, updates):
        return self._call("update_goal", user_id, goal_id, updates)

    def delete_goal(self, user_id, goal_id):
        return self._call("delete_goal", user_id, goal_id)


_storage: Optional[StorageBackend] = None


def get_storage() -> StorageBackend:
    """Process-wide Firestore-with-local-fallback storage (FastAPI dependency)."""
    global _storage
    if _storage is None:
        from app.core.config import settings
        from app.services.firestore_store import FirestoreBackend
        from app.services.local_store import LocalBackend, LocalKeyValueStore

        _storage = FallbackStorage(
            FirestoreBackend(),
            LocalBackend(LocalKeyValueStore(settings.LOCAL_STORE_PATH)),
        )
    return _storage
