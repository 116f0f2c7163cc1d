"""Business logic for user goals.

Progress is never stored on the goal; it is derived on every read from the
goal's baseline/target and the user's latest metric.
"""
from typing import List, Optional

from app.models.goal import Goal, GoalIn, GoalProgress, GoalUpdate
from app.models.health_data import HealthMetric
from app.services.storage import StorageBackend

# Goals measured as distance travelled from a baseline toward the target
DISTANCE_GOALS = {
    "weight": "weight",
    "bloodPressure": "blood_pressure_systolic",
    "bloodSugar": "blood_sugar",
}

# Goals measured as reading / target
RATIO_GOALS = {
    "steps": "steps",
    "sleep": "sleep",
    "exercise": "exercise",
    "water": "water_intake",
}

ENCOURAGING_MESSAGES = (
    (100, "🎉 Goal achieved! Congratulations!"),
    (90, "⭐ So close! Final push!"),
    (75, "🔥 Almost there! Don't give up now!"),
    (50, "🎯 Halfway there! You're doing amazing!"),
    (25, "💪 Great start! Keep pushing forward!"),
    (0, "🚀 Just getting started! You've got this!"),
)


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))


def calculate_goal_progress(goal: Goal, latest: Optional[HealthMetric]) -> float:
    """Percentage (0-100) toward the goal's target."""
    if goal.type in DISTANCE_GOALS:
        current = getattr(latest, DISTANCE_GOALS[goal.type]) if latest else None
        if not current:
            return 0.0
        start, target = goal.current_value, goal.target_value
        if start == target:
            return 100.0
        return _clamp((start - current) / (start - target) * 100)

    reading = getattr(latest, RATIO_GOALS[goal.type]) if latest else None
    value = reading if reading is not None else goal.current_value
    if not goal.target_value:
        return 0.0
    return _clamp(value / goal.target_value * 100)


def encouraging_message(progress: float) -> str:
    for threshold, message in ENCOURAGING_MESSAGES:
        if progress >= threshold:
            return message
    return ENCOURAGING_MESSAGES[-1][1]


class GoalService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def create_goal(self, user_id: str, goal: GoalIn) -> Goal:
        return self.storage.save_goal(user_id, goal)

    def list_goals(self, user_id: str) -> List[Goal]:
        return self.storage.list_goals(user_id)

    def list_progress(self, user_id: str) -> List[GoalProgress]:
        goals = self.storage.list_goals(user_id)
        metrics = self.storage.list_metrics(user_id) if goals else []
        latest = metrics[0] if metrics else None

        out = []
        for goal in goals:
            progress = calculate_goal_progress(goal, latest)
            out.append(GoalProgress(goal=goal, progress=progress, message=encouraging_message(progress)))
        return out

    def update_goal(self, user_id: str, goal_id: str, updates: GoalUpdate) -> None:
        self.storage.update_goal(user_id, goal_id, updates)

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        self.storage.delete_goal(user_id, goal_id)
