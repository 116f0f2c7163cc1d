"""Rule-based suggestions derived from the metric list and the current alerts."""
from __future__ import annotations

from typing import List, Sequence

from app.models.health_data import HealthMetric
from app.models.insights import Alert, Recommendation
from app.services.anomaly_detector import calculate_average

RECENT_WINDOW = 7
MIN_SLEEP_HOURS = 7
STEP_TARGET = 8000
WEIGHT_CHANGE_LIMIT = 5


def generate_recommendations(
    metrics: Sequence[HealthMetric], alerts: Sequence[Alert]
) -> List[Recommendation]:
    if not metrics:
        return [
            Recommendation(
                id="rec-start",
                category="Getting Started",
                title="Start Tracking Your Health",
                description="Begin by logging your daily health metrics to get personalized insights and recommendations.",
                priority="high",
            )
        ]

    recommendations: List[Recommendation] = []
    latest = metrics[0]
    recent = metrics[:RECENT_WINDOW]

    # Sleep
    if latest.sleep and latest.sleep < MIN_SLEEP_HOURS:
        recommendations.append(
            Recommendation(
                id="rec-sleep",
                category="Sleep",
                title="Improve Sleep Duration",
                description="You're getting less than 7 hours of sleep. Aim for 7-9 hours for optimal health.",
                priority="high",
            )
        )

    # Activity
    avg_steps = calculate_average(recent, "steps")
    if avg_steps and avg_steps < STEP_TARGET:
        recommendations.append(
            Recommendation(
                id="rec-activity",
                category="Activity",
                title="Increase Daily Steps",
                description="Try to reach 10,000 steps per day for better cardiovascular health.",
                priority="medium",
            )
        )

    # Weight: newest minus oldest sample of the recent window
    if len(metrics) >= RECENT_WINDOW:
        weights = [m.weight for m in recent if m.weight]
        if len(weights) >= 2:
            change = weights[0] - weights[-1]
            if abs(change) > WEIGHT_CHANGE_LIMIT:
                recommendations.append(
                    Recommendation(
                        id="rec-weight",
                        category="Weight",
                        title="Monitor Weight Changes",
                        description=(
                            f"You've experienced a {abs(change):.1f} lb change this week. "
                            "Consult a healthcare provider if concerned."
                        ),
                        priority="medium",
                    )
                )

    if not alerts:
        recommendations.append(
            Recommendation(
                id="rec-wellness",
                category="Wellness",
                title="Keep Up the Good Work!",
                description="Your health metrics look great. Continue your healthy habits.",
                priority="low",
            )
        )

    return recommendations
