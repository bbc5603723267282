"""Entry points tying the load calculator to the workout planner.

Callers hand over in-memory records (activity history, goals, preferences
with current weather) and receive immutable results. Nothing here touches
storage or the network.
"""

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from .analysis.model import TrainingLoadMetrics, TrainingLoadModel
from .analysis.periodization import WeeklyWorkoutPlan
from .analysis import periodization, plan_adjustment
from .analysis.recommendations import PlanningContext, WorkoutPlanner
from .analysis.sports_metrics import TrainingLoadCalculator
from .analysis.thresholds import AthleteThresholds, estimate_thresholds
from .analysis.workouts import WorkoutRecommendation
from .config import config
from .models import Activity, Goal, UserPreferences

logger = logging.getLogger(__name__)


def calculate_load_metrics(
    activities: Iterable[Activity],
    thresholds: Optional[AthleteThresholds] = None,
) -> TrainingLoadMetrics:
    """Current acute/chronic load state from an activity history.

    Args:
        activities: Completed sessions, any order
        thresholds: Athlete calibration, estimated from the activities when None

    Returns:
        TrainingLoadMetrics, zeroed with status recover for an empty history
    """
    activities = list(activities)
    if thresholds is None:
        thresholds = estimate_thresholds(activities)

    points = TrainingLoadCalculator(thresholds).process_activities(activities)
    return TrainingLoadModel().calculate_load_metrics(points)


def generate_todays_workout(context: PlanningContext) -> Optional[WorkoutRecommendation]:
    """Today's recommendation, None for a rest day."""
    return WorkoutPlanner(context).generate_todays_workout()


def generate_weekly_plan(context: PlanningContext) -> WeeklyWorkoutPlan:
    return periodization.generate_weekly_plan(context)


def apply_day_edit(
    plan: WeeklyWorkoutPlan,
    day_index: int,
    workout: Optional[WorkoutRecommendation],
) -> WeeklyWorkoutPlan:
    return plan_adjustment.apply_day_edit(plan, day_index, workout)


def reset_to_recommended(context: PlanningContext) -> WeeklyWorkoutPlan:
    return plan_adjustment.reset_to_recommended(context)


def build_context(
    activities: Iterable[Activity],
    goals: Sequence[Goal] = (),
    preferences: Optional[UserPreferences] = None,
    thresholds: Optional[AthleteThresholds] = None,
    today: Optional[date] = None,
    user_id: str = "default",
) -> PlanningContext:
    """Assemble a planning context from raw history.

    Metrics are computed over the full history; only the most recent
    sessions are kept as the planner's recent-activity window.
    """
    activities = sorted(activities, key=lambda a: a.start_date_local, reverse=True)
    if thresholds is None:
        thresholds = estimate_thresholds(activities)

    metrics = calculate_load_metrics(activities, thresholds)
    recent = tuple(activities[:config.RECENT_ACTIVITY_WINDOW])

    logger.debug(
        f"Context for user {user_id}: {len(activities)} activities, {len(recent)} recent, "
        f"acute {metrics.acute}, chronic {metrics.chronic}, balance {metrics.balance}"
    )

    return PlanningContext(
        metrics=metrics,
        recent_activities=recent,
        goals=tuple(goals),
        preferences=preferences or UserPreferences(),
        thresholds=thresholds,
        today=today or date.today(),
        user_id=user_id,
    )
