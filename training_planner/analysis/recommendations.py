"""Training recommendation engine based on current load metrics."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Tuple

from ..config import config
from ..models import Activity, Goal, GoalMetric, UserPreferences
from .environmental_factors import EnvironmentalAnalyzer
from .model import TrainingLoadMetrics
from .sports_metrics import TrainingLoadCalculator
from .thresholds import AthleteThresholds, DEFAULT_THRESHOLDS
from .workouts import (
    WorkoutRecommendation,
    basic_workout,
    distance_volume_workout,
    easy_workout,
    frequency_easy_workout,
    intensity_workout,
    long_workout,
    moderate_workout,
    pace_interval_workout,
    recovery_workout,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanningContext:
    """Everything the planner needs for one invocation."""

    metrics: TrainingLoadMetrics
    recent_activities: Tuple[Activity, ...] = field(default_factory=tuple)  # most recent first
    goals: Tuple[Goal, ...] = field(default_factory=tuple)
    preferences: UserPreferences = field(default_factory=UserPreferences)
    thresholds: AthleteThresholds = DEFAULT_THRESHOLDS
    today: date = field(default_factory=date.today)
    user_id: str = "default"


class WorkoutPlanner:
    """Generate workout recommendations from training load, goals and weather.

    Decisions are evaluated in a fixed order: recovery first, then
    goal-aligned work, then the weekly periodization pattern.
    """

    def __init__(self, context: PlanningContext):
        self.context = context
        self.calculator = TrainingLoadCalculator(context.thresholds)
        self.environmental_analyzer = EnvironmentalAnalyzer()

    # Gates

    def session_load(self, activity: Activity) -> float:
        """Stored load score, or the normalized load under current thresholds."""
        if activity.training_load is not None:
            return activity.training_load
        return self.calculator.calculate_normalized_load(activity)

    def should_recommend_recovery(self) -> bool:
        """Only recommend recovery on clear evidence of overreaching.

        Insufficient history never forces recovery.
        """
        metrics = self.context.metrics
        recent = self.context.recent_activities

        if len(recent) < config.RECOVERY_MIN_SESSIONS:
            return False
        if metrics.balance < config.RECOVERY_BALANCE_THRESHOLD:
            return True
        if metrics.acute > config.RECOVERY_ACUTE_THRESHOLD:
            return True

        window = recent[:config.RECOVERY_MIN_SESSIONS]
        intense = [a for a in window if self.session_load(a) > config.INTENSE_SESSION_LOAD]
        return len(intense) >= config.RECOVERY_MIN_SESSIONS

    def should_recommend_intensity_work(self) -> bool:
        metrics = self.context.metrics
        return metrics.balance > config.INTENSITY_BALANCE_MIN and metrics.acute < config.INTENSITY_ACUTE_MAX

    def should_recommend_long_workout(self) -> bool:
        metrics = self.context.metrics
        return metrics.balance > config.LONG_BALANCE_MIN and metrics.chronic > config.LONG_CHRONIC_MIN

    def should_rest(self) -> bool:
        """Full rest is reserved for weeks carrying a lot of load."""
        return self.context.metrics.acute > config.SUNDAY_REST_ACUTE_MIN

    # Recommendations

    def generate_todays_workout(self) -> Optional[WorkoutRecommendation]:
        """Get training recommendation for today, None for a rest day."""
        today = self.context.today

        if self.should_recommend_recovery():
            logger.info(f"Recovery recommended for {today}: metrics {self.context.metrics}")
            return self._finalize(recovery_workout(today), today)

        goal_workout = self.create_goal_specific_workout()
        if goal_workout is not None:
            return self._finalize(goal_workout, today)

        return self.workout_for_date(today)

    def workout_for_date(self, day: date) -> Optional[WorkoutRecommendation]:
        """Recommendation for a given date from the recovery gate and weekly pattern."""
        if self.should_recommend_recovery():
            workout = recovery_workout(day)
        else:
            workout = self._pattern_workout(day)

        if workout is None:
            logger.debug(f"{day} ({day.strftime('%A')}): rest day")
            return None

        logger.debug(f"{day} ({day.strftime('%A')}): {workout.type.value} {workout.sport}")
        return self._finalize(workout, day)

    def _pattern_workout(self, day: date) -> Optional[WorkoutRecommendation]:
        """Weekly periodization pattern for a non-recovery day.

        Mon moderate, Tue/Thu quality if gated, Wed/Fri easy, Sat long if
        gated, Sun easy unless the recent load calls for full rest.
        """
        advanced = self.context.preferences.is_advanced
        weekday = day.weekday()  # 0 = Monday

        if weekday in (1, 3):
            if self.should_recommend_intensity_work():
                return intensity_workout(day, advanced)
            return moderate_workout(day)

        if weekday in (2, 4):
            return easy_workout(day)

        if weekday == 5:
            if self.should_recommend_long_workout():
                return long_workout(day, advanced)
            return moderate_workout(day)

        if weekday == 6:
            if self.should_rest():
                return None
            return easy_workout(day)

        return moderate_workout(day)

    def create_goal_specific_workout(self) -> Optional[WorkoutRecommendation]:
        """Workout aimed at the highest-priority open goal.

        Priority: distance, then pace, then frequency goals.
        """
        open_goals = [g for g in self.context.goals if g.is_open]
        if not open_goals:
            return None

        today = self.context.today
        for metric in (GoalMetric.TOTAL_DISTANCE, GoalMetric.AVERAGE_PACE, GoalMetric.RUN_COUNT):
            goal = next((g for g in open_goals if g.metric_type == metric), None)
            if goal is None:
                continue

            progress = goal.progress_percentage
            if metric == GoalMetric.TOTAL_DISTANCE:
                if progress < 50:
                    workout = distance_volume_workout(today, progress)
                else:
                    workout = intensity_workout(today, self.context.preferences.is_advanced)
                alignment = f"Distance goal: {round(progress)}% complete"
            elif metric == GoalMetric.AVERAGE_PACE:
                workout = pace_interval_workout(today)
                alignment = f"Pace goal: {round(progress)}% complete"
            else:
                workout = frequency_easy_workout(today)
                alignment = f"Frequency goal: {round(progress)}% complete"

            logger.info(f"Goal-aligned workout for goal {goal.id}: {workout.type.value}")
            return replace(workout, goal_alignment=alignment)

        return None

    def _finalize(self, workout: WorkoutRecommendation, day: date) -> WorkoutRecommendation:
        return self.environmental_analyzer.adjust_workout(workout, self.context.preferences.weather, day)

    def get_alternatives(self, recommendation: WorkoutRecommendation) -> List[WorkoutRecommendation]:
        """Alternatives limited to the athlete's preferred sports."""
        preferred = set(self.context.preferences.preferred_sports)
        return [alt for alt in recommendation.alternatives if alt.sport in preferred]


def fallback_todays_workout(today: Optional[date] = None) -> WorkoutRecommendation:
    """Basic session when no training load data is available."""
    return basic_workout(today or date.today(), kind="fallback-today")
