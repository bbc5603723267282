"""Plan adjustment: day edits, reset to recommended and plan analytics.

This module provides:
1. Single-day edits returning a new plan with recomputed totals
2. Reset-to-recommended with a deterministic fallback
3. Analysis of a plan's balance with improvement advice
"""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from . import periodization
from .periodization import DAY_NAMES, WeeklyWorkoutPlan, fallback_weekly_plan, sunday_based_day
from .recommendations import PlanningContext
from .workouts import WorkoutRecommendation, WorkoutType

logger = logging.getLogger(__name__)


def apply_day_edit(
    plan: WeeklyWorkoutPlan,
    day_index: int,
    workout: Optional[WorkoutRecommendation],
) -> WeeklyWorkoutPlan:
    """Set or clear one day's workout.

    Args:
        plan: Current plan, left untouched
        day_index: Day of week, 0 = Sunday .. 6 = Saturday
        workout: New workout, or None for a rest day

    Returns:
        New plan whose totals are recomputed from the full day map
    """
    if day_index not in range(7):
        raise ValueError(f"Day index must be 0-6, got {day_index}")
    if not plan.is_editable:
        raise ValueError(f"Plan {plan.id} is not editable")

    workouts = dict(plan.workouts)
    workouts[day_index] = workout
    edited = replace(plan, workouts=workouts)

    logger.info(
        f"Plan {plan.id}: {DAY_NAMES[day_index]} set to "
        f"{workout.type.value if workout else 'rest'}, total time {plan.total_time} -> {edited.total_time} min"
    )
    return edited


def reset_to_recommended(context: PlanningContext) -> WeeklyWorkoutPlan:
    """Discard all edits and install a freshly generated plan.

    Any failure while regenerating is logged and replaced by the fallback
    plan, so the caller always receives a complete plan.
    """
    try:
        return periodization.generate_weekly_plan(context)
    except Exception:
        logger.exception(f"Plan regeneration failed for user {context.user_id}, installing fallback plan")
        return fallback_weekly_plan(context.today)


def todays_workout_from_plan(plan: WeeklyWorkoutPlan, today: Optional[date] = None) -> Optional[WorkoutRecommendation]:
    """Today's slot of the plan, keeping the daily view in sync with it."""
    today = today or date.today()
    workout = plan.workout_on(today)
    if workout is None:
        logger.debug(f"No workout in plan {plan.id} for {DAY_NAMES[sunday_based_day(today)]}")
    return workout


class AdvicePriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class PlanAdvice:
    kind: str  # warning, info, success
    message: str
    priority: AdvicePriority


@dataclass(frozen=True)
class PlanSummary:
    """Distribution of a weekly plan's sessions."""

    total_workouts: int
    total_tss: float
    total_distance: float
    total_time: int
    rest_days: int
    workout_distribution: Dict[str, int] = field(default_factory=dict)
    sport_distribution: Dict[str, int] = field(default_factory=dict)
    intensity_distribution: Dict[str, int] = field(default_factory=dict)
    advice: List[PlanAdvice] = field(default_factory=list)


def summarize_plan(plan: WeeklyWorkoutPlan) -> PlanSummary:
    """Summarize a plan's distributions and advise on its balance."""
    workouts = [w for w in plan.workouts.values() if w is not None]

    intensity_distribution = {
        "low": sum(1 for w in workouts if w.intensity <= 3),
        "moderate": sum(1 for w in workouts if 3 < w.intensity <= 6),
        "high": sum(1 for w in workouts if w.intensity > 6),
    }

    return PlanSummary(
        total_workouts=len(workouts),
        total_tss=plan.total_tss,
        total_distance=plan.total_distance,
        total_time=plan.total_time,
        rest_days=plan.rest_days,
        workout_distribution=dict(Counter(w.type.value for w in workouts)),
        sport_distribution=dict(Counter(w.sport for w in workouts)),
        intensity_distribution=intensity_distribution,
        advice=_plan_advice(plan, workouts),
    )


def _plan_advice(plan: WeeklyWorkoutPlan, workouts: List[WorkoutRecommendation]) -> List[PlanAdvice]:
    advice = []

    recovery_sessions = sum(1 for w in workouts if w.type == WorkoutType.RECOVERY)
    intense_sessions = sum(1 for w in workouts if w.intensity >= 7)
    if intense_sessions > 2 and recovery_sessions < 2:
        advice.append(PlanAdvice(
            "warning",
            "Consider adding more recovery days to balance your intense workouts",
            AdvicePriority.HIGH,
        ))

    if len({w.type for w in workouts}) < 3:
        advice.append(PlanAdvice(
            "info",
            "Adding more workout variety can improve overall fitness",
            AdvicePriority.MEDIUM,
        ))

    if plan.total_tss > 500:
        advice.append(PlanAdvice("success", "Your weekly training load is well-balanced", AdvicePriority.LOW))
    elif plan.total_tss < 200:
        advice.append(PlanAdvice(
            "warning",
            "Consider increasing your weekly training volume gradually",
            AdvicePriority.MEDIUM,
        ))

    if plan.rest_days == 0:
        advice.append(PlanAdvice("warning", "Include at least one rest day for recovery", AdvicePriority.HIGH))

    return advice
