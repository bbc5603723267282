"""Weekly plan generation and periodization phase classification."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..config import config
from .model import TrainingLoadMetrics
from .recommendations import PlanningContext, WorkoutPlanner
from .workouts import WorkoutRecommendation, basic_workout

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
# Monday, Thursday, Saturday on the Sunday-based day index
FALLBACK_TRAINING_DAYS = (1, 4, 6)


class PeriodizationPhase(Enum):
    """Coarse training-cycle label derived from load metrics."""

    BASE = "base"  # Aerobic base building
    BUILD = "build"  # Increasing load
    PEAK = "peak"  # High chronic load
    RECOVERY = "recovery"  # Shedding accumulated fatigue


def sunday_based_day(day: date) -> int:
    """Day-of-week index with 0 = Sunday."""
    return (day.weekday() + 1) % 7


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


@dataclass(frozen=True)
class WeeklyWorkoutPlan:
    """A week of workouts keyed by day of week (0 = Sunday .. 6 = Saturday).

    Totals are never passed in: every construction, including
    ``dataclasses.replace``, recomputes them from the full day map.
    """

    id: str
    week_start: date
    workouts: Mapping[int, Optional[WorkoutRecommendation]]
    periodization_phase: PeriodizationPhase
    is_editable: bool = True
    notes: Optional[str] = None
    total_tss: float = field(init=False)
    total_distance: float = field(init=False)
    total_time: int = field(init=False)

    def __post_init__(self):
        if set(self.workouts) != set(range(DAYS_IN_WEEK)):
            raise ValueError(
                f"Weekly plan must have exactly days 0-6, got {sorted(self.workouts)}"
            )
        object.__setattr__(self, "workouts", MappingProxyType(dict(self.workouts)))

        sessions = [w for w in self.workouts.values() if w is not None]
        object.__setattr__(self, "total_tss", round(sum(w.estimated_tss for w in sessions), 1))
        object.__setattr__(self, "total_distance", round(sum(w.distance or 0 for w in sessions), 1))
        object.__setattr__(self, "total_time", sum(w.duration for w in sessions))

    @property
    def rest_days(self) -> int:
        return sum(1 for w in self.workouts.values() if w is None)

    def workout_on(self, day: date) -> Optional[WorkoutRecommendation]:
        return self.workouts[sunday_based_day(day)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the plan store."""
        return {
            "id": self.id,
            "week_start": self.week_start.isoformat(),
            "workouts": {
                day: (workout.to_dict() if workout is not None else None)
                for day, workout in sorted(self.workouts.items())
            },
            "total_tss": self.total_tss,
            "total_distance": self.total_distance,
            "total_time": self.total_time,
            "periodization_phase": self.periodization_phase.value,
            "is_editable": self.is_editable,
            "notes": self.notes,
        }


def determine_periodization_phase(metrics: TrainingLoadMetrics) -> PeriodizationPhase:
    if metrics.balance < config.PHASE_RECOVERY_BALANCE:
        return PeriodizationPhase.RECOVERY
    if metrics.chronic < config.PHASE_BASE_CHRONIC:
        return PeriodizationPhase.BASE
    if metrics.chronic > config.PHASE_PEAK_CHRONIC:
        return PeriodizationPhase.PEAK
    return PeriodizationPhase.BUILD


def fallback_weekly_plan(today: Optional[date] = None) -> WeeklyWorkoutPlan:
    """Deterministic plan for athletes with nothing to plan from.

    Three easy runs on Monday, Thursday and Saturday, rest elsewhere.
    """
    today = today or date.today()
    start = week_start(today)

    workouts = {}
    for day in range(DAYS_IN_WEEK):
        if day in FALLBACK_TRAINING_DAYS:
            # Monday-based offset from the week start
            workouts[day] = basic_workout(start + timedelta(days=(day - 1) % 7), kind="fallback")
        else:
            workouts[day] = None

    return WeeklyWorkoutPlan(
        id=f"fallback-week-{start.isoformat()}",
        week_start=start,
        workouts=workouts,
        periodization_phase=PeriodizationPhase.BASE,
    )


def generate_weekly_plan(context: PlanningContext) -> WeeklyWorkoutPlan:
    """Generate the next seven days of workouts starting today.

    Today's slot gets the full single-day decision (recovery, goals,
    pattern); the following six days use the recovery gate and the weekly
    pattern. Without any activity history the fallback plan is returned.

    Args:
        context: Planning inputs for this invocation

    Returns:
        WeeklyWorkoutPlan with exactly seven day entries
    """
    today = context.today
    if not context.recent_activities:
        logger.warning(f"No activity history for user {context.user_id}, using fallback plan")
        return fallback_weekly_plan(today)

    planner = WorkoutPlanner(context)
    workouts: Dict[int, Optional[WorkoutRecommendation]] = {}

    for offset in range(DAYS_IN_WEEK):
        day = today + timedelta(days=offset)
        if offset == 0:
            workout = planner.generate_todays_workout()
        else:
            workout = planner.workout_for_date(day)
        workouts[sunday_based_day(day)] = workout

    start = week_start(today)
    plan = WeeklyWorkoutPlan(
        id=f"week-{start.isoformat()}",
        week_start=start,
        workouts=workouts,
        periodization_phase=determine_periodization_phase(context.metrics),
    )

    logger.info(
        f"Generated plan {plan.id} for user {context.user_id}: {plan.periodization_phase.value} phase, "
        f"{DAYS_IN_WEEK - plan.rest_days} sessions, {plan.total_time} min, {plan.total_tss:.0f} TSS"
    )
    return plan
