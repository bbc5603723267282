"""Analysis module for training load and workout planning."""

from .model import TrainingLoadMetrics, TrainingLoadModel
from .periodization import WeeklyWorkoutPlan
from .recommendations import PlanningContext, WorkoutPlanner
from .sports_metrics import TrainingLoadCalculator
from .thresholds import AthleteThresholds, estimate_thresholds
from .workouts import WorkoutRecommendation

__all__ = [
    "AthleteThresholds",
    "estimate_thresholds",
    "PlanningContext",
    "TrainingLoadCalculator",
    "TrainingLoadMetrics",
    "TrainingLoadModel",
    "WeeklyWorkoutPlan",
    "WorkoutPlanner",
    "WorkoutRecommendation",
]
