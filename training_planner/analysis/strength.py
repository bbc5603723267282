"""Strength session load estimation.

Heart rate under-reads the neuromuscular cost of lifting, so strength
sessions get their own load formula instead of the TRIMP/TSS blend. The
session's training focus is inferred from its name with an ordered keyword
rule list; this is a best-effort heuristic and an explicit ``exercise_type``
tag on the activity always wins.
"""

import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..models import Activity
from .thresholds import AthleteThresholds

logger = logging.getLogger(__name__)

NEUROMUSCULAR_FACTOR = 1.3
NO_HR_LOAD_PER_MINUTE = 0.8


class ExerciseType(Enum):
    """Strength training focus and its load multiplier."""

    STRENGTH = ("strength", 0.7)
    POWER = ("power", 0.75)
    HYPERTROPHY = ("hypertrophy", 0.8)
    ENDURANCE = ("endurance", 0.9)
    CIRCUIT = ("circuit", 1.0)

    def __init__(self, tag: str, multiplier: float):
        self.tag = tag
        self.multiplier = multiplier

    @classmethod
    def from_tag(cls, tag: str) -> Optional["ExerciseType"]:
        tag = tag.strip().lower()
        for exercise_type in cls:
            if exercise_type.tag == tag:
                return exercise_type
        return None


# First matching rule wins
EXERCISE_TYPE_RULES: Tuple[Tuple[ExerciseType, Tuple[str, ...]], ...] = (
    (ExerciseType.CIRCUIT, ("circuit", "crossfit", "hiit", "wod", "metcon")),
    (ExerciseType.POWER, ("power", "clean", "jerk", "snatch", "plyo", "explosive")),
    (ExerciseType.STRENGTH, ("strength", "heavy", "1rm", "3x5", "5x5", "5x3", "max")),
    (ExerciseType.ENDURANCE, ("endurance", "light", "high rep", "15+")),
    (ExerciseType.HYPERTROPHY, ("hypertrophy", "bodybuilding", "pump")),
)
DEFAULT_EXERCISE_TYPE = ExerciseType.HYPERTROPHY


def classify_exercise_type(
    name: str,
    explicit_tag: Optional[str] = None,
    rules: Sequence[Tuple[ExerciseType, Tuple[str, ...]]] = EXERCISE_TYPE_RULES,
) -> ExerciseType:
    """Classify a strength session's focus.

    Args:
        name: Activity name as entered by the athlete
        explicit_tag: Classification supplied by the activity record, if any
        rules: Ordered (type, keywords) pairs, first match wins

    Returns:
        ExerciseType, hypertrophy when nothing matches
    """
    if explicit_tag:
        tagged = ExerciseType.from_tag(explicit_tag)
        if tagged is not None:
            return tagged
        logger.warning(f"Unknown exercise type tag '{explicit_tag}', inferring from name")

    lowered = (name or "").lower()
    for exercise_type, keywords in rules:
        if any(keyword in lowered for keyword in keywords):
            return exercise_type
    return DEFAULT_EXERCISE_TYPE


def rpe_multiplier(perceived_exertion: Optional[float]) -> float:
    """Scale load by perceived exertion, RPE 10 maps to 1.3."""
    if perceived_exertion is None:
        return 1.0
    return 0.5 + (perceived_exertion / 10) * 0.8


def calculate_strength_load(activity: Activity, thresholds: AthleteThresholds) -> int:
    """Load of a strength session on the 0-100 scale."""
    minutes = activity.duration_minutes

    if activity.has_heartrate and thresholds.heart_rate_reserve > 0:
        hr_ratio = (activity.average_heartrate - thresholds.resting_heart_rate) / thresholds.heart_rate_reserve
        hr_ratio = max(0.0, min(1.0, hr_ratio))
        base_load = minutes * hr_ratio * NEUROMUSCULAR_FACTOR
    else:
        base_load = minutes * NO_HR_LOAD_PER_MINUTE

    exercise_type = classify_exercise_type(activity.name, activity.exercise_type)
    load = base_load * exercise_type.multiplier * rpe_multiplier(activity.perceived_exertion)

    return int(round(min(100.0, max(0.0, load))))
