"""Input records consumed by the load calculator and workout planner.

These mirror what the activity store, goal store and weather service hand
over. They are plain immutable values; persistence lives elsewhere.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _parse_datetime(value: Any) -> datetime:
    """Naive local wall-clock time.

    Strava exports local times with a trailing Z, so any offset is dropped
    rather than converted.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    raise ValueError(f"Unsupported timestamp: {value!r}")


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Activity:
    """One completed training session."""

    start_date_local: datetime
    moving_time: int  # seconds
    sport_type: str = "Run"
    name: str = ""
    id: Optional[str] = None
    distance: Optional[float] = None  # meters
    average_heartrate: Optional[float] = None  # bpm
    max_heartrate: Optional[float] = None  # bpm
    average_watts: Optional[float] = None
    weighted_average_watts: Optional[float] = None
    perceived_exertion: Optional[float] = None  # RPE 1-10
    training_load: Optional[float] = None  # precomputed 0-100 score from the activity store
    exercise_type: Optional[str] = None  # explicit strength classification tag

    @property
    def has_heartrate(self) -> bool:
        return bool(self.average_heartrate and self.average_heartrate > 0)

    @property
    def has_power(self) -> bool:
        return bool(self.average_watts and self.average_watts > 0)

    @property
    def duration_minutes(self) -> float:
        return self.moving_time / 60

    @property
    def duration_hours(self) -> float:
        return self.moving_time / 3600

    @property
    def local_date(self) -> date:
        return self.start_date_local.date()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        """Build an activity from a Strava-shaped record."""
        if not isinstance(data, dict):
            raise ValueError(f"Activity record must be an object, got {type(data).__name__}")
        try:
            start = data["start_date_local"] if "start_date_local" in data else data["start_date"]
            moving_time = int(data["moving_time"])
        except KeyError as e:
            raise ValueError(f"Activity record missing required field {e}") from e

        return cls(
            start_date_local=_parse_datetime(start),
            moving_time=moving_time,
            sport_type=data.get("sport_type") or data.get("type") or "Run",
            name=data.get("name") or "",
            id=str(data["id"]) if data.get("id") is not None else None,
            distance=_optional_float(data.get("distance")),
            average_heartrate=_optional_float(data.get("average_heartrate")),
            max_heartrate=_optional_float(data.get("max_heartrate")),
            average_watts=_optional_float(data.get("average_watts")),
            weighted_average_watts=_optional_float(data.get("weighted_average_watts")),
            perceived_exertion=_optional_float(data.get("perceived_exertion")),
            training_load=_optional_float(
                data.get("training_load", data.get("training_load_score"))
            ),
            exercise_type=data.get("exercise_type"),
        )


class GoalMetric(Enum):
    """Goal metric types the planner knows how to train for."""

    TOTAL_DISTANCE = "total_distance"
    AVERAGE_PACE = "average_pace"
    RUN_COUNT = "run_count"
    OTHER = "other"


@dataclass(frozen=True)
class Goal:
    """An athlete goal with its current progress."""

    id: str
    metric_type: GoalMetric
    target_value: float
    current_progress: float = 0.0
    unit: str = ""
    deadline: Optional[date] = None
    is_active: bool = True
    is_completed: bool = False

    @property
    def progress_percentage(self) -> float:
        if not self.target_value:
            return 0.0
        return self.current_progress / self.target_value * 100

    @property
    def is_open(self) -> bool:
        return self.is_active and not self.is_completed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        if not isinstance(data, dict):
            raise ValueError(f"Goal record must be an object, got {type(data).__name__}")
        metric = data.get("metric_type")
        if metric is None and isinstance(data.get("goal_type"), dict):
            metric = data["goal_type"].get("metric_type")
        try:
            metric_type = GoalMetric(metric)
        except ValueError:
            metric_type = GoalMetric.OTHER

        deadline = data.get("deadline")
        return cls(
            id=str(data.get("id", "")),
            metric_type=metric_type,
            target_value=float(data.get("target_value") or 0),
            current_progress=float(data.get("current_progress") or 0),
            unit=data.get("unit") or data.get("target_unit") or "",
            deadline=_parse_datetime(deadline).date() if deadline else None,
            is_active=bool(data.get("is_active", True)),
            is_completed=bool(data.get("is_completed", False)),
        )


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions at the athlete's location."""

    temperature: float  # °C
    precipitation: float = 0.0  # mm
    wind_speed: float = 0.0  # km/h


class ExperienceLevel(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class UserPreferences:
    """Athlete preferences that shape recommendations."""

    preferred_sports: Tuple[str, ...] = ("Run", "Ride", "Swim")
    available_minutes: int = 60
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    distance_unit: str = "km"
    pace_unit: str = "min/km"
    weather: Optional[WeatherSnapshot] = None
    equipment: Tuple[str, ...] = field(default_factory=tuple)
    injuries: Tuple[str, ...] = field(default_factory=tuple)
    limitations: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_advanced(self) -> bool:
        return self.experience_level == ExperienceLevel.ADVANCED


def parse_activities(records: List[Dict[str, Any]]) -> List[Activity]:
    """Parse a list of Strava-shaped records, oldest first."""
    activities = [Activity.from_dict(record) for record in records]
    return sorted(activities, key=lambda a: a.start_date_local)
